"""Settlement suggestions from member balances."""

from collections.abc import Iterable

from src.domain.models import MemberBalance, SuggestedSettlement


def suggest_settlements(
    balances: Iterable[MemberBalance],
) -> list[SuggestedSettlement]:
    """Greedily match debtors to creditors.

    Debtors and creditors keep the order they arrive in (the ledger emits
    balances sorted by ascending net). Each step pays the smaller of the two
    open amounts and advances whichever side reaches zero. The loop stops as
    soon as either side is exhausted, so a pool-level surplus or shortfall is
    left as a residual on the other side.

    Args:
        balances: Member balances, usually from ``compute_balances``.

    Returns:
        list[SuggestedSettlement]: Proposed payments in emission order.
    """
    debtors: list[list] = []
    creditors: list[list] = []
    names: dict[str, str] = {}
    for balance in balances:
        names[balance.uid] = balance.name
        if balance.net_cents < 0:
            debtors.append([balance.uid, -balance.net_cents])
        elif balance.net_cents > 0:
            creditors.append([balance.uid, balance.net_cents])

    suggestions: list[SuggestedSettlement] = []
    i = 0
    j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        pay = min(debtor[1], creditor[1])
        suggestions.append(
            SuggestedSettlement(
                from_uid=debtor[0],
                to_uid=creditor[0],
                amount_cents=pay,
                from_name=names[debtor[0]],
                to_name=names[creditor[0]],
            )
        )
        debtor[1] -= pay
        creditor[1] -= pay
        if debtor[1] == 0:
            i += 1
        if creditor[1] == 0:
            j += 1
    return suggestions


def settlement_residual(balances: Iterable[MemberBalance]) -> int:
    """Return the amount the greedy matching cannot settle.

    Positive when creditors are owed more than debtors owe (pool surplus),
    negative for a shortfall, zero when suggestions close every balance.
    """
    return sum(balance.net_cents for balance in balances)


__all__ = ["suggest_settlements", "settlement_residual"]
