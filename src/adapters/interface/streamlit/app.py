"""Streamlit settle-up page for a trip pool."""

from collections.abc import Callable, Sequence
import os

import altair as alt
from sqlalchemy.exc import SQLAlchemyError
import streamlit as st

from src.application.use_cases.export_pool_summary import (
    build_csv_export,
    build_share_text,
    export_file_name,
)
from src.application.use_cases.get_pool_ledger import (
    GetPoolLedgerUseCase,
    PoolLedgerView,
)
from src.application.use_cases.record_pool_entries import (
    RecordPoolEntriesUseCase,
)
from src.domain.constants import (
    ROLE_MEMBER,
    ROLE_ORGANIZER,
    SPLIT_EQUAL,
    SPLIT_EXACT,
    SPLIT_PERCENT,
)
from src.domain.models import Contribution, Expense, Member, MemberBalance
from src.domain.policies.entry_permissions import (
    can_edit_entry,
    is_organizer,
)
from src.infrastructure.container import build_pool_repository
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import PoolSettings
from src.utils.money_utils import format_cents, parse_to_cents


LOAD_ERRORS = (RuntimeError, SQLAlchemyError)
WRITE_ERRORS = (ValueError, PermissionError, LookupError, SQLAlchemyError)


def _fetch_pool_ledger(trip_id: str) -> PoolLedgerView:
    """Fetch the ledger for a trip from the configured repository."""
    repository = build_pool_repository()
    use_case = GetPoolLedgerUseCase(repository=repository)
    return use_case.execute(trip_id)


@st.cache_data(show_spinner=False, ttl=5)
def _load_pool_ledger(trip_id: str) -> PoolLedgerView:
    """Cached wrapper around _fetch_pool_ledger for Streamlit sessions."""
    return _fetch_pool_ledger(trip_id)


def _record_use_case() -> RecordPoolEntriesUseCase:
    return RecordPoolEntriesUseCase(repository=build_pool_repository())


def _run_change(
    change: Callable[[RecordPoolEntriesUseCase], object],
) -> str | None:
    """Apply a write through the record use case.

    Args:
        change: Callable receiving the use case and performing one write.

    Returns:
        str | None: Error message to show, or None when the write succeeded
        and the cached ledger was invalidated.
    """
    try:
        change(_record_use_case())
    except WRITE_ERRORS as exc:
        return str(exc)
    _load_pool_ledger.clear()
    return None


def _submit_change(
    change: Callable[[RecordPoolEntriesUseCase], object],
) -> None:
    error = _run_change(change)
    if error:
        st.error(error)
        return
    st.rerun()


def _format_amount(amount_cents: int, currency_symbol: str) -> str:
    """Format cents for display."""
    return f"{currency_symbol}{format_cents(amount_cents)}"


def _balance_rows(
    balances: Sequence[MemberBalance],
    currency_symbol: str,
) -> list[dict[str, str]]:
    """Build table rows for the balances dataframe."""
    return [
        {
            "Member": balance.name,
            "Contributed": _format_amount(
                balance.contributed_cents,
                currency_symbol,
            ),
            "Share of expenses": _format_amount(
                balance.owes_cents,
                currency_symbol,
            ),
            "Net": _format_amount(balance.net_cents, currency_symbol),
        }
        for balance in balances
    ]


def _balance_chart_data(
    balances: Sequence[MemberBalance],
    currency_symbol: str,
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready rows for the net balance chart."""
    return [
        {
            "member": balance.name,
            "net": balance.net_cents / 100,
            "net_label": _format_amount(balance.net_cents, currency_symbol),
            "status": "owes" if balance.net_cents < 0 else "is owed",
        }
        for balance in balances
    ]


def _render_balance_chart(
    balances: Sequence[MemberBalance],
    currency_symbol: str,
) -> None:
    """Render a horizontal bar chart of member net balances."""
    if not balances:
        st.info("No balances yet.")
        return
    data = _balance_chart_data(balances, currency_symbol)
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadius=4,
    ).encode(
        x=alt.X("net:Q", title="Net balance"),
        y=alt.Y("member:N", sort=None, title=None),
        color=alt.Color(
            "status:N",
            scale=alt.Scale(
                domain=["owes", "is owed"],
                range=["#e76f51", "#2e7d32"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("member:N"),
            alt.Tooltip("net_label:N"),
        ],
    )
    st.altair_chart(chart, width="stretch")


def _render_suggestions(
    view: PoolLedgerView,
    actor: Member | None,
    currency_symbol: str,
) -> None:
    """Render suggested payments with a mark-paid action for the payer."""
    st.subheader("Suggested payments")
    if not view.suggested_settlements:
        st.caption("No suggested payments right now.")
        return
    for index, suggestion in enumerate(view.suggested_settlements):
        label = (
            f"{suggestion.from_name} pays {suggestion.to_name} "
            f"{_format_amount(suggestion.amount_cents, currency_symbol)}"
        )
        text_col, action_col = st.columns([4, 1])
        text_col.write(label)
        if actor is None or actor.uid != suggestion.from_uid:
            continue
        if not action_col.button("Mark paid", key=f"settle-{index}"):
            continue
        error = _run_change(
            lambda use_case: use_case.record_settlement(
                view.trip_id,
                actor,
                suggestion.to_uid,
                suggestion.amount_cents,
                note="Settle up",
            )
        )
        if error:
            st.error(error)
            continue
        get_usage_logger().info(
            f"Settlement marked paid on trip={view.trip_id}: {label}"
        )
        st.rerun()


def _can_add_members(view: PoolLedgerView, actor: Member | None) -> bool:
    """Return True when the roster is empty or the actor organizes it."""
    if not view.members:
        return True
    return actor is not None and is_organizer(actor.uid, view.members)


def _render_member_form(view: PoolLedgerView, actor: Member | None) -> None:
    """Render the sidebar form putting people on the trip roster."""
    if not _can_add_members(view, actor):
        return
    with st.sidebar.form("add-member", clear_on_submit=True):
        st.subheader("Add member" if view.members else "Start the roster")
        uid = st.text_input("Member id")
        name = st.text_input("Name")
        email = st.text_input("Email")
        role = ROLE_MEMBER
        if view.members:
            role = st.selectbox("Role", [ROLE_MEMBER, ROLE_ORGANIZER])
        submitted = st.form_submit_button("Add member")
    if not submitted:
        return
    member = Member(uid=uid, name=name, email=email.strip(), role=role)
    actor_uid = actor.uid if actor else ""
    _submit_change(
        lambda use_case: use_case.add_member(view.trip_id, member, actor_uid)
    )


def _render_contribution_form(trip_id: str, actor: Member) -> None:
    """Render the add-contribution form."""
    with st.form("add-contribution", clear_on_submit=True):
        st.subheader("Add contribution")
        raw_amount = st.text_input("Amount")
        note = st.text_input("Note")
        submitted = st.form_submit_button("Add")
    if not submitted:
        return
    amount_cents = parse_to_cents(raw_amount)
    if amount_cents is None:
        st.error("Enter a valid amount.")
        return
    _submit_change(
        lambda use_case: use_case.add_contribution(
            trip_id,
            actor,
            amount_cents,
            note,
        )
    )


def _parse_allocation(raw_values: dict[str, str]) -> dict[str, int] | None:
    """Convert per-member inputs into cents or basis points.

    Percent inputs are percentages (``33.33``) and become basis points.
    Returns None when any non-blank value fails to parse.
    """
    allocation: dict[str, int] = {}
    for uid, raw in raw_values.items():
        if not raw.strip():
            continue
        parsed = parse_to_cents(raw)
        if parsed is None:
            return None
        allocation[uid] = parsed
    return allocation


def _render_expense_form(
    trip_id: str,
    actor: Member,
    members: Sequence[Member],
) -> None:
    """Render the add-expense form with equal, exact and percent splits."""
    st.subheader("Add expense")
    names = {member.uid: member.name for member in members}
    # Outside the form so the per-member inputs update before submitting.
    participants = st.multiselect(
        "Split between",
        options=list(names),
        default=list(names),
        format_func=lambda uid: names.get(uid, uid),
        key="expense-participants",
    )
    split_type = st.radio(
        "Split",
        [SPLIT_EQUAL, SPLIT_EXACT, SPLIT_PERCENT],
        horizontal=True,
        key="expense-split-type",
    )
    with st.form("add-expense", clear_on_submit=True):
        title = st.text_input("Title")
        raw_amount = st.text_input("Amount")
        raw_values = {}
        if split_type != SPLIT_EQUAL:
            st.caption(
                "Enter the amount per person"
                if split_type == SPLIT_EXACT
                else "Enter percent per person (total must be 100)"
            )
            for uid in participants:
                raw_values[uid] = st.text_input(
                    names.get(uid, uid),
                    key=f"split-{split_type}-{uid}",
                )
        submitted = st.form_submit_button("Add")
    if not submitted:
        return
    amount_cents = parse_to_cents(raw_amount)
    allocation = _parse_allocation(raw_values)
    if amount_cents is None or allocation is None:
        st.error("Enter valid amounts.")
        return
    expense = Expense(
        title=title,
        amount_cents=amount_cents,
        paid_by_uid=actor.uid,
        paid_by_name=actor.name,
        split_between_uids=list(participants),
        split_type=split_type,
        split_exact_cents=allocation if split_type == SPLIT_EXACT else {},
        # A percentage with two decimals parsed as cents is basis points.
        split_percent_bps=allocation if split_type == SPLIT_PERCENT else {},
    )
    _submit_change(lambda use_case: use_case.add_expense(trip_id, expense))


def _editable_entries(
    view: PoolLedgerView,
    actor: Member | None,
) -> tuple[list[Contribution], list[Expense]]:
    """Return the contributions and expenses the actor may change."""
    if actor is None:
        return [], []
    contributions = [
        item
        for item in view.contributions
        if can_edit_entry(item.uid, actor.uid, view.members)
    ]
    expenses = [
        item
        for item in view.expenses
        if can_edit_entry(item.paid_by_uid, actor.uid, view.members)
    ]
    return contributions, expenses


def _render_contribution_editor(
    trip_id: str,
    actor: Member,
    contribution: Contribution,
    currency_symbol: str,
) -> None:
    label = (
        f"{contribution.name or contribution.uid} added "
        f"{_format_amount(contribution.amount_cents, currency_symbol)}"
    )
    with st.expander(label):
        with st.form(f"edit-contribution-{contribution.id}"):
            raw_amount = st.text_input(
                "Amount",
                value=format_cents(contribution.amount_cents),
            )
            note = st.text_input("Note", value=contribution.note)
            save = st.form_submit_button("Save")
            delete = st.form_submit_button("Delete")
    if delete:
        _submit_change(
            lambda use_case: use_case.delete_contribution(
                trip_id,
                actor.uid,
                contribution.id,
            )
        )
        return
    if not save:
        return
    amount_cents = parse_to_cents(raw_amount)
    if amount_cents is None:
        st.error("Enter a valid amount.")
        return
    _submit_change(
        lambda use_case: use_case.update_contribution(
            trip_id,
            actor.uid,
            contribution.id,
            amount_cents,
            note,
        )
    )


def _render_expense_editor(
    trip_id: str,
    actor: Member,
    expense: Expense,
    currency_symbol: str,
) -> None:
    label = (
        f"{expense.title}: "
        f"{_format_amount(expense.amount_cents, currency_symbol)} paid by "
        f"{expense.paid_by_name or expense.paid_by_uid}"
    )
    with st.expander(label):
        with st.form(f"edit-expense-{expense.id}"):
            title = st.text_input("Title", value=expense.title)
            raw_amount = st.text_input(
                "Amount",
                value=format_cents(expense.amount_cents),
            )
            save = st.form_submit_button("Save")
            delete = st.form_submit_button("Delete")
    if delete:
        _submit_change(
            lambda use_case: use_case.delete_expense(
                trip_id,
                actor.uid,
                expense.id,
            )
        )
        return
    if not save:
        return
    amount_cents = parse_to_cents(raw_amount)
    if amount_cents is None:
        st.error("Enter a valid amount.")
        return
    _submit_change(
        lambda use_case: use_case.update_expense(
            trip_id,
            actor.uid,
            expense.id,
            title,
            amount_cents,
        )
    )


def _render_entries(
    view: PoolLedgerView,
    actor: Member | None,
    currency_symbol: str,
) -> None:
    """Render edit and delete controls for the actor's editable entries."""
    contributions, expenses = _editable_entries(view, actor)
    if actor is None or not (contributions or expenses):
        return
    st.subheader("Your entries")
    for contribution in contributions:
        _render_contribution_editor(
            view.trip_id,
            actor,
            contribution,
            currency_symbol,
        )
    for expense in expenses:
        _render_expense_editor(view.trip_id, actor, expense, currency_symbol)


def _render_history(view: PoolLedgerView, currency_symbol: str) -> None:
    """Render the recorded settlement history."""
    st.subheader("Settlement history")
    if not view.settlement_history:
        st.caption("No settlements recorded yet.")
        return
    data = [
        {
            "From": settlement.from_name or settlement.from_uid,
            "To": settlement.to_name or settlement.to_uid,
            "Amount": _format_amount(settlement.amount_cents, currency_symbol),
            "Note": settlement.note,
            "When": (
                settlement.created_at.strftime("%Y-%m-%d %H:%M")
                if settlement.created_at
                else ""
            ),
        }
        for settlement in view.settlement_history
    ]
    st.dataframe(data, width="stretch", hide_index=True)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Travel Pool", layout="wide")
    st.title("Travel Pool • Settle up")

    settings = PoolSettings.from_env()
    currency_symbol = settings.currency_symbol
    trip_id = st.sidebar.text_input(
        "Trip",
        value=os.getenv("POOL_TRIP_ID", ""),
    ).strip()
    if not trip_id:
        st.warning("Enter a trip id to load its pool.")
        return

    try:
        view = _load_pool_ledger(trip_id)
    except LOAD_ERRORS as exc:
        st.error(f"Failed to load the pool: {exc}")
        return

    actor = None
    if view.members:
        member_by_uid = {member.uid: member for member in view.members}
        actor_uid = st.sidebar.selectbox(
            "Acting as",
            options=list(member_by_uid),
            format_func=lambda uid: member_by_uid[uid].name or uid,
        )
        actor = member_by_uid.get(actor_uid)

    _render_member_form(view, actor)

    if not view.members:
        st.warning("No members found for this trip.")
        return

    contributed_col, spent_col, balance_col = st.columns(3)
    contributed_col.metric(
        "Total contributed",
        _format_amount(view.total_contributed_cents, currency_symbol),
    )
    spent_col.metric(
        "Total spent",
        _format_amount(view.total_spent_cents, currency_symbol),
    )
    balance_col.metric(
        "Pool balance",
        _format_amount(view.pool_balance_cents, currency_symbol),
    )

    chart_col, table_col = st.columns(2)
    with chart_col:
        st.subheader("Balances (after settlements)")
        _render_balance_chart(view.balances, currency_symbol)
    with table_col:
        st.dataframe(
            _balance_rows(view.balances, currency_symbol),
            width="stretch",
            hide_index=True,
        )

    _render_suggestions(view, actor, currency_symbol)
    _render_history(view, currency_symbol)

    if actor is not None:
        form_left, form_right = st.columns(2)
        with form_left:
            _render_contribution_form(trip_id, actor)
        with form_right:
            _render_expense_form(trip_id, actor, view.members)
        _render_entries(view, actor, currency_symbol)

    st.sidebar.download_button(
        "Export CSV",
        data=build_csv_export(view),
        file_name=export_file_name(trip_id),
        mime="text/csv",
        on_click=lambda: get_usage_logger().info(
            f"CSV export downloaded for trip={trip_id}"
        ),
    )
    with st.sidebar.expander("Share summary"):
        st.code(build_share_text(view, currency_symbol), language=None)


if __name__ == "__main__":  # pragma: no cover
    main()
