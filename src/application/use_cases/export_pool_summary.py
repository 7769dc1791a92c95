"""Use case to export a trip pool ledger as CSV or shareable text."""

import csv
import io
from pathlib import Path
import re

from src.application.use_cases.get_pool_ledger import PoolLedgerView
from src.infrastructure.logging.logger import get_app_logger
from src.utils.money_utils import format_cents


HISTORY_PREVIEW_LIMIT = 10


def build_csv_export(view: PoolLedgerView) -> str:
    """Render the ledger as a sectioned CSV document.

    Sections are SUMMARY, BALANCES, SUGGESTED and SETTLEMENT_HISTORY,
    separated by blank lines. Text fields are quoted, amounts stay numeric.

    Args:
        view: Ledger computed for one trip.

    Returns:
        str: CSV content.
    """
    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        quoting=csv.QUOTE_NONNUMERIC,
        lineterminator="\n",
    )
    writer.writerow(["SECTION", "FIELD", "VALUE"])
    writer.writerow(
        ["SUMMARY", "TotalContributedCents", view.total_contributed_cents]
    )
    writer.writerow(["SUMMARY", "TotalSpentCents", view.total_spent_cents])
    writer.writerow(["SUMMARY", "BalanceCents", view.pool_balance_cents])
    writer.writerow([])

    writer.writerow(["BALANCES", "Name", "NetCents"])
    for balance in view.balances:
        writer.writerow(["BALANCES", balance.name, balance.net_cents])
    writer.writerow([])

    writer.writerow(["SUGGESTED", "From", "To", "AmountCents"])
    for suggestion in view.suggested_settlements:
        writer.writerow(
            [
                "SUGGESTED",
                suggestion.from_name,
                suggestion.to_name,
                suggestion.amount_cents,
            ]
        )
    writer.writerow([])

    writer.writerow(
        ["SETTLEMENT_HISTORY", "From", "To", "AmountCents", "Note", "CreatedAt"]
    )
    for settlement in view.settlement_history:
        created_at = (
            settlement.created_at.isoformat() if settlement.created_at else ""
        )
        writer.writerow(
            [
                "SETTLEMENT_HISTORY",
                settlement.from_name or settlement.from_uid,
                settlement.to_name or settlement.to_uid,
                settlement.amount_cents,
                settlement.note,
                created_at,
            ]
        )
    return buffer.getvalue()


def build_share_text(view: PoolLedgerView, currency_symbol: str = "₹") -> str:
    """Render a short plain-text settle-up summary."""
    lines = [
        "Travel Pool • Settle up",
        "",
        f"Total contributed: {currency_symbol}"
        f"{format_cents(view.total_contributed_cents)}",
        f"Total spent: {currency_symbol}{format_cents(view.total_spent_cents)}",
        f"Balance: {currency_symbol}{format_cents(view.pool_balance_cents)}",
        "",
        "Suggested payments:",
    ]
    if not view.suggested_settlements:
        lines.append("- None")
    for suggestion in view.suggested_settlements:
        lines.append(
            f"- {suggestion.from_name} pays {suggestion.to_name} "
            f"{currency_symbol}{format_cents(suggestion.amount_cents)}"
        )

    lines.extend(["", "Settlement history:"])
    history = view.settlement_history
    if not history:
        lines.append("- None")
    for settlement in history[:HISTORY_PREVIEW_LIMIT]:
        lines.append(
            f"- {settlement.from_name or settlement.from_uid} → "
            f"{settlement.to_name or settlement.to_uid} "
            f"{currency_symbol}{format_cents(settlement.amount_cents)}"
        )
    if len(history) > HISTORY_PREVIEW_LIMIT:
        lines.append("- …and more")
    return "\n".join(lines) + "\n"


def export_file_name(trip_id: str) -> str:
    """Return the CSV file name for a trip.

    Anything other than word characters, dots and dashes becomes ``_`` and
    leading dots are dropped, so the name never leaves the export directory.
    """
    safe_id = re.sub(r"[^\w.-]+", "_", trip_id).lstrip(".") or "trip"
    return f"travelpool_settleup_{safe_id}.csv"


class ExportPoolSummaryUseCase:
    """Write a ledger CSV export to disk."""

    def __init__(self, export_dir: Path, logger=None) -> None:
        """Initialize the use case.

        Args:
            export_dir: Directory receiving the CSV files.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._export_dir = Path(export_dir)
        self._logger = logger or get_app_logger()

    def execute(self, view: PoolLedgerView) -> Path:
        """Write the CSV export for a trip.

        Args:
            view: Ledger computed for one trip.

        Returns:
            Path: Location of the written file.
        """
        self._export_dir.mkdir(parents=True, exist_ok=True)
        path = self._export_dir / export_file_name(view.trip_id)
        path.write_text(build_csv_export(view), encoding="utf-8")
        self._logger.info(
            f"Exported pool summary for trip={view.trip_id} to {path}"
        )
        return path


__all__ = [
    "ExportPoolSummaryUseCase",
    "build_csv_export",
    "build_share_text",
    "export_file_name",
]
