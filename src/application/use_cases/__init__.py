"""Application use cases package."""

from .export_pool_summary import (
    ExportPoolSummaryUseCase,
    build_csv_export,
    build_share_text,
)
from .get_pool_ledger import GetPoolLedgerUseCase, PoolLedgerView
from .record_pool_entries import RecordPoolEntriesUseCase

__all__ = [
    "GetPoolLedgerUseCase",
    "PoolLedgerView",
    "RecordPoolEntriesUseCase",
    "ExportPoolSummaryUseCase",
    "build_csv_export",
    "build_share_text",
]
