"""CLI adapter printing a trip's settle-up summary and exporting it as CSV.

The trip is selected with ``POOL_TRIP_ID``; exports land in
``POOL_EXPORT_DIR``.
"""

import os

from sqlalchemy.exc import SQLAlchemyError

from src.application.use_cases.export_pool_summary import (
    ExportPoolSummaryUseCase,
    build_share_text,
)
from src.application.use_cases.get_pool_ledger import GetPoolLedgerUseCase
from src.infrastructure.container import build_pool_repository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import PoolSettings


def main() -> None:
    """Compute the pool ledger for a trip, print it and write the CSV."""
    logger = get_app_logger()
    trip_id = os.getenv("POOL_TRIP_ID", "").strip()
    if not trip_id:
        logger.warning("POOL_TRIP_ID is required to build a pool report.")
        return

    settings = PoolSettings.from_env()
    try:
        repository = build_pool_repository(settings=settings)
        view = GetPoolLedgerUseCase(
            repository=repository,
            logger=logger,
        ).execute(trip_id)
    except (RuntimeError, SQLAlchemyError) as exc:
        logger.error(str(exc))
        return

    print(build_share_text(view, settings.currency_symbol), end="")

    export_path = ExportPoolSummaryUseCase(
        export_dir=settings.export_dir,
        logger=logger,
    ).execute(view)
    print(f"CSV export written to {export_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
