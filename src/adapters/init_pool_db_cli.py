"""Simple CLI to create the pool tables and validate the connection.

This adapter is meant for local operations: it instantiates the concrete
database adapter from the infrastructure layer, creates the schema when
missing and runs a basic health check.
"""

from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.pool_repository import SqlAlchemyPoolRepository


def main() -> None:
    """Create pool tables and check connectivity."""
    adapter = SqlAlchemyDatabaseEngineAdapter()
    logger = get_app_logger()

    engine = adapter.get_pool_engine()
    logger.info(f"Pool DB: {engine.url}")

    SqlAlchemyPoolRepository(adapter).ensure_schema()
    with engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    logger.info("Pool tables are ready and the connection is working.")


if __name__ == "__main__":  # pragma: no cover
    main()
