"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.pool_repository import PoolRepositoryPort
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.pool_repository_factory import (
    create_pool_repository,
)
from src.infrastructure.settings import PoolSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_pool_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: PoolSettings | None = None,
) -> PoolRepositoryPort:
    """Return the configured pool repository."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or PoolSettings.from_env()
    return create_pool_repository(
        resolved_db,
        logger=get_app_logger(),
        settings=resolved_settings,
    )


__all__ = [
    "build_database_adapter",
    "build_pool_repository",
]
