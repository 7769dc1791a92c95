"""Factory helpers to select the pool repository backend."""

import os
from typing import Optional

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.pool_repository import PoolRepositoryPort
from src.infrastructure.in_memory_pool_repository import (
    InMemoryPoolRepository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.pool_repository import SqlAlchemyPoolRepository
from src.infrastructure.settings import PoolSettings


_memory_repository: Optional[InMemoryPoolRepository] = None


def get_memory_repository() -> InMemoryPoolRepository:
    """Return the process-wide in-memory repository.

    Returns:
        InMemoryPoolRepository: Lazily created shared instance.
    """
    global _memory_repository
    if _memory_repository is None:
        _memory_repository = InMemoryPoolRepository()
    return _memory_repository


def create_pool_repository(
    db_port: DatabaseEnginePort,
    logger=None,
    settings: PoolSettings | None = None,
) -> PoolRepositoryPort:
    """Return a pool repository implementation based on configuration.

    Args:
        db_port: Port providing access to the pool engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        settings: Optional settings override; environment is used otherwise.

    Returns:
        PoolRepositoryPort: Concrete repository implementation.
    """
    resolved_logger = logger or get_app_logger()
    selected_backend = (
        settings.backend
        if settings
        else os.getenv("POOL_BACKEND", "sqlalchemy")
    ).strip().lower()

    if selected_backend == "sqlalchemy":
        return SqlAlchemyPoolRepository(db_port)

    if selected_backend == "memory":
        resolved_logger.warning(
            "Using the in-memory pool backend; records are not persisted"
        )
        return get_memory_repository()

    raise ValueError(
        "Unsupported pool backend: "
        f"{selected_backend}. Expected sqlalchemy or memory."
    )


__all__ = ["create_pool_repository", "get_memory_repository"]
