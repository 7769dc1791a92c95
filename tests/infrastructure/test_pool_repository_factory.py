"""Tests for pool repository backend selection."""

from unittest.mock import MagicMock

import pytest

from src.infrastructure import pool_repository_factory as factory
from src.infrastructure.container import build_pool_repository
from src.infrastructure.in_memory_pool_repository import (
    InMemoryPoolRepository,
)
from src.infrastructure.pool_repository import SqlAlchemyPoolRepository
from src.infrastructure.settings import PoolSettings


def test_factory_defaults_to_sqlalchemy(monkeypatch) -> None:
    """Factory should return SQLAlchemy repository by default."""
    monkeypatch.delenv("POOL_BACKEND", raising=False)
    db_port = MagicMock()

    repository = factory.create_pool_repository(db_port, logger=MagicMock())

    assert isinstance(repository, SqlAlchemyPoolRepository)


def test_factory_uses_shared_memory_backend(monkeypatch) -> None:
    """Memory backend should reuse one repository per process."""
    monkeypatch.setattr(factory, "_memory_repository", None)
    settings = PoolSettings(backend="memory")
    logger = MagicMock()

    first = factory.create_pool_repository(
        MagicMock(),
        logger=logger,
        settings=settings,
    )
    second = factory.create_pool_repository(
        MagicMock(),
        logger=logger,
        settings=settings,
    )

    assert isinstance(first, InMemoryPoolRepository)
    assert first is second
    logger.warning.assert_called()


def test_factory_rejects_unknown_backend() -> None:
    with pytest.raises(ValueError):
        factory.create_pool_repository(
            MagicMock(),
            logger=MagicMock(),
            settings=PoolSettings(backend="firestore"),
        )


def test_container_builds_repository_from_settings() -> None:
    db_port = MagicMock()

    repository = build_pool_repository(
        db_port=db_port,
        settings=PoolSettings(backend="sqlalchemy"),
    )

    assert isinstance(repository, SqlAlchemyPoolRepository)
