"""Tests for the SQLAlchemy and in-memory pool repositories."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine

from src.domain.models import Contribution, Expense, Member, Settlement
from src.infrastructure.in_memory_pool_repository import (
    InMemoryPoolRepository,
)
from src.infrastructure.pool_repository import SqlAlchemyPoolRepository


CREATED = datetime(2024, 7, 1, 8, 0, tzinfo=timezone.utc)


def _sqlalchemy_repository(tmp_path) -> SqlAlchemyPoolRepository:
    engine = create_engine(f"sqlite:///{tmp_path / 'pool.db'}", future=True)
    db_port = MagicMock()
    db_port.get_pool_engine.return_value = engine
    repository = SqlAlchemyPoolRepository(db_port)
    repository.ensure_schema()
    return repository


@pytest.fixture(params=["sqlalchemy", "memory"])
def repository(request, tmp_path):
    if request.param == "sqlalchemy":
        return _sqlalchemy_repository(tmp_path)
    return InMemoryPoolRepository()


def test_snapshot_round_trips_all_collections(repository) -> None:
    repository.add_member("t1", Member(uid="a", name="Ann", role="organizer"))
    repository.add_member("t1", Member(uid="b", name="Ben"))
    repository.add_member("t2", Member(uid="z", name="Zed"))
    contribution = repository.add_contribution(
        "t1",
        Contribution(uid="a", name="Ann", amount_cents=5000, created_at=CREATED),
    )
    expense = repository.add_expense(
        "t1",
        Expense(
            title="Ferry",
            amount_cents=3000,
            paid_by_uid="a",
            paid_by_name="Ann",
            split_between_uids=["a", "b"],
            split_type="percent",
            split_percent_bps={"a": 2500, "b": 7500},
            created_at=CREATED,
        ),
    )
    settlement = repository.add_settlement(
        "t1",
        Settlement(
            from_uid="b",
            from_name="Ben",
            to_uid="a",
            to_name="Ann",
            amount_cents=1000,
            note="cash",
            created_at=CREATED,
        ),
    )

    snapshot = repository.fetch_snapshot("t1")

    assert snapshot.trip_id == "t1"
    assert [m.uid for m in snapshot.members] == ["a", "b"]
    assert snapshot.members[0].role == "organizer"
    assert snapshot.contributions == [contribution]
    assert snapshot.expenses == [expense]
    assert snapshot.expenses[0].split_percent_bps == {"a": 2500, "b": 7500}
    assert snapshot.settlements == [settlement]
    assert snapshot.settlements[0].created_at == CREATED


def test_add_member_replaces_existing_entry(repository) -> None:
    repository.add_member("t1", Member(uid="a", name="Ann"))
    repository.add_member("t1", Member(uid="a", name="Annie"))

    members = repository.fetch_snapshot("t1").members

    assert [(m.uid, m.name) for m in members] == [("a", "Annie")]


def test_contribution_update_and_delete(repository) -> None:
    stored = repository.add_contribution(
        "t1",
        Contribution(uid="a", amount_cents=100),
    )

    repository.update_contribution("t1", stored.id, 250, "fixed")
    updated = repository.fetch_contribution("t1", stored.id)

    assert updated.amount_cents == 250
    assert updated.note == "fixed"

    repository.delete_contribution("t1", stored.id)

    assert repository.fetch_contribution("t1", stored.id) is None


def test_expense_update_and_delete(repository) -> None:
    stored = repository.add_expense(
        "t1",
        Expense(
            title="Snacks",
            amount_cents=400,
            paid_by_uid="a",
            split_between_uids=["a"],
        ),
    )

    repository.update_expense("t1", stored.id, "Snacks and water", 450)
    updated = repository.fetch_expense("t1", stored.id)

    assert updated.title == "Snacks and water"
    assert updated.amount_cents == 450
    assert updated.split_between_uids == ["a"]

    repository.delete_expense("t1", stored.id)

    assert repository.fetch_expense("t1", stored.id) is None


def test_unknown_trip_has_empty_snapshot(repository) -> None:
    snapshot = repository.fetch_snapshot("nope")

    assert snapshot.members == []
    assert snapshot.contributions == []
    assert snapshot.expenses == []
    assert snapshot.settlements == []
