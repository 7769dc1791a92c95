"""SQLAlchemy-backed repository for trip pool records."""

from datetime import datetime
import json
from uuid import uuid4

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.pool_repository import (
    PoolRepositoryPort,
    PoolSnapshot,
)
from src.domain.models import Contribution, Expense, Member, Settlement
from src.utils.money_utils import coerce_cents


CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS trip_members (
        trip_id TEXT NOT NULL,
        uid TEXT NOT NULL,
        name TEXT NOT NULL,
        email TEXT NOT NULL DEFAULT '',
        role TEXT NOT NULL DEFAULT 'member',
        PRIMARY KEY (trip_id, uid)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS pool_contributions (
        id TEXT PRIMARY KEY,
        trip_id TEXT NOT NULL,
        uid TEXT NOT NULL,
        name TEXT NOT NULL DEFAULT '',
        amount_cents BIGINT NOT NULL,
        note TEXT NOT NULL DEFAULT '',
        created_at TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS pool_expenses (
        id TEXT PRIMARY KEY,
        trip_id TEXT NOT NULL,
        title TEXT NOT NULL DEFAULT '',
        amount_cents BIGINT NOT NULL,
        paid_by_uid TEXT NOT NULL,
        paid_by_name TEXT NOT NULL DEFAULT '',
        split_between_uids TEXT NOT NULL DEFAULT '[]',
        split_type TEXT NOT NULL DEFAULT 'equal',
        split_exact_cents TEXT NOT NULL DEFAULT '{}',
        split_percent_bps TEXT NOT NULL DEFAULT '{}',
        created_at TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS pool_settlements (
        id TEXT PRIMARY KEY,
        trip_id TEXT NOT NULL,
        from_uid TEXT NOT NULL,
        from_name TEXT NOT NULL DEFAULT '',
        to_uid TEXT NOT NULL,
        to_name TEXT NOT NULL DEFAULT '',
        amount_cents BIGINT NOT NULL,
        note TEXT NOT NULL DEFAULT '',
        created_at TEXT
    )
    """,
)

SELECT_MEMBERS_SQL = text(
    """
    SELECT uid, name, email, role
    FROM trip_members
    WHERE trip_id = :trip_id
    ORDER BY uid
    """
)

SELECT_CONTRIBUTIONS_SQL = text(
    """
    SELECT id, uid, name, amount_cents, note, created_at
    FROM pool_contributions
    WHERE trip_id = :trip_id
    ORDER BY created_at, id
    """
)

SELECT_EXPENSES_SQL = text(
    """
    SELECT id, title, amount_cents, paid_by_uid, paid_by_name,
           split_between_uids, split_type, split_exact_cents,
           split_percent_bps, created_at
    FROM pool_expenses
    WHERE trip_id = :trip_id
    ORDER BY created_at, id
    """
)

SELECT_SETTLEMENTS_SQL = text(
    """
    SELECT id, from_uid, from_name, to_uid, to_name, amount_cents, note,
           created_at
    FROM pool_settlements
    WHERE trip_id = :trip_id
    ORDER BY created_at, id
    """
)


class SqlAlchemyPoolRepository(PoolRepositoryPort):
    """Repository storing trip pool records through SQLAlchemy."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the pool engine.
        """
        self._db_port = db_port

    def ensure_schema(self) -> None:
        """Create the pool tables if they do not exist."""
        engine = self._db_port.get_pool_engine()
        with engine.begin() as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)

    def add_member(self, trip_id: str, member: Member) -> None:
        """Insert or replace a roster member."""
        engine = self._db_port.get_pool_engine()
        params = {
            "trip_id": trip_id,
            "uid": member.uid,
            "name": member.name,
            "email": member.email,
            "role": member.role,
        }
        with engine.begin() as conn:
            conn.execute(
                text(
                    "DELETE FROM trip_members "
                    "WHERE trip_id = :trip_id AND uid = :uid"
                ),
                params,
            )
            conn.execute(
                text(
                    """
                    INSERT INTO trip_members (trip_id, uid, name, email, role)
                    VALUES (:trip_id, :uid, :name, :email, :role)
                    """
                ),
                params,
            )

    def fetch_snapshot(self, trip_id: str) -> PoolSnapshot:
        """Read the four collections inside one serializable transaction."""
        params = {"trip_id": trip_id}
        engine = self._db_port.get_pool_engine()
        with engine.connect() as conn:
            conn = conn.execution_options(isolation_level="SERIALIZABLE")
            with conn.begin():
                member_rows = conn.execute(SELECT_MEMBERS_SQL, params).all()
                contribution_rows = conn.execute(
                    SELECT_CONTRIBUTIONS_SQL,
                    params,
                ).all()
                expense_rows = conn.execute(SELECT_EXPENSES_SQL, params).all()
                settlement_rows = conn.execute(
                    SELECT_SETTLEMENTS_SQL,
                    params,
                ).all()
        return PoolSnapshot(
            trip_id=trip_id,
            members=[
                Member(
                    uid=row.uid,
                    name=row.name,
                    email=row.email,
                    role=row.role,
                )
                for row in member_rows
            ],
            contributions=[
                self._to_contribution(row) for row in contribution_rows
            ],
            expenses=[self._to_expense(row) for row in expense_rows],
            settlements=[self._to_settlement(row) for row in settlement_rows],
        )

    def fetch_contribution(
        self,
        trip_id: str,
        contribution_id: str,
    ) -> Contribution | None:
        query = text(
            """
            SELECT id, uid, name, amount_cents, note, created_at
            FROM pool_contributions
            WHERE trip_id = :trip_id AND id = :id
            """
        )
        engine = self._db_port.get_pool_engine()
        with engine.connect() as conn:
            row = conn.execute(
                query,
                {"trip_id": trip_id, "id": contribution_id},
            ).first()
        return self._to_contribution(row) if row else None

    def add_contribution(
        self,
        trip_id: str,
        contribution: Contribution,
    ) -> Contribution:
        stored = Contribution(
            id=contribution.id or uuid4().hex,
            uid=contribution.uid,
            name=contribution.name,
            amount_cents=contribution.amount_cents,
            note=contribution.note,
            created_at=contribution.created_at,
        )
        query = text(
            """
            INSERT INTO pool_contributions (
                id, trip_id, uid, name, amount_cents, note, created_at
            )
            VALUES (
                :id, :trip_id, :uid, :name, :amount_cents, :note, :created_at
            )
            """
        )
        engine = self._db_port.get_pool_engine()
        with engine.begin() as conn:
            conn.execute(
                query,
                {
                    "id": stored.id,
                    "trip_id": trip_id,
                    "uid": stored.uid,
                    "name": stored.name,
                    "amount_cents": stored.amount_cents,
                    "note": stored.note,
                    "created_at": _dump_datetime(stored.created_at),
                },
            )
        return stored

    def update_contribution(
        self,
        trip_id: str,
        contribution_id: str,
        amount_cents: int,
        note: str,
    ) -> None:
        query = text(
            """
            UPDATE pool_contributions
            SET amount_cents = :amount_cents, note = :note
            WHERE trip_id = :trip_id AND id = :id
            """
        )
        engine = self._db_port.get_pool_engine()
        with engine.begin() as conn:
            conn.execute(
                query,
                {
                    "trip_id": trip_id,
                    "id": contribution_id,
                    "amount_cents": amount_cents,
                    "note": note,
                },
            )

    def delete_contribution(self, trip_id: str, contribution_id: str) -> None:
        query = text(
            "DELETE FROM pool_contributions "
            "WHERE trip_id = :trip_id AND id = :id"
        )
        engine = self._db_port.get_pool_engine()
        with engine.begin() as conn:
            conn.execute(query, {"trip_id": trip_id, "id": contribution_id})

    def fetch_expense(self, trip_id: str, expense_id: str) -> Expense | None:
        query = text(
            """
            SELECT id, title, amount_cents, paid_by_uid, paid_by_name,
                   split_between_uids, split_type, split_exact_cents,
                   split_percent_bps, created_at
            FROM pool_expenses
            WHERE trip_id = :trip_id AND id = :id
            """
        )
        engine = self._db_port.get_pool_engine()
        with engine.connect() as conn:
            row = conn.execute(
                query,
                {"trip_id": trip_id, "id": expense_id},
            ).first()
        return self._to_expense(row) if row else None

    def add_expense(self, trip_id: str, expense: Expense) -> Expense:
        expense_id = expense.id or uuid4().hex
        query = text(
            """
            INSERT INTO pool_expenses (
                id, trip_id, title, amount_cents, paid_by_uid, paid_by_name,
                split_between_uids, split_type, split_exact_cents,
                split_percent_bps, created_at
            )
            VALUES (
                :id, :trip_id, :title, :amount_cents, :paid_by_uid,
                :paid_by_name, :split_between_uids, :split_type,
                :split_exact_cents, :split_percent_bps, :created_at
            )
            """
        )
        engine = self._db_port.get_pool_engine()
        with engine.begin() as conn:
            conn.execute(
                query,
                {
                    "id": expense_id,
                    "trip_id": trip_id,
                    "title": expense.title,
                    "amount_cents": expense.amount_cents,
                    "paid_by_uid": expense.paid_by_uid,
                    "paid_by_name": expense.paid_by_name,
                    "split_between_uids": json.dumps(
                        list(expense.split_between_uids)
                    ),
                    "split_type": expense.split_type,
                    "split_exact_cents": json.dumps(
                        dict(expense.split_exact_cents),
                        sort_keys=True,
                    ),
                    "split_percent_bps": json.dumps(
                        dict(expense.split_percent_bps),
                        sort_keys=True,
                    ),
                    "created_at": _dump_datetime(expense.created_at),
                },
            )
        return Expense(
            id=expense_id,
            title=expense.title,
            amount_cents=expense.amount_cents,
            paid_by_uid=expense.paid_by_uid,
            paid_by_name=expense.paid_by_name,
            split_between_uids=list(expense.split_between_uids),
            split_type=expense.split_type,
            split_exact_cents=dict(expense.split_exact_cents),
            split_percent_bps=dict(expense.split_percent_bps),
            created_at=expense.created_at,
        )

    def update_expense(
        self,
        trip_id: str,
        expense_id: str,
        title: str,
        amount_cents: int,
    ) -> None:
        query = text(
            """
            UPDATE pool_expenses
            SET title = :title, amount_cents = :amount_cents
            WHERE trip_id = :trip_id AND id = :id
            """
        )
        engine = self._db_port.get_pool_engine()
        with engine.begin() as conn:
            conn.execute(
                query,
                {
                    "trip_id": trip_id,
                    "id": expense_id,
                    "title": title,
                    "amount_cents": amount_cents,
                },
            )

    def delete_expense(self, trip_id: str, expense_id: str) -> None:
        query = text(
            "DELETE FROM pool_expenses WHERE trip_id = :trip_id AND id = :id"
        )
        engine = self._db_port.get_pool_engine()
        with engine.begin() as conn:
            conn.execute(query, {"trip_id": trip_id, "id": expense_id})

    def add_settlement(
        self,
        trip_id: str,
        settlement: Settlement,
    ) -> Settlement:
        stored = Settlement(
            id=settlement.id or uuid4().hex,
            from_uid=settlement.from_uid,
            from_name=settlement.from_name,
            to_uid=settlement.to_uid,
            to_name=settlement.to_name,
            amount_cents=settlement.amount_cents,
            note=settlement.note,
            created_at=settlement.created_at,
        )
        query = text(
            """
            INSERT INTO pool_settlements (
                id, trip_id, from_uid, from_name, to_uid, to_name,
                amount_cents, note, created_at
            )
            VALUES (
                :id, :trip_id, :from_uid, :from_name, :to_uid, :to_name,
                :amount_cents, :note, :created_at
            )
            """
        )
        engine = self._db_port.get_pool_engine()
        with engine.begin() as conn:
            conn.execute(
                query,
                {
                    "id": stored.id,
                    "trip_id": trip_id,
                    "from_uid": stored.from_uid,
                    "from_name": stored.from_name,
                    "to_uid": stored.to_uid,
                    "to_name": stored.to_name,
                    "amount_cents": stored.amount_cents,
                    "note": stored.note,
                    "created_at": _dump_datetime(stored.created_at),
                },
            )
        return stored

    @staticmethod
    def _to_contribution(row) -> Contribution:
        return Contribution(
            id=row.id,
            uid=row.uid,
            name=row.name,
            amount_cents=coerce_cents(row.amount_cents),
            note=row.note,
            created_at=_load_datetime(row.created_at),
        )

    @staticmethod
    def _to_expense(row) -> Expense:
        return Expense(
            id=row.id,
            title=row.title,
            amount_cents=coerce_cents(row.amount_cents),
            paid_by_uid=row.paid_by_uid,
            paid_by_name=row.paid_by_name,
            split_between_uids=json.loads(row.split_between_uids or "[]"),
            split_type=row.split_type,
            split_exact_cents={
                uid: coerce_cents(cents)
                for uid, cents in json.loads(
                    row.split_exact_cents or "{}"
                ).items()
            },
            split_percent_bps={
                uid: int(bps)
                for uid, bps in json.loads(
                    row.split_percent_bps or "{}"
                ).items()
            },
            created_at=_load_datetime(row.created_at),
        )

    @staticmethod
    def _to_settlement(row) -> Settlement:
        return Settlement(
            id=row.id,
            from_uid=row.from_uid,
            from_name=row.from_name,
            to_uid=row.to_uid,
            to_name=row.to_name,
            amount_cents=coerce_cents(row.amount_cents),
            note=row.note,
            created_at=_load_datetime(row.created_at),
        )


def _dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _load_datetime(value) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


__all__ = ["SqlAlchemyPoolRepository", "CREATE_TABLES_SQL"]
