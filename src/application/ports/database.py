"""Database ports for the trip pool.

This module defines the application-layer protocol for accessing the pool
database engine. Infrastructure implementations provide concrete adapters
that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine that stores trip pool records.

    Application code can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_pool_engine(self) -> Engine:
        """Get the engine for the pool database.

        Returns:
            Engine: SQLAlchemy engine connected to the pool database.
        """


__all__ = ["DatabaseEnginePort"]
