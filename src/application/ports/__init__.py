"""Application ports package."""

from .database import DatabaseEnginePort
from .pool_repository import PoolRepositoryPort, PoolSnapshot

__all__ = [
    "DatabaseEnginePort",
    "PoolRepositoryPort",
    "PoolSnapshot",
]
