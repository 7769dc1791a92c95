"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path

import dotenv

from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


SUPPORTED_BACKENDS = ("sqlalchemy", "memory")


@dataclass(frozen=True)
class PoolSettings:
    """Settings for the pool storage backend and exports.

    Attributes:
        backend: Backend identifier (sqlalchemy or memory).
        currency_symbol: Symbol prefixed to formatted amounts.
        export_dir: Directory receiving CSV exports.
    """

    backend: str = "sqlalchemy"
    currency_symbol: str = "₹"
    export_dir: Path | None = None

    @classmethod
    def from_env(cls) -> "PoolSettings":
        """Build settings from environment variables.

        Returns:
            PoolSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        backend = os.getenv("POOL_BACKEND", "sqlalchemy").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            logger.warning(
                f"Unknown POOL_BACKEND '{backend}', using sqlalchemy"
            )
            backend = "sqlalchemy"
        currency_symbol = os.getenv("POOL_CURRENCY_SYMBOL", "₹")
        raw_export_dir = os.getenv("POOL_EXPORT_DIR")
        if raw_export_dir:
            export_dir = Path(raw_export_dir).expanduser().resolve()
        else:
            export_dir = get_project_root() / "exports"
        return cls(
            backend=backend,
            currency_symbol=currency_symbol,
            export_dir=export_dir,
        )


__all__ = ["PoolSettings", "SUPPORTED_BACKENDS"]
