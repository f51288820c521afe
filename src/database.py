"""Database configuration and session management."""

import logging
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from src.config import get_settings

settings = get_settings()


def _connect_args(database_url: str, statement_timeout_ms: int) -> dict[str, Any]:
    """Per-dialect connection arguments."""
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    if database_url.startswith("postgresql") and statement_timeout_ms > 0:
        # Store calls never hang past the caller's deadline
        return {"options": f"-c statement_timeout={statement_timeout_ms}"}
    return {}


engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.database_url, settings.statement_timeout_ms),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def configure_logging() -> None:
    """Configure root logging for workers and scripts."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
