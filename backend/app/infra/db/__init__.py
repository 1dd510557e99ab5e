"""Database connection helpers."""

from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from ...config import Settings

__all__ = ["build_engine", "ping"]


def build_engine(settings: Settings) -> Engine:
    """Create the process-wide engine for the configured database."""

    return create_engine(
        settings.effective_database_url, echo=False, future=True, pool_pre_ping=True
    )


def ping(engine: Engine) -> None:
    """Round-trip a trivial statement; raises ``SQLAlchemyError`` when unreachable."""

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
