"""
ThemeVote – Async SQLAlchemy engine, session, and declarative base.

``build_engine`` is shared by the application and the test suite so every
engine gets the same connection setup. On SQLite that means switching on
foreign-key enforcement for each new connection; without it the
``votes.theme_id`` and ``themes.form_id`` references are never checked.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ── Engine ──
def build_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    url = url or settings.DATABASE_URL
    engine_kwargs = {"echo": settings.DEBUG if echo is None else echo}

    # PgBouncer in transaction mode cannot use prepared statements.
    if url.startswith("postgresql+asyncpg"):
        engine_kwargs["connect_args"] = {"statement_cache_size": 0}

    new_engine = create_async_engine(url, **engine_kwargs)
    if new_engine.url.get_backend_name() == "sqlite":
        event.listen(new_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Services keep using rows after commit (vote ids, created themes).
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine()

# ── Session factory ──
async_session = make_session_factory(engine)


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


# ── Dependency for FastAPI routes ──
async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield a session; commit when the request succeeds, roll back when it raises."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
