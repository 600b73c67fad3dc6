#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Database access
===============
One async engine per process, one session per request.

SQLite only enforces ``wiki_pages.author_id -> users.id`` when each connection
turns ``PRAGMA foreign_keys`` on; every engine built here (and the test
engines, via ``enable_sqlite_foreign_keys``) does so on connect.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from .config import get_settings


# -----------------------------------------------------------------------------

class Base(DeclarativeBase):
    """Declarative base for ``users`` and ``wiki_pages``."""


# -----------------------------------------------------------------------------

def enable_sqlite_foreign_keys(engine: AsyncEngine) -> AsyncEngine:
    """Turn on FK enforcement for every new DBAPI connection of ``engine``."""
    if engine.dialect.name == "sqlite":
        @event.listens_for(engine.sync_engine, "connect")
        def _fk_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    return engine


# -----------------------------------------------------------------------------

def build_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    settings = get_settings()
    url = url or settings.database_url
    if echo is None:
        echo = settings.db_echo

    if url.startswith("sqlite"):
        engine = create_async_engine(
            url, echo=echo, connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(
            url,
            echo=echo,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    return enable_sqlite_foreign_keys(engine)


# -----------------------------------------------------------------------------

_engine: Optional[AsyncEngine] = None
_sessions: Optional[async_sessionmaker[AsyncSession]] = None


def init_db(url: Optional[str] = None, echo: Optional[bool] = None) -> None:
    """Build the process-wide engine and session factory."""
    global _engine, _sessions
    _engine = build_engine(url, echo)
    _sessions = async_sessionmaker(_engine, expire_on_commit=False)


def get_engine() -> AsyncEngine:
    if _engine is None:
        init_db()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _sessions is None:
        init_db()
    return _sessions


# -----------------------------------------------------------------------------

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session: committed when the handler returns, else rolled back."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# -----------------------------------------------------------------------------

async def create_all_tables() -> None:
    """Create missing tables for a development database; Alembic owns production."""
    import socialwiki.models.models  # noqa: F401  registers users / wiki_pages

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# -----------------------------------------------------------------------------
