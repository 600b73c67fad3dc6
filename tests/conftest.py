#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for SocialWiki tests.
Uses an in-memory SQLite database so no external services are needed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from socialwiki.core.database import Base, enable_sqlite_foreign_keys, get_db
from socialwiki.main import create_app


# -----------------------------------------------------------------------------

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# -----------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def db_engine():
    engine = enable_sqlite_foreign_keys(create_async_engine(
        TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
    ))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session_factory(db_engine):
    """Shared sessionmaker — both client and db_session use this."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(db_session_factory):
    """Direct DB session for test setup and assertions."""
    async with db_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_engine, db_session_factory):
    """HTTP test client wired to an isolated in-memory DB."""
    async def override_get_db():
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
# Helper functions for tests
# -----------------------------------------------------------------------------

async def register_user(client: AsyncClient, user_name: str = "testuser",
                        email: str | None = None,
                        password: str = "testpass123") -> dict:
    resp = await client.post("/registerUser", data={
        "userName": user_name,
        "firstName": user_name.title(),
        "lastName": "Tester",
        "email": email or f"{user_name}@example.com",
        "password": password,
    })
    assert resp.status_code == 200, resp.text
    return resp.json()


async def create_page(client: AsyncClient, title: str, content: str, username: str,
                      parent_id: int = -1, author_id: int = 1) -> dict:
    resp = await client.post("/createWikiPage", data={
        "title": title,
        "content": content,
        "username": username,
        "parentID": str(parent_id),
        "authorID": str(author_id),
    })
    assert resp.status_code == 200, resp.text
    return resp.json()


# -----------------------------------------------------------------------------
