#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for account registration, login, and the health check."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from socialwiki.models import User
from tests.conftest import register_user


# -----------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_register(client: AsyncClient):
    resp = await client.post("/registerUser", data={
        "userName": "alice",
        "firstName": "Alice",
        "lastName": "Liddell",
        "email": "alice@example.com",
        "password": "password123",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["user_name"] == "alice"
    assert data["first_name"] == "Alice"
    assert data["email"] == "alice@example.com"
    assert isinstance(data["id"], int)
    assert "password" not in data
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_register_names_optional(client: AsyncClient):
    resp = await client.post("/registerUser", data={
        "userName": "nameless",
        "email": "nameless@example.com",
        "password": "password123",
    })
    assert resp.status_code == 200
    assert resp.json()["first_name"] is None


@pytest.mark.asyncio
async def test_register_stores_hash_not_password(client: AsyncClient, db_session):
    await register_user(client, "hashy", password="s3cretpass")
    user = (await db_session.execute(select(User).where(User.user_name == "hashy"))).scalar_one()
    assert user.password_hash != "s3cretpass"
    assert user.password_hash.startswith("$2")


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient):
    await register_user(client, "bob")
    resp = await client.post("/registerUser", data={
        "userName": "bob",
        "email": "bob2@example.com",
        "password": "password123",
    })
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient):
    await register_user(client, "carol", email="shared@example.com")
    resp = await client.post("/registerUser", data={
        "userName": "carol2",
        "email": "shared@example.com",
        "password": "password123",
    })
    assert resp.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize("fields", [
    {"email": "x@example.com", "password": "password123"},                        # no userName
    {"userName": "has space", "email": "x@example.com", "password": "password123"},
    {"userName": "dave", "email": "not-an-email", "password": "password123"},
    {"userName": "dave", "email": "x@example.com", "password": "short"},
])
async def test_register_invalid_input(client: AsyncClient, fields):
    resp = await client.post("/registerUser", data=fields)
    assert resp.status_code == 412
    assert "detail" in resp.json()


@pytest.mark.asyncio
async def test_login(client: AsyncClient):
    registered = await register_user(client, "erin", password="erinpass123")
    resp = await client.post("/loginUser", data={"userName": "erin", "password": "erinpass123"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == registered["id"]
    assert "password" not in data


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient):
    await register_user(client, "frank", password="frankpass123")
    resp = await client.post("/loginUser", data={"userName": "frank", "password": "wrongpassword"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_login_unknown_user(client: AsyncClient):
    resp = await client.post("/loginUser", data={"userName": "ghost", "password": "whatever123"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_register_validation_error_keeps_cause():
    from pydantic import ValidationError
    from socialwiki.core.errors import UserValidationError
    from socialwiki.routes.users import register_user as register_route

    with pytest.raises(UserValidationError) as info:
        await register_route(params={"userName": "x"}, db=None)
    assert isinstance(info.value.__cause__, ValidationError)


def test_debug_setting_reaches_app(monkeypatch):
    from socialwiki.core.config import get_settings
    from socialwiki.main import create_app

    monkeypatch.setenv("DEBUG", "true")
    get_settings.cache_clear()
    try:
        assert create_app().debug is True
    finally:
        get_settings.cache_clear()


# -----------------------------------------------------------------------------
