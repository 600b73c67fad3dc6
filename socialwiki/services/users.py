#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
User service — look up, register, and authenticate user accounts.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialwiki.core.security import hash_password, verify_password
from socialwiki.models import User
from socialwiki.schemas import UserCreate

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

async def find_by_user_name(db: AsyncSession, user_name: Optional[str]) -> list[User]:
    """Every account named ``user_name``; zero, one, or several rows."""
    if not user_name:
        return []
    result = await db.execute(
        select(User).where(User.user_name == user_name).order_by(User.id)
    )
    return list(result.scalars().all())


# -----------------------------------------------------------------------------

async def create_user(db: AsyncSession, data: UserCreate) -> User:
    existing = await db.execute(select(User).where(User.user_name == data.user_name))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

    existing_email = await db.execute(select(User).where(User.email == str(data.email)))
    if existing_email.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    user = User(
        user_name=data.user_name,
        first_name=data.first_name,
        last_name=data.last_name,
        email=str(data.email),
        password_hash=hash_password(data.password),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration; the unique index decides.
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username or email already registered",
        )

    log.info("Registered user %s (id=%s)", user.user_name, user.id)
    return user


# -----------------------------------------------------------------------------

async def authenticate_user(db: AsyncSession, user_name: Optional[str], password: Optional[str]) -> User:
    matches = await find_by_user_name(db, user_name)
    user = matches[0] if len(matches) == 1 else None
    if not user or not password or not verify_password(password, user.password_hash):
        log.debug("Rejected login for %r", user_name)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    return user


# -----------------------------------------------------------------------------

async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.user_name))
    return list(result.scalars().all())


# -----------------------------------------------------------------------------
