#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Users router
============
POST /registerUser  — create an account, returns the session view
POST /loginUser     — check credentials, returns the session view
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from socialwiki.core.config import get_settings
from socialwiki.core.database import get_db
from socialwiki.core.errors import UserValidationError
from socialwiki.core.params import request_params
from socialwiki.schemas import SessionUserResponse, UserCreate
from socialwiki.services.users import authenticate_user, create_user


# -----------------------------------------------------------------------------

router = APIRouter(tags=["users"])


# -----------------------------------------------------------------------------

@router.post("/registerUser", response_model=SessionUserResponse)
async def register_user(
    params: dict[str, str] = Depends(request_params),
    db: AsyncSession       = Depends(get_db),
):
    settings = get_settings()
    if not settings.allow_registration:
        raise HTTPException(status_code=403, detail="Public registration is disabled")

    try:
        data = UserCreate.model_validate(params)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise UserValidationError(f"{field}: {first['msg']}") from exc

    user = await create_user(db, data)
    return user.as_session_user()


# -----------------------------------------------------------------------------

@router.post("/loginUser", response_model=SessionUserResponse)
async def login_user(
    params: dict[str, str] = Depends(request_params),
    db: AsyncSession       = Depends(get_db),
):
    user = await authenticate_user(db, params.get("userName"), params.get("password"))
    return user.as_session_user()


# -----------------------------------------------------------------------------
