#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for request validation and response serialisation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Users
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class UserCreate(BaseModel):
    """Registration fields, named as the front-end posts them."""
    model_config = ConfigDict(populate_by_name=True)

    user_name:  str = Field(..., alias="userName", min_length=2, max_length=64,
                            pattern=r"^[a-zA-Z0-9_.-]+$")
    first_name: Optional[str] = Field(None, alias="firstName", max_length=128)
    last_name:  Optional[str] = Field(None, alias="lastName", max_length=128)
    email:      EmailStr
    # bcrypt only looks at the first 72 bytes
    password:   str = Field(..., min_length=8, max_length=72)


# -----------------------------------------------------------------------------

class SessionUserResponse(BaseModel):
    id: int
    user_name: str
    first_name: Optional[str]
    last_name: Optional[str]
    email: str

    model_config = {"from_attributes": True}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Wiki pages
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class WikiPageResponse(BaseModel):
    # id is None when the page was never stored
    id: Optional[int]
    title: str
    content: str
    parent_id: int
    origin_author_id: Optional[int]
    author_id: Optional[int]
    author: Optional[str]
    creation_date: Optional[datetime]
    views: int


# -----------------------------------------------------------------------------
