#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
ORM Models for SocialWiki
=========================

Tables
------
users       — accounts with salted password hashes
wiki_pages  — pages and revisions; ``parent_id`` links a revision to the
              page it was edited from, ``IS_ORIGINAL_ID`` marks an original

All primary keys are integers generated by the store and may be assigned
only once.  Timestamps stored in UTC.
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Integer, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from socialwiki.core.database import Base


# ----------------------------------------------------------------------------

IS_ORIGINAL_ID = -1


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def _write_once_id(instance, value):
    current = instance.__dict__.get("id")
    if current is not None and value != current:
        raise ValueError(
            f"{type(instance).__name__} id is already set to {current}"
        )
    return value


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# users
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class SessionUser:
    """Read-only copy of a User without the password, for display contexts."""
    id:         int | None
    user_name:  str
    first_name: str | None
    last_name:  str | None
    email:      str


class User(Base):
    __tablename__ = "users"

    id:            Mapped[int]        = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_name:     Mapped[str]        = mapped_column(String(64),  unique=True, nullable=False, index=True)
    first_name:    Mapped[str | None] = mapped_column(String(128), nullable=True)
    last_name:     Mapped[str | None] = mapped_column(String(128), nullable=True)
    email:         Mapped[str]        = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str]        = mapped_column(String(255), nullable=False)
    created_at:    Mapped[datetime]   = mapped_column(DateTime(timezone=True), default=_utcnow)

    # Relationships
    pages: Mapped[list["WikiPage"]] = relationship(back_populates="author")

    @validates("id")
    def _validate_id(self, key, value):
        return _write_once_id(self, value)

    def as_session_user(self) -> SessionUser:
        return SessionUser(
            id=self.id,
            user_name=self.user_name,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
        )

    def __repr__(self) -> str:
        return f"<User id={self.id} user_name={self.user_name!r} email={self.email!r}>"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# wiki_pages
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class WikiPage(Base):
    """
    A wiki page or one revision of it.

    ``parent_id`` is not a foreign key: the sentinel has no row behind it,
    and a revision may outlive the page it was edited from.
    """
    __tablename__ = "wiki_pages"
    __table_args__ = (
        CheckConstraint(
            f"parent_id = {IS_ORIGINAL_ID} OR parent_id > 0",
            name="ck_wiki_pages_parent_id",
        ),
        CheckConstraint("length(title) > 0", name="ck_wiki_pages_title"),
    )

    id:               Mapped[int]        = mapped_column(Integer, primary_key=True, autoincrement=True)
    title:            Mapped[str]        = mapped_column(String(512), nullable=False, index=True)
    content:          Mapped[str]        = mapped_column(Text, nullable=False)
    parent_id:        Mapped[int]        = mapped_column(Integer, nullable=False, default=IS_ORIGINAL_ID, index=True)
    # authorID supplied when the lineage was started; unset on revisions
    origin_author_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    author_id:        Mapped[int]        = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    creation_date:    Mapped[datetime]   = mapped_column(DateTime(timezone=True), default=_utcnow)
    views:            Mapped[int]        = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    author: Mapped["User"] = relationship(back_populates="pages")

    @validates("id")
    def _validate_id(self, key, value):
        return _write_once_id(self, value)

    # ── Construction shapes ───────────────────────────────────────────────

    @classmethod
    def original(cls, title: str, content: str, author_id: int, author: User) -> "WikiPage":
        """First page of a new lineage, started by ``author_id``."""
        return cls(
            title=title,
            content=content,
            parent_id=IS_ORIGINAL_ID,
            origin_author_id=author_id,
            author_id=author.id,
            author=author,
            creation_date=_utcnow(),
            views=0,
        )

    @classmethod
    def revision(cls, title: str, content: str, parent_id: int, author: User) -> "WikiPage":
        """Edit of page ``parent_id`` by ``author``."""
        return cls(
            title=title,
            content=content,
            parent_id=parent_id,
            author_id=author.id,
            author=author,
            creation_date=_utcnow(),
            views=0,
        )

    @property
    def is_original(self) -> bool:
        return self.parent_id == IS_ORIGINAL_ID

    def __repr__(self) -> str:
        return f"<WikiPage id={self.id} title={self.title!r} parent_id={self.parent_id}>"
