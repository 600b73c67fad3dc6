#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Page service
============
Create, search, and read wiki pages.

A page is either an original (``parent_id == IS_ORIGINAL_ID``) or a revision
pointing at the page it was edited from.  Creation is strict about who the
author is; search treats an unknown or ambiguous author as "any author".
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from socialwiki.core.errors import (
    AuthorResolutionError, EmptySearchError,
    PageSaveError, PageValidationError,
)
from socialwiki.models import IS_ORIGINAL_ID, WikiPage
from .users import find_by_user_name

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

_INTEGER_RE = re.compile(r"[+-]?\d+")
_LONG_MIN = -(2 ** 63)
_LONG_MAX = 2 ** 63 - 1


def _parse_long(value: Optional[str]) -> Optional[int]:
    """Signed 64-bit integer from ``value``, or None when it is not one."""
    if value is None or not _INTEGER_RE.fullmatch(value):
        return None
    try:
        number = int(value)
    except ValueError:
        # longer than the interpreter's int-from-str digit limit
        return None
    if not _LONG_MIN <= number <= _LONG_MAX:
        return None
    return number


def _contains(term: str) -> str:
    """LIKE pattern matching ``term`` literally anywhere in the column."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _reject(reason: str) -> PageValidationError:
    log.debug("Rejected page request: %s", reason)
    return PageValidationError(reason)


def page_to_dict(page: WikiPage) -> dict[str, Any]:
    return {
        "id":               page.id,
        "title":            page.title,
        "content":          page.content,
        "parent_id":        page.parent_id,
        "origin_author_id": page.origin_author_id,
        "author_id":        page.author_id,
        "author":           page.author.user_name if page.author else None,
        "creation_date":    page.creation_date,
        "views":            page.views or 0,
    }


async def _get_page(db: AsyncSession, page_id: Optional[str]) -> WikiPage:
    number = _parse_long(page_id)
    page = None
    if number is not None:
        page = await db.get(WikiPage, number, options=[selectinload(WikiPage.author)])
    if not page:
        raise HTTPException(status_code=404, detail=f"Page '{page_id}' not found")
    return page


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Store access
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

async def save_page(db: AsyncSession, page: WikiPage) -> WikiPage:
    """Persist ``page`` and return it with its generated id.

    Raises PageSaveError carrying the attempted page when the store rejects
    it on a constraint.
    """
    # Taken before the flush: a failed flush expires the author row.
    attempted = page_to_dict(page)

    db.add(page)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        log.warning("Store rejected page %r: %s", attempted["title"], exc.orig)
        raise PageSaveError(attempted, detail=str(exc.orig)) from exc
    return page


# -----------------------------------------------------------------------------

async def find_by_title_and_author_id_and_content(
    db: AsyncSession,
    title: Optional[str],
    author_id: Optional[int],
    content: Optional[str],
) -> list[WikiPage]:
    """Pages matching every given filter; blank filters match anything.

    Title and content are case-insensitive substring matches.
    """
    q = (
        select(WikiPage)
        .options(selectinload(WikiPage.author))
        .order_by(WikiPage.id)
    )
    if title:
        q = q.where(WikiPage.title.ilike(_contains(title), escape="\\"))
    if author_id is not None:
        q = q.where(WikiPage.author_id == author_id)
    if content:
        q = q.where(WikiPage.content.ilike(_contains(content), escape="\\"))

    result = await db.execute(q)
    return list(result.scalars().all())


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Operations
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

async def create_wiki_page(
    db: AsyncSession,
    *,
    title: Optional[str],
    content: Optional[str],
    username: Optional[str],
    parent_id: Optional[str],
    author_id: Optional[str],
) -> WikiPage:
    """Validate a create/edit request and store the resulting page.

    ``parent_id`` and ``author_id`` arrive as strings.  Checks run in a fixed
    order and the first failure wins.
    """
    parent = _parse_long(parent_id)
    if parent is None:
        raise _reject("parentID must be an integer")

    author_number = _parse_long(author_id)
    if author_number is None:
        raise _reject("authorID must be an integer")

    if not title:
        raise _reject("title must be a non-empty string")
    if content is None:
        raise _reject("content is required")
    if parent == 0 or parent < IS_ORIGINAL_ID:
        raise _reject(f"parentID must be {IS_ORIGINAL_ID} or a positive id")
    if author_number <= 0:
        raise _reject("authorID must be positive")

    matches = await find_by_user_name(db, username)
    if len(matches) != 1:
        log.debug("Username %r resolved to %d accounts", username, len(matches))
        raise AuthorResolutionError(f"username {username!r} is not a unique account")
    user = matches[0]

    if parent == IS_ORIGINAL_ID:
        page = WikiPage.original(title, content, author_number, user)
    else:
        page = WikiPage.revision(title, content, parent, user)

    page = await save_page(db, page)
    log.info("Created page %d %r (parent %d) by %s", page.id, page.title, page.parent_id, user.user_name)
    return page


# -----------------------------------------------------------------------------

async def search_wiki_pages(
    db: AsyncSession,
    *,
    title: Optional[str],
    author: Optional[str],
    content: Optional[str],
) -> list[WikiPage]:
    if not title and not author and not content:
        raise EmptySearchError("at least one of title, author, content is required")

    author_id = None
    matches = await find_by_user_name(db, author)
    if len(matches) == 1:
        author_id = matches[0].id
    elif author:
        # Unknown or ambiguous author: search without an author filter.
        log.debug("Author %r resolved to %d accounts; filter dropped", author, len(matches))

    return await find_by_title_and_author_id_and_content(db, title, author_id, content)


# -----------------------------------------------------------------------------

async def get_wiki_page(db: AsyncSession, page_id: Optional[str]) -> WikiPage:
    """Fetch a page for viewing and count the visit."""
    page = await _get_page(db, page_id)
    page.views = (page.views or 0) + 1
    await db.flush()
    return page


# -----------------------------------------------------------------------------

async def get_page_lineage(db: AsyncSession, page_id: Optional[str]) -> list[WikiPage]:
    """The page followed by each page it was edited from, back to the original.

    Stops early at a parent that no longer exists or that was already seen.
    """
    page = await _get_page(db, page_id)
    chain = [page]
    seen = {page.id}

    while not page.is_original and page.parent_id not in seen:
        parent = await db.get(
            WikiPage, page.parent_id, options=[selectinload(WikiPage.author)]
        )
        if parent is None:
            break
        chain.append(parent)
        seen.add(parent.id)
        page = parent

    return chain


# -----------------------------------------------------------------------------
