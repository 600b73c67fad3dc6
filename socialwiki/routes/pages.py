#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pages router
============
POST /createWikiPage          — create a page or a revision of one
GET  /searchWikiPage          — filter pages by title / author / content
GET  /advancedSearchWikiPage  — same filters, author passed as ``user``
GET  /getWikiPage             — one page by id (counts a view)
GET  /getWikiPageLineage      — a page and every page it descends from

Parameters may come from the query string or a form-encoded body.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from socialwiki.core.database import get_db
from socialwiki.core.params import request_params
from socialwiki.schemas import WikiPageResponse
from socialwiki.services import pages as page_svc


# -----------------------------------------------------------------------------

router = APIRouter(tags=["pages"])


# ── Create ────────────────────────────────────────────────────────────────────

@router.post("/createWikiPage", response_model=WikiPageResponse)
async def create_wiki_page(
    params: dict[str, str] = Depends(request_params),
    db: AsyncSession       = Depends(get_db),
):
    page = await page_svc.create_wiki_page(
        db,
        title=params.get("title"),
        content=params.get("content"),
        username=params.get("username"),
        parent_id=params.get("parentID"),
        author_id=params.get("authorID"),
    )
    return page_svc.page_to_dict(page)


# ── Search ────────────────────────────────────────────────────────────────────

@router.get("/searchWikiPage", response_model=list[WikiPageResponse])
async def search_wiki_page(
    params: dict[str, str] = Depends(request_params),
    db: AsyncSession       = Depends(get_db),
):
    pages = await page_svc.search_wiki_pages(
        db,
        title=params.get("title"),
        author=params.get("author"),
        content=params.get("content"),
    )
    return [page_svc.page_to_dict(p) for p in pages]


# -----------------------------------------------------------------------------

@router.get("/advancedSearchWikiPage", response_model=list[WikiPageResponse])
async def advanced_search_wiki_page(
    params: dict[str, str] = Depends(request_params),
    db: AsyncSession       = Depends(get_db),
):
    pages = await page_svc.search_wiki_pages(
        db,
        title=params.get("title"),
        author=params.get("user"),
        content=params.get("content"),
    )
    return [page_svc.page_to_dict(p) for p in pages]


# ── Read ──────────────────────────────────────────────────────────────────────

@router.get("/getWikiPage", response_model=WikiPageResponse)
async def get_wiki_page(
    params: dict[str, str] = Depends(request_params),
    db: AsyncSession       = Depends(get_db),
):
    page = await page_svc.get_wiki_page(db, params.get("id"))
    return page_svc.page_to_dict(page)


# -----------------------------------------------------------------------------

@router.get("/getWikiPageLineage", response_model=list[WikiPageResponse])
async def get_wiki_page_lineage(
    params: dict[str, str] = Depends(request_params),
    db: AsyncSession       = Depends(get_db),
):
    chain = await page_svc.get_page_lineage(db, params.get("id"))
    return [page_svc.page_to_dict(p) for p in chain]


# -----------------------------------------------------------------------------
