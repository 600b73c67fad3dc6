#!/usr/bin/env python
#
# -------------------------------------------------------------------------------
"""List accounts (session views only, no password hashes) and their page counts."""

import asyncio

from sqlalchemy import func, select

from socialwiki.core.config import get_settings
from socialwiki.core.database import get_engine, get_session_factory
from socialwiki.models import WikiPage
from socialwiki.services.users import list_users


async def check():
    s = get_settings()
    print("DATABASE_URL:", s.database_url)
    factory = get_session_factory()
    async with factory() as db:
        for user in await list_users(db):
            pages = (await db.execute(
                select(func.count()).select_from(WikiPage).where(WikiPage.author_id == user.id)
            )).scalar_one()
            view = user.as_session_user()
            print(f"  id={view.id} user_name={view.user_name} email={view.email} pages={pages}")
    await get_engine().dispose()


asyncio.run(check())
