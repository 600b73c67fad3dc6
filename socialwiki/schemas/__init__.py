from socialwiki.schemas.schemas import (
    UserCreate, SessionUserResponse,
    WikiPageResponse,
)

__all__ = [
    "UserCreate", "SessionUserResponse",
    "WikiPageResponse",
]
