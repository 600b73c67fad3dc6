from socialwiki.models.models import IS_ORIGINAL_ID, SessionUser, User, WikiPage

__all__ = ["IS_ORIGINAL_ID", "SessionUser", "User", "WikiPage"]
