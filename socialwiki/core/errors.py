#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Error taxonomy
==============
Failures raised by the page and user services.  Each carries the HTTP status
it maps to; ``socialwiki.main`` turns them into responses.

WikiError
 ├── PageValidationError     412  malformed create request, no page in body
 ├── UserValidationError     412  malformed registration request
 ├── AuthorResolutionError   422  username matched zero or several accounts
 ├── EmptySearchError        422  every search filter blank
 └── PageSaveError           500  store rejected the page, body is the attempt
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Any

from fastapi import status


# -----------------------------------------------------------------------------

class WikiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def body(self) -> Any:
        """JSON payload for the response, or None for an empty body."""
        return None


# -----------------------------------------------------------------------------

class PageValidationError(WikiError):
    status_code = status.HTTP_412_PRECONDITION_FAILED

    def body(self) -> Any:
        return {"detail": self.detail}


# -----------------------------------------------------------------------------

class UserValidationError(WikiError):
    status_code = status.HTTP_412_PRECONDITION_FAILED

    def body(self) -> Any:
        return {"detail": self.detail}


# -----------------------------------------------------------------------------

class AuthorResolutionError(WikiError):
    status_code = 422


# -----------------------------------------------------------------------------

class EmptySearchError(WikiError):
    status_code = 422


# -----------------------------------------------------------------------------

class PageSaveError(WikiError):
    """The store refused the page.  ``page`` is the serialised attempt."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, page: dict[str, Any], detail: str = "") -> None:
        super().__init__(detail)
        self.page = page

    def body(self) -> Any:
        return self.page


# -----------------------------------------------------------------------------
