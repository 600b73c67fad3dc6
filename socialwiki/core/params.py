#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Request parameters
==================
The wiki endpoints accept their fields either in the query string or in a
form-encoded body, like servlet request parameters.  A query-string value
wins over a body field of the same name.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import Request


# -----------------------------------------------------------------------------

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# -----------------------------------------------------------------------------

async def request_params(request: Request) -> dict[str, str]:
    """FastAPI dependency returning the merged parameter map."""
    params: dict[str, str] = {}

    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        for key, value in form.multi_items():
            # first value wins; uploaded files are not parameters
            if isinstance(value, str) and key not in params:
                params[key] = value

    for key in request.query_params.keys():
        params[key] = request.query_params.getlist(key)[0]

    return params


# -----------------------------------------------------------------------------
