#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
Security utilities
==================
Salted password hashing (bcrypt).  Account passwords are never stored or
returned in clear text.
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

import bcrypt as _bcrypt_lib


# ----------------------------------------------------------------------------
# Password hashing
# ----------------------------------------------------------------------------

def hash_password(plain: str) -> str:
    return _bcrypt_lib.hashpw(plain.encode("utf-8"), _bcrypt_lib.gensalt()).decode("utf-8")


# ----------------------------------------------------------------------------

def verify_password(plain: str, hashed: str) -> bool:
    try:
        return _bcrypt_lib.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash or over-long password
        return False


# ----------------------------------------------------------------------------
