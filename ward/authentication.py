"""
Token authentication used by the API.

Kept in its own module so that REST framework can import the class from
settings without pulling in any view code.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """``Authorization: Token <key>`` authentication.

    Stable import path for ``DEFAULT_AUTHENTICATION_CLASSES``; JWT bearer
    tokens are handled by SimpleJWT alongside it.
    """

    keyword = 'Token'
