"""Percent/plus decoding of a single query token."""

from __future__ import annotations

from urllib.parse import unquote, unquote_plus


def decode_component(token: str, *, plus_as_space: bool = True) -> str:
    """Decode a query-string key or value.

    Tokens without ``%`` or ``+`` are returned as-is. Everything else goes
    through ``urllib.parse``: malformed escapes such as ``%zz`` are passed
    through unchanged and invalid UTF-8 becomes U+FFFD.

    When plus_as_space is False, ``+`` is kept literally.
    """
    if "%" not in token and "+" not in token:
        return token
    if plus_as_space:
        return unquote_plus(token)
    return unquote(token)
