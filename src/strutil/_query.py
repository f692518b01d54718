"""QueryScanner — key lookup and key/value extraction over raw URLs.

Segments are produced lazily as slices of the query string; no segment
list is ever built. Keys are compared ordinally (case-sensitive).

Two entry points:
- get_query_parameter: first match for one name, scanning the raw URL
- get_query_parameters: every parameter of an absolute URI, first wins
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from strutil._decode import decode_component

if TYPE_CHECKING:
    from collections.abc import Iterator

    from strutil._types import QueryMap


def iter_segments(query: str, start: int = 0) -> Iterator[tuple[str, str | None]]:
    """Yield (key, value) slices for each ``&``-delimited segment.

    Empty segments (``a=1&&b=2``) are skipped. A segment without ``=``
    is a bare key and yields None as its value. Nothing is decoded here.
    """
    end = len(query)
    pos = start
    while pos < end:
        amp = query.find("&", pos)
        if amp == -1:
            amp = end
        if amp > pos:
            eq = query.find("=", pos, amp)
            if eq == -1:
                yield query[pos:amp], None
            else:
                yield query[pos:eq], query[eq + 1 : amp]
        pos = amp + 1


def get_query_parameter(
    url: str | None, name: str | None, *, plus_as_space: bool = True
) -> str | None:
    """Return the decoded value of the first ``name`` parameter in ``url``.

    A bare key (``?flag``) matches with an empty string. Returns None when
    either argument is empty, the URL has no query, or nothing matches.
    """
    if not url or not name:
        return None

    mark = url.find("?")
    if mark == -1 or mark == len(url) - 1:
        return None

    for key, value in iter_segments(url, mark + 1):
        if key != name:
            continue
        if value is None:
            return ""
        return decode_component(value, plus_as_space=plus_as_space)
    return None


def get_query_parameters(
    url: str | None, *, plus_as_space: bool = True
) -> QueryMap | None:
    """Extract every query parameter of an absolute URI.

    Keys and values are decoded; bare keys map to an empty string. The
    first occurrence of a key wins. Keys that decode to empty or
    whitespace-only text are dropped.

    Returns None (never an empty dict) when the URL is not an absolute
    URI, has no query, or yields no parameters.
    """
    if not url:
        return None

    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.query:
        return None

    params: QueryMap = {}
    for raw_key, raw_value in iter_segments(parts.query):
        key = decode_component(raw_key, plus_as_space=plus_as_space)
        if not key.strip() or key in params:
            continue
        if raw_value is None:
            params[key] = ""
        else:
            params[key] = decode_component(raw_value, plus_as_space=plus_as_space)

    return params or None
