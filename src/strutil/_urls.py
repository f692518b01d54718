"""URL extraction from free text.

Matching uses ``google-re2`` for guaranteed linear-time scanning, so
arbitrarily long user text cannot trigger catastrophic backtracking.
"""

from __future__ import annotations

import re2

# Scheme or "www." prefix, then a run without whitespace, quotes, <> or [],
# not ending in trailing punctuation.
URL_PATTERN = r"""(?i:https?://|www\.)[^\s<>"'\[\]]*[^\s<>"'\[\]().,;:!?]"""

_URL_RE = re2.compile(URL_PATTERN)


def extract_urls(value: str | None, *, pattern: re2.Pattern[str] | None = None) -> list[str] | None:
    """Return every URL found in ``value``, in order of appearance.

    None or blank input returns None; text without URLs returns [].
    ``pattern`` overrides the default compiled URL pattern.
    """
    if value is None or not value.strip():
        return None
    compiled = pattern if pattern is not None else _URL_RE
    return [m.group(0) for m in compiled.finditer(value)]
