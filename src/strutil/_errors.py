"""Error types shared across strutil.

Not-found lookups return None; these exceptions are reserved for inputs
that violate a call's contract.
"""

from __future__ import annotations


class StringUtilError(Exception):
    """Base class for strutil errors."""


class ArgumentError(StringUtilError, ValueError):
    """A required argument was None, empty, or otherwise unusable."""


class FormatError(StringUtilError, ValueError):
    """A value could not be converted to the type it was bound to."""
