"""Core protocols and type aliases for strutil."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

# Decoded key -> decoded value, insertion-ordered by first occurrence.
QueryMap = dict[str, str]

# Anything with a natural str() form; None entries are skipped by templates.
TemplateValue = object | None


@runtime_checkable
class Converter[T](Protocol):
    """Convert a raw string into a native value.

    Implementations raise ValueError (or a subclass) when the text does
    not parse; the registry turns that into a FormatError.
    """

    def __call__(self, raw: str, /) -> T: ...
