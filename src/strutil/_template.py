"""TemplateBuilder — positional ``{...}`` substitution.

Placeholders bind by position only: the text between the braces is never
inspected. Values are consumed left to right across the whole template,
skipping None entries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strutil._types import TemplateValue


def build_string_from_template(
    template: str | None, *values: TemplateValue
) -> str | None:
    """Replace each ``{...}`` placeholder with the next non-None value.

    - A None template returns None; no values returns the template as-is.
    - A placeholder with no ``}`` after it ends substitution: the rest of
      the template is kept verbatim.
    - Once the values run out (or only None remains), placeholders are
      left intact, braces included.

    >>> build_string_from_template("{a} and {b}", 1, None, 2)
    '1 and 2'
    """
    if template is None or not values:
        return template
    if "{" not in template:
        return template

    parts: list[str] = []
    cursor = 0
    pos = 0
    end = len(template)

    while pos < end:
        open_at = template.find("{", pos)
        if open_at == -1:
            parts.append(template[pos:])
            break

        close_at = template.find("}", open_at + 1)
        if close_at == -1:
            parts.append(template[pos:])
            break

        parts.append(template[pos:open_at])

        while cursor < len(values) and values[cursor] is None:
            cursor += 1

        if cursor < len(values):
            parts.append(str(values[cursor]))
            cursor += 1
        else:
            parts.append(template[open_at : close_at + 1])

        pos = close_at + 1

    return "".join(parts)
