"""Config types for a configured StringUtil.

The same dict shape can come from JSON or YAML:

    plus_as_space: false
    id_separator: "|"
    url_pattern: "https://\\S+"

Config construction path:
  dict → parse_config() → StringUtilConfig → StringUtil(config)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from strutil._errors import StringUtilError
from strutil._strings import ID_SEPARATOR
from strutil._urls import URL_PATTERN

MAX_URL_PATTERN_LENGTH = 4096


class ConfigParseError(StringUtilError):
    """Error parsing a config dict into config types."""


@dataclass(frozen=True, slots=True)
class StringUtilConfig:
    """Policy knobs for the string operations.

    - plus_as_space: decode ``+`` in query keys/values as a space
    - id_separator: separator used by to_combined_id
    - url_pattern: RE2 pattern used by extract_urls
    """

    plus_as_space: bool = True
    id_separator: str = ID_SEPARATOR
    url_pattern: str = URL_PATTERN


_FIELDS = frozenset({"plus_as_space", "id_separator", "url_pattern"})


def parse_config(data: dict[str, Any]) -> StringUtilConfig:
    """Parse a dict into a StringUtilConfig.

    Missing keys take their defaults. The URL pattern is only checked for
    type and length here; StringUtil compiles it.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(set(data) - _FIELDS)
    if unknown:
        msg = f"unknown config keys: {unknown} (expected some of {sorted(_FIELDS)})"
        raise ConfigParseError(msg)

    plus_as_space = data.get("plus_as_space", True)
    if not isinstance(plus_as_space, bool):
        msg = f"'plus_as_space' must be a bool, got {type(plus_as_space).__name__}"
        raise ConfigParseError(msg)

    id_separator = data.get("id_separator", ID_SEPARATOR)
    if not isinstance(id_separator, str):
        msg = f"'id_separator' must be a string, got {type(id_separator).__name__}"
        raise ConfigParseError(msg)
    if not id_separator:
        msg = "'id_separator' must not be empty"
        raise ConfigParseError(msg)

    url_pattern = data.get("url_pattern", URL_PATTERN)
    if not isinstance(url_pattern, str):
        msg = f"'url_pattern' must be a string, got {type(url_pattern).__name__}"
        raise ConfigParseError(msg)
    if not url_pattern:
        msg = "'url_pattern' must not be empty"
        raise ConfigParseError(msg)
    if len(url_pattern) > MAX_URL_PATTERN_LENGTH:
        msg = (
            f"'url_pattern' length {len(url_pattern)} exceeds maximum "
            f"{MAX_URL_PATTERN_LENGTH}"
        )
        raise ConfigParseError(msg)

    return StringUtilConfig(
        plus_as_space=plus_as_space,
        id_separator=id_separator,
        url_pattern=url_pattern,
    )
