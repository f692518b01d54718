"""StringUtil — the string operations bound to one config and registry.

Module-level functions use the default policy. Build a StringUtil when a
caller needs a different one, e.g. literal ``+`` in query values or a
custom URL pattern, or extra converters for its model types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import re2

from strutil._binder import bind_mapping, parse_query_string
from strutil._config import ConfigParseError, StringUtilConfig
from strutil._json import convert_base64_json_to_object
from strutil._query import get_query_parameter, get_query_parameters
from strutil._registry import DEFAULT_CONVERTERS, ConverterRegistry
from strutil._strings import get_domain_from_email, to_combined_id
from strutil._template import build_string_from_template
from strutil._urls import extract_urls

if TYPE_CHECKING:
    from collections.abc import Mapping

    from strutil._types import QueryMap, TemplateValue


@dataclass(frozen=True, slots=True)
class StringUtil:
    """String operations with a fixed config.

    The URL pattern is compiled at construction time via ``google-re2``.

    Raises:
        ConfigParseError: If config.url_pattern is not valid RE2 syntax.
    """

    config: StringUtilConfig = field(default_factory=StringUtilConfig)
    converters: ConverterRegistry = DEFAULT_CONVERTERS
    _url_re: re2.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            compiled = re2.compile(self.config.url_pattern)
        except re2.error as e:
            msg = f'invalid url_pattern "{self.config.url_pattern}": {e}'
            raise ConfigParseError(msg) from e
        object.__setattr__(self, "_url_re", compiled)

    def to_combined_id(self, *keys: str | None) -> str:
        return to_combined_id(*keys, separator=self.config.id_separator)

    def get_query_parameter(self, url: str | None, name: str | None) -> str | None:
        return get_query_parameter(url, name, plus_as_space=self.config.plus_as_space)

    def get_query_parameters(self, url: str | None) -> QueryMap | None:
        return get_query_parameters(url, plus_as_space=self.config.plus_as_space)

    def parse_query_string[T](self, query_string: str | None, cls: type[T]) -> T:
        return parse_query_string(query_string, cls, converters=self.converters)

    def bind_mapping[T](self, cls: type[T], data: Mapping[str, Any]) -> T:
        return bind_mapping(cls, data, converters=self.converters)

    def build_string_from_template(
        self, template: str | None, *values: TemplateValue
    ) -> str | None:
        return build_string_from_template(template, *values)

    def extract_urls(self, value: str | None) -> list[str] | None:
        return extract_urls(value, pattern=self._url_re)

    def convert_base64_json_to_object(self, value: str | None, cls: Any = None) -> Any:
        return convert_base64_json_to_object(value, cls, converters=self.converters)

    def get_domain_from_email(self, address: str | None) -> str | None:
        return get_domain_from_email(address)
