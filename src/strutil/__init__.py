"""strutil — String primitives for query strings, models and templates.

All public types are exported from this module for flat imports:

    from strutil import get_query_parameter, parse_query_string, StringUtil
"""

import logging

__version__ = "0.1.0"

# Typed binding
from strutil._binder import (
    FieldDescriptor,
    FieldTable,
    bind_mapping,
    coerce_value,
    field_table,
    parse_query_string,
)

# Config
from strutil._config import (
    MAX_URL_PATTERN_LENGTH,
    ConfigParseError,
    StringUtilConfig,
    parse_config,
)

# Decoding and query scanning
from strutil._decode import decode_component
from strutil._errors import ArgumentError, FormatError, StringUtilError
from strutil._json import convert_base64_json_to_object
from strutil._query import get_query_parameter, get_query_parameters, iter_segments

# Converters
from strutil._registry import (
    DEFAULT_CONVERTERS,
    ConverterRegistry,
    ConverterRegistryBuilder,
    UnsupportedTypeError,
    register_core_converters,
)

# Facade
from strutil._string_util import StringUtil
from strutil._strings import ID_SEPARATOR, get_domain_from_email, to_combined_id
from strutil._template import build_string_from_template
from strutil._types import Converter, QueryMap, TemplateValue
from strutil._urls import URL_PATTERN, extract_urls

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Protocols and aliases
    "Converter",
    "QueryMap",
    "TemplateValue",
    # Errors
    "StringUtilError",
    "ArgumentError",
    "FormatError",
    "UnsupportedTypeError",
    "ConfigParseError",
    # Query scanning
    "decode_component",
    "iter_segments",
    "get_query_parameter",
    "get_query_parameters",
    # Typed binding
    "FieldDescriptor",
    "FieldTable",
    "field_table",
    "parse_query_string",
    "bind_mapping",
    "coerce_value",
    # Converters
    "ConverterRegistry",
    "ConverterRegistryBuilder",
    "register_core_converters",
    "DEFAULT_CONVERTERS",
    # Templates and strings
    "build_string_from_template",
    "to_combined_id",
    "get_domain_from_email",
    "ID_SEPARATOR",
    # URLs and JSON
    "extract_urls",
    "URL_PATTERN",
    "convert_base64_json_to_object",
    # Config and facade
    "StringUtilConfig",
    "parse_config",
    "MAX_URL_PATTERN_LENGTH",
    "StringUtil",
]
