"""Base64-wrapped JSON decoding."""

from __future__ import annotations

import base64
import json
from typing import Any, overload

from strutil._binder import coerce_value
from strutil._errors import ArgumentError, FormatError
from strutil._registry import DEFAULT_CONVERTERS, ConverterRegistry


@overload
def convert_base64_json_to_object(
    value: str | None, cls: None = None, *, converters: ConverterRegistry = ...
) -> Any: ...


@overload
def convert_base64_json_to_object[T](
    value: str | None, cls: type[T], *, converters: ConverterRegistry = ...
) -> T | None: ...


def convert_base64_json_to_object(
    value: str | None,
    cls: Any = None,
    *,
    converters: ConverterRegistry = DEFAULT_CONVERTERS,
) -> Any:
    """Decode base64 text holding a JSON document.

    With ``cls`` the decoded object is bound onto that type (see
    bind_mapping); without it the plain JSON value is returned. A JSON
    ``null`` document returns None.

    Raises:
        ArgumentError: value is None or blank
        FormatError: value is not valid base64, or the JSON does not fit cls
        json.JSONDecodeError: the decoded bytes are not valid JSON
    """
    if value is None or not value.strip():
        msg = "value must be a non-blank base64 string"
        raise ArgumentError(msg)

    try:
        raw = base64.b64decode(value.strip(), validate=True)
    except ValueError as e:
        msg = f"invalid base64 input: {e}"
        raise FormatError(msg) from e

    data = json.loads(raw)
    if data is None or cls is None:
        return data
    return coerce_value(data, cls, converters, where=getattr(cls, "__name__", "value"))
