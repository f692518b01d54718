"""TypedBinder — bind string key/value pairs onto a model's fields.

A FieldTable describes the writable fields of a class: annotated
attributes (dataclass fields included) and properties with a setter.
Tables are built once per class and cached process-wide; lookups are
case-insensitive via str.casefold().

Binding paths:
- parse_query_string: form-decoded query string → converted field values
- bind_mapping: decoded JSON object → type-checked field values
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import types
import typing
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, get_type_hints
from urllib.parse import parse_qsl

from strutil._errors import ArgumentError, FormatError
from strutil._registry import (
    DEFAULT_CONVERTERS,
    ConverterRegistry,
    UnsupportedTypeError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A writable field: attribute name plus resolved declared type."""

    name: str
    annotation: Any


@dataclass(frozen=True, slots=True)
class FieldTable:
    """Writable fields of one class, keyed by casefolded name.

    When two fields differ only by case, the first declared one wins.
    """

    owner: type
    _by_key: MappingProxyType[str, FieldDescriptor] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def lookup(self, name: str) -> FieldDescriptor | None:
        """Find a field by name, ignoring case."""
        return self._by_key.get(name.casefold())

    @property
    def names(self) -> list[str]:
        """Declared names of all writable fields, in declaration order."""
        return [d.name for d in self._by_key.values()]

    def __len__(self) -> int:
        return len(self._by_key)


# ═══════════════════════════════════════════════════════════════════════════════
# Field table cache
# ═══════════════════════════════════════════════════════════════════════════════

_TABLES: dict[type, FieldTable] = {}
_TABLES_LOCK = threading.Lock()


def field_table(cls: type) -> FieldTable:
    """Return the cached FieldTable for ``cls``, building it on first use.

    Raises:
        ArgumentError: cls is not a class, or is a frozen dataclass
    """
    table = _TABLES.get(cls)
    if table is not None:
        return table

    with _TABLES_LOCK:
        table = _TABLES.get(cls)
        if table is None:
            table = _build_field_table(cls)
            _TABLES[cls] = table
            logger.debug(
                "built field table for %s.%s: %s",
                cls.__module__,
                cls.__qualname__,
                table.names,
            )
    return table


def _build_field_table(cls: Any) -> FieldTable:
    if not isinstance(cls, type):
        msg = f"expected a class, got {type(cls).__name__}"
        raise ArgumentError(msg)

    params = getattr(cls, "__dataclass_params__", None)
    if params is not None and params.frozen:
        msg = f"{cls.__qualname__} is a frozen dataclass; its fields cannot be assigned"
        raise ArgumentError(msg)

    by_key: dict[str, FieldDescriptor] = {}

    def add(name: str, annotation: Any) -> None:
        by_key.setdefault(name.casefold(), FieldDescriptor(name, annotation))

    hints = get_type_hints(cls)
    for name, annotation in hints.items():
        if name.startswith("_") or typing.get_origin(annotation) is ClassVar:
            continue
        if isinstance(_class_attr(cls, name), property):
            continue  # handled with the other properties below
        add(name, annotation)

    seen: set[str] = set()
    for klass in reversed(cls.__mro__):
        for name in vars(klass):
            if name in seen or name.startswith("_"):
                continue
            seen.add(name)
            # The most-derived definition decides whether the name is settable.
            attr = _class_attr(cls, name)
            if not isinstance(attr, property) or attr.fset is None:
                continue
            getter_hints = get_type_hints(attr.fget) if attr.fget is not None else {}
            add(name, getter_hints.get("return", Any))

    return FieldTable(owner=cls, _by_key=MappingProxyType(by_key))


def _class_attr(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    return None


def _instantiate[T](cls: type[T]) -> T:
    try:
        return cls()
    except TypeError as e:
        msg = f"{cls.__qualname__} cannot be constructed without arguments: {e}"
        raise ArgumentError(msg) from e


# ═══════════════════════════════════════════════════════════════════════════════
# Query string binding
# ═══════════════════════════════════════════════════════════════════════════════


def parse_query_string[T](
    query_string: str | None,
    cls: type[T],
    *,
    converters: ConverterRegistry = DEFAULT_CONVERTERS,
) -> T:
    """Bind a form-encoded query string onto a new instance of ``cls``.

    A single leading ``?`` is ignored. Keys match fields case-insensitively;
    unknown keys and keys without a value are skipped, so unmatched fields
    keep their defaults. A repeated key is assigned in order, leaving the
    last value in place.

    Raises:
        ArgumentError: query_string is None/empty or cls is not bindable
        FormatError: a value cannot be converted to its field's type
    """
    if not query_string:
        msg = "query_string must be a non-empty string"
        raise ArgumentError(msg)

    table = field_table(cls)
    model = _instantiate(cls)

    for key, value in parse_qsl(query_string.removeprefix("?"), keep_blank_values=True):
        if not value:
            continue
        descriptor = table.lookup(key)
        if descriptor is None:
            continue
        try:
            converted = converters.convert(value, descriptor.annotation)
        except UnsupportedTypeError:
            raise
        except FormatError as e:
            msg = f"field {descriptor.name!r}: {e}"
            raise FormatError(msg) from e
        setattr(model, descriptor.name, converted)

    return model


# ═══════════════════════════════════════════════════════════════════════════════
# Mapping (decoded JSON) binding
# ═══════════════════════════════════════════════════════════════════════════════

_JSON_SCALARS: tuple[type, ...] = (str, int, float, bool)


def bind_mapping[T](
    cls: type[T],
    data: Mapping[str, Any],
    *,
    converters: ConverterRegistry = DEFAULT_CONVERTERS,
) -> T:
    """Bind an already-decoded mapping onto a new instance of ``cls``.

    Keys match fields case-insensitively and unknown keys are ignored.
    Nested mappings bind recursively into class-typed fields, and strings
    are converted for registry types such as UUID or datetime.

    Raises:
        ArgumentError: cls is not bindable
        FormatError: a value does not fit its field's declared type
    """
    table = field_table(cls)
    model = _instantiate(cls)
    for key, value in data.items():
        descriptor = table.lookup(str(key))
        if descriptor is None:
            continue
        bound = coerce_value(value, descriptor.annotation, converters, where=descriptor.name)
        setattr(model, descriptor.name, bound)
    return model


def coerce_value(
    value: Any,
    annotation: Any,
    converters: ConverterRegistry = DEFAULT_CONVERTERS,
    *,
    where: str = "value",
) -> Any:
    """Fit a decoded JSON value to a declared type.

    Raises:
        FormatError: the value has the wrong shape for the annotation
    """
    if annotation is Any or annotation is object:
        return value

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Union or origin is types.UnionType:
        if value is None and type(None) in args:
            return None
        last_error: FormatError | None = None
        for member in args:
            if member is type(None):
                continue
            try:
                return coerce_value(value, member, converters, where=where)
            except FormatError as e:
                last_error = e
        if last_error is not None:
            raise last_error

    if value is None:
        msg = f"{where}: null is not allowed for {_describe(annotation)}"
        raise FormatError(msg)

    if origin in (list, tuple, set, frozenset):
        if not isinstance(value, list):
            msg = f"{where}: expected a JSON array, got {type(value).__name__}"
            raise FormatError(msg)
        if origin is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
            if len(value) != len(args):
                msg = f"{where}: expected {len(args)} items, got {len(value)}"
                raise FormatError(msg)
            return tuple(
                coerce_value(v, t, converters, where=f"{where}[{i}]")
                for i, (v, t) in enumerate(zip(value, args, strict=True))
            )
        item_type = args[0] if args else Any
        items = [
            coerce_value(v, item_type, converters, where=f"{where}[{i}]")
            for i, v in enumerate(value)
        ]
        return origin(items)

    if origin is dict:
        if not isinstance(value, dict):
            msg = f"{where}: expected a JSON object, got {type(value).__name__}"
            raise FormatError(msg)
        value_type = args[1] if len(args) == 2 else Any
        return {
            k: coerce_value(v, value_type, converters, where=f"{where}.{k}")
            for k, v in value.items()
        }

    if origin is not None:
        return value

    if annotation in _JSON_SCALARS:
        return _coerce_scalar(value, annotation, where)

    if isinstance(value, str):
        try:
            return converters.convert(value, annotation)
        except FormatError as e:
            msg = f"{where}: {e}"
            raise FormatError(msg) from e

    if isinstance(value, dict) and _is_bindable(annotation):
        return bind_mapping(annotation, value, converters=converters)

    if isinstance(annotation, type) and isinstance(value, annotation):
        return value

    msg = f"{where}: cannot bind {type(value).__name__} to {_describe(annotation)}"
    raise FormatError(msg)


def _coerce_scalar(value: Any, annotation: type, where: str) -> Any:
    if annotation is bool:
        ok = isinstance(value, bool)
    elif annotation is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        if ok:
            return float(value)
    elif annotation is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, str)
    if not ok:
        msg = f"{where}: expected {annotation.__name__}, got {type(value).__name__}"
        raise FormatError(msg)
    return value


def _is_bindable(annotation: Any) -> bool:
    if not isinstance(annotation, type) or annotation.__module__ == "builtins":
        return False
    return dataclasses.is_dataclass(annotation) or bool(
        getattr(annotation, "__annotations__", None)
    )


def _describe(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation)
