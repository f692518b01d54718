"""Converter registry for string → native type binding.

The registry maps a target type to a plain callable ``(raw: str) -> value``.
Binding code asks the registry to convert a query or JSON string into the
declared type of a field.

Architecture:
- ConverterRegistryBuilder → .build() → ConverterRegistry (immutable)
- register_core_converters() installs the built-in scalar types
- Enum subclasses, ``X | None`` and other unions are handled structurally

Example::

    builder = register_core_converters(ConverterRegistryBuilder())
    builder.converter(Path, Path)
    registry = builder.build()

    registry.convert("42", int)  # 42
"""

from __future__ import annotations

import datetime as dt
import enum
import types
import typing
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from strutil._errors import FormatError

if TYPE_CHECKING:
    from strutil._types import Converter

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class UnsupportedTypeError(FormatError):
    """No converter is registered for the requested target type."""

    def __init__(self, target: Any, available: list[str]) -> None:
        self.target = target
        self.available = sorted(available)
        name = _type_name(target)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"no converter for type {name} (registered: {registered})"
        else:
            msg = f"no converter for type {name} (no converters are registered)"
        super().__init__(msg)


# ═══════════════════════════════════════════════════════════════════════════════
# Core converters
# ═══════════════════════════════════════════════════════════════════════════════


def _to_bool(raw: str) -> bool:
    text = raw.strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    msg = f"{raw!r} is not a valid boolean (expected 'true' or 'false')"
    raise ValueError(msg)


def _to_decimal(raw: str) -> Decimal:
    try:
        return Decimal(raw.strip())
    except InvalidOperation as e:
        msg = f"{raw!r} is not a valid decimal"
        raise ValueError(msg) from e


def _to_datetime(raw: str) -> dt.datetime:
    return dt.datetime.fromisoformat(raw.strip())


def _to_date(raw: str) -> dt.date:
    return dt.date.fromisoformat(raw.strip())


def _to_time(raw: str) -> dt.time:
    return dt.time.fromisoformat(raw.strip())


def _to_uuid(raw: str) -> uuid.UUID:
    return uuid.UUID(raw.strip())


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════


class ConverterRegistryBuilder:
    """Builder for constructing a ConverterRegistry.

    Register converters per target type, then call build() to produce an
    immutable registry. Registering a type twice replaces the converter.
    """

    def __init__(self) -> None:
        self._converters: dict[type, Converter[Any]] = {}

    def converter[T](
        self, target: type[T], fn: Converter[T]
    ) -> ConverterRegistryBuilder:
        """Register a converter for a target type."""
        self._converters[target] = fn
        return self

    def build(self) -> ConverterRegistry:
        """Freeze the registry. No further registration is possible."""
        return ConverterRegistry(
            _converters=MappingProxyType(dict(self._converters)),
        )


def register_core_converters(
    builder: ConverterRegistryBuilder,
) -> ConverterRegistryBuilder:
    """Register the built-in scalar converters.

    bool accepts only 'true'/'false' (any case). int and float use the
    Python constructors, so surrounding whitespace is tolerated.
    """
    return (
        builder.converter(str, str)
        .converter(int, int)
        .converter(float, float)
        .converter(bool, _to_bool)
        .converter(Decimal, _to_decimal)
        .converter(uuid.UUID, _to_uuid)
        .converter(dt.datetime, _to_datetime)
        .converter(dt.date, _to_date)
        .converter(dt.time, _to_time)
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ConverterRegistry:
    """Immutable table of string converters keyed by target type.

    Constructed via ConverterRegistryBuilder. Use convert() to turn a raw
    string into a value of a declared field type.
    """

    _converters: MappingProxyType[type, Converter[Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def convert(self, raw: str, target: Any) -> Any:
        """Convert ``raw`` into ``target``.

        Raises:
            UnsupportedTypeError: no converter handles the target type
            FormatError: the converter rejected the text
        """
        if target is Any or target is object:
            return raw

        origin = typing.get_origin(target)
        if origin is typing.Union or origin is types.UnionType:
            return self._convert_union(raw, typing.get_args(target))
        if origin is typing.Literal:
            return self._convert_literal(raw, typing.get_args(target))
        if origin is not None:
            raise UnsupportedTypeError(target, self.type_names())

        fn = self._converters.get(target)
        if fn is None and isinstance(target, type) and issubclass(target, enum.Enum):
            return _convert_enum(raw, target)
        if fn is None:
            raise UnsupportedTypeError(target, self.type_names())

        try:
            return fn(raw)
        except (ValueError, TypeError, OverflowError) as e:
            msg = f"cannot convert {raw!r} to {_type_name(target)}: {e}"
            raise FormatError(msg) from e

    @property
    def converter_count(self) -> int:
        """Number of registered target types."""
        return len(self._converters)

    def contains(self, target: type) -> bool:
        """Check if a target type has a registered converter."""
        return target in self._converters

    def type_names(self) -> list[str]:
        """Return the names of all registered target types (sorted)."""
        return sorted(_type_name(t) for t in self._converters)

    # ── Private conversion helpers ─────────────────────────────────────────

    def _convert_union(self, raw: str, members: tuple[Any, ...]) -> Any:
        candidates = [m for m in members if m is not type(None)]
        last_error: FormatError | None = None
        for member in candidates:
            try:
                return self.convert(raw, member)
            except FormatError as e:
                last_error = e
        if last_error is None:
            msg = f"cannot convert {raw!r} to None"
            raise FormatError(msg)
        raise last_error

    def _convert_literal(self, raw: str, choices: tuple[Any, ...]) -> Any:
        for choice in choices:
            if isinstance(choice, str) and choice == raw:
                return choice
        for choice in choices:
            if isinstance(choice, str) or choice is None:
                continue
            try:
                if self.convert(raw, type(choice)) == choice:
                    return choice
            except FormatError:
                continue
        msg = f"{raw!r} is not one of {list(choices)!r}"
        raise FormatError(msg)


def _convert_enum(raw: str, target: type[enum.Enum]) -> enum.Enum:
    """Resolve an enum member by name (case-insensitive), then by value."""
    text = raw.strip()
    folded = text.casefold()
    for name, member in target.__members__.items():
        if name.casefold() == folded:
            return member
    for member in target:
        if str(member.value) == text:
            return member
    msg = f"{raw!r} is not a valid {target.__name__}"
    raise FormatError(msg)


def _type_name(target: Any) -> str:
    if isinstance(target, type):
        if target.__module__ == "builtins":
            return target.__qualname__
        return f"{target.__module__}.{target.__qualname__}"
    return repr(target)


DEFAULT_CONVERTERS = register_core_converters(ConverterRegistryBuilder()).build()
