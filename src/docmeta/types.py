"""Host type system that parameter type tokens resolve against."""

from __future__ import annotations

import datetime
import decimal
import uuid
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import CastError, DefinitionError


@dataclass(frozen=True)
class CastInfo:
    """Describes which runtime values a declared type accepts.

    An empty `accepts_types` means any value is accepted.
    """

    name: str
    accepts_types: tuple[type, ...] = ()
    coerce: Callable[[Any], Any] | None = None

    def accepts(self, value: Any) -> bool:
        if not self.accepts_types:
            return True
        # bool is an int subclass; only accept it where bool is declared
        if isinstance(value, bool) and bool not in self.accepts_types:
            return False
        return isinstance(value, self.accepts_types)

    def describe(self) -> str:
        return self.name


def _type_name(value: Any) -> str:
    if value is None:
        return "none"
    return type(value).__name__


def cast(value: Any, info: CastInfo, param: str | None = None) -> Any:
    """Check `value` against `info`, applying its coercion if it has one.

    Raises:
        CastError: If the value is not accepted.
    """
    if not info.accepts(value):
        found = _type_name(value)
        prefix = f"{param}: " if param else ""
        raise CastError(
            f"{prefix}expected {info.describe()}, found {found}",
            expected=info.describe(),
            found=found,
        )
    if info.coerce is not None:
        return info.coerce(value)
    return value


class TypeRegistry:
    """Name -> CastInfo map used to resolve parameter type tokens."""

    def __init__(self, types: Mapping[str, CastInfo] | None = None):
        self._types: dict[str, CastInfo] = dict(types or {})

    def register(self, name: str, *accepts_types: type, coerce=None) -> CastInfo:
        info = CastInfo(name=name, accepts_types=accepts_types, coerce=coerce)
        self._types[name] = info
        return info

    def alias(self, name: str, target: str) -> None:
        self._types[name] = self.resolve(target)

    def resolve(self, token: str) -> CastInfo:
        """Resolve a type token.

        Raises:
            DefinitionError: If the token names no known type.
        """
        try:
            return self._types[token]
        except KeyError:
            raise DefinitionError(f"unknown parameter type {token!r}") from None

    def __contains__(self, token: str) -> bool:
        return token in self._types

    def names(self) -> list[str]:
        return sorted(self._types)


def default_registry() -> TypeRegistry:
    """Value types of the document language."""
    registry = TypeRegistry()
    registry.register("any")
    registry.register("none", type(None))
    registry.register("bool", bool)
    registry.register("int", int)
    registry.register("float", float, int, coerce=float)
    registry.register("str", str)
    registry.register("array", list, tuple, coerce=list)
    registry.register("dict", dict)
    registry.register("content", str)
    registry.register("func", Callable)
    registry.alias("Value", "any")
    registry.alias("String", "str")
    registry.alias("Content", "content")
    registry.alias("Array", "array")
    registry.alias("Dict", "dict")
    return registry


def sql_registry() -> TypeRegistry:
    """PostgreSQL type names as they appear in SQL function doc blocks."""
    registry = TypeRegistry()
    registry.register("text", str)
    registry.register("bigint", int)
    registry.register("boolean", bool)
    registry.register("numeric", int, float, decimal.Decimal)
    registry.register("jsonb", dict, list, str, int, float, bool, type(None))
    registry.register("uuid", uuid.UUID, str)
    registry.register("timestamptz", datetime.datetime)
    registry.register("interval", datetime.timedelta)
    registry.register("text[]", Sequence)
    registry.alias("varchar", "text")
    registry.alias("integer", "bigint")
    registry.alias("int", "bigint")
    registry.alias("int4", "bigint")
    registry.alias("int8", "bigint")
    registry.alias("bool", "boolean")
    registry.alias("json", "jsonb")
    registry.alias("timestamp", "timestamptz")
    return registry
