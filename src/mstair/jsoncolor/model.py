# File: src/mstair/jsoncolor/model.py
"""
Value domain for colorized JSON rendering.

A renderable value is exactly one of the shapes classified by `Kind`:

- OBJECT: any Mapping; keys render in sorted order.
- RECORD: a `Record`, a dataclass instance, or an object providing `__record_fields__()`;
  fields render in declaration order.
- ARRAY: list or tuple.
- STRING, BOOLEAN, NUMBER (int, float, Decimal), NULL (None).
- UNKNOWN: everything else. The formatter writes nothing for these.

Indirection is explicit: `Ref` (or a `weakref.ref`) is peeled by `deref()` a bounded
number of times before classification.
"""

from __future__ import annotations

import dataclasses
import math
import weakref
from collections.abc import Iterable, Iterator, Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Final, NamedTuple, Protocol, runtime_checkable


__all__ = [
    "MAX_DEREF_DEPTH",
    "Field",
    "Kind",
    "Record",
    "Ref",
    "SupportsRecordFields",
    "deref",
    "format_number",
    "kind_of",
]

MAX_DEREF_DEPTH: Final[int] = 2
"""Layers of indirection peeled before dispatch: a reference, then the value it holds."""

_FLOAT_INTEGRAL_LIMIT: Final[float] = 1e16


class Kind(Enum):
    """Shape of a value, as seen by the dispatcher."""

    RECORD = "record"
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    NULL = "null"
    UNKNOWN = "unknown"


@runtime_checkable
class SupportsRecordFields(Protocol):
    """Objects that describe themselves as an ordered list of named fields."""

    def __record_fields__(self) -> Iterable[tuple[str, Any]]: ...


class Field(NamedTuple):
    """One named field of a Record."""

    name: str
    value: Any


class Record:
    """
    Fixed, ordered set of named fields.

    Unlike a mapping, a record keeps its declaration order when rendered.

    Example:
        >>> Record([("y", 1), ("x", 2)]).names
        ('y', 'x')
    """

    __slots__ = ("fields", "name")

    fields: tuple[Field, ...]
    """Fields in declaration order."""

    name: str
    """Optional type name, informational only."""

    def __init__(
        self,
        fields: Iterable[tuple[str, Any]] | Mapping[str, Any] = (),
        *,
        name: str = "",
    ) -> None:
        items: Iterable[tuple[Any, Any]] = fields.items() if isinstance(fields, Mapping) else fields
        self.fields = tuple(Field(str(k), v) for k, v in items)
        self.name = name
        seen: set[str] = set()
        for field in self.fields:
            if field.name in seen:
                raise ValueError(f"Duplicate record field: {field.name!r}")
            seen.add(field.name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.fields == other.fields and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.name, self.names))

    def __repr__(self) -> str:
        inner = ", ".join(f"{f.name}={f.value!r}" for f in self.fields)
        return f"{self.name or 'Record'}({inner})"

    @classmethod
    def from_object(cls, obj: Any) -> Record:
        """
        Convert a structured object into a Record, keeping its declared field order.

        Supported inputs: Record (returned as-is), dataclass instances, named tuples,
        and objects implementing `__record_fields__()`.

        :param obj: The object to convert.
        :return Record: The record view of obj.
        :raises TypeError: If obj has no declared field list.
        """
        if isinstance(obj, Record):
            return obj
        name = type(obj).__name__
        if _is_dataclass_instance(obj):
            return cls(((f.name, getattr(obj, f.name, None)) for f in dataclasses.fields(obj)), name=name)
        if isinstance(obj, tuple) and hasattr(obj, "_fields"):
            return cls(zip(obj._fields, obj, strict=True), name=name)  # pyright: ignore[reportUnknownMemberType, reportAttributeAccessIssue]
        if _provides_record_fields(obj):
            return cls(obj.__record_fields__(), name=name)
        raise TypeError(f"Cannot describe {name} as a record")


class Ref:
    """
    Explicit reference to another value.

    An empty reference (`Ref()` or `Ref(None)`) renders as null.
    """

    __slots__ = ("target",)

    def __init__(self, target: Any = None) -> None:
        self.target = target

    def __repr__(self) -> str:
        return f"Ref({self.target!r})"


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _provides_record_fields(value: Any) -> bool:
    # Looked up on the type, as Python does for dunder methods.
    return hasattr(type(value), "__record_fields__")


def deref(value: Any, *, max_depth: int = MAX_DEREF_DEPTH) -> Any:
    """
    Peel at most `max_depth` layers of `Ref` / `weakref.ref` indirection.

    A dead weak reference yields None. Anything still wrapped after `max_depth`
    layers is returned wrapped, which classifies as Kind.UNKNOWN.
    """
    for _ in range(max_depth):
        if isinstance(value, Ref):
            value = value.target
        elif isinstance(value, weakref.ReferenceType):
            value = value()  # pyright: ignore[reportUnknownVariableType]
        else:
            break
    return value  # pyright: ignore[reportUnknownVariableType]


def kind_of(value: Any) -> Kind:
    """Classify an already dereferenced value."""
    if isinstance(value, Record) or _is_dataclass_instance(value) or _provides_record_fields(value):
        return Kind.RECORD
    if isinstance(value, Mapping):
        return Kind.OBJECT
    if isinstance(value, (list, tuple)):
        return Kind.ARRAY
    if isinstance(value, str):
        return Kind.STRING
    # bool before number: bool is a subclass of int
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return Kind.NUMBER
    if value is None:
        return Kind.NULL
    return Kind.UNKNOWN


def format_number(value: int | float | Decimal) -> str:
    """
    Return the shortest faithful decimal text for a number.

    Floats are written in positional notation with the shortest digits that
    round-trip, so `1e16` prints as `10000000000000000` and `1e-7` as `0.0000001`.

    Example:
        >>> format_number(100.0), format_number(0.1), format_number(Decimal("1.50"))
        ('100', '0.1', '1.50')
        >>> format_number(-0.0), format_number(1e-7)
        ('-0', '0.0000001')
    """
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value == 0:
            return "-0" if math.copysign(1.0, value) < 0 else "0"
        if value.is_integer() and abs(value) < _FLOAT_INTEGRAL_LIMIT:
            return str(int(value))
        # repr() gives the shortest round-trip digits; Decimal lays them out without an exponent.
        return format(Decimal(repr(value)), "f")
    return str(int(value))


# End of file: src/mstair/jsoncolor/model.py
