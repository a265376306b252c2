"""Comparison values: kind dispatch, width-tagged scalars and range bounds."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from uiquery.constants import FALSY_STRINGS, FLOAT_TOLERANCE, TRUTHY_STRINGS
from uiquery.core.errors import PropertyTypeError


class ValueKind(str, Enum):
    STRING = "string"
    INT = "int"
    INT64 = "int64"
    UINT = "uint"
    UINT64 = "uint64"
    FLOAT = "float"
    BOOL = "bool"
    GENERIC = "generic"

    @property
    def specifier(self) -> str:
        return _SPECIFIERS[self]

    @property
    def is_numeric(self) -> bool:
        return self in _NUMERIC_ORDER


_SPECIFIERS = {
    ValueKind.STRING: "%@",
    ValueKind.INT: "%d",
    ValueKind.INT64: "%ld",
    ValueKind.UINT: "%u",
    ValueKind.UINT64: "%llu",
    ValueKind.FLOAT: "%f",
    ValueKind.BOOL: "%@",
    ValueKind.GENERIC: "%@",
}

# Widening order used when two numeric bounds disagree
_NUMERIC_ORDER = [
    ValueKind.INT,
    ValueKind.UINT,
    ValueKind.INT64,
    ValueKind.UINT64,
    ValueKind.FLOAT,
]


class _SizedInt(int):
    bits = 64
    signed = True

    def __new__(cls, value: int):
        v = int.__new__(cls, value)
        if cls.signed:
            lo, hi = -(1 << (cls.bits - 1)), (1 << (cls.bits - 1)) - 1
        else:
            lo, hi = 0, (1 << cls.bits) - 1
        if not lo <= v <= hi:
            raise ValueError(f"{cls.__name__} out of range: {value}")
        return v

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Int32(_SizedInt):
    bits = 32


class Int64(_SizedInt):
    bits = 64


class UInt32(_SizedInt):
    bits = 32
    signed = False


class UInt64(_SizedInt):
    bits = 64
    signed = False


class Float32(float):
    def __repr__(self) -> str:
        return f"Float32({float(self)})"


def classify_value(value: Any) -> ValueKind:
    """Pick the comparison strategy for *value* from its runtime type."""
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, Int64):
        return ValueKind.INT64
    if isinstance(value, UInt64):
        return ValueKind.UINT64
    if isinstance(value, UInt32):
        return ValueKind.UINT
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    return ValueKind.GENERIC


def coerce_actual(kind: ValueKind, key: str, actual: Any) -> Any:
    """Convert a non-None property value for comparison under *kind*."""
    if kind is ValueKind.GENERIC:
        return actual

    if kind is ValueKind.STRING:
        if isinstance(actual, str):
            return actual
        raise PropertyTypeError(key, "string", actual)

    if kind is ValueKind.BOOL:
        if isinstance(actual, bool):
            return actual
        if isinstance(actual, (int, float)):
            return actual != 0
        if isinstance(actual, str):
            text = actual.strip().lower()
            if text in TRUTHY_STRINGS:
                return True
            if text in FALSY_STRINGS:
                return False
        raise PropertyTypeError(key, "bool", actual)

    # numeric kinds
    if isinstance(actual, bool):
        return int(actual)
    if isinstance(actual, (int, float)):
        return actual
    if isinstance(actual, str):
        text = actual.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            pass
    raise PropertyTypeError(key, kind.value, actual)


def values_equal(kind: ValueKind, actual: Any, expected: Any) -> bool:
    if kind is ValueKind.FLOAT:
        return math.isclose(actual, expected, rel_tol=0.0, abs_tol=FLOAT_TOLERANCE)
    return actual == expected


def render_operand(kind: ValueKind, value: Any) -> str:
    if kind is ValueKind.STRING:
        text = str(value.value if isinstance(value, Enum) else value)
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
    if kind is ValueKind.BOOL:
        return "TRUE" if value else "FALSE"
    if kind is ValueKind.FLOAT:
        return f"{float(value):f}"
    if kind.is_numeric:
        return str(int(value))
    return repr(value)


def _unify(a: ValueKind, b: ValueKind) -> ValueKind:
    if a is b:
        return a
    if a.is_numeric and b.is_numeric:
        return max(a, b, key=_NUMERIC_ORDER.index)
    raise ValueError(f"Range bounds have incompatible kinds: {a.value} and {b.value}")


@dataclass(frozen=True)
class Bounds:
    """A closed, half-open or one-sided range over comparable scalars."""

    lower: Any = None
    upper: Any = None
    lower_inclusive: bool = True
    upper_inclusive: bool = True
    kind: ValueKind = field(init=False, compare=False)

    def __post_init__(self):
        ends = [v for v in (self.lower, self.upper) if v is not None]
        if not ends:
            raise ValueError("A range needs at least one bound")
        kinds = [classify_value(v) for v in ends]
        if ValueKind.BOOL in kinds:
            raise ValueError("Boolean values cannot bound a range")
        kind = kinds[0]
        for other in kinds[1:]:
            kind = _unify(kind, other)
        if self.lower is not None and self.upper is not None:
            if self.lower > self.upper:
                raise ValueError(f"Range lower bound {self.lower!r} exceeds upper bound {self.upper!r}")
        object.__setattr__(self, "kind", kind)

    def includes(self, actual: Any) -> bool:
        if self.lower is not None:
            if actual < self.lower or (not self.lower_inclusive and actual == self.lower):
                return False
        if self.upper is not None:
            if actual > self.upper or (not self.upper_inclusive and actual == self.upper):
                return False
        return True

    def render(self, key: str) -> str:
        lo = render_operand(self.kind, self.lower) if self.lower is not None else None
        hi = render_operand(self.kind, self.upper) if self.upper is not None else None
        if lo is not None and hi is not None and self.lower_inclusive and self.upper_inclusive:
            return f"{key} BETWEEN {{{lo}, {hi}}}"
        parts = []
        if lo is not None:
            parts.append(f"{key} {'>=' if self.lower_inclusive else '>'} {lo}")
        if hi is not None:
            parts.append(f"{key} {'<=' if self.upper_inclusive else '<'} {hi}")
        return " AND ".join(parts)


def closed(lower: Any, upper: Any) -> Bounds:
    """``lower...upper``: both ends included."""
    return Bounds(lower, upper)


def half_open(lower: Any, upper: Any) -> Bounds:
    """``lower..<upper``: lower included, upper excluded."""
    return Bounds(lower, upper, upper_inclusive=False)


def at_least(lower: Any) -> Bounds:
    return Bounds(lower=lower)


def below(upper: Any) -> Bounds:
    return Bounds(upper=upper, upper_inclusive=False)


def at_most(upper: Any) -> Bounds:
    return Bounds(upper=upper)


def as_bounds(value: Bounds | range | tuple) -> Bounds:
    """Accept a :class:`Bounds`, a unit-step ``range`` or a ``(lower, upper)`` pair."""
    if isinstance(value, Bounds):
        return value
    if isinstance(value, range):
        if value.step != 1:
            raise ValueError(f"Only unit-step ranges are supported, got step {value.step}")
        return half_open(value.start, value.stop)
    if isinstance(value, tuple) and len(value) == 2:
        return closed(*value)
    raise ValueError(f"Unsupported range: {value!r}")
