"""Property-path predicate builder.

Each builder resolves its property reference up front, so a typo in a test
fails when the predicate is built rather than quietly never matching.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional

from uiquery.core.properties import Property, read_property, resolve_property
from uiquery.predicates.base import Predicate
from uiquery.predicates.values import (
    Bounds,
    ValueKind,
    as_bounds,
    classify_value,
    coerce_actual,
    render_operand,
    values_equal,
)


class Operator(str, Enum):
    EQUALS = "=="
    IN_RANGE = "IN_RANGE"
    IN = "IN"
    CONTAINS = "CONTAINS[c]"
    BEGINS_WITH = "BEGINSWITH[c]"
    ENDS_WITH = "ENDSWITH[c]"
    MATCHES = "MATCHES[c]"
    LIKE = "LIKE"


_STRING_OPERATORS = frozenset({
    Operator.CONTAINS,
    Operator.BEGINS_WITH,
    Operator.ENDS_WITH,
    Operator.MATCHES,
    Operator.LIKE,
})


@dataclass(frozen=True, eq=False)
class KeyPathPredicate(Predicate):
    """Compares one property of the evaluated object against an operand."""

    prop: Property
    operator: Operator
    operand: Any
    kind: ValueKind
    pattern: Optional[re.Pattern] = field(default=None, repr=False)

    def evaluate(self, obj: Any) -> bool:
        actual = read_property(obj, self.prop)
        key = self.prop.value

        if self.operator is Operator.EQUALS and self.operand is None:
            return actual is None
        if actual is None:
            return False

        if self.operator is Operator.EQUALS:
            return values_equal(self.kind, coerce_actual(self.kind, key, actual), self.operand)
        if self.operator is Operator.IN_RANGE:
            return self.operand.includes(coerce_actual(self.kind, key, actual))
        if self.operator is Operator.IN:
            return actual in self.operand

        text = coerce_actual(ValueKind.STRING, key, actual)
        if self.operator is Operator.CONTAINS:
            return self.operand.casefold() in text.casefold()
        if self.operator is Operator.BEGINS_WITH:
            return text.casefold().startswith(self.operand.casefold())
        if self.operator is Operator.ENDS_WITH:
            return text.casefold().endswith(self.operand.casefold())
        # MATCHES / LIKE
        return self.pattern.fullmatch(text) is not None

    @property
    def predicate_format(self) -> str:
        key = self.prop.value
        if self.operator is Operator.IN_RANGE:
            return self.operand.render(key)
        if self.operator is Operator.IN:
            items = ", ".join(render_operand(classify_value(v), v) for v in self.operand)
            return f"{key} IN {{{items}}}"
        if self.operator is Operator.EQUALS and self.operand is None:
            return f"{key} == nil"
        return f"{key} {self.operator.value} {render_operand(self.kind, self.operand)}"


def _string_operand(operator: Operator, value: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{operator.name.lower()} needs a string operand, got {type(value).__name__}")
    return value


def equals(prop: Property | str, value: Any) -> Predicate:
    """Property equals *value*, compared the way *value*'s type implies."""
    resolved = resolve_property(prop)
    return KeyPathPredicate(resolved, Operator.EQUALS, value, classify_value(value))


def in_range(prop: Property | str, bounds: Bounds | range | tuple) -> Predicate:
    """Property lies within *bounds* (see :mod:`uiquery.predicates.values`)."""
    resolved = resolve_property(prop)
    b = as_bounds(bounds)
    return KeyPathPredicate(resolved, Operator.IN_RANGE, b, b.kind)


def is_in(prop: Property | str, values: Iterable[Any]) -> Predicate:
    resolved = resolve_property(prop)
    return KeyPathPredicate(resolved, Operator.IN, tuple(values), ValueKind.GENERIC)


def contains(prop: Property | str, substring: str) -> Predicate:
    resolved = resolve_property(prop)
    operand = _string_operand(Operator.CONTAINS, substring)
    return KeyPathPredicate(resolved, Operator.CONTAINS, operand, ValueKind.STRING)


def begins_with(prop: Property | str, prefix: str) -> Predicate:
    resolved = resolve_property(prop)
    operand = _string_operand(Operator.BEGINS_WITH, prefix)
    return KeyPathPredicate(resolved, Operator.BEGINS_WITH, operand, ValueKind.STRING)


def ends_with(prop: Property | str, suffix: str) -> Predicate:
    resolved = resolve_property(prop)
    operand = _string_operand(Operator.ENDS_WITH, suffix)
    return KeyPathPredicate(resolved, Operator.ENDS_WITH, operand, ValueKind.STRING)


def matches_regex(prop: Property | str, pattern: str) -> Predicate:
    """Whole-string, case-insensitive regular expression match."""
    resolved = resolve_property(prop)
    operand = _string_operand(Operator.MATCHES, pattern)
    try:
        compiled = re.compile(operand, re.IGNORECASE)
    except re.error as exc:
        raise ValueError(f"Invalid regular expression {pattern!r}: {exc}") from exc
    return KeyPathPredicate(resolved, Operator.MATCHES, operand, ValueKind.STRING, compiled)


def like(prop: Property | str, pattern: str) -> Predicate:
    """Whole-string wildcard match: ``*`` is any run of characters, ``?`` is one."""
    resolved = resolve_property(prop)
    operand = _string_operand(Operator.LIKE, pattern)
    regex = "".join(
        ".*" if ch == "*" else "." if ch == "?" else re.escape(ch) for ch in operand
    )
    compiled = re.compile(regex, re.DOTALL)
    return KeyPathPredicate(resolved, Operator.LIKE, operand, ValueKind.STRING, compiled)
