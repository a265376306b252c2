"""AND / OR / NOT composition of predicates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Union

from uiquery.predicates.base import Predicate


class CompoundKind(str, Enum):
    AND = "AND"
    OR = "OR"
    NOT = "NOT"


@dataclass(frozen=True, eq=False)
class CompoundPredicate(Predicate):
    """AND/OR/NOT node. Empty AND is true, empty OR is false."""

    kind: CompoundKind
    subpredicates: tuple[Predicate, ...]

    def __post_init__(self):
        for p in self.subpredicates:
            if not isinstance(p, Predicate):
                raise TypeError(f"Not a predicate: {p!r}")
        if self.kind is CompoundKind.NOT and len(self.subpredicates) != 1:
            raise ValueError("NOT takes exactly one subpredicate")

    def evaluate(self, obj: Any) -> bool:
        if self.kind is CompoundKind.AND:
            return all(p.evaluate(obj) for p in self.subpredicates)
        if self.kind is CompoundKind.OR:
            return any(p.evaluate(obj) for p in self.subpredicates)
        return not self.subpredicates[0].evaluate(obj)

    @property
    def predicate_format(self) -> str:
        if self.kind is CompoundKind.NOT:
            return f"NOT ({self.subpredicates[0].predicate_format})"
        if not self.subpredicates:
            return "TRUEPREDICATE" if self.kind is CompoundKind.AND else "FALSEPREDICATE"
        joiner = f" {self.kind.value} "
        return joiner.join(f"({p.predicate_format})" for p in self.subpredicates)


PredicateArgs = Union[Predicate, Iterable[Predicate]]


def _flatten(predicates: tuple) -> tuple[Predicate, ...]:
    # and_([a, b]) and and_(a, b) are equivalent
    if len(predicates) == 1 and not isinstance(predicates[0], Predicate):
        return tuple(predicates[0])
    return tuple(predicates)


def and_(*predicates: PredicateArgs) -> Predicate:
    return CompoundPredicate(CompoundKind.AND, _flatten(predicates))


def or_(*predicates: PredicateArgs) -> Predicate:
    return CompoundPredicate(CompoundKind.OR, _flatten(predicates))


def not_(predicate: Predicate) -> Predicate:
    return CompoundPredicate(CompoundKind.NOT, (predicate,))
