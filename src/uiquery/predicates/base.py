"""Predicate base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable


class Predicate(ABC):
    """Immutable boolean query over one element (or query) object.

    Combine with ``&``, ``|``, ``~`` or the fluent ``and_`` / ``or_`` /
    ``inverted`` forms.
    """

    @abstractmethod
    def evaluate(self, obj: Any) -> bool: ...

    @property
    @abstractmethod
    def predicate_format(self) -> str: ...

    def __call__(self, obj: Any) -> bool:
        return self.evaluate(obj)

    def __str__(self) -> str:
        return self.predicate_format

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def and_(self, *others: Predicate) -> Predicate:
        from uiquery.predicates.compound import and_

        return and_(self, *others)

    def or_(self, *others: Predicate) -> Predicate:
        from uiquery.predicates.compound import or_

        return or_(self, *others)

    @property
    def inverted(self) -> Predicate:
        from uiquery.predicates.compound import not_

        return not_(self)

    def __and__(self, other: Predicate) -> Predicate:
        return self.and_(other)

    def __or__(self, other: Predicate) -> Predicate:
        return self.or_(other)

    def __invert__(self) -> Predicate:
        return self.inverted


class BlockPredicate(Predicate):
    """Predicate backed by a plain callable."""

    def __init__(self, fn: Callable[[Any], bool], description: str = "BLOCKPREDICATE"):
        self._fn = fn
        self._description = description

    def evaluate(self, obj: Any) -> bool:
        return bool(self._fn(obj))

    @property
    def predicate_format(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"BlockPredicate({self._description!r})"


class ConstantPredicate(Predicate):
    def __init__(self, result: bool):
        self._result = result

    def evaluate(self, obj: Any) -> bool:
        return self._result

    @property
    def predicate_format(self) -> str:
        return "TRUEPREDICATE" if self._result else "FALSEPREDICATE"

    def __repr__(self) -> str:
        return self.predicate_format


TRUE = ConstantPredicate(True)
FALSE = ConstantPredicate(False)


def block(fn: Callable[[Any], bool], description: str = "BLOCKPREDICATE") -> Predicate:
    return BlockPredicate(fn, description)
