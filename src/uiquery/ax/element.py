"""Lazily-resolved element handles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

from uiquery.ax.node import AXNode, Frame
from uiquery.ax.query import _UNSET, ElementQuery, QueryProvider, _type_filter, property_predicate
from uiquery.ax.waits import wait_for
from uiquery.config import get_config
from uiquery.core.properties import ElementType, Property
from uiquery.predicates import builder
from uiquery.predicates.base import Predicate

if TYPE_CHECKING:
    from uiquery.runner.logging import WaitLog

NodeResolver = Callable[[], Optional[AXNode]]


class Element(QueryProvider):
    """Handle to one element of the tree.

    The handle stores how to find the element, not the element itself:
    every property read resolves it again, so an element that has not
    appeared yet simply reports ``exists == False`` and ``None`` values.
    """

    def __init__(
        self,
        resolver: NodeResolver,
        description: str = "element",
        log: Optional[WaitLog] = None,
    ):
        self._resolver = resolver
        self.description = description
        self.log = log

    def __repr__(self) -> str:
        return f"Element({self.description})"

    def resolve(self) -> AXNode | None:
        return self._resolver()

    def _get(self, attr: str, missing: Any = None) -> Any:
        node = self._resolver()
        return missing if node is None else getattr(node, attr)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def exists(self) -> bool:
        return self._resolver() is not None

    @property
    def identifier(self) -> str | None:
        return self._get("identifier")

    @property
    def element_type(self) -> ElementType | None:
        return self._get("element_type")

    @property
    def label(self) -> str | None:
        return self._get("label")

    @property
    def title(self) -> str | None:
        return self._get("title")

    @property
    def value(self) -> Any:
        return self._get("value")

    @property
    def placeholder_value(self) -> str | None:
        return self._get("placeholder_value")

    @property
    def is_enabled(self) -> bool:
        return self._get("is_enabled", False)

    @property
    def is_selected(self) -> bool:
        return self._get("is_selected", False)

    @property
    def has_focus(self) -> bool:
        return self._get("has_focus", False)

    @property
    def is_hittable(self) -> bool:
        return self._get("is_hittable", False)

    @property
    def frame(self) -> Frame | None:
        return self._get("frame")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def descendants(self, element_type: ElementType = ElementType.ANY) -> ElementQuery:
        resolver = self._resolver

        def _source():
            node = resolver()
            return [] if node is None else _type_filter(node.descendants(), element_type)

        return ElementQuery(_source, f"{self.description}.descendants({element_type.value})", self.log)

    def children(self, element_type: ElementType = ElementType.ANY) -> ElementQuery:
        resolver = self._resolver

        def _source():
            node = resolver()
            return [] if node is None else _type_filter(node.children, element_type)

        return ElementQuery(_source, f"{self.description}.children({element_type.value})", self.log)

    # ------------------------------------------------------------------
    # Waiting
    # ------------------------------------------------------------------

    def wait(self, predicate: Predicate, timeout: float | None = None) -> bool:
        """Wait until *predicate* holds for this element."""
        return wait_for(self, predicate, timeout, log=self.log, subject=self.description)

    def wait_for_existence(self, timeout: float | None = None) -> bool:
        if timeout is None:
            timeout = get_config().timeouts.element_existence
        return self.wait(builder.equals(Property.EXISTS, True), timeout)

    def wait_for_non_existence(self, timeout: float | None = None) -> bool:
        """Wait for the element to go away; ``False`` if it is still there at the deadline."""
        if timeout is None:
            timeout = get_config().timeouts.element_existence
        return self.wait(builder.equals(Property.EXISTS, False), timeout)

    def wait_for_property(
        self,
        prop: Property | str,
        *,
        equals: Any = _UNSET,
        contains: str | None = None,
        in_range: Any = None,
        timeout: float | None = None,
    ) -> bool:
        """Wait for one property, e.g. ``wait_for_property("value", contains="example.com")``."""
        predicate = property_predicate(prop, equals=equals, contains=contains, in_range=in_range)
        return self.wait(predicate, timeout)
