"""Lazily-evaluated element collections and their filters."""

from __future__ import annotations

from itertools import islice
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Optional

from uiquery.ax.node import AXNode
from uiquery.ax.waits import wait_for
from uiquery.core.properties import ElementType, Property
from uiquery.predicates import builder
from uiquery.predicates.base import TRUE, Predicate

if TYPE_CHECKING:
    from uiquery.ax.element import Element
    from uiquery.runner.logging import WaitLog

NodeSource = Callable[[], Iterable[AXNode]]

_UNSET: Any = object()


def property_predicate(
    prop: Property | str,
    equals: Any = _UNSET,
    contains: str | None = None,
    in_range: Any = None,
) -> Predicate:
    """Build the predicate for a single ``equals=`` / ``contains=`` / ``in_range=`` keyword."""
    given = [equals is not _UNSET, contains is not None, in_range is not None]
    if sum(given) != 1:
        raise ValueError("Pass exactly one of equals=, contains= or in_range=")
    if contains is not None:
        return builder.contains(prop, contains)
    if in_range is not None:
        return builder.in_range(prop, in_range)
    return builder.equals(prop, equals)


def _filter_predicate(
    target: Predicate | Property | str,
    containing: str | None,
    equal_to: Any,
) -> Predicate:
    if isinstance(target, Predicate):
        if containing is not None or equal_to is not _UNSET:
            raise ValueError("A predicate filter takes no containing= or equal_to=")
        return target
    return property_predicate(target, equals=equal_to, contains=containing)


def _type_filter(nodes: Iterable[AXNode], element_type: ElementType) -> Iterator[AXNode]:
    return (n for n in nodes if element_type.accepts(n.element_type))


def _typed(element_type: ElementType) -> property:
    def getter(self) -> ElementQuery:
        return self.descendants(element_type)

    getter.__doc__ = f"All ``{element_type.value}`` descendants."
    return property(getter)


class QueryProvider:
    """Typed descendant queries shared by elements and queries."""

    def descendants(self, element_type: ElementType = ElementType.ANY) -> ElementQuery:
        raise NotImplementedError

    windows = _typed(ElementType.WINDOW)
    sheets = _typed(ElementType.SHEET)
    dialogs = _typed(ElementType.DIALOG)
    alerts = _typed(ElementType.ALERT)
    popovers = _typed(ElementType.POPOVER)
    buttons = _typed(ElementType.BUTTON)
    radio_buttons = _typed(ElementType.RADIO_BUTTON)
    check_boxes = _typed(ElementType.CHECK_BOX)
    switches = _typed(ElementType.SWITCH)
    pop_up_buttons = _typed(ElementType.POP_UP_BUTTON)
    static_texts = _typed(ElementType.STATIC_TEXT)
    text_fields = _typed(ElementType.TEXT_FIELD)
    secure_text_fields = _typed(ElementType.SECURE_TEXT_FIELD)
    search_fields = _typed(ElementType.SEARCH_FIELD)
    text_views = _typed(ElementType.TEXT_VIEW)
    links = _typed(ElementType.LINK)
    images = _typed(ElementType.IMAGE)
    groups = _typed(ElementType.GROUP)
    scroll_views = _typed(ElementType.SCROLL_VIEW)
    web_views = _typed(ElementType.WEB_VIEW)
    tab_groups = _typed(ElementType.TAB_GROUP)
    toolbars = _typed(ElementType.TOOLBAR)
    menu_bars = _typed(ElementType.MENU_BAR)
    menus = _typed(ElementType.MENU)
    menu_items = _typed(ElementType.MENU_ITEM)
    tables = _typed(ElementType.TABLE)
    outlines = _typed(ElementType.OUTLINE)
    cells = _typed(ElementType.CELL)


class ElementQuery(QueryProvider):
    """A lazily-evaluated set of elements.

    Nothing is read from the tree until the query is counted, iterated or
    resolved through one of its elements; filters only wrap the source.
    """

    def __init__(
        self,
        source: NodeSource,
        description: str = "query",
        log: Optional[WaitLog] = None,
    ):
        self._source = source
        self.description = description
        self.log = log

    def __repr__(self) -> str:
        return f"ElementQuery({self.description})"

    def _derive(self, source: NodeSource, suffix: str) -> ElementQuery:
        return ElementQuery(source, f"{self.description}{suffix}", self.log)

    def _element(self, resolver: Callable[[], AXNode | None], suffix: str) -> Element:
        from uiquery.ax.element import Element

        return Element(resolver, f"{self.description}{suffix}", self.log)

    def nodes(self) -> list[AXNode]:
        """Current matches, in tree order."""
        return list(self._source())

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def matching(
        self,
        target: Predicate | Property | str,
        *,
        containing: str | None = None,
        equal_to: Any = _UNSET,
    ) -> ElementQuery:
        """Keep elements that themselves satisfy the filter."""
        predicate = _filter_predicate(target, containing, equal_to)
        source = self._source
        return self._derive(
            lambda: (n for n in source() if predicate.evaluate(n)),
            f".matching({predicate.predicate_format})",
        )

    def containing(
        self,
        target: Predicate | Property | ElementType | str,
        *,
        containing: str | None = None,
        equal_to: Any = _UNSET,
        where: Predicate | None = None,
    ) -> ElementQuery:
        """Keep elements that have a descendant satisfying the filter.

        ``containing(ElementType.BUTTON, where=pred)`` restricts the
        descendant to one element kind.
        """
        if isinstance(target, ElementType):
            predicate = where if where is not None else TRUE
            if target is not ElementType.ANY:
                predicate = builder.equals(Property.ELEMENT_TYPE, target).and_(predicate)
        else:
            if where is not None:
                raise ValueError("where= is only valid with an element type")
            predicate = _filter_predicate(target, containing, equal_to)
        source = self._source
        return self._derive(
            lambda: (
                n for n in source()
                if any(predicate.evaluate(d) for d in n.descendants())
            ),
            f".containing({predicate.predicate_format})",
        )

    def descendants(self, element_type: ElementType = ElementType.ANY) -> ElementQuery:
        source = self._source

        def _walk() -> Iterator[AXNode]:
            seen: set[int] = set()
            for n in source():
                for d in _type_filter(n.descendants(), element_type):
                    if id(d) not in seen:
                        seen.add(id(d))
                        yield d

        return self._derive(_walk, f".descendants({element_type.value})")

    def children(self, element_type: ElementType = ElementType.ANY) -> ElementQuery:
        source = self._source
        return self._derive(
            lambda: (c for n in source() for c in _type_filter(n.children, element_type)),
            f".children({element_type.value})",
        )

    # ------------------------------------------------------------------
    # Single-element accessors
    # ------------------------------------------------------------------

    def element_matching(
        self,
        target: Predicate | Property | str,
        *,
        containing: str | None = None,
        equal_to: Any = _UNSET,
    ) -> Element:
        """First element satisfying the filter, resolved on each access."""
        return self.matching(target, containing=containing, equal_to=equal_to).first_match

    @property
    def first_match(self) -> Element:
        source = self._source
        return self._element(lambda: next(iter(source()), None), ".firstMatch")

    def element_bound_by_index(self, index: int) -> Element:
        if index < 0:
            raise IndexError("Element index must be non-negative")
        source = self._source
        return self._element(
            lambda: next(islice(source(), index, None), None), f"[{index}]"
        )

    def __getitem__(self, key: int | str) -> Element:
        """``query[3]`` binds by index; ``query["id"]`` matches identifier, title or label."""
        if isinstance(key, int):
            return self.element_bound_by_index(key)
        source = self._source
        return self._element(
            lambda: next(
                (n for n in source() if key in (n.identifier, n.title, n.label)), None
            ),
            f"[{key!r}]",
        )

    @property
    def count(self) -> int:
        return sum(1 for _ in self._source())

    @property
    def all_elements(self) -> list[Element]:
        return [self.element_bound_by_index(i) for i in range(self.count)]

    # ------------------------------------------------------------------
    # Waiting
    # ------------------------------------------------------------------

    def wait(self, predicate: Predicate, timeout: float | None = None) -> bool:
        """Wait until *predicate* holds for this query (e.g. on ``count``)."""
        return wait_for(self, predicate, timeout, log=self.log, subject=self.description)

    def wait_for_property(
        self,
        prop: Property | str,
        *,
        equals: Any = _UNSET,
        contains: str | None = None,
        in_range: Any = None,
        timeout: float | None = None,
    ) -> bool:
        predicate = property_predicate(prop, equals=equals, contains=contains, in_range=in_range)
        return self.wait(predicate, timeout)
