"""Supported element property references and element kinds."""

from __future__ import annotations

from enum import Enum
from operator import attrgetter
from typing import Any, Callable

from uiquery.core.errors import PropertyTypeError, UnresolvedPropertyError


class Property(str, Enum):
    """Queryable element/query attributes.

    The member value is the stable key used in rendered predicate formats.
    """
    VALUE = "value"
    LABEL = "label"
    TITLE = "title"
    IDENTIFIER = "identifier"
    PLACEHOLDER_VALUE = "placeholderValue"
    IS_ENABLED = "isEnabled"
    IS_SELECTED = "isSelected"
    HAS_FOCUS = "hasFocus"
    IS_HITTABLE = "isHittable"
    EXISTS = "exists"
    ELEMENT_TYPE = "elementType"
    FRAME = "frame"
    COUNT = "count"

    @property
    def attribute(self) -> str:
        return _ATTRIBUTES[self]


class ElementType(str, Enum):
    ANY = "any"
    OTHER = "other"
    APPLICATION = "application"
    WINDOW = "window"
    SHEET = "sheet"
    DIALOG = "dialog"
    ALERT = "alert"
    POPOVER = "popover"
    BUTTON = "button"
    RADIO_BUTTON = "radioButton"
    CHECK_BOX = "checkBox"
    SWITCH = "switch"
    TOGGLE = "toggle"
    POP_UP_BUTTON = "popUpButton"
    MENU_BUTTON = "menuButton"
    COMBO_BOX = "comboBox"
    STATIC_TEXT = "staticText"
    TEXT_FIELD = "textField"
    SECURE_TEXT_FIELD = "secureTextField"
    SEARCH_FIELD = "searchField"
    TEXT_VIEW = "textView"
    LINK = "link"
    IMAGE = "image"
    GROUP = "group"
    SCROLL_VIEW = "scrollView"
    WEB_VIEW = "webView"
    TAB_GROUP = "tabGroup"
    TAB = "tab"
    TOOLBAR = "toolbar"
    MENU_BAR = "menuBar"
    MENU_BAR_ITEM = "menuBarItem"
    MENU = "menu"
    MENU_ITEM = "menuItem"
    TABLE = "table"
    OUTLINE = "outline"
    OUTLINE_ROW = "outlineRow"
    CELL = "cell"
    SLIDER = "slider"
    PROGRESS_INDICATOR = "progressIndicator"

    def accepts(self, other: ElementType | str | None) -> bool:
        return self is ElementType.ANY or self == other


_ATTRIBUTES: dict[Property, str] = {
    Property.VALUE: "value",
    Property.LABEL: "label",
    Property.TITLE: "title",
    Property.IDENTIFIER: "identifier",
    Property.PLACEHOLDER_VALUE: "placeholder_value",
    Property.IS_ENABLED: "is_enabled",
    Property.IS_SELECTED: "is_selected",
    Property.HAS_FOCUS: "has_focus",
    Property.IS_HITTABLE: "is_hittable",
    Property.EXISTS: "exists",
    Property.ELEMENT_TYPE: "element_type",
    Property.FRAME: "frame",
    Property.COUNT: "count",
}

_ACCESSORS: dict[Property, Callable[[Any], Any]] = {
    prop: attrgetter(attr) for prop, attr in _ATTRIBUTES.items()
}

_BY_NAME: dict[str, Property] = {}
for _prop, _attr in _ATTRIBUTES.items():
    _BY_NAME[_prop.value] = _prop
    _BY_NAME[_attr] = _prop


def resolve_property(ref: Property | str) -> Property:
    """Map a property reference to its :class:`Property`.

    Accepts a member, its key (``"placeholderValue"``) or the Python
    attribute name (``"placeholder_value"``).
    """
    if isinstance(ref, Property):
        return ref
    if isinstance(ref, str) and ref in _BY_NAME:
        return _BY_NAME[ref]
    raise UnresolvedPropertyError(ref)


def read_property(obj: Any, prop: Property) -> Any:
    try:
        return _ACCESSORS[prop](obj)
    except AttributeError:
        raise PropertyTypeError(
            prop.value,
            "readable property",
            detail=f"{type(obj).__name__} has no '{prop.value}' property",
        ) from None
