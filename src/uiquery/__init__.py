"""Declarative element queries, predicates and polling waits for UI tests."""

__version__ = "0.1.0"

from uiquery.ax import AXNode, Element, ElementQuery, Frame, UITree, wait_for, wait_until
from uiquery.core.properties import ElementType, Property
from uiquery.predicates import (
    and_,
    at_least,
    at_most,
    begins_with,
    below,
    closed,
    contains,
    ends_with,
    equals,
    half_open,
    in_range,
    is_in,
    like,
    matches_regex,
    not_,
    or_,
)
