"""Tests for element queries and their filters."""

import threading

import pytest

from uiquery.ax.node import AXNode
from uiquery.ax.query import ElementQuery, property_predicate
from uiquery.ax.tree import UITree
from uiquery.core.errors import PropertyTypeError
from uiquery.core.properties import ElementType
from uiquery.predicates import FALSE, block, contains, equals, in_range
from uiquery.runner.logging import WaitLog


def _buttons(*labels):
    return UITree.from_node(
        AXNode(
            identifier="root",
            element_type=ElementType.WINDOW,
            children=[
                AXNode(identifier=f"b{i}", element_type=ElementType.BUTTON, label=label)
                for i, label in enumerate(labels)
            ],
        )
    )


def test_matching_keeps_order():
    tree = _buttons("Save", "Cancel", "Save as", "Help", "Close")
    query = tree.buttons.matching(contains("label", "save"))
    assert query.count == 2
    assert [n.identifier for n in query.nodes()] == ["b0", "b2"]


def test_containing_by_substring_keeps_order():
    labels = ["Save", "Cancel", "Save as", "Help", "Close"]
    tree = UITree.from_node(
        AXNode(
            children=[
                AXNode(
                    identifier=f"cell{i}",
                    element_type=ElementType.CELL,
                    children=[AXNode(element_type=ElementType.STATIC_TEXT, label=label)],
                )
                for i, label in enumerate(labels)
            ]
        )
    )
    query = tree.cells.containing("label", containing="save")
    assert [n.identifier for n in query.nodes()] == ["cell0", "cell2"]


def test_matching_by_property_keyword():
    tree = _buttons("Save", "Cancel")
    assert tree.buttons.matching("label", equal_to="Cancel").count == 1
    assert tree.buttons.matching("label", containing="an").count == 1
    assert tree.buttons.matching("identifier", equal_to=None).count == 0


def test_filters_are_lazy():
    calls = []
    counting = block(lambda node: calls.append(node) or True)
    tree = _buttons("a", "b", "c")
    query = tree.buttons.matching(counting)
    assert calls == []
    assert query.count == 3
    assert len(calls) == 3


def test_first_match_stops_early():
    calls = []
    counting = block(lambda node: calls.append(node) or True)
    tree = _buttons("a", "b", "c")
    assert tree.buttons.matching(counting).first_match.label == "a"
    assert len(calls) == 1


def test_matching_vs_containing(app):
    # the window itself is not a button, but it contains one
    assert app.windows.matching(equals("label", "Back")).count == 0
    containing = app.windows.containing(equals("label", "Back"))
    assert containing.count == 1
    assert containing.first_match.identifier == "main"


def test_containing_element_type_with_where(app):
    with_selected_tab = app.groups.containing(
        ElementType.RADIO_BUTTON, where=equals("isSelected", True)
    )
    # tabs is a tabGroup, not a group; the toolbar group has no radio buttons
    assert with_selected_tab.count == 0

    tab_groups = app.tab_groups.containing(ElementType.RADIO_BUTTON, where=equals("title", "Privacy Dashboard"))
    assert tab_groups.count == 1
    assert app.windows.containing(ElementType.CHECK_BOX).first_match.identifier == "settings"


def test_containing_where_needs_element_type(app):
    with pytest.raises(ValueError):
        app.windows.containing("label", equal_to="Back", where=FALSE)


def test_containing_radio_button_with_static_text(app):
    tabs = app.radio_buttons.containing(ElementType.STATIC_TEXT, where=contains("value", "privacy"))
    assert [n.identifier for n in tabs.nodes()] == ["tab2"]


def test_typed_accessors(app):
    assert app.buttons.count == 2
    assert app.windows.count == 2
    assert app.text_fields.count == 1
    assert app.check_boxes.first_match.value == "1"
    assert app.static_texts.count == 3


def test_descendants_deduplicate():
    tree = UITree.from_node(
        AXNode(children=[AXNode(element_type=ElementType.GROUP, children=[
            AXNode(element_type=ElementType.GROUP, children=[AXNode(element_type=ElementType.BUTTON)]),
        ])])
    )
    # both groups see the same button
    assert tree.groups.descendants(ElementType.BUTTON).count == 1
    assert tree.groups.children(ElementType.BUTTON).count == 1


def test_children_are_direct_only(app):
    main = app.windows["main"]
    assert main.children().count == 3
    assert main.children(ElementType.BUTTON).count == 0
    assert main.descendants(ElementType.BUTTON).count == 2


def test_subscript_by_identifier_title_or_label(app):
    assert app.buttons["back"].label == "Back"
    assert app.buttons["Forward"].identifier == "forward"
    assert app.windows["Settings"].identifier == "settings"
    assert not app.buttons["reload"].exists


def test_element_bound_by_index(app):
    assert app.buttons[1].identifier == "forward"
    assert not app.buttons[5].exists
    with pytest.raises(IndexError):
        app.buttons.element_bound_by_index(-1)


def test_all_elements(app):
    labels = [e.label for e in app.buttons.all_elements]
    assert labels == ["Back", "Forward"]


def test_element_matching_returns_first(app):
    tab = app.radio_buttons.element_matching(contains("title", "a"))
    assert tab.identifier == "tab1"
    assert app.buttons.element_matching("isEnabled", equal_to=False).identifier == "forward"


def test_property_predicate_requires_exactly_one_keyword():
    with pytest.raises(ValueError):
        property_predicate("label")
    with pytest.raises(ValueError):
        property_predicate("label", equals="a", contains="b")
    assert property_predicate("count", in_range=(1, 3)).predicate_format == "count BETWEEN {1, 3}"


def test_wait_on_count():
    root = AXNode(identifier="root")
    tree = UITree.from_node(root)
    timer = threading.Timer(
        0.1,
        lambda: root.children.extend(
            [AXNode(element_type=ElementType.CELL), AXNode(element_type=ElementType.CELL)]
        ),
    )
    timer.start()
    try:
        assert tree.cells.wait(equals("count", 2), timeout=2.0)
    finally:
        timer.cancel()
    assert tree.cells.wait_for_property("count", in_range=(1, 5), timeout=0.1)
    assert not tree.cells.wait_for_property("count", equals=3, timeout=0.1)


def test_query_wait_is_logged(app):
    log = WaitLog()
    tree = UITree(app.resolve, "browser", log)
    assert tree.buttons.wait(in_range("count", (1, 2)), timeout=0.5)
    entry = log.entries[0]
    assert entry["subject"] == "browser.descendants(button)"
    assert entry["predicate"] == "count BETWEEN {1, 2}"
    assert entry["outcome"] == "completed"


def test_type_mismatch_in_filter_raises(app):
    with pytest.raises(PropertyTypeError):
        app.buttons.matching(equals("label", 3)).count


def test_query_from_plain_source():
    nodes = [AXNode(label="x"), AXNode(label="y")]
    query = ElementQuery(lambda: nodes, "static")
    assert query.matching(equals("label", "y")).count == 1
    assert repr(query) == "ElementQuery(static)"
