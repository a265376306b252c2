"""Shared fixtures: a small browser-like accessibility tree."""

import pytest

from uiquery.ax.node import AXNode, Frame
from uiquery.ax.tree import UITree
from uiquery.config import set_config
from uiquery.core.properties import ElementType as T


@pytest.fixture(autouse=True)
def _reset_config(monkeypatch):
    monkeypatch.delenv("UIQUERY_CONFIG", raising=False)
    set_config(None)
    yield
    set_config(None)


def build_browser_tree() -> AXNode:
    return AXNode(
        identifier="app",
        element_type=T.APPLICATION,
        title="Browser",
        children=[
            AXNode(
                identifier="main",
                element_type=T.WINDOW,
                title="Example Domain",
                frame=Frame(x=0, y=0, width=1200, height=800),
                children=[
                    AXNode(
                        identifier="toolbar",
                        element_type=T.GROUP,
                        children=[
                            AXNode(identifier="back", element_type=T.BUTTON, label="Back"),
                            AXNode(
                                identifier="forward",
                                element_type=T.BUTTON,
                                label="Forward",
                                is_enabled=False,
                            ),
                            AXNode(
                                identifier="AddressBarViewController.addressBarTextField",
                                element_type=T.TEXT_FIELD,
                                value="https://example.com/",
                                placeholder_value="Search or enter address",
                                has_focus=True,
                            ),
                        ],
                    ),
                    AXNode(
                        identifier="tabs",
                        element_type=T.TAB_GROUP,
                        children=[
                            AXNode(
                                identifier="tab1",
                                element_type=T.RADIO_BUTTON,
                                title="Example Domain",
                                is_selected=True,
                                children=[
                                    AXNode(element_type=T.STATIC_TEXT, value="Example Domain"),
                                ],
                            ),
                            AXNode(
                                identifier="tab2",
                                element_type=T.RADIO_BUTTON,
                                title="Privacy Dashboard",
                                children=[
                                    AXNode(element_type=T.STATIC_TEXT, value="Privacy Dashboard"),
                                ],
                            ),
                        ],
                    ),
                    AXNode(
                        identifier="trackers",
                        element_type=T.STATIC_TEXT,
                        label="Trackers blocked",
                        value=3,
                    ),
                ],
            ),
            AXNode(
                identifier="settings",
                element_type=T.WINDOW,
                title="Settings",
                children=[
                    AXNode(
                        identifier="PreferencesGeneralView.showAutocompleteSuggestions",
                        element_type=T.CHECK_BOX,
                        title="Show autocomplete suggestions",
                        value="1",
                    ),
                ],
            ),
        ],
    )


@pytest.fixture()
def browser_tree() -> AXNode:
    return build_browser_tree()


@pytest.fixture()
def app(browser_tree) -> UITree:
    return UITree.from_node(browser_tree)


class FakeObject:
    """Plain attribute bag standing in for an element under test."""

    def __init__(self, **props):
        self.__dict__.update(props)

    def __repr__(self) -> str:
        return f"FakeObject({self.__dict__})"


@pytest.fixture()
def make_obj():
    return FakeObject
