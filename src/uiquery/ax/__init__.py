from uiquery.ax.element import Element
from uiquery.ax.node import AXNode, Frame
from uiquery.ax.query import ElementQuery
from uiquery.ax.snapshot import load_tree, save_tree
from uiquery.ax.tree import SnapshotSource, UITree
from uiquery.ax.waits import wait_for, wait_until

__all__ = [
    "AXNode",
    "Element",
    "ElementQuery",
    "Frame",
    "SnapshotSource",
    "UITree",
    "load_tree",
    "save_tree",
    "wait_for",
    "wait_until",
]
