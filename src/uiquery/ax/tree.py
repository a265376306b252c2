"""Root of an accessibility tree."""

from __future__ import annotations

import pathlib
from typing import Optional

from uiquery.ax.element import Element, NodeResolver
from uiquery.ax.node import AXNode
from uiquery.ax.snapshot import load_tree
from uiquery.core.errors import SnapshotError
from uiquery.runner.logging import WaitLog


class SnapshotSource:
    """Node resolver that re-reads a snapshot file on every call.

    A missing file resolves to ``None``. A file that does not parse (an
    exporter caught mid-write) resolves to the last tree that did, or to
    ``None`` when none has yet; :attr:`pending` tells that case apart from
    a genuinely absent application.
    """

    def __init__(self, path: str | pathlib.Path):
        self.path = pathlib.Path(path)
        self.last_good: AXNode | None = None
        self.error: SnapshotError | None = None

    @property
    def pending(self) -> bool:
        """The file exists but has not parsed since it appeared."""
        return self.last_good is None and self.error is not None

    def __call__(self) -> AXNode | None:
        if not self.path.exists():
            self.last_good = None
            self.error = None
            return None
        try:
            self.last_good = load_tree(self.path)
        except SnapshotError as exc:
            self.error = exc
        else:
            self.error = None
        return self.last_good


class UITree(Element):
    """The application element.

    Elements and queries created from it share its wait log.
    """

    def __init__(
        self,
        provider: NodeResolver,
        description: str = "app",
        log: Optional[WaitLog] = None,
    ):
        super().__init__(provider, description, log)

    @classmethod
    def from_node(cls, node: AXNode, log: Optional[WaitLog] = None) -> UITree:
        return cls(lambda: node, node.identifier or "app", log)

    @classmethod
    def from_snapshot_file(
        cls,
        path: str | pathlib.Path,
        log: Optional[WaitLog] = None,
    ) -> UITree:
        """Tree backed by a snapshot file that is re-read on every resolution.

        See :class:`SnapshotSource` for how missing and unreadable files
        resolve; neither raises, so waits on the tree stay boolean.
        """
        source = SnapshotSource(path)
        return cls(source, source.path.stem, log)
