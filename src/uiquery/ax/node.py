"""In-memory accessibility tree nodes."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from uiquery.core.properties import ElementType


class Frame(BaseModel):
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


class AXNode(BaseModel):
    """One element of an accessibility tree snapshot.

    Field names match the element property accessors, so predicates
    evaluate against a node exactly as against a live element. camelCase
    aliases (``elementType``, ``placeholderValue``, ``isEnabled``, ...) are
    accepted on input.
    """
    model_config = ConfigDict(populate_by_name=True)

    identifier: str = ""
    element_type: ElementType = Field(default=ElementType.OTHER, alias="elementType")
    label: str = ""
    title: str = ""
    value: Any = None
    placeholder_value: Optional[str] = Field(default=None, alias="placeholderValue")
    is_enabled: bool = Field(default=True, alias="isEnabled")
    is_selected: bool = Field(default=False, alias="isSelected")
    has_focus: bool = Field(default=False, alias="hasFocus")
    is_hittable: bool = Field(default=True, alias="isHittable")
    frame: Frame = Field(default_factory=Frame)
    children: list[AXNode] = Field(default_factory=list)

    @property
    def exists(self) -> bool:
        return True

    def walk(self) -> Iterator[AXNode]:
        """Yield this node and its descendants, depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def descendants(self) -> Iterator[AXNode]:
        for child in self.children:
            yield from child.walk()

    def describe(self) -> str:
        parts = [self.element_type.value]
        if self.identifier:
            parts.append(f"id={self.identifier}")
        if self.title:
            parts.append(f"title={self.title!r}")
        if self.label:
            parts.append(f"label={self.label!r}")
        return " ".join(parts)

    def to_summary(self) -> dict[str, Any]:
        """Flat, serializable view without children."""
        return {
            "identifier": self.identifier,
            "element_type": self.element_type.value,
            "label": self.label,
            "title": self.title,
            "value": self.value,
            "enabled": self.is_enabled,
            "frame": self.frame.model_dump(),
        }


AXNode.model_rebuild()
