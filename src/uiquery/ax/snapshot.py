"""Accessibility tree snapshots on disk (JSON or YAML)."""

from __future__ import annotations

import json
import pathlib

import yaml
from pydantic import ValidationError

from uiquery.ax.node import AXNode
from uiquery.core.errors import SnapshotError


def _is_yaml(path: pathlib.Path) -> bool:
    return path.suffix.lower() in (".yaml", ".yml")


def load_tree(path: str | pathlib.Path) -> AXNode:
    p = pathlib.Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {p}: {exc}") from exc
    try:
        raw = yaml.safe_load(text) if _is_yaml(p) else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Snapshot {p} is not valid: {exc}") from exc
    if not isinstance(raw, dict):
        raise SnapshotError(f"Snapshot {p} must contain a single root element")
    try:
        return AXNode.model_validate(raw)
    except ValidationError as exc:
        raise SnapshotError(f"Snapshot {p} does not describe an element tree: {exc}") from exc


def save_tree(node: AXNode, path: str | pathlib.Path) -> None:
    p = pathlib.Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = node.model_dump(mode="json", by_alias=True)
    if _is_yaml(p):
        p.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
    else:
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
