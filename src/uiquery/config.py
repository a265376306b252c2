"""Configuration: timeouts, poll interval and wait logging."""

from __future__ import annotations

import json
import os
import pathlib
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from uiquery.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_POLL_INTERVAL,
    ELEMENT_EXISTENCE_TIMEOUT,
    FIRE_ANIMATION_TIMEOUT,
    LOCAL_TEST_SERVER_TIMEOUT,
    NAVIGATION_TIMEOUT,
)
from uiquery.core.errors import ConfigError


class TimeoutConfig(BaseModel):
    element_existence: float = Field(default=ELEMENT_EXISTENCE_TIMEOUT, gt=0)
    navigation: float = Field(default=NAVIGATION_TIMEOUT, gt=0)
    fire_animation: float = Field(default=FIRE_ANIMATION_TIMEOUT, gt=0)
    local_test_server: float = Field(default=LOCAL_TEST_SERVER_TIMEOUT, gt=0)
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, gt=0)


class QueryConfig(BaseModel):
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    log_path: Optional[str] = None
    echo_log: bool = False


def _is_yaml(path: pathlib.Path) -> bool:
    return path.suffix.lower() in (".yaml", ".yml")


def load_config(path: str | pathlib.Path) -> QueryConfig:
    """Read a JSON or YAML config file."""
    p = pathlib.Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    text = p.read_text(encoding="utf-8")
    try:
        if not text.strip():
            raw: Any = None
        else:
            raw = yaml.safe_load(text) if _is_yaml(p) else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Config file {p} is not valid: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {p} must contain a mapping")
    try:
        return QueryConfig(**raw)
    except ValidationError as exc:
        raise ConfigError(f"Config file {p} failed validation: {exc}") from exc


def save_config(config: QueryConfig, path: str | pathlib.Path) -> None:
    p = pathlib.Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(exclude_none=True)
    if _is_yaml(p):
        p.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


_active: QueryConfig | None = None


def get_config() -> QueryConfig:
    """Active configuration; loaded from ``$UIQUERY_CONFIG`` on first use."""
    global _active
    if _active is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        _active = load_config(env_path) if env_path else QueryConfig()
    return _active


def set_config(config: QueryConfig | None) -> None:
    """Replace the active configuration (``None`` resets to lazy loading)."""
    global _active
    _active = config
