"""Tests for configuration loading."""

import json

import pytest

from uiquery.config import QueryConfig, TimeoutConfig, get_config, load_config, save_config, set_config
from uiquery.core.errors import ConfigError


def test_defaults():
    cfg = QueryConfig()
    assert cfg.timeouts.element_existence == 5.0
    assert cfg.timeouts.navigation == 30.0
    assert cfg.timeouts.fire_animation == 30.0
    assert cfg.timeouts.local_test_server == 15.0
    assert cfg.log_path is None
    assert cfg.echo_log is False


def test_load_yaml(tmp_path):
    path = tmp_path / "uiquery.yaml"
    path.write_text("timeouts:\n  navigation: 12\n  poll_interval: 0.1\nlog_path: out/waits.jsonl\n")
    cfg = load_config(path)
    assert cfg.timeouts.navigation == 12.0
    assert cfg.timeouts.poll_interval == 0.1
    assert cfg.timeouts.element_existence == 5.0
    assert cfg.log_path == "out/waits.jsonl"


def test_save_and_load_json(tmp_path):
    path = tmp_path / "cfg" / "uiquery.json"
    save_config(QueryConfig(timeouts=TimeoutConfig(element_existence=2.0), echo_log=True), path)
    data = json.loads(path.read_text())
    assert data["timeouts"]["element_existence"] == 2.0
    assert "log_path" not in data
    assert load_config(path).echo_log is True


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("")
    assert load_config(path) == QueryConfig()


@pytest.mark.parametrize(
    "name, content",
    [
        ("bad.json", "{not json"),
        ("list.yaml", "- 1\n- 2\n"),
        ("negative.yaml", "timeouts:\n  navigation: -1\n"),
        ("typo.json", '{"timeouts": {"navigation": "soon"}}'),
    ],
)
def test_invalid_files_raise_config_error(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml")


def test_get_config_reads_env_var(tmp_path, monkeypatch):
    path = tmp_path / "uiquery.yaml"
    path.write_text("timeouts:\n  element_existence: 1.5\n")
    monkeypatch.setenv("UIQUERY_CONFIG", str(path))
    assert get_config().timeouts.element_existence == 1.5
    # cached until reset
    path.write_text("timeouts:\n  element_existence: 9\n")
    assert get_config().timeouts.element_existence == 1.5
    set_config(None)
    assert get_config().timeouts.element_existence == 9.0
