"""Tests for assertion helpers."""

import pytest

from uiquery.ax.tree import UITree
from uiquery.predicates import contains, equals
from uiquery.runner.logging import WaitLog
from uiquery.testing.assertions import (
    AssertionResult,
    assert_eventually,
    assert_exists,
    assert_not_exists,
    check,
    is_on,
)


def test_assertion_result_passed():
    r = AssertionResult(True, "OK", expected="foo", actual="foo")
    d = r.to_dict()
    assert d["passed"] is True
    assert d["expected"] == "foo"
    assert d["actual"] == "foo"


def test_assertion_result_failed():
    r = AssertionResult(False, "Mismatch", expected="bar", actual="baz")
    d = r.to_dict()
    assert d["passed"] is False
    assert d["message"] == "Mismatch"


def test_check_captures_actual_value(app):
    r = check(app.buttons["back"], equals("label", "Forward"))
    assert not r.passed
    assert r.actual == "Back"
    assert r.expected == 'label == "Forward"'
    assert r.message == 'label == "Forward" does not hold'


def test_check_compound(app):
    r = check(app.buttons["back"], equals("label", "Back") & equals("isEnabled", True))
    assert r.passed
    assert r.actual is None
    assert r.message.endswith(" holds")


def test_assert_eventually(app):
    assert_eventually(app.text_fields.first_match, contains("value", "example"), timeout=0.2)
    with pytest.raises(AssertionError, match="address bar: value CONTAINS"):
        assert_eventually(
            app.text_fields.first_match,
            contains("value", "duckduckgo"),
            timeout=0.05,
            message="address bar",
        )


def test_assert_eventually_logs(browser_tree):
    log = WaitLog()
    tree = UITree.from_node(browser_tree, log)
    with pytest.raises(AssertionError):
        assert_eventually(tree.buttons, equals("count", 5), timeout=0.05)
    assert log.entries[0]["subject"] == "app.descendants(button)"
    assert log.entries[0]["outcome"] == "timedOut"


def test_assert_exists(app):
    assert_exists(app.buttons["back"], timeout=0.1)
    with pytest.raises(AssertionError, match="did not appear"):
        assert_exists(app.buttons["reload"], timeout=0.05)


def test_assert_not_exists(app):
    assert_not_exists(app.buttons["reload"], timeout=0.1)
    with pytest.raises(AssertionError, match="still present"):
        assert_not_exists(app.buttons["back"], timeout=0.05, message="toolbar")


@pytest.mark.parametrize(
    "value, expected",
    [("1", True), ("on", True), (" ON ", True), ("0", False), ("off", False), ("", False),
     (1, True), (0, False), (0.5, True), (True, True), (False, False)],
)
def test_is_on(value, expected):
    assert is_on(value) is expected


def test_is_on_rejects_missing_value():
    with pytest.raises(TypeError):
        is_on(None)


def test_checkbox_value(app):
    box = app.check_boxes["PreferencesGeneralView.showAutocompleteSuggestions"]
    assert is_on(box.value)
