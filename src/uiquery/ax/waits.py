"""Polling waits.

A wait re-evaluates its condition until it holds or the timeout elapses.
Timing out is an ordinary ``False``/``None`` result, never an exception.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from uiquery.config import get_config
from uiquery.predicates.base import Predicate

if TYPE_CHECKING:
    from uiquery.runner.logging import WaitLog

T = TypeVar("T")


def _poll(
    condition: Callable[[], T],
    timeout: float,
    poll_interval: float,
) -> tuple[T, int]:
    """Return the last condition result and the number of evaluations."""
    deadline = time.monotonic() + max(timeout, 0.0)
    polls = 0
    while True:
        result = condition()
        polls += 1
        if result:
            return result, polls
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return result, polls
        time.sleep(min(poll_interval, remaining))


def wait_until(
    condition: Callable[[], Optional[T]],
    timeout: float | None = None,
    poll_interval: float | None = None,
) -> Optional[T]:
    """Poll *condition* until truthy; return its value, or ``None`` on timeout."""
    timeouts = get_config().timeouts
    result, _ = _poll(
        condition,
        timeouts.navigation if timeout is None else timeout,
        poll_interval or timeouts.poll_interval,
    )
    return result or None


def wait_for(
    obj: Any,
    predicate: Predicate,
    timeout: float | None = None,
    poll_interval: float | None = None,
    log: WaitLog | None = None,
    subject: str | None = None,
) -> bool:
    """Wait until *predicate* holds for *obj*. Returns ``False`` on timeout."""
    timeouts = get_config().timeouts
    if timeout is None:
        timeout = timeouts.navigation
    started = time.monotonic()
    result, polls = _poll(
        lambda: predicate.evaluate(obj),
        timeout,
        poll_interval or timeouts.poll_interval,
    )
    completed = bool(result)
    if log is not None:
        log.record(
            subject=subject or repr(obj),
            predicate=predicate.predicate_format,
            timeout=timeout,
            completed=completed,
            elapsed=time.monotonic() - started,
            polls=polls,
        )
    return completed
