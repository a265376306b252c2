"""Structured JSON-lines log of wait outcomes."""

from __future__ import annotations

import json
import pathlib
import sys
import time
from collections import deque
from typing import Any

from uiquery.config import QueryConfig
from uiquery.constants import DEFAULT_LOG_TAIL, MAX_LOG_ENTRIES


class WaitLog:
    """Append-only structured log of waits.

    The newest *max_entries* entries are kept in memory. Every entry is
    also written to *path* once :meth:`open` has been called, and echoed
    to stderr when *echo* is set.
    """

    def __init__(
        self,
        path: str | pathlib.Path | None = None,
        echo: bool = False,
        max_entries: int = MAX_LOG_ENTRIES,
    ):
        self._log_path = pathlib.Path(path) if path else None
        self.echo = echo
        self._fh = None
        self._entries: deque[dict[str, Any]] = deque(maxlen=max_entries)

    @classmethod
    def from_config(cls, config: QueryConfig) -> WaitLog:
        return cls(config.log_path, echo=config.echo_log)

    @property
    def path(self) -> pathlib.Path | None:
        return self._log_path

    def open(self) -> None:
        if self._log_path is None:
            return
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = open(self._log_path, "a", encoding="utf-8")

    def close(self) -> None:
        if self._fh:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> WaitLog:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def record(
        self,
        subject: str,
        predicate: str,
        timeout: float,
        completed: bool,
        elapsed: float,
        polls: int,
    ) -> dict[str, Any]:
        entry = {
            "timestamp": time.time(),
            "subject": subject,
            "predicate": predicate,
            "timeout": timeout,
            "outcome": "completed" if completed else "timedOut",
            "elapsed": round(elapsed, 4),
            "polls": polls,
        }
        self._entries.append(entry)
        line = json.dumps(entry, ensure_ascii=False, default=str)
        if self._fh:
            self._fh.write(line + "\n")
            self._fh.flush()
        if self.echo:
            print(line, file=sys.stderr)
        return entry

    def read_last_n(self, n: int = DEFAULT_LOG_TAIL) -> list[dict[str, Any]]:
        if self._log_path is None or not self._log_path.exists():
            return []
        lines = self._log_path.read_text(encoding="utf-8").strip().splitlines()
        return [json.loads(l) for l in lines[-n:]]

    @property
    def entries(self) -> list[dict[str, Any]]:
        return list(self._entries)
