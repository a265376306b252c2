"""Doctor command: validates the environment and input files for uiquery."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from uiquery.ax.snapshot import load_tree
from uiquery.config import load_config
from uiquery.core.errors import ConfigError, SnapshotError

MIN_PYTHON = (3, 9)


@dataclass
class CheckResult:
    name: str
    passed: bool
    message: str
    hint: Optional[str] = None


@dataclass
class DoctorReport:
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    def add(self, result: CheckResult) -> None:
        self.checks.append(result)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def check_python_version() -> CheckResult:
    """Verify that the running Python meets the minimum version requirement."""
    current = sys.version_info[:2]
    ok = current >= MIN_PYTHON
    ver_str = f"{current[0]}.{current[1]}"
    min_str = f"{MIN_PYTHON[0]}.{MIN_PYTHON[1]}"
    if ok:
        return CheckResult(
            name="Python version",
            passed=True,
            message=f"Python {ver_str} ✓ (>= {min_str} required)",
        )
    return CheckResult(
        name="Python version",
        passed=False,
        message=f"Python {ver_str} is too old (need >= {min_str})",
        hint=f"Install Python {min_str}+ from https://python.org/downloads/",
    )


def check_snapshot(snapshot_path: Optional[str] = None) -> CheckResult:
    """Validate that the snapshot file (if given) parses into an element tree."""
    if snapshot_path is None:
        return CheckResult(
            name="Snapshot",
            passed=True,
            message="No snapshot specified (skipped)",
        )
    p = Path(snapshot_path)
    if not p.exists():
        return CheckResult(
            name="Snapshot",
            passed=False,
            message=f"Snapshot file not found: '{p}'",
            hint="Export the accessibility tree first or pass the correct path with --snapshot.",
        )
    try:
        root = load_tree(p)
    except SnapshotError as exc:
        return CheckResult(
            name="Snapshot",
            passed=False,
            message=f"Snapshot file is invalid: {exc}",
            hint="The root must be a single element mapping with optional 'children'.",
        )
    count = sum(1 for _ in root.walk())
    return CheckResult(
        name="Snapshot",
        passed=True,
        message=f"Snapshot '{p}' holds {count} element(s) ✓",
    )


def check_config(config_path: Optional[str] = None) -> CheckResult:
    """Validate that the config file (if given) loads and passes validation."""
    if config_path is None:
        return CheckResult(
            name="Config",
            passed=True,
            message="No config specified (skipped)",
        )
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        return CheckResult(
            name="Config",
            passed=False,
            message=str(exc).splitlines()[0],
            hint="Fix the file or remove --config to use the built-in defaults.",
        )
    return CheckResult(
        name="Config",
        passed=True,
        message=(
            f"Config '{config_path}' is valid ✓ "
            f"(navigation timeout {config.timeouts.navigation}s)"
        ),
    )


def check_log_dirs(paths: Optional[List[str]] = None) -> List[CheckResult]:
    """Verify that wait-log directories exist (or can be created) and are writable."""
    if paths is None:
        paths = [os.path.join(os.getcwd(), "artifacts")]

    results = []
    for raw_path in paths:
        p = Path(raw_path)
        try:
            p.mkdir(parents=True, exist_ok=True)
        except OSError:
            pass  # reported below

        if p.exists() and os.access(p, os.W_OK):
            results.append(
                CheckResult(
                    name=f"Log dir: {p}",
                    passed=True,
                    message=f"'{p}' is writable ✓",
                )
            )
        elif not p.exists():
            results.append(
                CheckResult(
                    name=f"Log dir: {p}",
                    passed=False,
                    message=f"'{p}' does not exist and could not be created",
                    hint=f"Create the directory manually: mkdir -p \"{p}\"",
                )
            )
        else:
            results.append(
                CheckResult(
                    name=f"Log dir: {p}",
                    passed=False,
                    message=f"'{p}' exists but is not writable",
                    hint=f"Fix permissions: chmod u+w \"{p}\"",
                )
            )
    return results


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def run_doctor(
    log_dirs: Optional[List[str]] = None,
    snapshot_path: Optional[str] = None,
    config_path: Optional[str] = None,
) -> DoctorReport:
    """Run all environment checks and return a :class:`DoctorReport`."""
    report = DoctorReport()

    report.add(check_python_version())
    report.add(check_snapshot(snapshot_path))
    report.add(check_config(config_path))
    for result in check_log_dirs(log_dirs):
        report.add(result)

    return report
