"""Command-line interface for uiquery."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import yaml

from uiquery.ax.query import ElementQuery
from uiquery.ax.snapshot import load_tree
from uiquery.ax.tree import SnapshotSource, UITree
from uiquery.config import get_config, load_config, set_config
from uiquery.core.errors import ConfigError, SnapshotError, UIQueryError
from uiquery.core.properties import ElementType, Property
from uiquery.predicates import and_, block, contains, equals, matches_regex
from uiquery.predicates.base import Predicate
from uiquery.runner.logging import WaitLog

from . import __version__
from .doctor import run_doctor
from .errors import (
    EXIT_DOCTOR_FAILURE,
    EXIT_GENERAL_ERROR,
    EXIT_OK,
    InvalidFilterError,
    NoMatchError,
    SnapshotFileError,
    UIQueryToolError,
    WaitTimeoutError,
)


@click.group()
@click.version_option(version=__version__, prog_name="uiquery")
@click.option(
    "--config",
    "config_path",
    default=None,
    metavar="FILE",
    help="JSON or YAML config file (timeouts, poll interval, wait log).",
)
def main(config_path: Optional[str]) -> None:
    """uiquery: declarative element queries against accessibility snapshots."""
    try:
        if config_path:
            set_config(load_config(config_path))
        else:
            get_config()
    except ConfigError as exc:
        click.echo(str(exc), err=True)
        sys.exit(EXIT_GENERAL_ERROR)


@main.command()
@click.option(
    "--log-dir",
    "log_dirs",
    multiple=True,
    metavar="PATH",
    help="Wait-log directory to verify (repeatable). Defaults to ./artifacts.",
)
@click.option("--snapshot", "snapshot_path", default=None, metavar="FILE",
              help="Snapshot file to validate.")
@click.option("--check-config", "check_config_path", default=None, metavar="FILE",
              help="Config file to validate.")
def doctor(
    log_dirs: Tuple[str, ...],
    snapshot_path: Optional[str],
    check_config_path: Optional[str],
) -> None:
    """Validate the environment and input files for uiquery.

    Exits with code 0 when all checks pass, or 10 when one or more fail.
    """
    dirs = list(log_dirs) if log_dirs else None
    report = run_doctor(
        log_dirs=dirs, snapshot_path=snapshot_path, config_path=check_config_path
    )

    _print_report(report)

    if report.passed:
        click.echo("\n✅  All checks passed — environment is ready.")
        sys.exit(EXIT_OK)
    else:
        click.echo(
            "\n❌  One or more checks failed. Fix the issues above and re-run "
            "`uiquery doctor`.",
            err=True,
        )
        sys.exit(EXIT_DOCTOR_FAILURE)


def _print_report(report) -> None:
    """Pretty-print the doctor report to stdout."""
    click.echo(f"uiquery doctor — environment check\n{'─' * 45}")
    for check in report.checks:
        icon = "✓" if check.passed else "✗"
        click.echo(f"  [{icon}] {check.name}: {check.message}")
        if check.hint:
            click.echo(f"       ↳ {check.hint}")


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def _filter_options(fn):
    fn = click.option("--has-descendant", is_flag=True,
                      help="Match elements containing a descendant that passes the filters.")(fn)
    fn = click.option("--matches", "matches_", multiple=True, metavar="KEY=REGEX",
                      help="Property matches a regular expression (whole string, case-insensitive).")(fn)
    fn = click.option("--contains", "contains_", multiple=True, metavar="KEY=TEXT",
                      help="Property contains TEXT (case-insensitive).")(fn)
    fn = click.option("--equals", "equals_", multiple=True, metavar="KEY=VALUE",
                      help="Property equals VALUE (parsed as a YAML scalar: 3, true, '3').")(fn)
    fn = click.option("--type", "element_type", default=None, metavar="TYPE",
                      help="Element type, e.g. button, staticText, window.")(fn)
    return fn


def _split(expression: str) -> Tuple[str, str]:
    key, sep, raw = expression.partition("=")
    if not sep or not key:
        raise InvalidFilterError(expression, "expected KEY=VALUE")
    return key.strip(), raw


def build_predicate(
    element_type: Optional[str],
    equals_: Tuple[str, ...] = (),
    contains_: Tuple[str, ...] = (),
    matches_: Tuple[str, ...] = (),
) -> Predicate:
    """Turn CLI filter options into one AND predicate."""
    predicates = []
    if element_type:
        try:
            kind = ElementType(element_type)
        except ValueError:
            raise InvalidFilterError(f"--type {element_type}", "unknown element type") from None
        if kind is not ElementType.ANY:
            predicates.append(equals(Property.ELEMENT_TYPE, kind))

    for expression in equals_:
        key, raw = _split(expression)
        try:
            value = yaml.safe_load(raw) if raw else ""
        except yaml.YAMLError as exc:
            raise InvalidFilterError(expression, f"unparseable value: {exc}") from None
        predicates.append(_checked(expression, lambda: equals(key, value)))
    for expression in contains_:
        key, raw = _split(expression)
        predicates.append(_checked(expression, lambda: contains(key, raw)))
    for expression in matches_:
        key, raw = _split(expression)
        predicates.append(_checked(expression, lambda: matches_regex(key, raw)))

    return and_(predicates)


def _checked(expression: str, make) -> Predicate:
    try:
        return make()
    except (UIQueryError, ValueError) as exc:
        raise InvalidFilterError(expression, str(exc)) from None


def _select(tree: UITree, predicate: Predicate, has_descendant: bool) -> ElementQuery:
    query = tree.descendants()
    return query.containing(predicate) if has_descendant else query.matching(predicate)


def _fail(exc: UIQueryToolError) -> None:
    click.echo(str(exc), err=True)
    sys.exit(exc.exit_code)


# ---------------------------------------------------------------------------
# find / wait
# ---------------------------------------------------------------------------


@main.command()
@click.argument("snapshot", metavar="SNAPSHOT")
@_filter_options
def find(
    snapshot: str,
    element_type: Optional[str],
    equals_: Tuple[str, ...],
    contains_: Tuple[str, ...],
    matches_: Tuple[str, ...],
    has_descendant: bool,
) -> None:
    """Print the elements of SNAPSHOT that pass the filters, as JSON."""
    try:
        predicate = build_predicate(element_type, equals_, contains_, matches_)
        if not Path(snapshot).exists():
            raise SnapshotFileError(snapshot, "file not found")
        try:
            root = load_tree(snapshot)
        except SnapshotError as exc:
            raise SnapshotFileError(snapshot, str(exc)) from None
        query = _select(UITree.from_node(root), predicate, has_descendant)
        try:
            nodes = query.nodes()
        except UIQueryError as exc:
            raise InvalidFilterError(predicate.predicate_format, str(exc)) from None
        if not nodes:
            raise NoMatchError(query.description)
    except UIQueryToolError as exc:
        _fail(exc)
        return

    click.echo(json.dumps([n.to_summary() for n in nodes], indent=2, ensure_ascii=False, default=str))


@main.command()
@click.argument("snapshot", metavar="SNAPSHOT")
@_filter_options
@click.option("--timeout", type=float, default=None,
              help="Seconds to wait. Defaults to the configured element-existence timeout.")
@click.option("--gone", is_flag=True, help="Wait for the element to disappear instead.")
@click.option("--log", "log_path", default=None, metavar="FILE",
              help="Append the wait outcome to this JSON-lines file.")
def wait(
    snapshot: str,
    element_type: Optional[str],
    equals_: Tuple[str, ...],
    contains_: Tuple[str, ...],
    matches_: Tuple[str, ...],
    has_descendant: bool,
    timeout: Optional[float],
    gone: bool,
    log_path: Optional[str],
) -> None:
    """Wait until an element passing the filters appears in SNAPSHOT.

    The snapshot is re-read on every poll, so it can be refreshed by an
    external exporter while the command runs. A file that never parses
    during the wait is reported as a snapshot error, not as a missing
    element.
    """
    config = get_config()
    if timeout is None:
        timeout = config.timeouts.element_existence
    log = WaitLog(log_path) if log_path else WaitLog.from_config(config)

    try:
        predicate = build_predicate(element_type, equals_, contains_, matches_)
        source = SnapshotSource(snapshot)
        target = equals(Property.EXISTS, not gone)
        if gone:
            # an unparseable file says nothing about whether the element left
            target = target & block(lambda _: not source.pending, "snapshotReadable")
        with log:
            tree = UITree(source, source.path.stem, log)
            element = _select(tree, predicate, has_descendant).first_match
            try:
                ok = element.wait(target, timeout)
            except UIQueryError as exc:
                raise InvalidFilterError(predicate.predicate_format, str(exc)) from None
        if source.pending:
            raise SnapshotFileError(snapshot, str(source.error))
        if not ok:
            raise WaitTimeoutError(element.description, timeout, gone=gone)
    except UIQueryToolError as exc:
        _fail(exc)
        return

    if gone:
        click.echo(f"{element.description} is gone")
    else:
        node = element.resolve()
        summary = node.to_summary() if node is not None else {}
        click.echo(json.dumps(summary, indent=2, ensure_ascii=False, default=str))
