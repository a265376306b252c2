"""Exit codes and error message helpers for the uiquery CLI."""

# Exit codes
EXIT_OK = 0
EXIT_GENERAL_ERROR = 1
EXIT_NO_MATCH = 2
EXIT_INVALID_FILTER = 3
EXIT_SNAPSHOT_ERROR = 4
EXIT_TIMEOUT = 6
EXIT_DOCTOR_FAILURE = 10

# Human-readable descriptions keyed by exit code
_EXIT_DESCRIPTIONS = {
    EXIT_OK: "Success",
    EXIT_GENERAL_ERROR: "General error",
    EXIT_NO_MATCH: "No element matched the filters",
    EXIT_INVALID_FILTER: "Invalid filter expression",
    EXIT_SNAPSHOT_ERROR: "Snapshot file could not be read",
    EXIT_TIMEOUT: "Timed out waiting for the element",
    EXIT_DOCTOR_FAILURE: "Environment check failed (run `uiquery doctor` for details)",
}


def exit_description(code: int) -> str:
    """Return a human-readable description for *code*."""
    return _EXIT_DESCRIPTIONS.get(code, f"Unknown error (code {code})")


class UIQueryToolError(Exception):
    """Base exception; carries an exit code and an actionable message."""

    def __init__(self, message: str, exit_code: int = EXIT_GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class NoMatchError(UIQueryToolError):
    """Raised when no element satisfies the filters."""

    def __init__(self, query: str):
        hint = (
            "  Hint: Inspect the snapshot with `uiquery find SNAPSHOT` and no filters"
            " to list every element, then narrow down."
        )
        super().__init__(f"No element matched {query}.\n{hint}", EXIT_NO_MATCH)
        self.query = query


class InvalidFilterError(UIQueryToolError):
    """Raised when a KEY=VALUE filter cannot be turned into a predicate."""

    def __init__(self, expression: str, reason: str = ""):
        reason_part = f" ({reason})" if reason else ""
        hint = (
            "  Hint: Filters take the form KEY=VALUE where KEY is an element property"
            " such as label, title, identifier or value."
        )
        super().__init__(
            f"Invalid filter '{expression}'{reason_part}.\n{hint}", EXIT_INVALID_FILTER
        )
        self.expression = expression


class SnapshotFileError(UIQueryToolError):
    """Raised when the snapshot file is missing or malformed."""

    def __init__(self, path: str, reason: str = ""):
        reason_part = f": {reason}" if reason else ""
        hint = "  Hint: Run `uiquery doctor --snapshot FILE` to validate the file."
        super().__init__(f"Cannot use snapshot '{path}'{reason_part}\n{hint}", EXIT_SNAPSHOT_ERROR)
        self.path = path


class WaitTimeoutError(UIQueryToolError):
    """Raised when the awaited condition is not met in time."""

    def __init__(self, query: str, timeout: float, gone: bool = False):
        state = "disappear" if gone else "appear"
        hint = (
            "  Hint: Increase --timeout, or confirm the exporter is still"
            " refreshing the snapshot file."
        )
        super().__init__(
            f"Timeout after {timeout:.1f}s waiting for {query} to {state}.\n{hint}",
            EXIT_TIMEOUT,
        )
        self.query = query
        self.timeout = timeout
