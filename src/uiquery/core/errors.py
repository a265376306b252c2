"""Custom exception hierarchy."""


class UIQueryError(Exception):
    """Base exception for uiquery."""


class UnresolvedPropertyError(UIQueryError):
    """A property reference does not name a supported element property.

    Raised while a predicate is being built; it signals a test-authoring bug
    and is never turned into a silent no-match.
    """

    def __init__(self, ref: object):
        self.ref = ref
        super().__init__(f"Unsupported property reference: {ref!r}")


class PropertyTypeError(UIQueryError):
    """A property's runtime value cannot be compared the way the predicate asks."""

    def __init__(self, key: str, expected: str, actual: object = None, detail: str = ""):
        self.key = key
        self.expected = expected
        self.actual = actual
        msg = detail or (
            f"Property '{key}' holds {type(actual).__name__} {actual!r}; "
            f"cannot compare as {expected}"
        )
        super().__init__(msg)


class SnapshotError(UIQueryError):
    """An accessibility tree snapshot could not be read or parsed."""


class ConfigError(UIQueryError):
    """Configuration file is missing or invalid."""
