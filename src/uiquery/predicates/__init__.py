from uiquery.predicates.base import FALSE, TRUE, BlockPredicate, Predicate, block
from uiquery.predicates.builder import (
    KeyPathPredicate,
    Operator,
    begins_with,
    contains,
    ends_with,
    equals,
    in_range,
    is_in,
    like,
    matches_regex,
)
from uiquery.predicates.compound import CompoundKind, CompoundPredicate, and_, not_, or_
from uiquery.predicates.values import (
    Bounds,
    Float32,
    Int32,
    Int64,
    UInt32,
    UInt64,
    ValueKind,
    at_least,
    at_most,
    below,
    classify_value,
    closed,
    half_open,
)

__all__ = [
    "FALSE",
    "TRUE",
    "BlockPredicate",
    "Bounds",
    "CompoundKind",
    "CompoundPredicate",
    "Float32",
    "Int32",
    "Int64",
    "KeyPathPredicate",
    "Operator",
    "Predicate",
    "UInt32",
    "UInt64",
    "ValueKind",
    "and_",
    "at_least",
    "at_most",
    "begins_with",
    "below",
    "block",
    "classify_value",
    "closed",
    "contains",
    "ends_with",
    "equals",
    "half_open",
    "in_range",
    "is_in",
    "like",
    "matches_regex",
    "not_",
    "or_",
]
