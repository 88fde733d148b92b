"""Boundary assertions with discriminated failure diagnostics for ordered collections."""

from sortcheck.assertions import (
    AssertionResult,
    FailureCategory,
    evaluate_assertion,
    has_first_element,
    has_first_entry,
    has_first_key,
    has_last_element,
    has_last_entry,
    has_last_key,
)
from sortcheck.errors import OrderingError
from sortcheck.views import SortedMapView, SortedSetView, nulls_first, nulls_last

__all__ = [
    "AssertionResult",
    "FailureCategory",
    "OrderingError",
    "SortedMapView",
    "SortedSetView",
    "evaluate_assertion",
    "has_first_element",
    "has_first_entry",
    "has_first_key",
    "has_last_element",
    "has_last_entry",
    "has_last_key",
    "nulls_first",
    "nulls_last",
]
