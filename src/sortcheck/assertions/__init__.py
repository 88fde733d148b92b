"""Assertion system for boundary claims on ordered collections."""

from sortcheck.assertions.base import (
    AssertionResult,
    Boundary,
    Claim,
    Diagnosis,
    Fact,
    FailureCategory,
)
from sortcheck.assertions.dispatch import evaluate_assertion
from sortcheck.assertions.sorted_map import (
    has_first_entry,
    has_first_key,
    has_last_entry,
    has_last_key,
)
from sortcheck.assertions.sorted_set import has_first_element, has_last_element

__all__ = [
    "AssertionResult",
    "Boundary",
    "Claim",
    "Diagnosis",
    "Fact",
    "FailureCategory",
    "evaluate_assertion",
    "has_first_element",
    "has_first_entry",
    "has_first_key",
    "has_last_element",
    "has_last_entry",
    "has_last_key",
]
