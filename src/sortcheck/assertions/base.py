"""Base data structures for the assertion system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sortcheck.views import render, render_entry


class Boundary(str, Enum):
    FIRST = "first"
    LAST = "last"


class FailureCategory(str, Enum):
    EMPTY_COLLECTION = "empty_collection"
    WRONG_POSITION = "wrong_position"
    ABSENT = "absent"
    ENTRY_WRONG_POSITION = "entry_wrong_position"
    VALUE_MISMATCH_AT_BOUNDARY = "value_mismatch_at_boundary"
    KEY_MISMATCH_AT_BOUNDARY = "key_mismatch_at_boundary"
    KEY_WRONG_POSITION = "key_wrong_position"
    VALUE_WRONG_POSITION = "value_wrong_position"
    ENTRY_ABSENT = "entry_absent"


@dataclass(frozen=True)
class Claim:
    """A single first/last assertion about an ordered collection.

    Attributes:
        noun: What is being claimed about: "key", "entry" or "element".
        boundary: Which end of the collection the claim is about.
        expected: The expected key or element. For entries, the expected key.
        expected_value: The expected value, for entry claims only.
    """

    noun: str
    boundary: Boundary
    expected: Any
    expected_value: Any = None

    @property
    def kind(self) -> str:
        """Assertion type name, e.g. ``first_entry``."""
        return f"{self.boundary.value}_{self.noun}"

    def render_expected(self) -> str:
        if self.noun == "entry":
            return render_entry(self.expected, self.expected_value)
        return render(self.expected)


@dataclass(frozen=True)
class Fact:
    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}: {self.value}"


@dataclass(frozen=True)
class Diagnosis:
    """Why a boundary claim failed.

    ``boundary`` is the actual boundary key, element, or ``(key, value)``
    entry and is ``None`` for ``EMPTY_COLLECTION``. ``mapped_value`` is only
    set for ``KEY_WRONG_POSITION``; ``ambiguous_keys`` only for
    ``VALUE_WRONG_POSITION``.
    """

    claim: Claim
    category: FailureCategory
    actual: str
    boundary: Any = None
    mapped_value: Any = None
    ambiguous_keys: tuple[Any, ...] = ()


@dataclass
class AssertionResult:
    """Result of evaluating a single assertion.

    Attributes:
        name: Identifier for the assertion (e.g. "first_entry:1=0").
        passed: Whether the claim holds.
        message: Human-readable detail about the result.
        score: 1.0 (pass) or 0.0 (fail).
        weight: Relative importance of this assertion for weighted grade
            computation. Defaults to 1.0 (equal weight).
        facts: Named failure facts the message was built from, in order.
        diagnosis: Structured failure detail; ``None`` when passed.
    """

    name: str
    passed: bool
    message: str
    score: float = 0.0
    weight: float = 1.0
    facts: tuple[Fact, ...] = field(default_factory=tuple)
    diagnosis: Diagnosis | None = None

    @property
    def category(self) -> FailureCategory | None:
        return self.diagnosis.category if self.diagnosis is not None else None

    def fact(self, key: str) -> str | None:
        for f in self.facts:
            if f.key == key:
                return f.value
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "passed": self.passed,
            "message": self.message,
            "score": self.score,
            "weight": self.weight,
            "category": self.category.value if self.category is not None else None,
            "facts": [[f.key, f.value] for f in self.facts],
        }
