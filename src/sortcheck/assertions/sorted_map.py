"""First/last key and entry checks for key-sorted mappings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from sortcheck.assertions.base import AssertionResult, Boundary, Claim, Fact, FailureCategory
from sortcheck.assertions.rules import Rule, empty_failure, first_match, passed, rule_failure
from sortcheck.views import OrderedMapView, as_map_view, render, render_entry, render_list

MapSubject = OrderedMapView | Mapping[Any, Any]


@dataclass
class KeyContext:
    view: OrderedMapView
    claim: Claim
    actual_key: Any

    @property
    def edge(self) -> str:
        return self.claim.boundary.value


@dataclass
class EntryContext:
    view: OrderedMapView
    claim: Claim
    actual_key: Any
    actual_value: Any

    @property
    def edge(self) -> str:
        return self.claim.boundary.value

    @property
    def actual_entry(self) -> str:
        return render_entry(self.actual_key, self.actual_value)

    @cached_property
    def has_expected_key(self) -> bool:
        return self.view.contains_key(self.claim.expected)

    @cached_property
    def mapped_value(self) -> Any:
        return self.view.get(self.claim.expected)

    @cached_property
    def ambiguous_keys(self) -> tuple[Any, ...]:
        return tuple(self.view.keys_for_value(self.claim.expected_value))


def _actual_key_fact(c: KeyContext | EntryContext) -> tuple[Fact, ...]:
    return (Fact(f"{c.edge} key", render(c.actual_key)),)


def _actual_entry_fact(c: EntryContext) -> tuple[Fact, ...]:
    return (Fact(f"{c.edge} entry", c.actual_entry),)


KEY_RULES: tuple[Rule[KeyContext], ...] = (
    Rule(
        FailureCategory.WRONG_POSITION,
        applies=lambda c: c.view.contains_key(c.claim.expected),
        explain=lambda c: (
            f"It does contain this key, but the {c.edge} key is <{render(c.actual_key)}>"
        ),
        facts=_actual_key_fact,
    ),
    Rule(
        FailureCategory.ABSENT,
        applies=lambda c: True,
        explain=lambda c: (
            f"It does not contain this key, and the {c.edge} key is <{render(c.actual_key)}>"
        ),
        facts=_actual_key_fact,
    ),
)

# Order matters: a genuine but misplaced entry outranks a coincidental key or
# value match at the boundary, and boundary matches outrank containment scans.
ENTRY_RULES: tuple[Rule[EntryContext], ...] = (
    Rule(
        FailureCategory.ENTRY_WRONG_POSITION,
        applies=lambda c: c.has_expected_key and c.mapped_value == c.claim.expected_value,
        explain=lambda c: (
            f"It does contain this entry, but the {c.edge} entry is <{c.actual_entry}>"
        ),
        facts=_actual_entry_fact,
    ),
    Rule(
        FailureCategory.VALUE_MISMATCH_AT_BOUNDARY,
        applies=lambda c: c.claim.expected == c.actual_key,
        explain=lambda c: f"the {c.edge} value is <{render(c.actual_value)}>",
        facts=lambda c: (Fact(f"{c.edge} value", render(c.actual_value)),),
        short=True,
    ),
    Rule(
        FailureCategory.KEY_MISMATCH_AT_BOUNDARY,
        applies=lambda c: c.claim.expected_value == c.actual_value,
        explain=lambda c: f"the {c.edge} key is <{render(c.actual_key)}>",
        facts=_actual_key_fact,
        short=True,
    ),
    Rule(
        FailureCategory.KEY_WRONG_POSITION,
        applies=lambda c: c.has_expected_key,
        explain=lambda c: (
            f"It does contain this key, but the key is mapped to <{render(c.mapped_value)}>, "
            f"and the {c.edge} entry is <{c.actual_entry}>"
        ),
        facts=lambda c: (
            Fact("key is mapped to", render(c.mapped_value)),
            *_actual_entry_fact(c),
        ),
        details=lambda c: {"mapped_value": c.mapped_value},
    ),
    Rule(
        FailureCategory.VALUE_WRONG_POSITION,
        applies=lambda c: len(c.ambiguous_keys) > 0,
        explain=lambda c: (
            f"It does contain this value, but the value is mapped from the keys "
            f"<{render_list(c.ambiguous_keys)}>, and the {c.edge} entry is <{c.actual_entry}>"
        ),
        facts=lambda c: (
            Fact("value is mapped from keys", render_list(c.ambiguous_keys)),
            *_actual_entry_fact(c),
        ),
        details=lambda c: {"ambiguous_keys": c.ambiguous_keys},
    ),
    Rule(
        FailureCategory.ENTRY_ABSENT,
        applies=lambda c: True,
        explain=lambda c: (
            f"It does not contain this entry, and the {c.edge} entry is <{c.actual_entry}>"
        ),
        facts=_actual_entry_fact,
    ),
)


def _boundary_key(view: OrderedMapView, boundary: Boundary) -> Any:
    return view.first_key() if boundary is Boundary.FIRST else view.last_key()


def check_key(
    subject: MapSubject,
    claim: Claim,
    logger: logging.Logger | None = None,
) -> AssertionResult:
    """Check a first/last key claim and diagnose it when it fails."""
    logger = logger or logging.getLogger(__name__)
    view = as_map_view(subject)
    logger.info(f"Checking {claim.kind}: {claim.render_expected()}")

    if view.is_empty():
        return empty_failure(claim, view.render(), logger)

    actual_key = _boundary_key(view, claim.boundary)
    if actual_key == claim.expected:
        return passed(claim, logger)

    context = KeyContext(view=view, claim=claim, actual_key=actual_key)
    rule = first_match(KEY_RULES, context)
    return rule_failure(
        claim, rule, context, actual=view.render(), boundary=actual_key, logger=logger
    )


def check_entry(
    subject: MapSubject,
    claim: Claim,
    logger: logging.Logger | None = None,
) -> AssertionResult:
    """Check a first/last entry claim and diagnose it when it fails.

    Rules are tried in ``ENTRY_RULES`` order and the first match decides the
    category, so a caller sees the most specific explanation available.
    """
    logger = logger or logging.getLogger(__name__)
    view = as_map_view(subject)
    logger.info(f"Checking {claim.kind}: {claim.render_expected()}")

    if view.is_empty():
        return empty_failure(claim, view.render(), logger)

    actual_key = _boundary_key(view, claim.boundary)
    actual_value = view.get(actual_key)
    if actual_key == claim.expected and actual_value == claim.expected_value:
        return passed(claim, logger)

    context = EntryContext(
        view=view, claim=claim, actual_key=actual_key, actual_value=actual_value
    )
    rule = first_match(ENTRY_RULES, context)
    return rule_failure(
        claim,
        rule,
        context,
        actual=view.render(),
        boundary=(actual_key, actual_value),
        logger=logger,
    )


def has_first_key(
    mapping: MapSubject, expected_key: Any, *, logger: logging.Logger | None = None
) -> AssertionResult:
    return check_key(mapping, Claim("key", Boundary.FIRST, expected_key), logger)


def has_last_key(
    mapping: MapSubject, expected_key: Any, *, logger: logging.Logger | None = None
) -> AssertionResult:
    return check_key(mapping, Claim("key", Boundary.LAST, expected_key), logger)


def has_first_entry(
    mapping: MapSubject,
    expected_key: Any,
    expected_value: Any,
    *,
    logger: logging.Logger | None = None,
) -> AssertionResult:
    return check_entry(
        mapping, Claim("entry", Boundary.FIRST, expected_key, expected_value), logger
    )


def has_last_entry(
    mapping: MapSubject,
    expected_key: Any,
    expected_value: Any,
    *,
    logger: logging.Logger | None = None,
) -> AssertionResult:
    return check_entry(
        mapping, Claim("entry", Boundary.LAST, expected_key, expected_value), logger
    )
