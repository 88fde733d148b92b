"""First/last element checks for sorted sets."""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass
from typing import Any

from sortcheck.assertions.base import AssertionResult, Boundary, Claim, Fact, FailureCategory
from sortcheck.assertions.rules import Rule, empty_failure, first_match, passed, rule_failure
from sortcheck.views import OrderedSetView, as_set_view, render

SetSubject = OrderedSetView | Collection[Any]


@dataclass
class ElementContext:
    view: OrderedSetView
    claim: Claim
    actual_element: Any

    @property
    def edge(self) -> str:
        return self.claim.boundary.value


def _actual_element_fact(c: ElementContext) -> tuple[Fact, ...]:
    return (Fact(f"{c.edge} element", render(c.actual_element)),)


ELEMENT_RULES: tuple[Rule[ElementContext], ...] = (
    Rule(
        FailureCategory.WRONG_POSITION,
        applies=lambda c: c.view.contains(c.claim.expected),
        explain=lambda c: (
            f"It does contain this element, but the {c.edge} element is "
            f"<{render(c.actual_element)}>"
        ),
        facts=_actual_element_fact,
    ),
    Rule(
        FailureCategory.ABSENT,
        applies=lambda c: True,
        explain=lambda c: (
            f"It does not contain this element, and the {c.edge} element is "
            f"<{render(c.actual_element)}>"
        ),
        facts=_actual_element_fact,
    ),
)


def check_element(
    subject: SetSubject,
    claim: Claim,
    logger: logging.Logger | None = None,
) -> AssertionResult:
    logger = logger or logging.getLogger(__name__)
    view = as_set_view(subject)
    logger.info(f"Checking {claim.kind}: {claim.render_expected()}")

    if view.is_empty():
        return empty_failure(claim, view.render(), logger)

    actual = view.first() if claim.boundary is Boundary.FIRST else view.last()
    if actual == claim.expected:
        return passed(claim, logger)

    context = ElementContext(view=view, claim=claim, actual_element=actual)
    rule = first_match(ELEMENT_RULES, context)
    return rule_failure(
        claim, rule, context, actual=view.render(), boundary=actual, logger=logger
    )


def has_first_element(
    elements: SetSubject, expected: Any, *, logger: logging.Logger | None = None
) -> AssertionResult:
    return check_element(elements, Claim("element", Boundary.FIRST, expected), logger)


def has_last_element(
    elements: SetSubject, expected: Any, *, logger: logging.Logger | None = None
) -> AssertionResult:
    return check_element(elements, Claim("element", Boundary.LAST, expected), logger)
