"""Priority-ordered diagnostic rules shared by the boundary checks.

A failing claim is explained by the first rule in a fixed sequence whose
predicate holds. Each rule pairs that predicate with a category and the
builders for its explanation and extra facts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sortcheck.assertions.base import (
    AssertionResult,
    Claim,
    Diagnosis,
    Fact,
    FailureCategory,
)

C = TypeVar("C")


def _no_facts(context: Any) -> tuple[Fact, ...]:
    return ()


def _no_details(context: Any) -> dict[str, Any]:
    return {}


@dataclass(frozen=True)
class Rule(Generic[C]):
    """One step of a diagnosis.

    ``short`` rules report directly against the boundary and are appended
    to the headline with a comma instead of as a separate sentence.
    """

    category: FailureCategory
    applies: Callable[[C], bool]
    explain: Callable[[C], str]
    facts: Callable[[C], tuple[Fact, ...]] = _no_facts
    details: Callable[[C], dict[str, Any]] = _no_details
    short: bool = False


def first_match(rules: Sequence[Rule[C]], context: C) -> Rule[C]:
    for rule in rules:
        if rule.applies(context):
            return rule
    raise LookupError("no diagnostic rule matched")


def expected_fact(claim: Claim) -> Fact:
    return Fact(
        f"expected to have {claim.boundary.value} {claim.noun}",
        claim.render_expected(),
    )


def passed(claim: Claim, logger: logging.Logger) -> AssertionResult:
    logger.info(f"{claim.kind} {claim.render_expected()} passed=True")
    return AssertionResult(
        name=f"{claim.kind}:{claim.render_expected()}",
        passed=True,
        message=f"{claim.boundary.value} {claim.noun} is {claim.render_expected()}",
        score=1.0,
    )


def empty_failure(claim: Claim, actual: str, logger: logging.Logger) -> AssertionResult:
    facts = (expected_fact(claim), Fact("but was", actual))
    logger.info(f"{claim.kind} {claim.render_expected()} passed=False (empty collection)")
    return AssertionResult(
        name=f"{claim.kind}:{claim.render_expected()}",
        passed=False,
        message="\n".join(str(f) for f in facts),
        score=0.0,
        facts=facts,
        diagnosis=Diagnosis(
            claim=claim,
            category=FailureCategory.EMPTY_COLLECTION,
            actual=actual,
        ),
    )


def rule_failure(
    claim: Claim,
    rule: Rule[C],
    context: C,
    *,
    actual: str,
    boundary: Any,
    logger: logging.Logger,
) -> AssertionResult:
    headline = f"Not true that <{actual}> has {claim.boundary.value} {claim.noun} <{claim.render_expected()}>"
    separator = ", " if rule.short else ". "
    message = headline + separator + rule.explain(context)
    facts = (expected_fact(claim), Fact("but was", actual), *rule.facts(context))

    logger.info(
        f"{claim.kind} {claim.render_expected()} passed=False category={rule.category.value}"
    )
    logger.debug(message)

    return AssertionResult(
        name=f"{claim.kind}:{claim.render_expected()}",
        passed=False,
        message=message,
        score=0.0,
        facts=facts,
        diagnosis=Diagnosis(
            claim=claim,
            category=rule.category,
            actual=actual,
            boundary=boundary,
            **rule.details(context),
        ),
    )
