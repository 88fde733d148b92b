from __future__ import annotations

from collections import Counter
from typing import Any

from sortcheck.assertions.base import AssertionResult


def collect_metrics(assertion_results: list[AssertionResult]) -> dict[str, Any]:
    """Collect summary metrics for one check's assertion results."""
    passed = sum(1 for r in assertion_results if r.passed)
    failed = sum(1 for r in assertion_results if not r.passed)
    total = passed + failed
    pass_rate = (passed / total * 100) if total > 0 else 0.0

    # Weighted score: sum(weight_i * score_i) / sum(weight_i) * 100
    total_weight = sum(r.weight for r in assertion_results)
    if total_weight > 0:
        weighted_score = (
            sum(r.weight * r.score for r in assertion_results) / total_weight * 100
        )
    else:
        weighted_score = 0.0

    categories = Counter(
        r.category.value for r in assertion_results if r.category is not None
    )

    return {
        "assertion_pass_count": passed,
        "assertion_fail_count": failed,
        "assertion_pass_rate": round(pass_rate, 2),
        "weighted_score": round(weighted_score, 2),
        "failure_categories": dict(sorted(categories.items())),
    }
