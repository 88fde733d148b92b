from __future__ import annotations

from pathlib import Path
from typing import Any

from junitparser import Failure, JUnitXml, TestCase, TestSuite


def write_junit(run_dir: Path, all_results: dict[str, dict[str, Any]]) -> Path:
    """Write junit.xml from per-check results dict, return path."""
    xml = JUnitXml()

    for check_name, check_result in all_results.items():
        metrics = check_result.get("metrics", {})
        assertions = check_result.get("assertions", [])

        suite = TestSuite(check_name)
        suite.add_property("subject", str(check_result.get("subject", "")))

        for key in (
            "assertion_pass_rate",
            "weighted_score",
        ):
            val = metrics.get(key)
            if val is not None:
                suite.add_property(key, str(val))

        for category, count in metrics.get("failure_categories", {}).items():
            suite.add_property(f"category_{category}", str(count))

        # Test cases: one per assertion
        for assertion in assertions:
            case = TestCase(assertion["name"])
            case.classname = check_name
            if not assertion.get("passed", True):
                failure = Failure(
                    assertion.get("message", ""), assertion.get("category") or None
                )
                facts = assertion.get("facts", [])
                if facts:
                    failure.text = "\n".join(f"{key}: {value}" for key, value in facts)
                case.result = [failure]
            suite.add_testcase(case)

        # Use append (not +=) to preserve properties
        xml.append(suite)

    junit_path = run_dir / "junit.xml"
    xml.write(str(junit_path), pretty=True)
    return junit_path


def read_summary(junit_path: Path) -> list[dict[str, Any]]:
    """Read back per-check totals from a junit.xml written by ``write_junit``."""
    xml = JUnitXml.fromfile(str(junit_path))
    summary = []
    for suite in xml:
        failures = []
        for case in suite:
            if case.result:
                failures.append(
                    {
                        "name": case.name,
                        "category": case.result[0].type,
                        "message": case.result[0].message or "",
                    }
                )
        summary.append(
            {
                "name": suite.name,
                "tests": suite.tests,
                "failures": suite.failures,
                "properties": {p.name: p.value for p in suite.properties()},
                "failed_cases": failures,
            }
        )
    return summary
