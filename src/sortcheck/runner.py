from __future__ import annotations

import importlib.metadata
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from sortcheck.assertions.dispatch import evaluate_assertion
from sortcheck.config import CheckConfig, SuiteConfig
from sortcheck.errors import OrderingError
from sortcheck.metrics import collect_metrics
from sortcheck.verbose import setup_logger


class Runner:
    """Evaluates every check of a suite and writes the run artifacts."""

    def __init__(
        self,
        config: SuiteConfig,
        output_dir: Path,
        check_filter: str | None = None,
        verbose: bool = False,
    ):
        self.config = config
        self.output_dir = output_dir
        self.check_filter = check_filter
        self.verbose = verbose
        self.results: dict[str, dict[str, Any]] = {}

    @property
    def all_passed(self) -> bool:
        return all(r["all_passed"] for r in self.results.values())

    def execute(self) -> Path:
        """Run the selected checks. Returns the run directory."""
        checks = self.config.checks
        if self.check_filter:
            checks = [c for c in checks if c.name == self.check_filter]
            if not checks:
                raise ValueError(f"No check named '{self.check_filter}' in suite")

        run_id = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H%M%S_%f")
        run_dir = self.output_dir / run_id
        run_dir.mkdir(parents=True, exist_ok=True)

        logger = setup_logger(
            run_dir / "debug.log",
            verbose=self.verbose,
            logger_name=f"sortcheck_run_{run_id}",
        )
        logger.debug(f"Starting run with {len(checks)} check(s)")

        self.results = {}
        try:
            for check in checks:
                self.results[check.name] = self._run_check(check, logger)
                status = "PASS" if self.results[check.name]["all_passed"] else "FAIL"
                metrics = self.results[check.name]["metrics"]
                n_total = metrics["assertion_pass_count"] + metrics["assertion_fail_count"]
                logger.debug(
                    f"{status} {check.name} ({metrics['assertion_pass_count']}/{n_total} assertions)"
                )

            self._write_results(run_dir, checks)
        except OrderingError as e:
            logger.error(f"Run aborted: {e}")
            raise
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

        return run_dir

    def _run_check(self, check: CheckConfig, logger: logging.Logger) -> dict[str, Any]:
        """Evaluate one check's assertions against its subject."""
        view = self.config.subjects[check.subject].build_view()
        logger.debug(f"Running check '{check.name}' against {check.subject} = {view.render()}")

        assertion_results = [
            evaluate_assertion(view, assertion, logger=logger)
            for assertion in check.assertions
        ]

        return {
            "subject": check.subject,
            "metrics": collect_metrics(assertion_results),
            "assertions": [ar.to_dict() for ar in assertion_results],
            "all_passed": all(ar.passed for ar in assertion_results),
        }

    def _write_results(self, run_dir: Path, checks: list[CheckConfig]) -> None:
        """Write junit.xml, results.json and meta.yaml to the run directory."""
        from sortcheck.reporting.junit import write_junit

        write_junit(run_dir, self.results)

        (run_dir / "results.json").write_text(
            json.dumps(self.results, indent=2, default=str)
        )

        try:
            sortcheck_version = importlib.metadata.version("sortcheck")
        except importlib.metadata.PackageNotFoundError:
            sortcheck_version = "unknown"

        meta: dict[str, Any] = {
            "run_id": run_dir.name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": [c.name for c in checks],
            "all_passed": self.all_passed,
            "sortcheck_version": sortcheck_version,
        }

        (run_dir / "meta.yaml").write_text(yaml.dump(meta, default_flow_style=False))
