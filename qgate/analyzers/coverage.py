"""Test coverage via an external test runner."""
from __future__ import annotations

import re
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..config import CoverageConfig
from ..logging import get_logger
from ..models import Issue

logger = get_logger("coverage")


@dataclass
class CoverageResult:
    percentage: float
    has_tests: bool
    test_files: int
    degraded: bool
    missing_reason: str | None
    issues: List[Issue] = field(default_factory=list)


def parse_coverage(output: str, marker: str) -> Optional[float]:
    """Return the first percentage following ``marker`` in ``output``."""
    try:
        match = re.search(marker, output)
    except re.error:
        return None
    if match is None:
        return None
    try:
        return float(match.group(1))
    except (IndexError, ValueError):
        return None


class CoverageAnalyzer:
    def __init__(self, config: CoverageConfig) -> None:
        self.config = config

    def analyze(self, project_root: Path, test_files: Sequence[str]) -> CoverageResult:
        if not test_files:
            logger.warning("No test files found")
            return CoverageResult(
                percentage=0.0,
                has_tests=False,
                test_files=0,
                degraded=False,
                missing_reason="no test files",
                issues=[
                    Issue(
                        category="Test Coverage",
                        severity="high",
                        count=1,
                        description="No test files found",
                        recommendation="Add unit tests to improve code quality",
                    )
                ],
            )
        result = self.run(project_root)
        result.test_files = len(test_files)
        return result

    def run(self, cwd: Path) -> CoverageResult:
        """Run the coverage command; failures degrade to 0% and never raise."""
        try:
            cmd = shlex.split(self.config.command)
        except ValueError as exc:
            return self.degraded(f"test command cannot be parsed: {exc}")
        if not cmd:
            return self.degraded("no test command configured")
        try:
            completed = subprocess.run(
                cmd,
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
                text=True,
                timeout=self.config.timeout,
            )
        except subprocess.TimeoutExpired:
            return self.degraded(f"test command timed out after {self.config.timeout}s")
        except (OSError, ValueError) as exc:
            return self.degraded(f"test command unavailable: {exc}")

        if completed.returncode != 0:
            return self.degraded(f"test command exited with status {completed.returncode}")

        percentage = parse_coverage(completed.stdout or "", self.config.marker)
        if percentage is None:
            return self.degraded("coverage summary not found in test output")

        percentage = min(100.0, max(0.0, percentage))
        issues: List[Issue] = []
        if percentage < self.config.low_coverage:
            issues.append(
                Issue(
                    category="Test Coverage",
                    severity="medium",
                    count=1,
                    description=f"Low test coverage: {percentage:g}%",
                    recommendation="Add more unit tests to reach 70% coverage",
                )
            )
        logger.info("Coverage: %.1f%%", percentage)
        return CoverageResult(
            percentage=percentage,
            has_tests=True,
            test_files=0,
            degraded=False,
            missing_reason=None,
            issues=issues,
        )

    def degraded(self, reason: str) -> CoverageResult:
        logger.warning("Could not analyze test coverage: %s", reason)
        return CoverageResult(
            percentage=0.0,
            has_tests=False,
            test_files=0,
            degraded=True,
            missing_reason=reason,
            issues=[
                Issue(
                    category="Test Coverage",
                    severity="low",
                    count=1,
                    description=f"Could not run test coverage analysis ({reason})",
                    recommendation="Ensure the test command runs and prints a coverage summary",
                )
            ],
        )

    def score(self, result: CoverageResult) -> float:
        return result.percentage
