"""Quality gate evaluation over a persisted report.

The gate is strict only inside CI (``$CI`` set by default). Locally a failing gate
prints the same diagnostics but exits 0, unless ``gate.soft_fail_locally`` is off.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, TextIO

from .config import GateConfig
from .logging import get_logger
from .models import Issue, QualityReport
from .reporting.json_report import load_report

logger = get_logger("gate")

REMEDIATION = {
    "overall": "Raise the lowest sub-scores first",
    "fileSize": "Split the oversized files listed in the report",
    "duplication": "Extract duplicated code into shared utilities",
    "testCoverage": "Add unit tests and make sure the test command reports coverage",
    "typescript": "Convert the listed JavaScript files to TypeScript",
    "performance": "Memoize components and move inline styles into StyleSheet.create",
}


@dataclass
class ThresholdCheck:
    metric: str
    score: float
    threshold: float

    @property
    def gap(self) -> float:
        return self.threshold - self.score


@dataclass
class GateResult:
    failures: List[ThresholdCheck] = field(default_factory=list)
    warnings: List[ThresholdCheck] = field(default_factory=list)
    critical_issues: List[Issue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures and not self.critical_issues


class QualityGate:
    def __init__(self, config: GateConfig) -> None:
        self.config = config

    def evaluate(self, report: QualityReport) -> GateResult:
        result = GateResult()
        scores = report.scores
        for metric, threshold in self.config.thresholds.items():
            # A score missing from the report counts as zero.
            check = ThresholdCheck(metric, float(scores.get(metric, 0.0)), threshold)
            if check.score < threshold:
                result.failures.append(check)
            elif check.score < threshold + self.config.warning_band:
                result.warnings.append(check)
        result.critical_issues = [issue for issue in report.issues if issue.severity == "high"]
        return result

    def is_ci(self, environ: Optional[Mapping[str, str]] = None) -> bool:
        env = os.environ if environ is None else environ
        return bool(env.get(self.config.ci_env_var))

    def is_strict(self, environ: Optional[Mapping[str, str]] = None) -> bool:
        return self.is_ci(environ) or not self.config.soft_fail_locally

    def exit_code(self, result: GateResult, environ: Optional[Mapping[str, str]] = None) -> int:
        if result.passed:
            return 0
        return 1 if self.is_strict(environ) else 0

    def render(self, result: GateResult, report: QualityReport, strict: bool) -> str:
        lines: List[str] = ["Quality Gate Results:", "=" * 40]
        if result.passed:
            lines.append("All quality gates passed!")
            lines.append(f"Overall Score: {report.overall:g}/100")
            if result.warnings:
                lines.append("")
                lines.append("Warnings:")
                lines.extend(_warning_line(check) for check in result.warnings)
            lines.append("")
            lines.append("Quality gate: PASSED")
            return "\n".join(lines)

        lines.append("Quality gate failures:")
        for check in result.failures:
            lines.append(
                f"  {check.metric}: {check.score:g}/{check.threshold:g} "
                f"(needs {check.gap:.1f} more points) - {REMEDIATION.get(check.metric, 'Review this metric')}"
            )
        if result.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(_warning_line(check) for check in result.warnings)
        if result.critical_issues:
            lines.append("")
            lines.append("Critical issues:")
            for issue in result.critical_issues:
                hint = f" - {issue.recommendation}" if issue.recommendation else ""
                lines.append(f"  {issue.category}: {issue.description}{hint}")
        lines.append("")
        lines.append("Recommendations:")
        lines.append("  1. Fix critical issues before merging")
        lines.append("  2. Improve scores that are below thresholds")
        lines.append("  3. Re-run 'qgate report' and 'qgate gate' to confirm")
        lines.append("")
        lines.append("Quality gate: FAILED")
        if not strict:
            lines.append("")
            lines.append("Local development: quality gate failed but not blocking")
        return "\n".join(lines)


def _warning_line(check: ThresholdCheck) -> str:
    margin = check.score - check.threshold
    return f"  {check.metric}: {check.score:g}/{check.threshold:g} (only {margin:.1f} points above threshold)"


def run_gate(
    report_path: Path,
    config: GateConfig,
    environ: Optional[Mapping[str, str]] = None,
    stream: Optional[TextIO] = None,
) -> int:
    """Evaluate the persisted report and return the process exit status.

    Raises ReportNotFoundError when no report exists, whatever the environment.
    """
    report = load_report(Path(report_path))
    gate = QualityGate(config)
    result = gate.evaluate(report)
    strict = gate.is_strict(environ)
    logger.debug(
        "Gate evaluated: %d failures, %d warnings, %d critical issues (strict=%s)",
        len(result.failures),
        len(result.warnings),
        len(result.critical_issues),
        strict,
    )
    print(gate.render(result, report, strict), file=stream or sys.stdout)
    return gate.exit_code(result, environ)
