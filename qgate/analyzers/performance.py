"""Textual performance heuristics for React sources."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from ..config import PerformanceConfig
from ..models import Issue, SourceFile

INLINE_STYLE_RE = re.compile(r"style=\{\{")

OPTIMIZATIONS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("React.memo used", ("React.memo", "memo(")),
    ("useMemo used", ("useMemo",)),
    ("useCallback used", ("useCallback",)),
    ("useReducer used", ("useReducer",)),
)


@dataclass(frozen=True)
class Heuristic:
    name: str
    message: str
    check: Callable[[str, PerformanceConfig], bool]


def _unmemoized_state(text: str, config: PerformanceConfig) -> bool:
    return "useState" in text and "useMemo" not in text and "useCallback" not in text


def _inline_styles(text: str, config: PerformanceConfig) -> bool:
    return len(INLINE_STYLE_RE.findall(text)) > config.inline_style_limit


def _unmemoized_component(text: str, config: PerformanceConfig) -> bool:
    composes = "const " in text and "= (" in text and "React." in text
    return composes and "memo" not in text


HEURISTICS = (
    Heuristic("unmemoized-state", "State hooks without useMemo/useCallback", _unmemoized_state),
    Heuristic("inline-styles", "Multiple inline styles detected (use StyleSheet.create)", _inline_styles),
    Heuristic("unmemoized-component", "Consider React.memo optimization", _unmemoized_component),
)


@dataclass
class PerformanceFinding:
    file: str
    heuristic: str
    issue: str


@dataclass
class PerformanceResult:
    total: int
    findings: List[PerformanceFinding]
    optimizations: List[PerformanceFinding]
    issues: List[Issue] = field(default_factory=list)


class PerformanceAnalyzer:
    def __init__(self, config: PerformanceConfig, heuristics: Sequence[Heuristic] = HEURISTICS) -> None:
        self.config = config
        self.heuristics = tuple(heuristics)

    def analyze(self, files: Sequence[SourceFile]) -> PerformanceResult:
        findings: List[PerformanceFinding] = []
        optimizations: List[PerformanceFinding] = []
        for source in files:
            for heuristic in self.heuristics:
                if heuristic.check(source.text, self.config):
                    findings.append(PerformanceFinding(source.path, heuristic.name, heuristic.message))
            for label, markers in OPTIMIZATIONS:
                if any(marker in source.text for marker in markers):
                    optimizations.append(PerformanceFinding(source.path, "optimization", label))

        cap = self.config.report_cap
        issues = [
            Issue(
                category="Performance",
                severity="low",
                description=f"{finding.issue} [{finding.heuristic}]",
                files=[finding.file],
            )
            for finding in findings[:cap]
        ]
        if len(findings) > cap:
            issues.append(
                Issue(
                    category="Performance",
                    severity="medium",
                    count=len(findings),
                    description=(
                        f"{len(findings)} potential performance issues detected "
                        f"(showing first {cap})"
                    ),
                    recommendation="Implement React performance optimizations",
                )
            )
        return PerformanceResult(
            total=len(findings),
            findings=findings,
            optimizations=optimizations,
            issues=issues,
        )

    def score(self, result: PerformanceResult) -> float:
        # Uses the full count, not the capped list shown in the report.
        return 100.0 - result.total * self.config.penalty
