"""File size analysis against per-kind line limits."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..config import SizeConfig
from ..models import Issue, SourceFile


@dataclass
class OversizedFile:
    file: str
    lines: int
    limit: int
    kind: str


@dataclass
class SizeResult:
    total: int
    distribution: Dict[str, int]
    oversized: List[OversizedFile]
    issues: List[Issue] = field(default_factory=list)


class SizeAnalyzer:
    def __init__(self, config: SizeConfig) -> None:
        self.config = config

    def limit_for(self, kind: str) -> int:
        return self.config.limits.get(kind, self.config.limits["default"])

    def analyze(self, files: Sequence[SourceFile]) -> SizeResult:
        distribution = {"small": 0, "medium": 0, "large": 0, "xlarge": 0}
        oversized: List[OversizedFile] = []
        for source in files:
            distribution[_bucket(source.line_count)] += 1
            limit = self.limit_for(source.kind)
            # Unreadable files report 0 lines and can never be oversized.
            if source.line_count > limit:
                oversized.append(OversizedFile(source.path, source.line_count, limit, source.kind))
        issues: List[Issue] = []
        if oversized:
            issues.append(
                Issue(
                    category="File Size",
                    severity="high" if len(oversized) > self.config.high_severity_over else "medium",
                    count=len(oversized),
                    description=f"{len(oversized)} files exceed recommended size limits",
                    files=[item.file for item in oversized],
                    recommendation="Break large files into smaller components or modules",
                )
            )
        return SizeResult(total=len(files), distribution=distribution, oversized=oversized, issues=issues)

    def score(self, result: SizeResult) -> float:
        return 100.0 - len(result.oversized) * self.config.penalty


def _bucket(lines: int) -> str:
    if lines < 100:
        return "small"
    if lines < 200:
        return "medium"
    if lines <= 500:
        return "large"
    return "xlarge"
