"""Duplicate line ratio across the scanned source set."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set, Tuple

from ..config import DuplicationConfig
from ..models import Issue, SourceFile
from .duplicates import DuplicateFunction, DuplicateFunctionDetector

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class DuplicationResult:
    duplicate_lines: int
    total_lines: int
    percentage: float
    duplicate_functions: List[DuplicateFunction]
    issues: List[Issue] = field(default_factory=list)


class DuplicationAnalyzer:
    def __init__(self, config: DuplicationConfig) -> None:
        self.config = config

    def analyze(self, files: Sequence[SourceFile]) -> DuplicationResult:
        duplicate_lines, total_lines = self.count_duplicate_lines(files)
        percentage = duplicate_lines / total_lines * 100 if total_lines else 0.0
        functions = DuplicateFunctionDetector(self.config.min_name_length).analyze(files)
        issues: List[Issue] = []
        if percentage > self.config.issue_over:
            description = f"{percentage:.1f}% code duplication detected"
            names = [dup.name for dup in functions[:5]]
            if names:
                description += f" ({', '.join(names)})"
            issues.append(
                Issue(
                    category="Code Duplication",
                    severity="medium",
                    count=len(functions),
                    description=description,
                    files=sorted({path for dup in functions[:5] for path in dup.files}),
                    recommendation="Extract repeated code into shared utilities",
                )
            )
        return DuplicationResult(
            duplicate_lines=duplicate_lines,
            total_lines=total_lines,
            percentage=percentage,
            duplicate_functions=functions,
            issues=issues,
        )

    def count_duplicate_lines(self, files: Sequence[SourceFile]) -> Tuple[int, int]:
        """Return (duplicate lines, scanned lines) over normalized, non-trivial lines.

        Every occurrence after the first of a line that appears in at least two files
        counts as a duplicate, whatever order the files come in. Lines repeated only
        inside one file never count. The denominator only includes lines that survive
        filtering.
        """
        occurrences: Dict[str, int] = {}
        owners: Dict[str, Set[str]] = {}
        total = 0
        for source in files:
            for line in self.normalized_lines(source.text):
                total += 1
                occurrences[line] = occurrences.get(line, 0) + 1
                owners.setdefault(line, set()).add(source.path)
        duplicates = sum(count - 1 for line, count in occurrences.items() if len(owners[line]) > 1)
        return duplicates, total

    def normalized_lines(self, text: str) -> List[str]:
        lines = []
        for raw in text.split("\n"):
            line = raw.strip()
            if len(line) < self.config.min_line_length:
                continue
            lines.append(_WHITESPACE_RE.sub(" ", line))
        return lines

    def score(self, result: DuplicationResult) -> float:
        return 100.0 - result.percentage * self.config.penalty
