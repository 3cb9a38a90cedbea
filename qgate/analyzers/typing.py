"""TypeScript adoption by file extension."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from ..config import TypingConfig
from ..models import Issue, SourceFile


@dataclass
class TypingResult:
    typed: int
    untyped: int
    adoption: float
    candidates: List[str]
    issues: List[Issue] = field(default_factory=list)


class TypingAnalyzer:
    def __init__(self, config: TypingConfig) -> None:
        self.config = config

    def analyze(self, files: Sequence[SourceFile]) -> TypingResult:
        typed = [f.path for f in files if f.extension in self.config.typed_extensions]
        untyped = [f.path for f in files if f.extension in self.config.untyped_extensions]
        total = len(typed) + len(untyped)
        adoption = len(typed) / total * 100 if total else 0.0
        candidates: List[str] = []
        issues: List[Issue] = []
        if untyped and adoption < self.config.adoption_floor:
            candidates = untyped[: self.config.candidate_cap]
            issues.append(
                Issue(
                    category="TypeScript Adoption",
                    severity="medium",
                    count=len(untyped),
                    description=(
                        f"TypeScript adoption is {adoption:.1f}% "
                        f"({len(untyped)} JavaScript files remain)"
                    ),
                    files=candidates,
                    recommendation="Convert the listed files to TypeScript",
                )
            )
        return TypingResult(
            typed=len(typed),
            untyped=len(untyped),
            adoption=adoption,
            candidates=candidates,
            issues=issues,
        )

    def score(self, result: TypingResult) -> float:
        return result.adoption
