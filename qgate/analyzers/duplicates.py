"""Cross-file duplicate function names and repeated code patterns.

Only names are compared, never bodies: two files that each define ``handleSubmit``
are reported even if the implementations differ. The output is advisory, so the
detector prefers recall over precision.
"""
from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Pattern, Sequence, Set

from ..models import SourceFile

FUNCTION_DECL_RE = re.compile(r"function\s+(\w+)\s*\(")
ARROW_BINDING_RE = re.compile(r"(?:const|let|var)\s+(\w+)\s*=\s*\([^)]*\)\s*=>")


@dataclass(frozen=True)
class PatternProbe:
    name: str
    pattern: Pattern[str]
    threshold: int


PATTERN_PROBES = (
    PatternProbe("Similar component structures", re.compile(r"const\s+\w+\s*=\s*\(\s*\)\s*=>\s*\{"), 3),
    PatternProbe("Duplicate styling patterns", re.compile(r"StyleSheet\.create\(\{[\s\S]*?\}\)"), 2),
    PatternProbe("Similar hooks usage", re.compile(r"const\s+\[\w+,\s*\w+\]\s*=\s*useState\("), 5),
    PatternProbe("Duplicate import statements", re.compile(r"import\s+.*\s+from\s+['\"].*['\"]"), 10),
)


@dataclass
class DuplicateFunction:
    name: str
    files: List[str]


@dataclass
class PatternFinding:
    name: str
    total: int
    threshold: int
    files: Dict[str, int]


class DuplicateFunctionDetector:
    def __init__(self, min_name_length: int = 4) -> None:
        self.min_name_length = min_name_length

    def extract_names(self, text: str) -> List[str]:
        names = FUNCTION_DECL_RE.findall(text) + ARROW_BINDING_RE.findall(text)
        return [name for name in names if len(name) >= self.min_name_length]

    def analyze(self, files: Sequence[SourceFile]) -> List[DuplicateFunction]:
        seen: Dict[str, Set[str]] = defaultdict(set)
        for source in files:
            for name in self.extract_names(source.text):
                seen[name].add(source.path)
        return [
            DuplicateFunction(name=name, files=sorted(paths))
            for name, paths in sorted(seen.items())
            if len(paths) > 1
        ]


def scan_patterns(files: Sequence[SourceFile], probes: Sequence[PatternProbe] = PATTERN_PROBES) -> List[PatternFinding]:
    findings: List[PatternFinding] = []
    for probe in probes:
        per_file: Dict[str, int] = {}
        for source in files:
            hits = len(probe.pattern.findall(source.text))
            if hits:
                per_file[source.path] = hits
        total = sum(per_file.values())
        if total > probe.threshold:
            findings.append(PatternFinding(probe.name, total, probe.threshold, per_file))
    return findings
