"""Condensed console summary."""
from __future__ import annotations

import sys
from typing import TextIO

from ..models import QualityReport
from ..scoring import score_badge

RULE = "=" * 50


def print_summary(report: QualityReport, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    print(f"\n{RULE}", file=out)
    print("CODE QUALITY REPORT SUMMARY", file=out)
    print(RULE, file=out)
    print(f"Overall Score: {report.overall:g}/100 {score_badge(report.overall)}", file=out)
    print("\nDetailed Scores:", file=out)
    for name, metric in report.metrics.items():
        print(f"  {name}: {metric.score:.1f}/100", file=out)
    print("\nIssues Found:", file=out)
    if not report.issues:
        print("  None", file=out)
    for issue in report.issues:
        marker = "!!" if issue.severity == "high" else "- "
        print(f"  {marker} {issue.category}: {issue.description}", file=out)
    print(f"\n{RULE}", file=out)
