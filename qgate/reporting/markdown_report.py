"""Markdown report rendering."""
from __future__ import annotations

from pathlib import Path
from typing import List

from ..models import QualityReport
from ..scoring import score_badge, score_status

METRIC_LABELS = {
    "fileSize": "File Size",
    "duplication": "Code Duplication",
    "testCoverage": "Test Coverage",
    "typescript": "TypeScript Adoption",
    "performance": "Performance",
}


def write_markdown_report(report: QualityReport, path: Path) -> None:
    md = render_markdown(report)
    path.write_text(md, encoding="utf-8")


def render_markdown(report: QualityReport) -> str:
    lines: List[str] = []
    lines.append("# Code Quality Report")
    lines.append("")
    lines.append(f"## Overall Score: {report.overall:g}/100")
    lines.append("")
    lines.append(f"**{score_badge(report.overall)}**")
    lines.append("")
    lines.append("## Detailed Scores")
    lines.append("")
    lines.append("| Metric | Score | Status |")
    lines.append("| --- | --- | --- |")
    for name, label in METRIC_LABELS.items():
        metric = report.metrics.get(name)
        if metric is None:
            lines.append(f"| {label} | n/a | Missing |")
            continue
        lines.append(f"| {label} | {metric.score:.1f}/100 | {score_status(metric.score)} |")
    lines.append("")
    lines.append("## Issues Found")
    lines.append("")
    if report.issues:
        for issue in report.issues:
            lines.append(f"### {issue.category} ({issue.severity})")
            lines.append("")
            lines.append(issue.description)
            for path in issue.files:
                lines.append(f"- `{path}`")
            if issue.recommendation:
                lines.append("")
                lines.append(f"**Recommendation:** {issue.recommendation}")
            lines.append("")
    else:
        lines.append("- None detected")
        lines.append("")
    lines.append("## Recommendations")
    lines.append("")
    for recommendation in report.recommendations:
        lines.append(f"- {recommendation}")
    lines.append("")
    lines.append("## Metrics Summary")
    lines.append("")
    sizes = report.metrics.get("fileSize")
    coverage = report.metrics.get("testCoverage")
    duplication = report.metrics.get("duplication")
    typing = report.metrics.get("typescript")
    performance = report.metrics.get("performance")
    lines.append(f"- **Total Files:** {sizes.raw.get('total', 0) if sizes else 0}")
    lines.append(f"- **Oversized Files:** {sizes.raw.get('oversized', 0) if sizes else 0}")
    lines.append(
        f"- **Duplicate Lines:** {duplication.raw.get('duplicateLines', 0) if duplication else 0}"
        f" ({duplication.raw.get('percentage', 0.0) if duplication else 0.0:.1f}%)"
    )
    lines.append(f"- **Test Coverage:** {coverage.raw.get('percentage', 0) if coverage else 0}%")
    lines.append(
        f"- **TypeScript Adoption:** {typing.raw.get('adoption', 0.0) if typing else 0.0:.1f}%"
    )
    lines.append(
        f"- **Performance Issues:** {performance.raw.get('totalIssues', 0) if performance else 0}"
    )
    lines.append(
        f"- **Performance Optimizations:** "
        f"{performance.raw.get('optimizationsFound', 0) if performance else 0}"
    )
    lines.append("")
    lines.append("---")
    lines.append(f"*Generated on {report.timestamp}*")
    lines.append("")
    return "\n".join(lines)
