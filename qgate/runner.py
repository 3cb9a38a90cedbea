"""Main runner orchestrating analysis and score aggregation."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, Tuple

from .analyzers.coverage import CoverageAnalyzer, CoverageResult
from .analyzers.duplicates import scan_patterns
from .analyzers.duplication import DuplicationAnalyzer, DuplicationResult
from .analyzers.performance import PerformanceAnalyzer, PerformanceResult
from .analyzers.sizes import SizeAnalyzer, SizeResult
from .analyzers.typing import TypingAnalyzer, TypingResult
from .config import Config
from .logging import get_logger
from .models import Issue, MetricResult, QualityReport, SourceFile
from .reporting.validate import validate_report
from .scoring import clamp, overall_score, recommendations_for
from .utils import fs

logger = get_logger("runner")

DETAIL_CAP = 10


class Runner:
    def __init__(self, config: Config, jobs: int = 1, skip_coverage: bool = False) -> None:
        self.config = config
        self.jobs = max(1, jobs)
        self.skip_coverage = skip_coverage

    def run(self, project_root: Path) -> Tuple[QualityReport, List[str]]:
        project_root = Path(project_root)
        paths = self.config.paths
        source_root = project_root / paths.source_root
        if not source_root.is_dir():
            logger.warning("Source root %s not found; reporting on an empty file set", source_root)
        files = tuple(fs.load_source_files(source_root, paths.ignore_dirs, paths.extensions))
        logger.info("Scanning %d source files under %s", len(files), source_root)

        tasks: Dict[str, Callable[[Sequence[SourceFile]], Any]] = {
            "fileSize": SizeAnalyzer(self.config.sizes).analyze,
            "duplication": DuplicationAnalyzer(self.config.duplication).analyze,
            "typescript": TypingAnalyzer(self.config.typing).analyze,
            "performance": PerformanceAnalyzer(self.config.performance).analyze,
        }
        results = self._run_tasks(tasks, files)
        coverage = self._measure_coverage(project_root)

        report = self.aggregate(
            sizes=results["fileSize"],
            duplication=results["duplication"],
            coverage=coverage,
            typing=results["typescript"],
            performance=results["performance"],
            files=files,
        )
        errors: List[str] = []
        try:
            validate_report(report)
        except ValueError as exc:
            errors.append(str(exc))
        return report, errors

    def _run_tasks(
        self, tasks: Dict[str, Callable[[Sequence[SourceFile]], Any]], files: Sequence[SourceFile]
    ) -> Dict[str, Any]:
        if self.jobs == 1:
            results = {}
            for name, task in tasks.items():
                logger.info("Analyzing %s", name)
                results[name] = task(files)
            return results
        # Each analyzer owns its own state; results are joined here.
        with ThreadPoolExecutor(max_workers=self.jobs) as pool:
            futures = {name: pool.submit(task, files) for name, task in tasks.items()}
            return {name: future.result() for name, future in futures.items()}

    def _measure_coverage(self, project_root: Path) -> CoverageResult:
        analyzer = CoverageAnalyzer(self.config.coverage)
        if self.skip_coverage:
            return analyzer.degraded("coverage skipped")
        paths = self.config.paths
        test_files = fs.find_test_files(project_root, paths.test_roots, paths.ignore_dirs, paths.extensions)
        logger.info("Analyzing testCoverage (%d test files)", len(test_files))
        return analyzer.analyze(project_root, test_files)

    def aggregate(
        self,
        sizes: SizeResult,
        duplication: DuplicationResult,
        coverage: CoverageResult,
        typing: TypingResult,
        performance: PerformanceResult,
        files: Sequence[SourceFile] = (),
    ) -> QualityReport:
        """Combine analyzer results into a QualityReport."""
        config = self.config
        metrics = {
            "fileSize": MetricResult(
                name="fileSize",
                score=clamp(SizeAnalyzer(config.sizes).score(sizes)),
                raw={
                    "total": sizes.total,
                    "distribution": dict(sizes.distribution),
                    "oversized": len(sizes.oversized),
                    "oversizedFiles": [
                        {"file": o.file, "lines": o.lines, "limit": o.limit, "kind": o.kind}
                        for o in sizes.oversized
                    ],
                },
            ),
            "duplication": MetricResult(
                name="duplication",
                score=clamp(DuplicationAnalyzer(config.duplication).score(duplication)),
                raw={
                    "duplicateFunctions": len(duplication.duplicate_functions),
                    "duplicateLines": duplication.duplicate_lines,
                    "totalLines": duplication.total_lines,
                    "percentage": duplication.percentage,
                    "functions": [
                        {"name": d.name, "files": d.files}
                        for d in duplication.duplicate_functions[:DETAIL_CAP]
                    ],
                    "patterns": [
                        {"name": p.name, "total": p.total, "threshold": p.threshold}
                        for p in scan_patterns(files)
                    ],
                },
            ),
            "testCoverage": MetricResult(
                name="testCoverage",
                score=clamp(CoverageAnalyzer(config.coverage).score(coverage)),
                raw={
                    "percentage": coverage.percentage,
                    "hasTests": coverage.has_tests,
                    "testFiles": coverage.test_files,
                    "degraded": coverage.degraded,
                    "reason": coverage.missing_reason,
                },
            ),
            "typescript": MetricResult(
                name="typescript",
                score=clamp(TypingAnalyzer(config.typing).score(typing)),
                raw={
                    "typedFiles": typing.typed,
                    "untypedFiles": typing.untyped,
                    "adoption": typing.adoption,
                    "candidates": list(typing.candidates),
                },
            ),
            "performance": MetricResult(
                name="performance",
                score=clamp(PerformanceAnalyzer(config.performance).score(performance)),
                raw={
                    "totalIssues": performance.total,
                    "optimizationsFound": len(performance.optimizations),
                    "issues": [
                        {"file": f.file, "heuristic": f.heuristic, "issue": f.issue}
                        for f in performance.findings[: config.performance.report_cap]
                    ],
                    "optimizations": [
                        {"file": f.file, "optimization": f.issue}
                        for f in performance.optimizations[: config.performance.report_cap]
                    ],
                },
            ),
        }
        issues: List[Issue] = [
            *sizes.issues,
            *duplication.issues,
            *coverage.issues,
            *typing.issues,
            *performance.issues,
        ]
        overall = overall_score({name: m.score for name, m in metrics.items()}, config.weights)
        return QualityReport(
            timestamp=datetime.now(timezone.utc).isoformat(),
            metrics=metrics,
            overall=overall,
            issues=issues,
            recommendations=recommendations_for(overall),
        )
