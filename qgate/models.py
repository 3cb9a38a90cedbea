"""Data models used within qgate."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

SEVERITIES = ("low", "medium", "high")


@dataclass(frozen=True)
class SourceFile:
    path: str
    text: str
    line_count: int
    extension: str
    kind: str


@dataclass(frozen=True)
class MetricResult:
    name: str
    score: float
    raw: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class Issue:
    category: str
    severity: str
    description: str
    count: Optional[int] = None
    files: List[str] = field(default_factory=list)
    recommendation: Optional[str] = None

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValueError(f"unknown severity {self.severity!r}")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.category,
            "severity": self.severity,
            "description": self.description,
        }
        if self.count is not None:
            data["count"] = self.count
        if self.files:
            data["files"] = list(self.files)
        if self.recommendation:
            data["recommendation"] = self.recommendation
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Issue":
        return cls(
            category=str(data["type"]),
            severity=str(data["severity"]),
            description=str(data["description"]),
            count=data.get("count"),
            files=list(data.get("files", [])),
            recommendation=data.get("recommendation"),
        )


@dataclass
class QualityReport:
    timestamp: str
    metrics: Dict[str, MetricResult]
    overall: float
    issues: List[Issue] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def scores(self) -> Dict[str, float]:
        scores: Dict[str, float] = {name: result.score for name, result in self.metrics.items()}
        scores["overall"] = self.overall
        return scores

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "scores": self.scores,
            "metrics": {name: dict(result.raw) for name, result in self.metrics.items()},
            "issues": [issue.to_dict() for issue in self.issues],
            "recommendations": list(self.recommendations),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QualityReport":
        scores = dict(data.get("scores", {}))
        overall = scores.pop("overall", 0)
        raw_metrics = data.get("metrics", {})
        metrics = {
            name: MetricResult(name=name, score=float(score), raw=dict(raw_metrics.get(name, {})))
            for name, score in scores.items()
        }
        return cls(
            timestamp=str(data.get("timestamp", "")),
            metrics=metrics,
            overall=overall,
            issues=[Issue.from_dict(item) for item in data.get("issues", [])],
            recommendations=list(data.get("recommendations", [])),
        )
