"""Sub-score clamping, weighted aggregation and score bands."""
from __future__ import annotations

import math
from typing import List, Mapping

RECOMMENDATIONS = {
    "critical": [
        "Critical: Major refactoring required",
        "Focus on reducing file sizes and code duplication",
        "Increase test coverage to at least 50%",
        "Implement performance optimizations",
    ],
    "needs-improvement": [
        "Needs improvement: Minor improvements needed",
        "Add more unit tests",
        "Convert remaining JavaScript files to TypeScript",
        "Consider additional performance optimizations",
    ],
    "good": [
        "Good: Maintain current quality standards",
        "Continue monitoring for regressions",
        "Consider advanced optimizations",
    ],
}


def clamp(score: float, low: float = 0.0, high: float = 100.0) -> float:
    if math.isnan(score):
        return low
    return max(low, min(high, score))


def overall_score(scores: Mapping[str, float], weights: Mapping[str, float]) -> int:
    """Weighted sum of sub-scores, rounded half up.

    A metric missing from ``scores`` contributes zero.
    """
    total = sum(clamp(scores.get(metric, 0.0)) * weight for metric, weight in weights.items())
    return int(clamp(math.floor(total + 0.5)))


def score_band(score: float) -> str:
    if score < 60:
        return "critical"
    if score < 80:
        return "needs-improvement"
    return "good"


def recommendations_for(score: float) -> List[str]:
    return list(RECOMMENDATIONS[score_band(score)])


def score_badge(score: float) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Good"
    if score >= 60:
        return "Needs Improvement"
    return "Critical"


def score_status(score: float) -> str:
    if score >= 80:
        return "Good"
    if score >= 60:
        return "Warning"
    return "Critical"

