import pytest

from qgate.config import Config
from qgate.scoring import clamp, overall_score, recommendations_for, score_badge, score_status

WEIGHTS = Config.from_dict({}).weights


def test_default_weights_sum_to_one():
    assert set(WEIGHTS) == {"fileSize", "duplication", "testCoverage", "typescript", "performance"}
    assert sum(WEIGHTS.values()) == pytest.approx(1.0)


@pytest.mark.parametrize("raw, expected", [(-400.0, 0.0), (150.0, 100.0), (42.5, 42.5), (float("nan"), 0.0)])
def test_clamp(raw, expected):
    assert clamp(raw) == expected


def test_overall_is_rounded_weighted_sum():
    scores = {"fileSize": 90, "duplication": 80, "testCoverage": 55, "typescript": 40, "performance": 75}
    expected = 0.20 * 90 + 0.25 * 80 + 0.30 * 55 + 0.15 * 40 + 0.10 * 75
    assert overall_score(scores, WEIGHTS) == round(expected)


def test_overall_rounds_half_up():
    scores = {"fileSize": 100, "duplication": 100, "testCoverage": 0, "typescript": 0, "performance": 25}
    # 20 + 25 + 2.5
    assert overall_score(scores, WEIGHTS) == 48


def test_missing_sub_score_contributes_zero():
    scores = {"fileSize": 100, "duplication": 100, "typescript": 100, "performance": 100}
    assert overall_score(scores, WEIGHTS) == 70


def test_overall_is_bounded_for_out_of_range_inputs():
    high = {name: 1000 for name in WEIGHTS}
    low = {name: -1000 for name in WEIGHTS}
    assert overall_score(high, WEIGHTS) == 100
    assert overall_score(low, WEIGHTS) == 0


def test_recommendation_bands():
    assert recommendations_for(59)[0].startswith("Critical")
    assert recommendations_for(60)[0].startswith("Needs improvement")
    assert recommendations_for(80)[0].startswith("Good")


def test_badges_and_status():
    assert [score_badge(s) for s in (95, 85, 65, 10)] == ["Excellent", "Good", "Needs Improvement", "Critical"]
    assert [score_status(s) for s in (80, 60, 59)] == ["Good", "Warning", "Critical"]
