from qgate.analyzers.typing import TypingAnalyzer
from qgate.config import Config


def _analyze(make_source, paths):
    analyzer = TypingAnalyzer(Config.from_dict({}).typing)
    return analyzer.analyze([make_source(p, "export default 1;") for p in paths])


def test_adoption_zero_without_typed_files(make_source):
    result = _analyze(make_source, ["a.js", "b.jsx"])
    assert result.adoption == 0
    assert result.candidates == ["a.js", "b.jsx"]
    assert result.issues[0].category == "TypeScript Adoption"


def test_adoption_full_without_untyped_files(make_source):
    result = _analyze(make_source, ["a.ts", "b.tsx"])
    assert result.adoption == 100
    assert result.issues == []


def test_adoption_defined_for_empty_set(make_source):
    result = _analyze(make_source, [])
    assert result.adoption == 0
    assert result.candidates == []


def test_adoption_ratio_and_candidate_cap(make_source):
    paths = ["typed.ts"] + [f"legacy{i}.js" for i in range(15)]
    result = _analyze(make_source, paths)
    assert result.adoption == 100 / 16
    assert len(result.candidates) == 10
    assert result.issues[0].count == 15


def test_above_floor_has_no_candidates(make_source):
    result = _analyze(make_source, ["a.ts", "b.tsx", "c.js"])
    assert round(result.adoption, 2) == 66.67
    assert result.candidates == []
