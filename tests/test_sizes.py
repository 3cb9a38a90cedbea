from qgate.analyzers.sizes import SizeAnalyzer
from qgate.config import Config


def _lines(count: int) -> str:
    return "\n".join(f"const value{i} = {i};" for i in range(count))


def test_no_oversized_files_scores_full(make_source):
    cfg = Config.from_dict({})
    analyzer = SizeAnalyzer(cfg.sizes)
    files = [
        make_source("components/Button.jsx", _lines(50)),
        make_source("components/Card.jsx", _lines(50)),
        make_source("utils/format.js", _lines(50)),
    ]
    result = analyzer.analyze(files)
    assert result.oversized == []
    assert analyzer.score(result) == 100
    assert result.distribution["small"] == 3
    assert result.issues == []


def test_one_oversized_component_costs_ten_points(make_source):
    cfg = Config.from_dict({})
    analyzer = SizeAnalyzer(cfg.sizes)
    result = analyzer.analyze([make_source("components/Big.jsx", _lines(250))])
    assert [o.file for o in result.oversized] == ["components/Big.jsx"]
    assert result.oversized[0].limit == 200
    assert analyzer.score(result) == 90
    assert result.issues[0].severity == "medium"
    assert result.distribution["large"] == 1


def test_default_kind_is_most_permissive(make_source):
    cfg = Config.from_dict({})
    analyzer = SizeAnalyzer(cfg.sizes)
    assert analyzer.limit_for("default") == max(cfg.sizes.limits.values())
    result = analyzer.analyze([make_source("App.jsx", _lines(280))])
    assert result.oversized == []


def test_many_oversized_files_raise_high_severity(make_source):
    cfg = Config.from_dict({})
    analyzer = SizeAnalyzer(cfg.sizes)
    files = [make_source(f"utils/helper{i}.js", _lines(160)) for i in range(6)]
    result = analyzer.analyze(files)
    assert len(result.oversized) == 6
    assert result.issues[0].severity == "high"
    assert analyzer.score(result) == 40


def test_size_score_can_go_negative_before_clamping(make_source):
    cfg = Config.from_dict({})
    analyzer = SizeAnalyzer(cfg.sizes)
    files = [make_source(f"utils/helper{i}.js", _lines(160)) for i in range(12)]
    assert analyzer.score(analyzer.analyze(files)) == -20
