from qgate.analyzers.performance import PerformanceAnalyzer
from qgate.config import Config

STATEFUL = "const [open, setOpen] = useState(false);\n"
INLINE = "\n".join('<View style={{ padding: 4 }} />' for _ in range(4))
COMPOSED = "const Header = (props) => React.createElement(Title, props);\n"


def test_heuristics_are_not_mutually_exclusive(make_source):
    analyzer = PerformanceAnalyzer(Config.from_dict({}).performance)
    result = analyzer.analyze([make_source("components/Panel.jsx", STATEFUL + INLINE + "\n" + COMPOSED)])
    assert [f.heuristic for f in result.findings] == [
        "unmemoized-state",
        "inline-styles",
        "unmemoized-component",
    ]
    assert result.total == 3
    assert analyzer.score(result) == 85


def test_memoized_sources_are_clean(make_source):
    analyzer = PerformanceAnalyzer(Config.from_dict({}).performance)
    text = STATEFUL + "const total = useMemo(() => 1, []);\nexport default React.memo(Panel);\n"
    result = analyzer.analyze([make_source("components/Panel.jsx", text)])
    assert result.total == 0
    assert analyzer.score(result) == 100
    assert {f.issue for f in result.optimizations} == {"React.memo used", "useMemo used"}


def test_few_inline_styles_are_tolerated(make_source):
    analyzer = PerformanceAnalyzer(Config.from_dict({}).performance)
    text = "\n".join('<View style={{ margin: 1 }} />' for _ in range(3))
    assert analyzer.analyze([make_source("screens/Home.jsx", text)]).total == 0


def test_report_is_capped_but_score_uses_true_total(make_source):
    analyzer = PerformanceAnalyzer(Config.from_dict({}).performance)
    files = [make_source(f"components/C{i}.jsx", STATEFUL) for i in range(15)]
    result = analyzer.analyze(files)
    assert result.total == 15
    low = [issue for issue in result.issues if issue.severity == "low"]
    assert len(low) == 10
    assert low[0].files == ["components/C0.jsx"]
    summary = [issue for issue in result.issues if issue.severity == "medium"]
    assert summary[0].count == 15
    assert analyzer.score(result) == 25
