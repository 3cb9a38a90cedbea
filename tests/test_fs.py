from pathlib import Path

from qgate.utils.fs import (
    classify_kind,
    count_lines,
    find_test_files,
    iter_source_files,
    load_source_files,
)

IGNORE = ["node_modules", "build", "dist"]
EXTS = [".js", ".jsx", ".ts", ".tsx"]


def _touch(path: Path, text: str = "export default 1;\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_enumerator_prunes_hidden_and_ignored_dirs(tmp_path: Path):
    _touch(tmp_path / "components" / "Button.jsx")
    _touch(tmp_path / "utils" / "format.ts")
    _touch(tmp_path / "node_modules" / "lib" / "index.js")
    _touch(tmp_path / ".cache" / "chunk.js")
    _touch(tmp_path / "README.md", "# readme\n")
    found = sorted(p.relative_to(tmp_path).as_posix() for p in iter_source_files(tmp_path, IGNORE, EXTS))
    assert found == ["components/Button.jsx", "utils/format.ts"]


def test_enumerator_is_restartable(tmp_path: Path):
    _touch(tmp_path / "a.js")
    first = list(iter_source_files(tmp_path, IGNORE, EXTS))
    _touch(tmp_path / "b.tsx")
    second = list(iter_source_files(tmp_path, IGNORE, EXTS))
    assert len(first) == 1
    assert len(second) == 2


def test_enumerator_missing_root_is_empty(tmp_path: Path):
    assert list(iter_source_files(tmp_path / "missing", IGNORE, EXTS)) == []
    assert load_source_files(tmp_path / "missing", IGNORE, EXTS) == []


def test_load_source_files_skips_unreadable(tmp_path: Path):
    _touch(tmp_path / "screens" / "Home.jsx", "a\nb\nc")
    (tmp_path / "broken.js").write_bytes(b"\xff\xfe\xfa invalid utf-8")
    files = load_source_files(tmp_path, IGNORE, EXTS)
    assert [f.path for f in files] == ["screens/Home.jsx"]
    assert files[0].line_count == 3
    assert files[0].kind == "screens"
    assert files[0].extension == ".jsx"


def test_count_lines(tmp_path: Path):
    path = tmp_path / "a.js"
    path.write_text("one\ntwo\n", encoding="utf-8")
    assert count_lines(path) == 3
    assert count_lines(tmp_path / "missing.js") == 0


def test_classify_kind_uses_first_matching_segment():
    assert classify_kind("components/Button.jsx") == "components"
    assert classify_kind("src/screens/components/Row.jsx") == "components"
    assert classify_kind("contexts/AuthContext.tsx") == "contexts"
    assert classify_kind("services/api.js") == "services"
    assert classify_kind("utils/date.ts") == "utils"
    assert classify_kind("App.tsx") == "default"
    assert classify_kind("componentsList.js") == "default"


def test_find_test_files(tmp_path: Path):
    _touch(tmp_path / "src" / "App.test.jsx")
    _touch(tmp_path / "src" / "App.jsx")
    _touch(tmp_path / "__tests__" / "Header.spec.tsx")
    found = find_test_files(tmp_path, ["src", "__tests__"], IGNORE, EXTS)
    assert sorted(found) == ["__tests__/Header.spec.tsx", "src/App.test.jsx"]
