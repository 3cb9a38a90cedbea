from pathlib import Path

import pytest

from qgate.models import SourceFile
from qgate.utils.fs import classify_kind, count_text_lines


@pytest.fixture
def make_source():
    def _make(path: str, text: str) -> SourceFile:
        return SourceFile(
            path=path,
            text=text,
            line_count=count_text_lines(text),
            extension=Path(path).suffix.lower(),
            kind=classify_kind(path),
        )

    return _make
