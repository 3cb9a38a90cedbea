"""Filesystem helpers for qgate."""
from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, List, Sequence

from ..config import KINDS
from ..logging import get_logger
from ..models import SourceFile

logger = get_logger("fs")


def iter_source_files(root: Path, ignore_dirs: Iterable[str], extensions: Iterable[str]) -> Iterator[Path]:
    """Yield source files under ``root``; every call walks the tree again."""
    root = Path(root)
    if not root.is_dir():
        logger.debug("Source root %s does not exist; nothing to scan", root)
        return
    ignored = set(ignore_dirs)
    accepted = {ext.lower() for ext in extensions}
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            name for name in dirnames if not name.startswith(".") and name not in ignored
        )
        for filename in sorted(filenames):
            if Path(filename).suffix.lower() in accepted:
                yield Path(dirpath) / filename


def load_source_files(
    root: Path, ignore_dirs: Iterable[str], extensions: Iterable[str]
) -> List[SourceFile]:
    root = Path(root)
    files: List[SourceFile] = []
    for path in iter_source_files(root, ignore_dirs, extensions):
        try:
            text = read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable file %s: %s", path, exc)
            continue
        rel_path = path.relative_to(root).as_posix()
        files.append(
            SourceFile(
                path=rel_path,
                text=text,
                line_count=count_text_lines(text),
                extension=path.suffix.lower(),
                kind=classify_kind(rel_path),
            )
        )
    return files


def read_text(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def count_text_lines(text: str) -> int:
    return text.count("\n") + 1


def count_lines(path: Path) -> int:
    """Return the line count of ``path``, or 0 when it cannot be read."""
    try:
        return count_text_lines(read_text(path))
    except (OSError, UnicodeDecodeError):
        return 0


def classify_kind(path: str, kinds: Sequence[str] = KINDS) -> str:
    segments = PurePosixPath(str(path).replace("\\", "/")).parts[:-1]
    for kind in kinds:
        if kind in segments:
            return kind
    return "default"


def find_test_files(project_root: Path, test_roots: Iterable[str], ignore_dirs: Iterable[str], extensions: Iterable[str]) -> List[str]:
    found: List[str] = []
    seen = set()
    for rel_root in test_roots:
        for path in iter_source_files(Path(project_root) / rel_root, ignore_dirs, extensions):
            if not _is_test_name(path.name) or path in seen:
                continue
            seen.add(path)
            found.append(path.relative_to(project_root).as_posix())
    return found


def _is_test_name(filename: str) -> bool:
    parts = filename.split(".")
    return len(parts) >= 3 and parts[-2] in ("test", "spec")
