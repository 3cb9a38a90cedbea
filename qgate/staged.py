"""Pre-commit size check over git-staged files."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from .analyzers.sizes import OversizedFile, SizeAnalyzer
from .config import Config
from .logging import get_logger
from .utils import fs

logger = get_logger("staged")


def staged_files(project_root: Path, extensions: Iterable[str], ignore_dirs: Iterable[str]) -> Tuple[Path, List[str]]:
    """Return the work tree root and its added or modified staged source files."""
    try:
        repo = Repo(project_root, search_parent_directories=True)
        output = repo.git.diff("--cached", "--name-only", "--diff-filter=AM")
    except (InvalidGitRepositoryError, NoSuchPathError, GitCommandError) as exc:
        logger.info("No staged files found: %s", exc)
        return Path(project_root), []
    accepted = {ext.lower() for ext in extensions}
    ignored = set(ignore_dirs)
    files = [
        name
        for name in output.splitlines()
        if Path(name).suffix.lower() in accepted and not ignored.intersection(Path(name).parts)
    ]
    return Path(repo.working_tree_dir or project_root), files


def check_staged_sizes(project_root: Path, config: Config) -> List[OversizedFile]:
    work_tree, names = staged_files(project_root, config.paths.extensions, config.paths.ignore_dirs)
    analyzer = SizeAnalyzer(config.sizes)
    oversized: List[OversizedFile] = []
    for name in names:
        path = work_tree / name
        if not path.exists():
            continue
        lines = fs.count_lines(path)
        kind = fs.classify_kind(name)
        limit = analyzer.limit_for(kind)
        if lines > limit:
            oversized.append(OversizedFile(name, lines, limit, kind))
    return oversized
