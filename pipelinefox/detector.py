"""Locating CI descriptor files on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

GITLAB_CI_FILENAME = ".gitlab-ci.yml"


def find_gitlab_ci(path: str | os.PathLike[str]) -> Path | None:
    """Return the first GitLab CI file found under ``path``, in lexical walk order."""
    root = Path(path)
    if not root.exists() and not root.is_symlink():
        raise FileNotFoundError(f"no such file or directory: {root}")
    for candidate in _walk(root):
        if candidate.name == GITLAB_CI_FILENAME and not _is_real_dir(candidate):
            return candidate
    return None


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _walk(path: Path) -> Iterator[Path]:
    yield path
    if _is_real_dir(path):
        for child in sorted(path.iterdir(), key=lambda p: p.name):
            yield from _walk(child)