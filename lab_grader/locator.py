"""
Locates submission files in the student's working tree.

Probes a short list of likely relative paths first and falls back to a
bounded recursive search by exact file name.
"""

import os
from pathlib import Path

from .config import SEARCH_DEPTH
from .models import SourceFile


def find_one_of(candidates: list[str], root: Path) -> Path | None:
    """
    Return the first candidate path that exists under ``root``.

    Args:
        candidates: Relative paths, most likely first.
        root: Working-tree root.

    Returns:
        Absolute path of the first existing candidate, or None.
    """
    for candidate in candidates:
        path = root / candidate
        if path.exists():
            return path.resolve()
    return None


def find_first(filename: str, start: Path, depth: int = SEARCH_DEPTH) -> Path | None:
    """
    Search ``start`` for a file named exactly ``filename``.

    Files in a directory are checked before descending into its
    subdirectories. Entries are visited in name order. Directories that
    cannot be listed are skipped.

    Args:
        filename: Exact file name to look for.
        start: Directory to search.
        depth: Remaining levels to descend; the search stops below zero.

    Returns:
        Absolute path of the first match, or None.
    """
    if depth < 0:
        return None

    try:
        entries = sorted(os.scandir(start), key=lambda e: e.name)
    except OSError:
        return None

    for entry in entries:
        if entry.name == filename and entry.is_file():
            return Path(entry.path).resolve()

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            found = find_first(filename, Path(entry.path), depth - 1)
            if found:
                return found

    return None


def locate(source: SourceFile, root: Path, depth: int = SEARCH_DEPTH) -> Path | None:
    """
    Locate a rubric source file, probing candidates before searching the tree.
    """
    return find_one_of(source.candidates, root) or find_first(source.filename, root, depth)


def safe_read(path: Path | None) -> str | None:
    """
    Read a text file, returning None when it is missing or unreadable.

    Bytes that are not valid UTF-8 are replaced with U+FFFD.
    """
    if path is None:
        return None
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
