# src/docinject/utils/paths.py
"""
paths – Small, centralized path helpers for docinject.

Provides:
  • canonical_path(Path)          – absolute, symlink-free key for the usage set
  • display_path(path, base)      – relative-to-base rendering for diagnostics
  • is_regular_file(path)         – regular file, not a symlink (lstat semantics)
  • iter_regular_files(root)      – recursive walk yielding regular files
  • read_text / write_text        – UTF-8 I/O with line endings preserved
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator


def canonical_path(p: Path | str) -> Path:
    """Return the absolute, normalized form of *p* (symlinks resolved)."""
    return Path(p).resolve()


def display_path(path: Path, base: Path | None = None) -> str:
    """Render *path* relative to *base* when it lives below it.

    The last path component is never resolved, so a symlink is shown under
    its own name.
    """
    if base is None:
        return str(path)
    p = Path(path)
    shown = p.parent.resolve() / p.name
    try:
        return str(shown.relative_to(Path(base).resolve()))
    except ValueError:
        return str(path)


def is_regular_file(path: Path) -> bool:
    """True for a regular file; symlinks are rejected even when they point at one."""
    p = Path(path)
    return not p.is_symlink() and p.is_file()


def iter_regular_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under *root* (directory symlinks not followed)."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for fn in sorted(filenames):
            fp = Path(dirpath, fn)
            if is_regular_file(fp):
                yield fp


def read_text(path: Path) -> str:
    """Read UTF-8 text keeping line endings exactly as stored."""
    with open(path, 'r', encoding='utf-8', newline='') as fh:
        return fh.read()


def write_text(path: Path, text: str) -> None:
    """Write UTF-8 text without newline translation."""
    with open(path, 'w', encoding='utf-8', newline='') as fh:
        fh.write(text)
