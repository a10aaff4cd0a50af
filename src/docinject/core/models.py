from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Set, TYPE_CHECKING

from docinject.constants import (
    DEFAULT_ENTRY,
    DEFAULT_OUTPUT,
    DEFAULT_SOURCE_ROOT,
    IMAGE_SUFFIXES,
    MARKDOWN_SUFFIX,
    VECTOR_SUFFIX,
)

if TYPE_CHECKING:
    from docinject.core.report import BuildReport


class ContentKind(enum.Enum):
    """Closed classification driving how a matched file is rendered."""
    IMAGE = 'image'
    VECTOR = 'vector'
    MARKDOWN = 'markdown'
    TEXT = 'text'

    @classmethod
    def from_path(cls, path: Path) -> 'ContentKind':
        suffix = path.suffix.lower()
        if suffix in IMAGE_SUFFIXES:
            return cls.IMAGE
        if suffix == VECTOR_SUFFIX:
            return cls.VECTOR
        if suffix == MARKDOWN_SUFFIX:
            return cls.MARKDOWN
        return cls.TEXT


@dataclass(frozen=True)
class Dialect:
    """Start/end marker pair of one comment syntax."""
    name: str
    start: str
    end: str


@dataclass(frozen=True)
class MatchedFile:
    path: Path
    kind: ContentKind

    @classmethod
    def classify(cls, path: Path) -> 'MatchedFile':
        return cls(path=path, kind=ContentKind.from_path(path))


@dataclass(frozen=True)
class RecursionContext:
    """State threaded through every expansion call.

    `used` is shared by reference: `descend()` copies the depth, never the set.
    """
    depth: int = 0
    minify: bool = False
    used: Set[Path] = field(default_factory=set)

    def descend(self) -> 'RecursionContext':
        return replace(self, depth=self.depth + 1)

    def mark_used(self, path: Path) -> None:
        self.used.add(path)


@dataclass(frozen=True)
class BuildConfig:
    """Immutable build settings resolved from the CLI and environment."""
    entry: Path = DEFAULT_ENTRY
    output: Path = DEFAULT_OUTPUT
    source_root: Path = DEFAULT_SOURCE_ROOT
    base_dir: Path = field(default_factory=Path.cwd)
    minify: bool = False
    report_path: Optional[Path] = None

    def resolve(self, path: Path) -> Path:
        """Anchor a relative path at `base_dir`."""
        return path if path.is_absolute() else self.base_dir / path


@dataclass(frozen=True)
class BuildResult:
    output_path: Path
    text: str
    used: frozenset[Path]
    unused: tuple[Path, ...]
    report: 'BuildReport'
