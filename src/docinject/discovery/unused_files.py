from __future__ import annotations

"""Report source-root files that no directive ever pulled into the build."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

from docinject.logging.helpers import get_logger
from docinject.utils.paths import canonical_path, iter_regular_files


class UnusedFileReporter:
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('discovery.unused')

    def find_unused(self, source_root: Path, used: Iterable[Path]) -> List[Path]:
        """Return canonical paths of regular files under *source_root* not in *used*.

        The walk is independent of the expansion traversal; a missing root
        yields an empty list.
        """
        root = Path(source_root)
        if not root.is_dir():
            self._log.warning('source root %s is not a directory – unused-file scan skipped', root)
            return []
        seen: Set[Path] = set(used)
        unused = {canonical_path(fp) for fp in iter_regular_files(root)} - seen
        return sorted(unused, key=str)

    def report(self, source_root: Path, unused: List[str]) -> None:
        if not unused:
            return
        self._log.warning(
            'The following files in the %s directory were not used in the build:', source_root
        )
        for item in unused:
            self._log.warning('  - %s', item)
