from __future__ import annotations

"""
PatternExpander – resolve an injection pattern to rendered text.

For every match of the (normalized) glob pattern, in sorted path order:
    * entries that are missing or not regular files are logged and skipped;
    * regular files are recorded in the shared usage set, classified by
      suffix and rendered through the content renderer;
    * rendered chunks are joined with a single newline.

A pattern with no matches logs one warning naming it and yields ''.
"""

import glob
import logging
import os
from pathlib import Path
from typing import List, Optional

from docinject.core.interfaces.classifier import ContentRendererProtocol
from docinject.core.interfaces.engine import InjectorProtocol
from docinject.core.models import RecursionContext
from docinject.core.report import BuildReport
from docinject.logging.helpers import get_logger, trace_io
from docinject.utils.paths import canonical_path, display_path, is_regular_file


class PatternExpander(InjectorProtocol):
    def __init__(
        self,
        *,
        renderer: ContentRendererProtocol,
        base_dir: Optional[Path] = None,
        report: Optional[BuildReport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._renderer = renderer
        self._base = Path(base_dir) if base_dir is not None else Path.cwd()
        self._report = report
        self._log = logger or get_logger('discovery.patterns')

    @property
    def base_dir(self) -> Path:
        return self._base

    def resolve_pattern(self, pattern: str) -> List[Path]:
        """Return every filesystem entry matching *pattern*, sorted by path."""
        norm = os.path.normpath(pattern)
        anchored = norm if os.path.isabs(norm) else os.path.join(glob.escape(str(self._base)), norm)
        matches = sorted(glob.glob(anchored, recursive=True))
        trace_io(self._log, 'glob resolved', pattern=pattern, matches=len(matches))
        return [Path(m) for m in matches]

    def inject(self, pattern: str, ctx: RecursionContext) -> str:
        matches = self.resolve_pattern(pattern)
        if self._report is not None:
            self._report.add_pattern(matched=bool(matches))
        if not matches:
            self._note('No files matched the pattern %s', pattern)
            return ''

        chunks: List[str] = []
        for path in matches:
            if not is_regular_file(path):
                self._note('%s is not a file', display_path(path, self._base))
                continue
            canonical = canonical_path(path)
            ctx.mark_used(canonical)
            matched = self._renderer.classify(path)
            rendered = self._renderer.render(matched, ctx)
            if rendered is None:
                continue
            if self._report is not None:
                self._report.add_rendered(matched.kind)
            chunks.append(rendered)
        return '\n'.join(chunks)

    def _note(self, fmt: str, *args) -> None:
        self._log.warning(fmt, *args)
        if self._report is not None:
            self._report.add_diagnostic(fmt % args)
