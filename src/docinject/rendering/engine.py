from __future__ import annotations

"""
ExpansionEngine – recursive entry point of the build.

`expand(text, ctx)` runs the markup, block-comment and markdown dialect
scans once each, in that order, every scan working on the previous one's
output. Injection commands are handed to the bound injector (normally a
PatternExpander), which renders matched files and may call back into
`expand` one level deeper.

Depth guard: a call with ctx.depth above the ceiling returns its input
untouched, directives included. Cycles and merely deep chains are cut the
same way.
"""

import logging
from typing import Optional, Sequence

from docinject.constants import MAX_DEPTH
from docinject.core.interfaces.engine import ExpanderProtocol, InjectorProtocol
from docinject.core.models import RecursionContext
from docinject.core.report import BuildReport
from docinject.logging.helpers import get_logger
from docinject.parsing.directives import DirectiveScanner, default_scanners


class ExpansionEngine(ExpanderProtocol):
    def __init__(
        self,
        *,
        injector: Optional[InjectorProtocol] = None,
        scanners: Optional[Sequence[DirectiveScanner]] = None,
        max_depth: int = MAX_DEPTH,
        report: Optional[BuildReport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._injector = injector
        self._scanners = tuple(scanners) if scanners is not None else default_scanners()
        self._max_depth = int(max_depth)
        self._report = report
        self._log = logger or get_logger('expand')

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def bind(self, injector: InjectorProtocol) -> None:
        """Attach the injector; it usually needs this engine to exist first."""
        self._injector = injector

    def expand(self, text: str, ctx: RecursionContext) -> str:
        if ctx.depth > self._max_depth:
            self._log.warning('Maximum recursion depth reached (%d) – directives left unexpanded', self._max_depth)
            if self._report is not None:
                self._report.depth_truncations += 1
                self._report.add_diagnostic(f'Maximum recursion depth reached at depth {ctx.depth}')
            return text
        if self._injector is None:
            raise RuntimeError('ExpansionEngine has no injector bound')

        injector = self._injector
        for scanner in self._scanners:
            text = scanner.scan(text, lambda pattern: injector.inject(pattern, ctx))
        return text
