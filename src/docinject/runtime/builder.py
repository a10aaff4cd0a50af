from __future__ import annotations

"""
Builder – one complete build.

Steps:
    1) create the output directory;
    2) read the root document (failure is fatal);
    3) seed the usage set with the root document;
    4) expand at depth 0;
    5) write the output (failure is fatal);
    6) list source-root files never read (advisory only).
"""

import logging
from pathlib import Path
from typing import Optional

from docinject.core.errors import BuildError
from docinject.core.interfaces.render import MarkdownRendererProtocol, MinifierRegistryProtocol
from docinject.core.models import BuildConfig, BuildResult, RecursionContext
from docinject.core.report import BuildReport, StageTimer
from docinject.discovery.unused_files import UnusedFileReporter
from docinject.logging.helpers import get_logger
from docinject.runtime.wiring import build_engine
from docinject.utils.paths import canonical_path, display_path, read_text, write_text


class Builder:
    def __init__(
        self,
        config: BuildConfig,
        *,
        markdown: Optional[MarkdownRendererProtocol] = None,
        minifiers: Optional[MinifierRegistryProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._cfg = config
        self._markdown = markdown
        self._minifiers = minifiers
        self._log = logger or get_logger('build')

    @property
    def config(self) -> BuildConfig:
        return self._cfg

    def run(self) -> BuildResult:
        cfg = self._cfg
        entry = cfg.resolve(cfg.entry)
        output = cfg.resolve(cfg.output)
        report = BuildReport(minify=cfg.minify)

        try:
            output.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise BuildError(f'cannot create output directory {output.parent}: {exc}', path=output) from exc

        with StageTimer(report, 'read'):
            try:
                source = read_text(entry)
            except (OSError, UnicodeDecodeError) as exc:
                raise BuildError(f'cannot read root document {entry}: {exc}', path=entry) from exc

        ctx = RecursionContext(depth=0, minify=cfg.minify)
        ctx.mark_used(canonical_path(entry))

        engine = build_engine(
            base_dir=cfg.base_dir,
            report=report,
            markdown=self._markdown,
            minifiers=self._minifiers,
        )
        with StageTimer(report, 'expand'):
            text = engine.expand(source, ctx)

        with StageTimer(report, 'write'):
            try:
                write_text(output, text)
            except OSError as exc:
                raise BuildError(f'cannot write output {output}: {exc}', path=output) from exc

        self._log.info('Build completed. Output written to %s', display_path(output, cfg.base_dir))
        if cfg.minify:
            self._log.info('Minification was applied.')

        reporter = UnusedFileReporter(logger=self._log.getChild('unused'))
        source_root = cfg.resolve(cfg.source_root)
        with StageTimer(report, 'unused_scan'):
            unused = reporter.find_unused(source_root, ctx.used)
        shown = [display_path(p, cfg.base_dir) for p in unused]
        report.set_unused(shown)
        reporter.report(display_path(source_root, cfg.base_dir), shown)

        report.finish(bytes_out=len(text.encode('utf-8')))
        if cfg.report_path is not None:
            self._write_report(report, cfg.resolve(cfg.report_path))

        return BuildResult(
            output_path=output,
            text=text,
            used=frozenset(ctx.used),
            unused=tuple(unused),
            report=report,
        )

    def _write_report(self, report: BuildReport, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            write_text(path, report.to_json() + '\n')
        except OSError as exc:
            self._log.error('⚠  could not write build report %s (%s)', path, exc)


def build(config: Optional[BuildConfig] = None, **kwargs) -> BuildResult:
    """Run a build with *config* (or a BuildConfig built from keyword args)."""
    cfg = config or BuildConfig(**kwargs)
    return Builder(cfg).run()
