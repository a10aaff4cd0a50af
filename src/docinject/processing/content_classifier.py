from __future__ import annotations

"""
ContentClassifier – render one matched file according to its ContentKind.

    IMAGE     raw bytes → <img src="data:<mime>;base64,..." alt="<name>">
              (never expanded, never minified)
    VECTOR    expand directives one level deeper, then markup-minify
    MARKDOWN  expand directives on the raw markdown one level deeper,
              render to markup, then markup-minify
    TEXT      expand one level deeper, then minify by suffix
              (.js script, .css stylesheet, .html markup, others untouched)

Minification only runs when the build has `minify` set. A MinifyError is
logged and the unminified text is kept. A file that cannot be read is
logged and contributes nothing (render returns None).
"""

import base64
import html
import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from docinject.core.errors import MinifyError
from docinject.core.interfaces.classifier import ContentRendererProtocol
from docinject.core.interfaces.engine import ExpanderProtocol
from docinject.core.interfaces.render import (
    MarkdownRendererProtocol,
    MinifierProtocol,
    MinifierRegistryProtocol,
)
from docinject.core.models import ContentKind, MatchedFile, RecursionContext
from docinject.core.report import BuildReport
from docinject.logging.helpers import get_logger, trace_io
from docinject.rendering.markdown_renderer import MarkdownRenderer
from docinject.rendering.minifiers import MinifierRegistry
from docinject.utils.mime import mime_for_path
from docinject.utils.paths import display_path, read_text

Handler = Callable[[Path, RecursionContext], str]


class ContentClassifier(ContentRendererProtocol):
    def __init__(
        self,
        *,
        expander: ExpanderProtocol,
        markdown: Optional[MarkdownRendererProtocol] = None,
        minifiers: Optional[MinifierRegistryProtocol] = None,
        base_dir: Optional[Path] = None,
        report: Optional[BuildReport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._expander = expander
        self._markdown = markdown or MarkdownRenderer()
        self._minifiers = minifiers or MinifierRegistry()
        self._base = base_dir
        self._report = report
        self._log = logger or get_logger('processing.content')
        self._handlers: Dict[ContentKind, Handler] = {
            ContentKind.IMAGE: self._render_image,
            ContentKind.VECTOR: self._render_vector,
            ContentKind.MARKDOWN: self._render_markdown,
            ContentKind.TEXT: self._render_text,
        }

    def classify(self, path: Path) -> MatchedFile:
        return MatchedFile.classify(path)

    def render(self, matched: MatchedFile, ctx: RecursionContext) -> Optional[str]:
        handler = self._handlers[matched.kind]
        try:
            return handler(matched.path, ctx)
        except UnicodeDecodeError:
            self._diagnose('✘ %s: binary or non-UTF-8 file skipped.', self._show(matched.path))
        except OSError as exc:
            self._diagnose('⚠  could not read %s (%s)', self._show(matched.path), exc)
        return None

    def _render_image(self, path: Path, ctx: RecursionContext) -> str:
        data = path.read_bytes()
        trace_io(self._log, 'read image', path=str(path), size=len(data))
        encoded = base64.b64encode(data).decode('ascii')
        alt = html.escape(path.name, quote=True)
        return f'<img src="data:{mime_for_path(path)};base64,{encoded}" alt="{alt}">'

    def _render_vector(self, path: Path, ctx: RecursionContext) -> str:
        expanded = self._expand_file(path, ctx)
        if ctx.minify:
            expanded = self._minify(self._minifiers.vector, expanded, path)
        return expanded

    def _render_markdown(self, path: Path, ctx: RecursionContext) -> str:
        rendered = self._markdown.render(self._expand_file(path, ctx))
        if ctx.minify:
            rendered = self._minify(self._minifiers.markup, rendered, path)
        return rendered

    def _render_text(self, path: Path, ctx: RecursionContext) -> str:
        expanded = self._expand_file(path, ctx)
        if ctx.minify:
            minifier = self._minifiers.for_suffix(path.suffix)
            if minifier is not None:
                expanded = self._minify(minifier, expanded, path)
        return expanded

    def _expand_file(self, path: Path, ctx: RecursionContext) -> str:
        text = read_text(path)
        trace_io(self._log, 'read text', path=str(path), depth=ctx.depth + 1)
        return self._expander.expand(text, ctx.descend())

    def _minify(self, minifier: MinifierProtocol, text: str, path: Path) -> str:
        try:
            return minifier.minify(text)
        except MinifyError as exc:
            if self._report is not None:
                self._report.minify_failures += 1
            self._diagnose('Error minifying %s: %s', self._show(path), exc)
            return text

    def _show(self, path: Path) -> str:
        return display_path(path, self._base)

    def _diagnose(self, fmt: str, *args) -> None:
        self._log.error(fmt, *args)
        if self._report is not None:
            self._report.add_diagnostic(fmt % args)
