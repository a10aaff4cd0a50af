from __future__ import annotations
"""Markdown → markup rendering on Python-Markdown.

Raw inline markup in the source passes through unescaped, so markup that
was injected into a markdown file before rendering survives intact.
"""

from typing import Optional, Sequence

import markdown

from docinject.core.interfaces.render import MarkdownRendererProtocol

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    'markdown.extensions.fenced_code',
    'markdown.extensions.tables',
)


class MarkdownRenderer(MarkdownRendererProtocol):
    def __init__(self, *, extensions: Optional[Sequence[str]] = None) -> None:
        self._extensions = list(extensions if extensions is not None else DEFAULT_EXTENSIONS)

    def render(self, text: str) -> str:
        # Markdown instances carry per-document state; one per call.
        md = markdown.Markdown(extensions=self._extensions, output_format='html')
        return md.convert(text)


def render_markdown(text: str) -> str:
    return MarkdownRenderer().render(text)
