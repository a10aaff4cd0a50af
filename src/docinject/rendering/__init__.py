from docinject.rendering.engine import ExpansionEngine
from docinject.rendering.markdown_renderer import MarkdownRenderer, render_markdown
from docinject.rendering.minifiers import (
    MinifierRegistry,
    minify_markup,
    minify_script,
    minify_stylesheet,
)

__all__ = [
    'ExpansionEngine',
    'MarkdownRenderer',
    'render_markdown',
    'MinifierRegistry',
    'minify_markup',
    'minify_script',
    'minify_stylesheet',
]
