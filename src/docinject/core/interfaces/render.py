from __future__ import annotations
"""Contracts for the markdown renderer and the minifiers.

The expansion core only depends on these signatures, so any concrete
implementation can be swapped in (tests use plain callables).
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class MarkdownRendererProtocol(Protocol):
    def render(self, text: str) -> str:
        """Render markdown to markup, letting raw inline markup through."""
        ...


@runtime_checkable
class MinifierProtocol(Protocol):
    def minify(self, text: str) -> str:
        """Return minified text or raise MinifyError."""
        ...


@runtime_checkable
class MinifierRegistryProtocol(Protocol):
    @property
    def markup(self) -> MinifierProtocol:
        ...

    @property
    def vector(self) -> MinifierProtocol:
        """Minifier for SVG files (XML only)."""
        ...

    def for_suffix(self, suffix: str) -> Optional[MinifierProtocol]:
        """Minifier for a text file suffix, or None when it is left alone."""
        ...
