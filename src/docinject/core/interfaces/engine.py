from __future__ import annotations

from typing import Protocol, runtime_checkable

from docinject.core.models import RecursionContext


@runtime_checkable
class ExpanderProtocol(Protocol):
    """Recursive entry point: expand every directive in `text`."""

    def expand(self, text: str, ctx: RecursionContext) -> str:
        ...


@runtime_checkable
class InjectorProtocol(Protocol):
    """Resolve one injection pattern to its substituted text."""

    def inject(self, pattern: str, ctx: RecursionContext) -> str:
        ...
