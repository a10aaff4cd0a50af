from __future__ import annotations
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from docinject.core.models import MatchedFile, RecursionContext


@runtime_checkable
class ContentRendererProtocol(Protocol):
    """Render one matched file according to its content kind.

    Returns None when the file could not be read; the caller drops it
    from the joined output.
    """

    def render(self, matched: MatchedFile, ctx: RecursionContext) -> Optional[str]:
        ...

    def classify(self, path: Path) -> MatchedFile:
        ...
