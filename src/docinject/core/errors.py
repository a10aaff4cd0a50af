from __future__ import annotations

"""Exception types shared across docinject.

Only two conditions escape their originating component:
    * MinifyError – raised by minifier adapters, always caught by the
      content classifier, which falls back to the unminified text.
    * BuildError  – the root document or the output could not be accessed;
      this aborts the build.
"""

from pathlib import Path
from typing import Optional


class MinifyError(Exception):
    """A minifier could not process its input."""

    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(f'{kind} minification failed: {reason}')
        self.kind = kind
        self.reason = reason


class BuildError(Exception):
    """Fatal build failure tied to the root document or the output file."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path
