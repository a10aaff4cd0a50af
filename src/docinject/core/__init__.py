from __future__ import annotations

"""Public surface for docinject.core.

Models, errors, the build report and the collaborator protocols are
importable from here:

    from docinject.core import RecursionContext, MinifyError, BuildReport
"""

from docinject.core.errors import BuildError, MinifyError
from docinject.core.models import (
    BuildConfig,
    BuildResult,
    ContentKind,
    Dialect,
    MatchedFile,
    RecursionContext,
)
from docinject.core.report import BuildReport, StageTimer

__all__ = [
    "BuildError",
    "MinifyError",
    "BuildConfig",
    "BuildResult",
    "ContentKind",
    "Dialect",
    "MatchedFile",
    "RecursionContext",
    "BuildReport",
    "StageTimer",
]
