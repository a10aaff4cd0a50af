from __future__ import annotations

from docinject.constants import MAX_DEPTH
from docinject.core.errors import BuildError, MinifyError
from docinject.core.models import BuildConfig, BuildResult, ContentKind, Dialect, RecursionContext
from docinject.rendering.engine import ExpansionEngine
from docinject.runtime.builder import Builder, build

__version__ = '1.0.0'

__all__ = [
    'MAX_DEPTH',
    'BuildError',
    'MinifyError',
    'BuildConfig',
    'BuildResult',
    'ContentKind',
    'Dialect',
    'RecursionContext',
    'ExpansionEngine',
    'Builder',
    'build',
]
