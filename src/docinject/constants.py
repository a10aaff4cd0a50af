from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

from pathlib import Path

# Nested expansions deeper than this are abandoned and returned verbatim.
MAX_DEPTH: int = 10

# Directive dialects, in the order they are scanned.
MARKUP_START: str = '<!--'
MARKUP_END: str = '-->'
BLOCK_START: str = '/*'
BLOCK_END: str = '*/'
MARKDOWN_START: str = '[//]: # ('
MARKDOWN_END: str = ')'

INJECT_PREFIX: str = 'inject "'
INJECT_SUFFIX: str = '" here'

IMAGE_SUFFIXES: frozenset[str] = frozenset({'.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp'})
VECTOR_SUFFIX: str = '.svg'
MARKDOWN_SUFFIX: str = '.md'

DEFAULT_SOURCE_ROOT: Path = Path('src')
DEFAULT_ENTRY: Path = DEFAULT_SOURCE_ROOT / 'index.html'
DEFAULT_OUTPUT: Path = Path('docs') / 'index.html'
