from __future__ import annotations

"""
Directive scanning for the three comment dialects.

    markup    <!-- inject "PATTERN" here -->
    block     /* inject "PATTERN" here */
    markdown  [//]: # (inject "PATTERN" here)

`DirectiveScanner` walks a text left to right, finds non-overlapping
start/end spans of one dialect and asks `DirectiveResolver` whether the
inner text is an injection command. Commands are replaced by whatever the
caller's `inject` callback returns; every other span is copied through
byte-for-byte, markers included. A start marker with no end marker after it
stops the scan and the remainder is kept verbatim.

The markdown dialect ends at the first ')' after its start marker, so a
pattern containing ')' is cut short there.
"""

from typing import Callable, List, Optional, Tuple

from docinject.constants import (
    BLOCK_END,
    BLOCK_START,
    INJECT_PREFIX,
    INJECT_SUFFIX,
    MARKDOWN_END,
    MARKDOWN_START,
    MARKUP_END,
    MARKUP_START,
)
from docinject.core.models import Dialect

MARKUP = Dialect('markup', MARKUP_START, MARKUP_END)
BLOCK = Dialect('block', BLOCK_START, BLOCK_END)
MARKDOWN = Dialect('markdown', MARKDOWN_START, MARKDOWN_END)

# Scan order per expansion call.
DIALECTS: Tuple[Dialect, ...] = (MARKUP, BLOCK, MARKDOWN)

InjectFn = Callable[[str], str]


class DirectiveResolver:
    """Classify a span's inner text as an injection command or an opaque comment."""

    @staticmethod
    def parse_command(inner: str) -> Optional[str]:
        """Return the glob pattern of `inject "<pattern>" here`, else None.

        Matching is case-sensitive on the trimmed inner text; the pattern is
        trimmed too and must not be empty.
        """
        body = inner.strip()
        if len(body) < len(INJECT_PREFIX) + len(INJECT_SUFFIX):
            return None
        if not (body.startswith(INJECT_PREFIX) and body.endswith(INJECT_SUFFIX)):
            return None
        pattern = body[len(INJECT_PREFIX):len(body) - len(INJECT_SUFFIX)].strip()
        return pattern or None

    def resolve(self, span: str, inner: str, inject: InjectFn) -> str:
        """Return the substitution for one span."""
        pattern = self.parse_command(inner)
        if pattern is None:
            return span
        return inject(pattern)


class DirectiveScanner:
    """Find and substitute directive spans of a single dialect."""

    def __init__(self, dialect: Dialect, *, resolver: Optional[DirectiveResolver] = None) -> None:
        self._dialect = dialect
        self._resolver = resolver or DirectiveResolver()

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    def scan(self, text: str, inject: InjectFn) -> str:
        start_marker = self._dialect.start
        end_marker = self._dialect.end
        parts: List[str] = []
        idx = 0
        n = len(text)
        while idx < n:
            start = text.find(start_marker, idx)
            if start == -1:
                parts.append(text[idx:])
                break
            inner_from = start + len(start_marker)
            end = text.find(end_marker, start)
            if end == -1:
                parts.append(text[idx:])
                break
            stop = end + len(end_marker)
            parts.append(text[idx:start])
            inner = text[inner_from:end] if end >= inner_from else ''
            parts.append(self._resolver.resolve(text[start:stop], inner, inject))
            idx = stop
        return ''.join(parts)


def default_scanners(resolver: Optional[DirectiveResolver] = None) -> Tuple[DirectiveScanner, ...]:
    """One scanner per dialect, in scan order."""
    res = resolver or DirectiveResolver()
    return tuple(DirectiveScanner(d, resolver=res) for d in DIALECTS)
