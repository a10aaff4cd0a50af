from __future__ import annotations

"""
Build report.

Collects counters and timings for a single build run:
- files_rendered / files_by_kind: one entry per rendered matched file
  (a file injected N times counts N times).
- patterns_total / patterns_unmatched: injection commands seen.
- depth_truncations: expansions abandoned at the depth ceiling.
- minify_failures: minifier calls that fell back to unminified text.
- diagnostics: human-readable record of every recoverable condition.
- unused: source-root files never read, filled after expansion.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from docinject.core.models import ContentKind


@dataclass
class BuildReport:
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None
    duration_s: float | None = None

    minify: bool = False

    patterns_total: int = 0
    patterns_unmatched: int = 0

    files_rendered: int = 0
    files_by_kind: Dict[str, int] = field(
        default_factory=lambda: {kind.value: 0 for kind in ContentKind}
    )
    bytes_out: int = 0

    depth_truncations: int = 0
    minify_failures: int = 0

    time_by_stage: Dict[str, float] = field(
        default_factory=lambda: {
            "read": 0.0,
            "expand": 0.0,
            "write": 0.0,
            "unused_scan": 0.0,
        }
    )

    diagnostics: List[str] = field(default_factory=list)
    unused: List[str] = field(default_factory=list)

    def add_pattern(self, *, matched: bool) -> None:
        self.patterns_total += 1
        if not matched:
            self.patterns_unmatched += 1

    def add_rendered(self, kind: ContentKind) -> None:
        self.files_rendered += 1
        self.files_by_kind[kind.value] = self.files_by_kind.get(kind.value, 0) + 1

    def add_time(self, stage: str, seconds: float) -> None:
        self.time_by_stage[stage] = self.time_by_stage.get(stage, 0.0) + seconds

    def add_diagnostic(self, message: str) -> None:
        self.diagnostics.append(message)

    def set_unused(self, paths: Iterable[str]) -> None:
        self.unused = list(paths)

    def finish(self, *, bytes_out: int = 0) -> None:
        self.bytes_out = bytes_out
        self.finished_at = time.perf_counter()
        self.duration_s = (
            self.finished_at - self.started_at if self.finished_at else None
        )

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(
            {
                "started_at": self.started_at,
                "finished_at": self.finished_at,
                "duration_s": self.duration_s,
                "minify": self.minify,
                "patterns_total": self.patterns_total,
                "patterns_unmatched": self.patterns_unmatched,
                "files_rendered": self.files_rendered,
                "files_by_kind": self.files_by_kind,
                "bytes_out": self.bytes_out,
                "depth_truncations": self.depth_truncations,
                "minify_failures": self.minify_failures,
                "time_by_stage": self.time_by_stage,
                "diagnostics": self.diagnostics,
                "unused": self.unused,
            },
            indent=indent,
        )


class StageTimer:
    def __init__(self, report: BuildReport, stage: str):
        self._report = report
        self._stage = stage
        self._t0: float | None = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._t0 is not None:
            self._report.add_time(self._stage, time.perf_counter() - self._t0)
        return False
