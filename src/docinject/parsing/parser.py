# docinject/parsing/parser.py
from __future__ import annotations

import argparse

from docinject.constants import DEFAULT_ENTRY, DEFAULT_OUTPUT, DEFAULT_SOURCE_ROOT


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="docinject",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "docinject – assemble one HTML document by expanding\n"
            '<!-- inject "PATTERN" here -->, /* inject "PATTERN" here */ and\n'
            '[//]: # (inject "PATTERN" here) directives recursively.'
        ),
    )

    g_bld = p.add_argument_group("Build")
    g_log = p.add_argument_group("Logging & reports")

    g_bld.add_argument(
        "--minify",
        action="store_true",
        default=None,
        help="Minify injected HTML/SVG/markdown, JavaScript and CSS (env: DOCINJECT_MINIFY=1).",
    )
    g_bld.add_argument(
        "--entry",
        metavar="FILE",
        default=str(DEFAULT_ENTRY),
        help=f"Root document to expand (default: {DEFAULT_ENTRY}).",
    )
    g_bld.add_argument(
        "--output",
        metavar="FILE",
        default=str(DEFAULT_OUTPUT),
        help=f"Output file; its directory is created if missing (default: {DEFAULT_OUTPUT}).",
    )
    g_bld.add_argument(
        "--src",
        metavar="DIR",
        dest="source_root",
        default=str(DEFAULT_SOURCE_ROOT),
        help=f"Source root scanned for unused files (default: {DEFAULT_SOURCE_ROOT}).",
    )

    g_log.add_argument(
        "--report",
        metavar="FILE",
        dest="report_path",
        help="Write a JSON build report to FILE.",
    )
    g_log.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit log records as JSON lines (env: DOCINJECT_JSON_LOGS=1).",
    )
    verbosity = g_log.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug messages.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")
    return p
