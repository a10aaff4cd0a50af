from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from docinject.core.errors import BuildError
from docinject.core.models import BuildConfig, BuildResult
from docinject.logging.factory import DefaultLoggerFactory
from docinject.logging.helpers import get_logger
from docinject.parsing.parser import _build_parser
from docinject.runtime.builder import Builder


logger = get_logger('docinject')


def _env_flag(name: str) -> bool:
    return os.getenv(name, '').strip().lower() in ('1', 'true', 'yes', 'on')


def _configure_logging(enable_json: bool, level: int) -> None:
    """Configure process-wide logging once, either JSON or plain text."""
    prev = getattr(_configure_logging, '_configured_mode', None)
    if prev is not None and prev == (bool(enable_json), level):
        return
    factory = DefaultLoggerFactory(json_logs=enable_json, level=level)
    global logger
    logger = factory.get_logger('docinject')
    setattr(_configure_logging, '_configured_mode', (bool(enable_json), level))


def _level_for(ns: argparse.Namespace) -> int:
    if ns.verbose:
        return logging.DEBUG
    if ns.quiet:
        return logging.WARNING
    return logging.INFO


def _config_from_namespace(ns: argparse.Namespace, *, base_dir: Optional[Path] = None) -> BuildConfig:
    minify = ns.minify if ns.minify is not None else _env_flag('DOCINJECT_MINIFY')
    return BuildConfig(
        entry=Path(ns.entry),
        output=Path(ns.output),
        source_root=Path(ns.source_root),
        base_dir=base_dir or Path.cwd(),
        minify=bool(minify),
        report_path=Path(ns.report_path) if ns.report_path else None,
    )


class DocInject:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(argv: Sequence[str], *, base_dir: Optional[Path] = None) -> BuildResult:
        """Parse *argv*, run one build and return its result.

        Raises BuildError when the root document or the output is inaccessible.
        """
        ns = _build_parser().parse_args(list(argv))
        json_logs = ns.json_logs if ns.json_logs is not None else _env_flag('DOCINJECT_JSON_LOGS')
        _configure_logging(json_logs, _level_for(ns))
        cfg = _config_from_namespace(ns, base_dir=base_dir)
        return Builder(cfg).run()


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Entry point for `docinject` and `python -m docinject`."""
    try:
        DocInject.run(sys.argv[1:] if argv is None else argv)
        raise SystemExit(0)
    except BuildError as exc:
        logger.error('build failed: %s', exc)
        raise SystemExit(1)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
