from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from docinject.core.interfaces.render import MarkdownRendererProtocol, MinifierRegistryProtocol
from docinject.core.report import BuildReport
from docinject.discovery.pattern_expander import PatternExpander
from docinject.logging.helpers import get_logger
from docinject.processing.content_classifier import ContentClassifier
from docinject.rendering.engine import ExpansionEngine


def build_engine(
    *,
    base_dir: Path,
    report: Optional[BuildReport] = None,
    markdown: Optional[MarkdownRendererProtocol] = None,
    minifiers: Optional[MinifierRegistryProtocol] = None,
    logger: Optional[logging.Logger] = None,
) -> ExpansionEngine:
    """Wire engine → pattern expander → content classifier → engine.

    The classifier needs the engine for recursion and the engine needs the
    expander, so the injector is bound after construction.
    """
    lg = logger or get_logger('docinject')
    engine = ExpansionEngine(report=report, logger=lg.getChild('expand'))
    classifier = ContentClassifier(
        expander=engine,
        markdown=markdown,
        minifiers=minifiers,
        base_dir=base_dir,
        report=report,
        logger=lg.getChild('content'),
    )
    engine.bind(PatternExpander(
        renderer=classifier,
        base_dir=base_dir,
        report=report,
        logger=lg.getChild('patterns'),
    ))
    return engine
