from docinject.logging.factory import DefaultLoggerFactory
from docinject.logging.helpers import get_logger, setup_base_logger, trace_io

__all__ = ['DefaultLoggerFactory', 'get_logger', 'setup_base_logger', 'trace_io']
