from docinject.discovery.pattern_expander import PatternExpander
from docinject.discovery.unused_files import UnusedFileReporter

__all__ = ['PatternExpander', 'UnusedFileReporter']
