"""
docinject.utils – Small shared utilities (MIME lookup, path helpers).
"""
from .mime import mime_for_path
from .paths import canonical_path, display_path, is_regular_file, iter_regular_files, read_text, write_text

__all__ = ["mime_for_path", "canonical_path", "display_path", "is_regular_file", "iter_regular_files", "read_text", "write_text"]
