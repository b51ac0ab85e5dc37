"""
Filesystem module - path handling and content aggregation.
"""
from filecontext.filesystem.aggregator import FileSystemTools
from filecontext.filesystem.paths import (
    TEXT_EXTENSIONS,
    format_file_size,
    is_text_file,
    sanitize_path,
)

__all__ = [
    "FileSystemTools",
    "TEXT_EXTENSIONS",
    "format_file_size",
    "is_text_file",
    "sanitize_path",
]
