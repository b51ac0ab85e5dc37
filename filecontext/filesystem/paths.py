"""
Path and file-type helpers.

TEXT_EXTENSIONS is the single list of file types treated as text. Both the
upload endpoint and the context builder use it, so the two never disagree
about what counts as a text file.
"""
import os
import re
from typing import Optional, Union

from filecontext.core.exceptions import InvalidPathError

TEXT_EXTENSIONS = frozenset({
    "txt", "md", "js", "ts", "jsx", "tsx", "json", "yaml", "yml",
    "html", "css", "csv", "xml", "log", "env",
    "py", "java", "cpp", "c", "h",
})

# One or more leading "../" (or "..\") segments, or a bare ".."
_LEADING_TRAVERSAL = re.compile(r"^(\.\.(?:[\\/]|$))+")

_SIZE_UNITS = ["B", "KB", "MB", "GB"]


def get_extension(file_path: str) -> str:
    """Return the final extension of a path, lower-cased and without the dot."""
    return os.path.splitext(file_path)[1][1:].lower()


def is_text_file(file_path: str) -> bool:
    """Check whether a file name has a recognized text extension."""
    return get_extension(file_path) in TEXT_EXTENSIONS


def sanitize_path(input_path: Union[str, os.PathLike], root: Optional[str] = None) -> str:
    """
    Normalize a caller-supplied path and anchor it under `root`.

    The path is normalized first, which collapses every `..` to the front,
    then the leading run of `..` segments is removed, and only then is the
    result joined onto `root` (the working directory by default). Relative
    input therefore can never resolve above `root`:

        >>> sanitize_path("../../etc/passwd", root="/srv/app")
        '/srv/app/etc/passwd'

    Absolute input is normalized and kept absolute. Existence is not checked.

    Args:
        input_path: Raw path from the caller
        root: Directory relative paths are resolved against

    Returns:
        Absolute, normalized path

    Raises:
        InvalidPathError: If the input is empty or not a string
    """
    if isinstance(input_path, os.PathLike):
        input_path = os.fspath(input_path)

    if not isinstance(input_path, str):
        raise InvalidPathError(f"Path must be a string, got {type(input_path).__name__}")

    if not input_path.strip():
        raise InvalidPathError("Path cannot be empty")

    if "\x00" in input_path:
        raise InvalidPathError("Path contains a null byte")

    normalized = os.path.normpath(input_path)
    stripped = _LEADING_TRAVERSAL.sub("", normalized)

    base = os.path.abspath(root) if root else os.getcwd()
    return os.path.normpath(os.path.join(base, stripped or os.curdir))


def format_file_size(size_bytes: int) -> str:
    """
    Format a byte count for humans.

        >>> format_file_size(1536)
        '1.50 KB'
    """
    size = float(size_bytes)
    unit_index = 0

    while size >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    return f"{size:.2f} {_SIZE_UNITS[unit_index]}"
