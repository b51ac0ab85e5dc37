"""
Input Validators - Query request validation utilities.

Each validator returns (is_valid, error_message) so callers decide how to
report a failure. The query service turns failures into ValidationError.
"""
import re
from typing import Optional, Tuple

from filecontext.core.logging_config import get_logger
from filecontext.models.query import ProviderName

logger = get_logger(__name__)

# A ".." path segment, with either separator style
_TRAVERSAL_REGEX = re.compile(r"(^|[\\/])\.\.([\\/]|$)")


def validate_path(path: object) -> Tuple[bool, Optional[str]]:
    """
    Validate a caller-supplied path.

    Names that merely contain two dots (``notes..txt``) are allowed; only
    ``..`` as a whole segment is rejected.

    Args:
        path: Raw path from the request

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(path, str) or not path.strip():
        return False, "Path cannot be empty"

    if "\x00" in path:
        return False, "Path contains a null byte"

    if _TRAVERSAL_REGEX.search(path):
        logger.warning(f"Rejected path with traversal segment: {path[:100]}")
        return False, "Path must not contain '..' segments"

    return True, None


def validate_query(query: object) -> Tuple[bool, Optional[str]]:
    """
    Validate the natural-language query.

    Args:
        query: Raw query from the request

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(query, str) or not query.strip():
        return False, "Query cannot be empty"

    return True, None


def validate_model(model: object) -> Tuple[bool, Optional[str]]:
    """
    Validate the provider identifier.

    Args:
        model: Provider identifier ('ollama' or 'together')

    Returns:
        Tuple of (is_valid, error_message)
    """
    valid_models = [provider.value for provider in ProviderName]

    if model not in valid_models:
        return False, f"Invalid model: {model}. Must be one of: {valid_models}"

    return True, None
