"""
Shared service instances for the routes.

Routes receive these through FastAPI's Depends so tests can swap them with
app.dependency_overrides.
"""
from functools import lru_cache

from filecontext.core.config import Settings, get_settings
from filecontext.filesystem.aggregator import FileSystemTools
from filecontext.services.query_service import QueryService


def get_app_settings() -> Settings:
    """Settings dependency."""
    return get_settings()


@lru_cache(maxsize=1)
def get_file_tools() -> FileSystemTools:
    """Get or create the filesystem tools instance."""
    return FileSystemTools()


@lru_cache(maxsize=1)
def get_query_service() -> QueryService:
    """Get or create the query service instance."""
    return QueryService(get_settings(), file_tools=get_file_tools())
