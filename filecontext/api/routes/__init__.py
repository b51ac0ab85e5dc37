"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- query.py  : LLM queries over file context
- files.py  : Directory listing, upload and delete
- health.py : Health check endpoints
"""
from filecontext.api.routes.files import router as files_router
from filecontext.api.routes.health import router as health_router
from filecontext.api.routes.query import router as query_router

__all__ = [
    "files_router",
    "health_router",
    "query_router",
]
