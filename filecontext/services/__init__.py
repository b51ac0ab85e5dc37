"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- Orchestrate between the filesystem, prompt and LLM layers
"""
from filecontext.services.query_service import QueryService

__all__ = [
    "QueryService",
]
