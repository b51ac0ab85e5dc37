"""
Query Routes - ask a model about files on disk.

The route is a thin adapter: it parses the body into a QueryRequest, hands
it to QueryService and returns the ModelResponse as-is. Provider failures
come back with status 200 and a populated `error`; failures before dispatch
are raised as typed exceptions and mapped to status codes in main.py.
"""
from fastapi import APIRouter, Depends

from filecontext.api.dependencies import get_query_service
from filecontext.core.logging_config import get_logger
from filecontext.models.query import ErrorResponse, ModelResponse, QueryRequest
from filecontext.services.query_service import QueryService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Query"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or path"},
        403: {"model": ErrorResponse, "description": "Path is not readable"},
        404: {"model": ErrorResponse, "description": "Path not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    }
)


@router.post(
    "/query",
    response_model=ModelResponse,
    summary="Query an LLM with file context",
    description="""
    Read the file or directory at `path`, build a context from its text
    files and ask the selected model (`ollama` or `together`) the `query`.

    Directories are read one level deep. Only recognized text file types are
    included, and the context is truncated to the configured length.
    """
)
def query_files(
    request: QueryRequest,
    service: QueryService = Depends(get_query_service),
) -> ModelResponse:
    """Run the query pipeline. Sync so FastAPI runs it in its threadpool."""
    logger.info(f"Query received: model={request.model}, path={request.path[:100]}")
    return service.handle_query(request)
