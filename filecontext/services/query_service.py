"""
Query Service - the context-assembly and model-dispatch pipeline.

This service runs one query end to end:
1. Validates the request
2. Sanitizes the path
3. Aggregates file content
4. Builds the bounded prompt
5. Dispatches to the selected provider
6. Returns the provider's ModelResponse unchanged

Steps 1-3 fail fast with a typed exception and no provider call is made.
Steps 4-6 cannot fail: the gateway reports provider faults inside the
response. The service holds no per-request state, so one instance is shared
by all concurrent requests.
"""
from typing import Callable, Optional

from filecontext.core.config import Settings
from filecontext.core.exceptions import ValidationError
from filecontext.core.logging_config import get_logger
from filecontext.core.validators import validate_model, validate_path, validate_query
from filecontext.filesystem.aggregator import FileSystemTools
from filecontext.filesystem.paths import sanitize_path
from filecontext.llm.gateway import ProviderGateway
from filecontext.llm.prompts import build_prompt
from filecontext.models.query import ModelResponse, QueryRequest

logger = get_logger(__name__)


class QueryService:
    """
    Orchestrates sanitize -> aggregate -> build prompt -> dispatch.

    Collaborators are injected so each stage can be replaced in tests.

    Example:
        >>> service = QueryService(get_settings())
        >>> service.handle_query(
        ...     QueryRequest(path="storage/notes.md", query="Summarize", model="ollama")
        ... )
        ModelResponse(text='...', model='ollama', error='')
    """

    def __init__(
        self,
        settings: Settings,
        gateway: Optional[ProviderGateway] = None,
        file_tools: Optional[FileSystemTools] = None,
        path_sanitizer: Callable[[str], str] = sanitize_path,
    ):
        """
        Initialize the query service.

        Args:
            settings: Application settings (context budget, provider config)
            gateway: Provider gateway. Built from settings if not provided.
            file_tools: Filesystem reader. A default instance if not provided.
            path_sanitizer: Function mapping a raw path to a safe absolute one
        """
        self.settings = settings
        self.gateway = gateway or ProviderGateway(settings)
        self.file_tools = file_tools or FileSystemTools()
        self.path_sanitizer = path_sanitizer
        self.max_context_length = settings.max_context_length

    def validate(self, request: QueryRequest) -> None:
        """
        Check the request before any work is done.

        Raises:
            ValidationError: Naming the first invalid field
        """
        is_valid, error = validate_query(request.query)
        if not is_valid:
            raise ValidationError(error, field="query")

        is_valid, error = validate_path(request.path)
        if not is_valid:
            raise ValidationError(error, field="path")

        is_valid, error = validate_model(request.model)
        if not is_valid:
            raise ValidationError(error, field="model")

    def handle_query(self, request: QueryRequest) -> ModelResponse:
        """
        Answer a query about the content at request.path.

        Returns:
            The provider's ModelResponse (success or normalized failure)

        Raises:
            ValidationError: Bad request shape
            InvalidPathError: Path could not be sanitized
            NotFoundError / FilePermissionError / ReadError: Aggregation failed
        """
        self.validate(request)

        sanitized_path = self.path_sanitizer(request.path)
        logger.debug(f"Processing query: path={sanitized_path}, model={request.model}")

        records = self.file_tools.get_context_from_path(sanitized_path)

        built = build_prompt(records, request.query, self.max_context_length)
        if len(built.raw_context) > self.max_context_length:
            logger.info(
                f"Context truncated: {len(built.raw_context)} -> "
                f"{self.max_context_length} chars"
            )

        response = self.gateway.query(request.model, built.prompt, built.raw_context)

        if response.ok:
            logger.info(f"Query processed successfully: model={response.model}")
        else:
            logger.warning(f"Query answered with provider error: model={response.model}")

        return response
