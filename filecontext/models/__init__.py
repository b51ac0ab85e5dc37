"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input parsing for API endpoints
- Response models: Output formatting for API responses
- Internal models: FileRecord passed between aggregation and prompt building
"""
from filecontext.models.file_record import (
    FileKind,
    FileRecord,
    MessageResponse,
    UploadedFile,
    UploadResponse,
)
from filecontext.models.query import (
    ErrorResponse,
    HealthResponse,
    ModelResponse,
    ProviderName,
    QueryRequest,
)

__all__ = [
    "FileKind",
    "FileRecord",
    "MessageResponse",
    "UploadedFile",
    "UploadResponse",
    "ErrorResponse",
    "HealthResponse",
    "ModelResponse",
    "ProviderName",
    "QueryRequest",
]
