"""
Request and Response models for the query API.

These Pydantic models define the contract between the HTTP layer and the
query service. Field-level parsing is left loose on purpose: semantic
validation (empty query, unknown provider) is reported by the service as a
ValidationError so the failing stage is named in the response.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProviderName(str, Enum):
    """Wire-level identifiers of the supported model backends."""
    OLLAMA = "ollama"
    TOGETHER = "together"


class QueryRequest(BaseModel):
    """
    Request model for the /api/query endpoint.

    Attributes:
        path: File or directory whose content becomes the context.
        query: The natural-language question.
        model: Provider identifier, 'ollama' when omitted.
    """
    path: str = Field(
        default="",
        description="File or directory to use as context",
        examples=["storage/code-samples"]
    )
    query: str = Field(
        default="",
        description="The question to ask about the selected content",
        examples=["Summarize these files"]
    )
    model: str = Field(
        default=ProviderName.OLLAMA.value,
        description="Model backend: 'ollama' or 'together'"
    )


class ModelResponse(BaseModel):
    """
    Normalized answer from a model backend.

    Exactly one of `text` or `error` is non-empty. `model` always names the
    provider that was invoked, whether or not the call succeeded.
    """
    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Model output on success")
    model: str = Field(..., description="Provider that produced this response")
    error: str = Field(default="", description="Failure description, empty on success")

    @classmethod
    def success(cls, model: str, text: str) -> "ModelResponse":
        return cls(text=text, model=model, error="")

    @classmethod
    def failure(cls, model: str, error: str) -> "ModelResponse":
        return cls(text="", model=model, error=error or "Unknown error")

    @property
    def ok(self) -> bool:
        return not self.error


class HealthResponse(BaseModel):
    """Response model for the /health endpoint."""
    status: str = Field(default="healthy")
    version: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    message: str
    details: Optional[str] = None
    stage: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
