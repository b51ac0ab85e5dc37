"""
Filesystem entry models.

FileRecord is produced by the content aggregator and consumed by the
context builder; the upload models describe the /api/files/upload response.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FileKind(str, Enum):
    """Kind of filesystem entry."""
    FILE = "file"
    DIRECTORY = "directory"


class FileRecord(BaseModel):
    """
    One filesystem entry seen during aggregation.

    `content` is only populated for files that were read; directory
    entries never carry content.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Entry name (basename)")
    path: str = Field(..., description="Full path of the entry")
    kind: FileKind = Field(..., description="'file' or 'directory'")
    content: Optional[str] = Field(default=None, description="UTF-8 text of a file")

    @property
    def is_directory(self) -> bool:
        return self.kind == FileKind.DIRECTORY


class UploadedFile(BaseModel):
    """Description of a stored upload."""
    name: str
    size: str
    path: str


class UploadResponse(BaseModel):
    """Response from file upload."""
    message: str
    file: UploadedFile


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str
