"""
File Routes - list, upload and delete files.

These endpoints allow:
- Listing a directory (names and kinds, no content)
- Uploading a text file into the storage area
- Deleting a file from the storage area
"""
import os
from typing import List

from fastapi import APIRouter, Depends, File, Query, UploadFile

from filecontext.api.dependencies import get_app_settings, get_file_tools
from filecontext.core.config import Settings
from filecontext.core.exceptions import FileTooLargeError, UploadError, ValidationError
from filecontext.core.logging_config import get_logger
from filecontext.filesystem.aggregator import FileSystemTools
from filecontext.filesystem.paths import format_file_size, is_text_file, sanitize_path
from filecontext.models.file_record import (
    FileRecord,
    MessageResponse,
    UploadedFile,
    UploadResponse,
)
from filecontext.models.query import ErrorResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/files",
    tags=["Files"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    }
)


def _bare_filename(filename: str) -> bool:
    """True when `filename` names a file directly, with no directory part."""
    return (
        bool(filename)
        and filename not in (".", "..")
        and "/" not in filename
        and "\\" not in filename
        and "\x00" not in filename
    )


@router.get(
    "",
    response_model=List[FileRecord],
    summary="List files in a directory",
)
def list_files(
    path: str = Query(default="./", description="Directory path to list"),
    tools: FileSystemTools = Depends(get_file_tools),
) -> List[FileRecord]:
    """List the immediate children of a directory."""
    return tools.read_directory(sanitize_path(path))


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload a file",
    description="""
    Store a text file in the storage area so it can be queried.

    Only recognized text file types are accepted, up to the configured size
    limit (5 MB by default). An existing file with the same name is replaced.
    """
)
async def upload_file(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_app_settings),
    tools: FileSystemTools = Depends(get_file_tools),
) -> UploadResponse:
    """Validate and store an uploaded file."""
    filename = os.path.basename((file.filename or "").replace("\\", "/"))

    if not _bare_filename(filename):
        raise UploadError("No file uploaded")

    if not is_text_file(filename):
        raise UploadError("Only text files are allowed", details=f"filename={filename}")

    data = await file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise FileTooLargeError(format_file_size(settings.max_upload_bytes))

    destination = os.path.join(os.path.abspath(settings.storage_dir), filename)
    tools.write_file(destination, data)

    logger.info(f"File uploaded successfully: filename={filename}, size={len(data)}")

    return UploadResponse(
        message="File uploaded successfully",
        file=UploadedFile(
            name=filename,
            size=format_file_size(len(data)),
            path=destination,
        ),
    )


@router.delete(
    "/{filename}",
    response_model=MessageResponse,
    summary="Delete a file",
)
def delete_file(
    filename: str,
    settings: Settings = Depends(get_app_settings),
    tools: FileSystemTools = Depends(get_file_tools),
) -> MessageResponse:
    """Delete a file from the storage area."""
    if not _bare_filename(filename):
        raise ValidationError("Invalid file name", field="filename")

    tools.delete_file(os.path.join(os.path.abspath(settings.storage_dir), filename))

    logger.info(f"File deleted successfully: filename={filename}")
    return MessageResponse(message="File deleted successfully")
