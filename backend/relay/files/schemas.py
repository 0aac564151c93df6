"""Pydantic schemas for the file relay.

This module defines the data models exchanged over the API:
- FileRecord: metadata for one uploaded file, returned by upload and listing
- ErrorResponse: body of every failed request

Field names are snake_case in Python and camelCase on the wire
(``createdAt``), and the MIME type travels as ``type``.
"""
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MIME_TYPE = "application/octet-stream"


class FileRecord(BaseModel):
    """Metadata for one uploaded file.

    ``name`` and ``mime_type`` are client-supplied and stored verbatim; they
    are never used to build a path on disk.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., description="Unique record ID")
    name: str = Field(..., description="Original client-supplied filename")
    size: int = Field(..., ge=0, description="File size in bytes")
    mime_type: str = Field(..., alias="type", description="Client-declared MIME type")
    url: str = Field(..., description="Absolute URL the blob can be downloaded from")
    created_at: int = Field(..., alias="createdAt", description="Upload time in epoch milliseconds")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Explanation of what went wrong")
