"""FastAPI router for upload and listing endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from .schemas import ErrorResponse, FileRecord
from .service import FileRelayService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


def get_relay_service(request: Request) -> FileRelayService:
    """Resolve the service instance created by the application factory."""
    return request.app.state.relay_service


@router.post(
    "/upload",
    response_model=FileRecord,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_file(
    session_id: Optional[str] = Form(None, alias="sessionId"),
    file: Optional[UploadFile] = File(None),
    service: FileRelayService = Depends(get_relay_service),
):
    """Upload one file into a session.

    Args:
        session_id: Session the file belongs to (form field ``sessionId``)
        file: The file to upload (form field ``file``)

    Returns:
        FileRecord with the file metadata and download URL

    Raises:
        BadRequestError: If ``sessionId`` or ``file`` is missing (400)
        StorageError: If the file could not be written (500)
    """
    if file is None:
        return service.save_upload(session_id, None, b"")

    content = await file.read()
    return service.save_upload(
        session_id=session_id,
        filename=file.filename,
        content=content,
        mime_type=file.content_type,
    )


@router.get("/files/{session_id}", response_model=List[FileRecord])
async def list_files(
    session_id: str,
    service: FileRelayService = Depends(get_relay_service),
):
    """List a session's files, newest first. Unknown sessions yield []."""
    return service.list_files(session_id)
