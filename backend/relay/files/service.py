"""Upload orchestration for the file relay.

An upload is written to the blob store first and only recorded in the
session registry once the write succeeded, so a listed record always points
at a blob that exists on disk.
"""
import logging
import threading
import time
import uuid
from typing import List, Optional

from .blob_store import BlobStore
from .errors import MISSING_UPLOAD_FIELDS, BadRequestError
from .registry import SessionRegistry
from .schemas import DEFAULT_MIME_TYPE, FileRecord

logger = logging.getLogger(__name__)

UPLOADS_PATH = "/uploads"


class MillisecondClock:
    """Epoch-millisecond clock that never runs backwards."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, int(time.time() * 1000))
            return self._last


class FileRelayService:
    """Stores uploads and answers session listings."""

    def __init__(
        self,
        registry: SessionRegistry,
        blob_store: BlobStore,
        base_url: str,
        clock: Optional[MillisecondClock] = None,
    ):
        self.registry = registry
        self.blob_store = blob_store
        self.base_url = base_url.rstrip("/")
        self._clock = clock or MillisecondClock()

    def blob_url(self, stored_name: str) -> str:
        return f"{self.base_url}{UPLOADS_PATH}/{stored_name}"

    def save_upload(
        self,
        session_id: Optional[str],
        filename: Optional[str],
        content: bytes,
        mime_type: Optional[str] = None,
    ) -> FileRecord:
        """Store an uploaded file and record it under its session.

        Args:
            session_id: Session to file the upload under
            filename: Original filename; None or empty means no file was sent
            content: File content as bytes
            mime_type: Client-declared MIME type

        Returns:
            The FileRecord appended to the registry

        Raises:
            BadRequestError: If the session ID or the file is missing
            StorageError: If the blob could not be written
        """
        if not session_id or not filename:
            raise BadRequestError(MISSING_UPLOAD_FIELDS)

        created_at = self._clock.now()
        stored_name = self.blob_store.store(filename, content, timestamp_ms=created_at)

        record = FileRecord(
            id=str(uuid.uuid4()),
            name=filename,
            size=len(content),
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            url=self.blob_url(stored_name),
            created_at=created_at,
        )
        self.registry.append(session_id, record)

        logger.info("[%s] Uploaded: %s", session_id, filename)
        return record

    def list_files(self, session_id: str) -> List[FileRecord]:
        """Return the session's records newest first."""
        return self.registry.list(session_id)
