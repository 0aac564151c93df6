"""In-memory session registry.

Maps a session ID to the file records uploaded under it. State lives for the
process lifetime only: sessions appear on first upload and are never removed.

Thread Safety:
    Appends and reads take an internal lock, so concurrent uploads to one
    session never lose a record and listings never see a half-updated list.
"""
import logging
import threading
from typing import Dict, List

from .schemas import FileRecord

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Session ID -> insertion-ordered list of FileRecord."""

    def __init__(self) -> None:
        self._sessions: Dict[str, List[FileRecord]] = {}
        self._lock = threading.Lock()

    def append(self, session_id: str, record: FileRecord) -> None:
        """Append *record* to *session_id*, creating the session if needed."""
        if not session_id:
            raise ValueError("session_id must be a non-empty string")
        with self._lock:
            records = self._sessions.get(session_id)
            if records is None:
                records = self._sessions[session_id] = []
                logger.debug("Created session %s", session_id)
            records.append(record)

    def list(self, session_id: str) -> List[FileRecord]:
        """Return the session's records newest first; empty for unknown sessions."""
        with self._lock:
            records = list(self._sessions.get(session_id, ()))
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
