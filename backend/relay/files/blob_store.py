"""Blob storage for uploaded file content.

Blobs are written flat into the content directory as
``{timestamp}-{random hex}{ext}`` and served back unchanged from
``/uploads/{stored_name}``. The client's filename only contributes a short,
validated extension.
"""
import logging
import re
import time
import uuid
from pathlib import Path
from typing import Optional, Union

from .errors import StorageError

logger = logging.getLogger(__name__)

# Extensions outside this pattern are dropped from the stored name
_SAFE_SUFFIX = re.compile(r"^\.[a-z0-9]{1,16}$")


def safe_suffix(filename: str) -> str:
    """Return the lowercased extension of *filename* if it is safe to reuse."""
    suffix = Path(filename).suffix.lower()
    return suffix if _SAFE_SUFFIX.match(suffix) else ""


class BlobStore:
    """Writes uploaded bytes under a content directory."""

    def __init__(self, upload_dir: Union[str, Path]):
        self._upload_dir = Path(upload_dir)

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    def ensure_dir(self) -> None:
        """Create the content directory if it does not exist yet."""
        self._upload_dir.mkdir(parents=True, exist_ok=True)

    def make_stored_name(self, original_name: str, timestamp_ms: Optional[int] = None) -> str:
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        return f"{timestamp_ms}-{uuid.uuid4().hex}{safe_suffix(original_name)}"

    def store(
        self,
        original_name: str,
        content: bytes,
        timestamp_ms: Optional[int] = None,
    ) -> str:
        """Write *content* to a new blob and return its stored name.

        Args:
            original_name: Client-supplied filename (untrusted)
            content: File content as bytes
            timestamp_ms: Prefix for the stored name; defaults to now

        Returns:
            The stored name, relative to the content directory

        Raises:
            StorageError: If the file could not be written
        """
        stored_name = self.make_stored_name(original_name, timestamp_ms)
        file_path = self._upload_dir / stored_name
        try:
            file_path.write_bytes(content)
        except OSError as e:
            logger.error("Failed to write blob %s: %s", file_path, e)
            raise StorageError(f"Upload failed: could not store file ({e.strerror or e})") from e

        logger.info("Saved file: %s (%d bytes)", file_path, len(content))
        return stored_name
