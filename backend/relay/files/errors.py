"""Errors raised while relaying files.

Every error carries the HTTP status it is rendered with; the application
exception handler turns them into ``{"error": message}`` bodies.
"""


class RelayError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(RelayError):
    """A required upload field (``sessionId`` or ``file``) is missing."""

    status_code = 400


class StorageError(RelayError):
    """Writing a blob to the content directory failed."""

    status_code = 500


MISSING_UPLOAD_FIELDS = "Missing session ID or file"
