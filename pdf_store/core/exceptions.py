"""
pdf_store/core/exceptions.py

Custom exception hierarchy for the application.

Raising typed exceptions from services lets controllers catch specific
cases and return the correct HTTP status code without leaking internals.
"""


class AppBaseException(Exception):
    """Root exception, catch-all for any application-level error."""


# ── Ingest exceptions ──────────────────────────────────────────────────────────

class InvalidMediaTypeError(AppBaseException):
    """Raised when an upload is not declared as application/pdf."""


class InvalidUploadError(AppBaseException):
    """Raised when an upload is missing, empty, or has no usable name."""


class StorageUnavailableError(AppBaseException):
    """
    Raised when a backing store fails before any durable state changed.

    On the write path this means the blob put failed, so the whole ingest
    is safe to retry.
    """


class IngestFailedError(AppBaseException):
    """
    Raised when the blob was written but the metadata insert failed.

    The blob at ``stored_key`` is left behind as an orphan.
    """

    def __init__(self, message: str, stored_key: str) -> None:
        super().__init__(message)
        self.stored_key = stored_key


# ── Retrieval exceptions ───────────────────────────────────────────────────────

class FileNotFoundInStoreError(AppBaseException):
    """Raised when no metadata record exists for the requested id."""


class InconsistentStateError(AppBaseException):
    """Raised when a metadata record exists but its blob cannot be found."""

    def __init__(self, message: str, file_id: str, stored_key: str) -> None:
        super().__init__(message)
        self.file_id = file_id
        self.stored_key = stored_key


# ── Adapter exceptions ─────────────────────────────────────────────────────────
# Never cross the service boundary; services translate them.

class ObjectStoreError(AppBaseException):
    """Raised when an interaction with the object store fails."""


class ObjectNotFoundError(ObjectStoreError):
    """Raised when no object exists under the requested key."""


class MetadataStoreError(AppBaseException):
    """Raised when an interaction with the metadata database fails."""
