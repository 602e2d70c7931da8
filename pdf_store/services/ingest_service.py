"""
pdf_store/services/ingest_service.py

Orchestrates a single PDF upload:

    (content, media_type, original_name)
      └─ validate                      fail fast, nothing written
           └─ ObjectStore.put()        blob at "<id>.pdf"
                └─ MetadataStore.insert()  record becomes listable
                     └─ FileRecord

Write ordering is blob first, record second: a failure between the two
can only leave an orphan blob, never a record without content.

Both stores are constructor-injected so tests can swap them out with
in-memory fakes or mocks.
"""

from __future__ import annotations

import asyncio
import uuid

from pdf_store.core.constants import PDF_MEDIA_TYPE, STORED_KEY_EXTENSION
from pdf_store.core.exceptions import (
    IngestFailedError,
    InvalidMediaTypeError,
    InvalidUploadError,
    MetadataStoreError,
    ObjectStoreError,
    StorageUnavailableError,
)
from pdf_store.core.logger import get_logger
from pdf_store.metadata_store.base import FileRecord, MetadataStore
from pdf_store.object_store.base import ObjectStore

logger = get_logger(__name__)


def stored_key_for(file_id: str) -> str:
    """Object-store key for a file id. Recoverable from the id alone."""
    return f"{file_id}{STORED_KEY_EXTENSION}"


class IngestService:
    """
    Accepts one PDF and makes it durable in both stores.

    Failure policy:
    - **Validation** errors are raised before any store is touched.
    - **Blob write** failure → StorageUnavailableError; metadata untouched,
      the whole ingest is safe to retry.
    - **Record insert** failure → IngestFailedError; the blob stays behind
      as an orphan and its key is logged for operators. No cleanup, no retry.
    """

    def __init__(self, object_store: ObjectStore, metadata_store: MetadataStore) -> None:
        self._objects = object_store
        self._metadata = metadata_store

    # ── Public API ─────────────────────────────────────────────────────────────

    async def ingest(self, content: bytes, media_type: str, original_name: str) -> FileRecord:
        """
        Store one PDF and its metadata record.

        Args:
            content       : Raw bytes of the document.
            media_type    : Media type declared by the client.
            original_name : Display name supplied by the client.

        Returns:
            The FileRecord as stored, with ``created_at`` set by the store.

        Raises:
            InvalidMediaTypeError   : ``media_type`` is not application/pdf.
            InvalidUploadError      : Empty content or blank name.
            StorageUnavailableError : The blob write failed.
            IngestFailedError       : The blob was written but the record was not.
        """
        self._validate(content, media_type, original_name)

        file_id = str(uuid.uuid4())
        stored_key = stored_key_for(file_id)

        # ── 1. Blob ────────────────────────────────────────────────────────────
        try:
            await asyncio.to_thread(self._objects.put, stored_key, content, PDF_MEDIA_TYPE)
        except ObjectStoreError as exc:
            logger.warning("Blob write failed for '%s': %s", original_name, exc)
            raise StorageUnavailableError("Object store is unavailable.") from exc

        # ── 2. Record ──────────────────────────────────────────────────────────
        try:
            record = await asyncio.to_thread(
                self._metadata.insert,
                file_id,
                stored_key,
                original_name,
                len(content),
            )
        except MetadataStoreError as exc:
            logger.error(
                "Metadata insert failed after blob write; orphan blob left at '%s': %s",
                stored_key,
                exc,
            )
            raise IngestFailedError(
                "File content was stored but its record could not be saved.",
                stored_key=stored_key,
            ) from exc

        logger.info("'%s' ingested as %s (%d bytes).", original_name, file_id, record.size_bytes)
        return record

    # ── Internals ──────────────────────────────────────────────────────────────

    @staticmethod
    def _validate(content: bytes, media_type: str, original_name: str) -> None:
        if (media_type or "").strip() != PDF_MEDIA_TYPE:
            raise InvalidMediaTypeError(f"Only PDF files are allowed (got '{media_type}').")
        if not content:
            raise InvalidUploadError("Uploaded file is empty.")
        if not original_name or not original_name.strip():
            raise InvalidUploadError("Uploaded file has no name.")

