"""
pdf_store/services/retrieval_service.py

Resolves a file id to its bytes:

    file_id
      └─ MetadataStore.select_by_id()   → FileRecord | None
           └─ ObjectStore.get(stored_key) → BlobStream
                └─ RetrievedFile

"Never existed" (no record) and "record without content" (missing blob)
are reported as different errors.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from pdf_store.core.constants import PDF_MEDIA_TYPE
from pdf_store.core.exceptions import (
    FileNotFoundInStoreError,
    InconsistentStateError,
    MetadataStoreError,
    ObjectNotFoundError,
    ObjectStoreError,
    StorageUnavailableError,
)
from pdf_store.core.logger import get_logger
from pdf_store.metadata_store.base import FileRecord, MetadataStore
from pdf_store.object_store.base import BlobStream, ObjectStore

logger = get_logger(__name__)


@dataclass
class RetrievedFile:
    """
    A file ready to be sent back to a client.

    Attributes:
        record     : Metadata of the file.
        stream     : Lazy byte-chunk iterator over the blob; single use.
        media_type : Always application/pdf.
    """

    record: FileRecord
    stream: BlobStream
    media_type: str = PDF_MEDIA_TYPE


class RetrievalService:
    """Looks up a record and opens its blob for streaming."""

    def __init__(self, object_store: ObjectStore, metadata_store: MetadataStore) -> None:
        self._objects = object_store
        self._metadata = metadata_store

    async def retrieve(self, file_id: str) -> RetrievedFile:
        """
        Open the document stored under ``file_id``.

        The blob is opened before returning so store errors surface before
        any response bytes are sent; the bytes themselves are pulled lazily.

        Raises:
            FileNotFoundInStoreError : No record for ``file_id``.
            InconsistentStateError   : Record exists but its blob is missing.
            StorageUnavailableError  : A backing store failed.
        """
        try:
            record = await asyncio.to_thread(self._metadata.select_by_id, file_id)
        except MetadataStoreError as exc:
            logger.warning("Metadata lookup failed for '%s': %s", file_id, exc)
            raise StorageUnavailableError("Metadata store is unavailable.") from exc

        if record is None:
            raise FileNotFoundInStoreError(f"No file with id '{file_id}'.")

        try:
            stream = await asyncio.to_thread(self._objects.get, record.stored_key)
        except ObjectNotFoundError as exc:
            logger.error(
                "INCONSISTENT STATE: record '%s' exists but blob '%s' is missing.",
                file_id,
                record.stored_key,
            )
            raise InconsistentStateError(
                f"Content for file '{file_id}' is missing.",
                file_id=file_id,
                stored_key=record.stored_key,
            ) from exc
        except ObjectStoreError as exc:
            logger.warning("Blob fetch failed for '%s': %s", record.stored_key, exc)
            raise StorageUnavailableError("Object store is unavailable.") from exc

        logger.debug("Serving '%s' (%d bytes).", file_id, record.size_bytes)
        return RetrievedFile(record=record, stream=stream)
