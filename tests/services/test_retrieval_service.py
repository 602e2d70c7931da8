"""
tests/services/test_retrieval_service.py

Unit tests for RetrievalService against the in-memory object store and a
SQLite metadata store, with MagicMock wrappers where a failure must be
injected.
"""

from __future__ import annotations

import uuid
from unittest.mock import MagicMock

import pytest

from pdf_store.core.exceptions import (
    FileNotFoundInStoreError,
    InconsistentStateError,
    MetadataStoreError,
    ObjectStoreError,
    StorageUnavailableError,
)
from pdf_store.services.ingest_service import IngestService
from pdf_store.services.retrieval_service import RetrievalService

PDF = "application/pdf"


async def _ingest(object_store, metadata_store, content: bytes = b"%PDF-1.4\n\n", name: str = "a.pdf"):
    return await IngestService(object_store, metadata_store).ingest(content, PDF, name)


class TestRetrieve:

    @pytest.mark.asyncio
    async def test_round_trip_returns_identical_bytes(self, object_store, metadata_store) -> None:
        content = b"%PDF-1.7 " + b"x" * 1000
        record = await _ingest(object_store, metadata_store, content)

        retrieved = await RetrievalService(object_store, metadata_store).retrieve(record.id)

        assert retrieved.record == record
        assert retrieved.media_type == PDF
        assert retrieved.stream.read_all() == content

    @pytest.mark.asyncio
    async def test_stream_is_chunked_and_single_use(self, object_store, metadata_store) -> None:
        record = await _ingest(object_store, metadata_store, b"0123456789")

        retrieved = await RetrievalService(object_store, metadata_store).retrieve(record.id)
        chunks = list(retrieved.stream)

        assert chunks == [b"0123", b"4567", b"89"]  # chunk_size=4 in conftest
        with pytest.raises(RuntimeError):
            list(retrieved.stream)

    @pytest.mark.asyncio
    async def test_never_issued_id_is_not_found(self, object_store, metadata_store) -> None:
        service = RetrievalService(object_store, metadata_store)

        with pytest.raises(FileNotFoundInStoreError):
            await service.retrieve(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_missing_blob_is_inconsistent_not_not_found(self, object_store, metadata_store) -> None:
        record = await _ingest(object_store, metadata_store)
        del object_store._objects[record.stored_key]

        with pytest.raises(InconsistentStateError) as excinfo:
            await RetrievalService(object_store, metadata_store).retrieve(record.id)

        assert not isinstance(excinfo.value, FileNotFoundInStoreError)
        assert excinfo.value.file_id == record.id
        assert excinfo.value.stored_key == record.stored_key

    @pytest.mark.asyncio
    async def test_object_store_outage_is_storage_unavailable(self, object_store, metadata_store) -> None:
        record = await _ingest(object_store, metadata_store)
        objects = MagicMock()
        objects.get.side_effect = ObjectStoreError("read timeout")

        with pytest.raises(StorageUnavailableError):
            await RetrievalService(objects, metadata_store).retrieve(record.id)

    @pytest.mark.asyncio
    async def test_metadata_outage_is_storage_unavailable(self, object_store) -> None:
        metadata = MagicMock()
        metadata.select_by_id.side_effect = MetadataStoreError("db down")

        with pytest.raises(StorageUnavailableError):
            await RetrievalService(object_store, metadata).retrieve("anything")

    @pytest.mark.asyncio
    async def test_no_blob_fetch_when_record_missing(self, metadata_store) -> None:
        objects = MagicMock()

        with pytest.raises(FileNotFoundInStoreError):
            await RetrievalService(objects, metadata_store).retrieve("missing")

        objects.get.assert_not_called()
