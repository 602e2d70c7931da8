"""
pdf_store/object_store/memory_store.py

Dict-based ObjectStore for local development and testing.

Selected with ``OBJECT_STORE_BACKEND=memory``; contents vanish when the
process exits.
"""

from __future__ import annotations

import threading
from typing import Dict, Iterator, List

from pdf_store.core.config import settings
from pdf_store.core.exceptions import ObjectNotFoundError
from pdf_store.object_store.base import BlobStream, ObjectStore


class InMemoryObjectStore(ObjectStore):
    """In-memory object store. Thread-safe; blobs are copied on write."""

    def __init__(self, chunk_size: int | None = None) -> None:
        self._objects: Dict[str, bytes] = {}
        self._content_types: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._chunk_size = chunk_size or settings.stream_chunk_size

    def initialize(self) -> None:
        """Nothing to prepare."""

    def put(self, key: str, data: bytes, content_type: str) -> None:
        with self._lock:
            self._objects[key] = bytes(data)
            self._content_types[key] = content_type

    def get(self, key: str) -> BlobStream:
        with self._lock:
            data = self._objects.get(key)
        if data is None:
            raise ObjectNotFoundError(f"No object at key '{key}'")
        return BlobStream(self._iter_chunks(data), content_length=len(data))

    def _iter_chunks(self, data: bytes) -> Iterator[bytes]:
        for start in range(0, len(data), self._chunk_size):
            yield data[start:start + self._chunk_size]

    def keys(self) -> List[str]:
        """Return every stored key, for inspection."""
        with self._lock:
            return sorted(self._objects)

    def content_type(self, key: str) -> str | None:
        with self._lock:
            return self._content_types.get(key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._objects

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)
