"""
pdf_store/object_store/base.py

Abstract interface for the object store layer.

Design goals:
  - Services depend only on this interface, never on boto3.
  - Blobs are opaque bytes addressed by a key; the store knows nothing
    about metadata records.
  - Reads hand back a BlobStream so large files are never buffered whole.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator, Optional


# ── Shared data-transfer objects ──────────────────────────────────────────────

class BlobStream:
    """
    A lazy, finite, non-restartable sequence of byte chunks.

    Wraps an iterable produced by a backend plus an optional ``close``
    callback that releases the underlying connection. Iterating twice
    raises RuntimeError; closing is idempotent and also happens
    automatically once the chunks are exhausted.

    Attributes:
        content_length : Total size in bytes when the backend reports it.
    """

    def __init__(
        self,
        chunks: Iterable[bytes],
        content_length: Optional[int] = None,
        close: Optional[Callable[[], None]] = None,
    ) -> None:
        self._chunks = chunks
        self._close = close
        self._consumed = False
        self._closed = False
        self.content_length = content_length

    def __iter__(self) -> Iterator[bytes]:
        if self._consumed:
            raise RuntimeError("BlobStream has already been consumed.")
        self._consumed = True
        return self._generate()

    def _generate(self) -> Iterator[bytes]:
        try:
            for chunk in self._chunks:
                if chunk:
                    yield chunk
        finally:
            self.close()

    def close(self) -> None:
        """Release the backend resource. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._close is not None:
            self._close()

    def read_all(self) -> bytes:
        """Drain the stream into memory. Intended for small files and tests."""
        return b"".join(self)


# ── Abstract base ──────────────────────────────────────────────────────────────

class ObjectStore(ABC):
    """
    Contract every object-store backend must fulfil.

    Concrete implementations (e.g. S3ObjectStore) wrap a specific backend
    and translate its API and errors to this interface.
    """

    @abstractmethod
    def initialize(self) -> None:
        """
        Prepare the backend (e.g. create the bucket) if it is not ready.

        Must be idempotent: calling it on an initialised store is a no-op.

        Raises:
            ObjectStoreError: If the backend cannot be prepared.
        """

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str) -> None:
        """
        Store ``data`` under ``key``.

        Returns only once the backend has acknowledged the write.
        Writing the same key twice overwrites the previous blob (idempotent
        put-by-key).

        Raises:
            ObjectStoreError: If the write fails.
        """

    @abstractmethod
    def get(self, key: str) -> BlobStream:
        """
        Open the blob stored under ``key`` for streaming.

        Raises:
            ObjectNotFoundError: No object exists under ``key``.
            ObjectStoreError:    Any other backend failure.
        """
