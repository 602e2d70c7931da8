"""
pdf_store/metadata_store/base.py

Abstract interface for the metadata store layer.

Design goals:
  - Services depend only on this interface, never on SQLAlchemy.
  - FileRecord is the shared vocabulary across all layers.
  - The store knows nothing about blob bytes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


# ── Shared data-transfer objects ──────────────────────────────────────────────

@dataclass(frozen=True)
class FileRecord:
    """
    Metadata describing one uploaded document. Never mutated after insert.

    Attributes:
        id            : Opaque unique identifier (UUID4 string).
        stored_key    : Object-store key of the blob, derived from ``id``.
        original_name : Display name supplied by the client. Not unique and
                        never used to build paths.
        size_bytes    : Length of the blob in bytes at write time.
        created_at    : Insert timestamp assigned by the store.
    """

    id: str
    stored_key: str
    original_name: str
    size_bytes: int
    created_at: datetime


# ── Abstract base ──────────────────────────────────────────────────────────────

class MetadataStore(ABC):
    """
    Contract every metadata backend must fulfil.

    Concrete implementations (e.g. SQLMetadataStore) wrap a specific
    database and translate its API and errors to this interface.
    """

    @abstractmethod
    def initialize(self) -> None:
        """
        Create the schema if it does not exist yet. Idempotent.

        Raises:
            MetadataStoreError: If the schema cannot be created.
        """

    @abstractmethod
    def insert(
        self,
        file_id: str,
        stored_key: str,
        original_name: str,
        size_bytes: int,
    ) -> FileRecord:
        """
        Insert one record and return it with ``created_at`` populated.

        The insert is atomic: either the full row is visible afterwards or
        nothing is.

        Raises:
            MetadataStoreError: On any backend failure, including a
                                duplicate ``file_id``.
        """

    @abstractmethod
    def select_all(self) -> List[FileRecord]:
        """
        Return every record, newest ``created_at`` first.

        Records with equal ``created_at`` are ordered by insertion,
        most recent first. An empty table yields an empty list.

        Raises:
            MetadataStoreError: On any backend failure.
        """

    @abstractmethod
    def select_by_id(self, file_id: str) -> Optional[FileRecord]:
        """
        Return the record for ``file_id`` or None when there is none.

        Raises:
            MetadataStoreError: On any backend failure.
        """
