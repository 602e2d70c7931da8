"""
pdf_store/services/listing_service.py

Returns every stored FileRecord, most recent first.
"""

from __future__ import annotations

import asyncio
from typing import List

from pdf_store.core.exceptions import MetadataStoreError, StorageUnavailableError
from pdf_store.core.logger import get_logger
from pdf_store.metadata_store.base import FileRecord, MetadataStore

logger = get_logger(__name__)


class ListingService:
    def __init__(self, metadata_store: MetadataStore) -> None:
        self._metadata = metadata_store

    async def list_all(self) -> List[FileRecord]:
        """
        Return all records ordered by ``created_at`` descending.

        Raises:
            StorageUnavailableError: The metadata store failed.
        """
        try:
            records = await asyncio.to_thread(self._metadata.select_all)
        except MetadataStoreError as exc:
            logger.warning("Listing failed: %s", exc)
            raise StorageUnavailableError("Metadata store is unavailable.") from exc

        logger.debug("Listing returned %d record(s).", len(records))
        return records
