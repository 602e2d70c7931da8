"""
pdf_store/dependencies.py

Process-wide handles for the two stores and the three services.

Each getter builds its object on first call and returns the same instance
afterwards. Controllers receive them through FastAPI ``Depends`` so tests
can swap any of them with ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from pdf_store.core.config import settings
from pdf_store.core.logger import get_logger
from pdf_store.metadata_store.base import MetadataStore
from pdf_store.metadata_store.sql_store import SQLMetadataStore
from pdf_store.object_store.base import ObjectStore
from pdf_store.object_store.memory_store import InMemoryObjectStore
from pdf_store.object_store.s3_store import S3ObjectStore
from pdf_store.services.ingest_service import IngestService
from pdf_store.services.listing_service import ListingService
from pdf_store.services.retrieval_service import RetrievalService

logger = get_logger(__name__)


# ── Stores ─────────────────────────────────────────────────────────────────────

@lru_cache
def get_object_store() -> ObjectStore:
    if settings.object_store_backend == "memory":
        logger.warning("Using in-memory object store; blobs are lost on restart.")
        return InMemoryObjectStore()
    return S3ObjectStore()


@lru_cache
def get_metadata_store() -> MetadataStore:
    return SQLMetadataStore()


def initialize_stores(
    object_store: ObjectStore | None = None,
    metadata_store: MetadataStore | None = None,
) -> None:
    """
    Create the bucket and the table if they are absent.

    Called once at startup. Failures are logged and re-raised so the
    service never accepts requests against unprepared stores.
    """
    object_store = object_store or get_object_store()
    metadata_store = metadata_store or get_metadata_store()

    try:
        metadata_store.initialize()
        object_store.initialize()
    except Exception:
        logger.exception("Store initialisation failed.")
        raise

    logger.info("Stores initialised.")


# ── Services ───────────────────────────────────────────────────────────────────

@lru_cache
def get_ingest_service() -> IngestService:
    return IngestService(get_object_store(), get_metadata_store())


@lru_cache
def get_retrieval_service() -> RetrievalService:
    return RetrievalService(get_object_store(), get_metadata_store())


@lru_cache
def get_listing_service() -> ListingService:
    return ListingService(get_metadata_store())
