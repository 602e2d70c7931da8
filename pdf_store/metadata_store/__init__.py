"""pdf_store/metadata_store/__init__.py: public API of the metadata_store package."""

from pdf_store.metadata_store.base import FileRecord, MetadataStore
from pdf_store.metadata_store.sql_store import SQLMetadataStore

__all__ = [
    "MetadataStore",
    "FileRecord",
    "SQLMetadataStore",
]
