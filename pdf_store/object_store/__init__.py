"""pdf_store/object_store/__init__.py: public API of the object_store package."""

from pdf_store.object_store.base import BlobStream, ObjectStore
from pdf_store.object_store.memory_store import InMemoryObjectStore
from pdf_store.object_store.s3_store import S3ObjectStore

__all__ = [
    "ObjectStore",
    "BlobStream",
    "S3ObjectStore",
    "InMemoryObjectStore",
]
