"""
tests/conftest.py

Shared pytest fixtures available to all test modules.

Fixtures defined here are auto-discovered by pytest, no import needed.
The environment is pointed at the in-memory object store and an in-memory
SQLite database before the application is imported, so no test ever needs
MinIO or PostgreSQL.
"""

import io
import os

os.environ.setdefault("OBJECT_STORE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from pdf_store.dependencies import (  # noqa: E402
    get_ingest_service,
    get_listing_service,
    get_retrieval_service,
)
from pdf_store.main import app  # noqa: E402
from pdf_store.metadata_store.sql_store import SQLMetadataStore  # noqa: E402
from pdf_store.object_store.memory_store import InMemoryObjectStore  # noqa: E402
from pdf_store.services.ingest_service import IngestService  # noqa: E402
from pdf_store.services.listing_service import ListingService  # noqa: E402
from pdf_store.services.retrieval_service import RetrievalService  # noqa: E402


# ── Store fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def object_store() -> InMemoryObjectStore:
    """A fresh, empty in-memory object store with small chunks."""
    return InMemoryObjectStore(chunk_size=4)


@pytest.fixture
def metadata_store(tmp_path) -> SQLMetadataStore:
    """A fresh SQLite-backed metadata store with its table created."""
    store = SQLMetadataStore(database_url=f"sqlite:///{tmp_path / 'files.db'}")
    store.initialize()
    yield store
    store.engine.dispose()


# ── Core client fixture ────────────────────────────────────────────────────────

@pytest.fixture
def client(object_store, metadata_store) -> TestClient:
    """
    A synchronous TestClient wrapping the FastAPI app, with every service
    wired to this test's private stores.

    The lifespan context (startup) is entered automatically.
    """
    app.dependency_overrides[get_ingest_service] = lambda: IngestService(object_store, metadata_store)
    app.dependency_overrides[get_retrieval_service] = lambda: RetrievalService(object_store, metadata_store)
    app.dependency_overrides[get_listing_service] = lambda: ListingService(metadata_store)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


# ── Sample file fixtures ───────────────────────────────────────────────────────

@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Ten bytes starting with the PDF magic number."""
    return b"%PDF-1.4\n\n"


@pytest.fixture
def sample_pdf_file(sample_pdf_bytes) -> tuple:
    """
    A (field_name, (filename, file_obj, content_type)) tuple ready for
    use with TestClient's `files=` parameter.

    Usage:
        response = client.post("/upload", files=[sample_pdf_file])
    """
    return ("pdf", ("a.pdf", io.BytesIO(sample_pdf_bytes), "application/pdf"))


@pytest.fixture
def sample_txt_file() -> tuple:
    """A non-PDF upload tuple for negative-case tests."""
    return ("pdf", ("readme.txt", io.BytesIO(b"hello world"), "text/plain"))
