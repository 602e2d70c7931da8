"""
tests/api/test_files_controller.py

HTTP-level tests for GET /files and GET /files/{file_id}.
"""

import io
import uuid
from unittest.mock import patch

from fastapi.testclient import TestClient

from pdf_store.core.exceptions import MetadataStoreError, ObjectStoreError


def _upload(client: TestClient, name: str, content: bytes) -> str:
    response = client.post(
        "/upload",
        files=[("pdf", (name, io.BytesIO(content), "application/pdf"))],
    )
    assert response.status_code == 200
    return response.json()["fileId"]


# ── GET /files ─────────────────────────────────────────────────────────────────

class TestListFiles:

    def test_empty_listing_is_empty_array(self, client: TestClient) -> None:
        response = client.get("/files")
        assert response.status_code == 200
        assert response.json() == []

    def test_listing_shape(self, client: TestClient, sample_pdf_bytes) -> None:
        file_id = _upload(client, "a.pdf", sample_pdf_bytes)

        (item,) = client.get("/files").json()

        assert item["id"] == file_id
        assert item["filename"] == "a.pdf"
        assert item["file_size"] == 10
        assert "upload_date" in item

    def test_listing_is_newest_first(self, client: TestClient) -> None:
        ids = [_upload(client, f"doc{i}.pdf", b"%PDF-" + bytes([i])) for i in range(3)]

        listed = [item["id"] for item in client.get("/files").json()]

        assert listed == list(reversed(ids))

    def test_store_failure_returns_500(self, client: TestClient, metadata_store) -> None:
        with patch.object(metadata_store, "select_all", side_effect=MetadataStoreError("db down")):
            response = client.get("/files")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch files"}


# ── GET /files/{file_id} ───────────────────────────────────────────────────────

class TestGetFile:

    def test_returns_same_bytes_as_pdf(self, client: TestClient, sample_pdf_bytes) -> None:
        file_id = _upload(client, "a.pdf", sample_pdf_bytes)

        response = client.get(f"/files/{file_id}")

        assert response.status_code == 200
        assert response.content == sample_pdf_bytes
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-length"] == str(len(sample_pdf_bytes))

    def test_large_file_streams_back_intact(self, client: TestClient) -> None:
        content = b"%PDF-1.7\n" + bytes(range(256)) * 64
        file_id = _upload(client, "big.pdf", content)

        assert client.get(f"/files/{file_id}").content == content

    def test_display_name_is_percent_encoded_in_disposition(self, client: TestClient) -> None:
        file_id = _upload(client, "my report.pdf", b"%PDF-1.4")

        disposition = client.get(f"/files/{file_id}").headers["content-disposition"]

        assert disposition == "inline; filename*=UTF-8''my%20report.pdf"

    def test_unknown_id_returns_404(self, client: TestClient) -> None:
        response = client.get(f"/files/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"error": "File not found"}

    def test_malformed_id_returns_404(self, client: TestClient) -> None:
        assert client.get("/files/not-a-uuid").status_code == 404

    def test_missing_blob_returns_500_not_404(
        self, client: TestClient, sample_pdf_bytes, object_store
    ) -> None:
        file_id = _upload(client, "a.pdf", sample_pdf_bytes)
        del object_store._objects[f"{file_id}.pdf"]

        response = client.get(f"/files/{file_id}")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to serve file"}

    def test_object_store_outage_returns_500(
        self, client: TestClient, sample_pdf_bytes, object_store
    ) -> None:
        file_id = _upload(client, "a.pdf", sample_pdf_bytes)

        with patch.object(object_store, "get", side_effect=ObjectStoreError("timeout talking to minio")):
            response = client.get(f"/files/{file_id}")

        assert response.status_code == 500
        assert "minio" not in response.text
