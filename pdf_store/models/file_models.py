"""
pdf_store/models/file_models.py

Pydantic DTOs for the upload and listing flows.
The upload request has no DTO; FastAPI handles multipart/form-data
natively in the controller; only the response shapes are defined here.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, RootModel

from pdf_store.metadata_store.base import FileRecord


class UploadResponse(BaseModel):
    """
    Successful response for POST /upload.

        {
            "message": "File uploaded successfully",
            "fileId": "0b6f6f8e-6c36-4a49-9f3e-1c1f1e5e3f0a",
            "filename": "a.pdf"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str = "File uploaded successfully"
    file_id: str = Field(alias="fileId")
    filename: str

    @classmethod
    def from_record(cls, record: FileRecord) -> "UploadResponse":
        return cls(file_id=record.id, filename=record.original_name)


class FileSummary(BaseModel):
    """
    One entry of GET /files.

    ``filename`` is the name the client uploaded, not the storage key.
    """

    id: str
    filename: str
    file_size: int
    upload_date: datetime

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileSummary":
        return cls(
            id=record.id,
            filename=record.original_name,
            file_size=record.size_bytes,
            upload_date=record.created_at,
        )


class FileListResponse(RootModel[List[FileSummary]]):
    """Successful response for GET /files: a bare JSON array, newest first."""
