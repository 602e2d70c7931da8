"""
pdf_store/api/files_controller.py

Handles incoming requests to GET /files and GET /files/{file_id}.

Responses for GET /files:
  200  JSON array of uploaded files, newest first.  Empty when nothing has
       been uploaded yet.
  500  The metadata store could not be read.

Responses for GET /files/{file_id}:
  200  The PDF bytes, streamed, with Content-Type application/pdf.
  404  No file was ever uploaded under this id.
  500  The file is known but its content is missing, or a store failed.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from pdf_store.core.exceptions import (
    AppBaseException,
    FileNotFoundInStoreError,
    InconsistentStateError,
    StorageUnavailableError,
)
from pdf_store.core.logger import get_logger
from pdf_store.dependencies import get_listing_service, get_retrieval_service
from pdf_store.models.file_models import FileListResponse, FileSummary
from pdf_store.services.listing_service import ListingService
from pdf_store.services.retrieval_service import RetrievalService

logger = get_logger(__name__)

router = APIRouter(prefix="/files", tags=["Files"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _err(message: str, status: int = 400) -> JSONResponse:
    """Return a JSON error response with the standard error shape."""
    return JSONResponse(status_code=status, content={"error": message})


def _content_disposition(filename: str) -> str:
    # RFC 6266 / 5987: header values must stay latin-1, so percent-encode.
    return f"inline; filename*=UTF-8''{quote(filename, safe='')}"


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.get("", response_model=FileListResponse, summary="List uploaded files")
async def list_files(service: ListingService = Depends(get_listing_service)) -> JSONResponse:
    try:
        records = await service.list_all()

    except StorageUnavailableError as exc:
        logger.error("Error fetching files: %s", exc)
        return _err("Failed to fetch files", status=500)

    except AppBaseException as exc:
        logger.exception("Application error while listing files: %s", exc)
        return _err("Failed to fetch files", status=500)

    body = [FileSummary.from_record(r) for r in records]
    return JSONResponse(status_code=200, content=jsonable_encoder(body))


@router.get(
    "/{file_id}",
    summary="Download a PDF by id",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"application/pdf": {"schema": {"type": "string", "format": "binary"}}}},
        404: {"description": "File not found."},
    },
)
async def get_file(
    file_id: str,
    service: RetrievalService = Depends(get_retrieval_service),
):
    try:
        retrieved = await service.retrieve(file_id)

    except FileNotFoundInStoreError:
        logger.info("File '%s' not found.", file_id)
        return _err("File not found", status=404)

    except InconsistentStateError as exc:
        logger.error("File '%s' has a record but no blob at '%s'.", file_id, exc.stored_key)
        return _err("Failed to serve file", status=500)

    except AppBaseException as exc:
        logger.error("Error serving file '%s': %s", file_id, exc)
        return _err("Failed to serve file", status=500)

    headers = {
        "Content-Length": str(retrieved.stream.content_length or retrieved.record.size_bytes),
        "Content-Disposition": _content_disposition(retrieved.record.original_name),
    }
    return StreamingResponse(
        retrieved.stream,
        media_type=retrieved.media_type,
        headers=headers,
        background=BackgroundTask(retrieved.stream.close),
    )
