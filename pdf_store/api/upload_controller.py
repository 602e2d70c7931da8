"""
pdf_store/api/upload_controller.py

Handles incoming requests to POST /upload.

This layer is responsible only for HTTP concerns:
  - Parsing the multipart form and pulling out the 'pdf' file field.
  - Delegating validation and storage to IngestService.
  - Translating service-level errors into appropriate HTTP responses.

Responses:
  200  Upload succeeded.  Body carries a message, the new file id and the
       original filename.
  400  The request was rejected before anything was stored: the 'pdf'
       field was missing, the file was empty, or it was not a PDF.
  500  A backing store failed.  The body never contains store details.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from pdf_store.core.constants import UPLOAD_FIELD_NAME
from pdf_store.core.exceptions import (
    AppBaseException,
    IngestFailedError,
    InvalidMediaTypeError,
    InvalidUploadError,
    StorageUnavailableError,
)
from pdf_store.core.logger import get_logger
from pdf_store.dependencies import get_ingest_service
from pdf_store.models.file_models import UploadResponse
from pdf_store.services.ingest_service import IngestService

logger = get_logger(__name__)

router = APIRouter(tags=["Upload"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _err(message: str, status: int = 400) -> JSONResponse:
    """Return a JSON error response with the standard error shape."""
    return JSONResponse(status_code=status, content={"error": message})


# ── Endpoint ───────────────────────────────────────────────────────────────────

@router.post("/upload", response_model=UploadResponse, summary="Upload a PDF document")
async def upload(
    request: Request,
    service: IngestService = Depends(get_ingest_service),
) -> JSONResponse:
    """
    Accept a single PDF as multipart/form-data:

      curl -F "pdf=@report.pdf;type=application/pdf" http://localhost:5000/upload
    """
    # ── 1. Parse multipart form ────────────────────────────────────────────────
    try:
        form = await request.form()
    except Exception:  # noqa: BLE001
        return _err("Invalid multipart/form-data payload.")

    upload_file = form.get(UPLOAD_FIELD_NAME)
    if not isinstance(upload_file, StarletteUploadFile):
        return _err("No file uploaded")

    # ── 2. Delegate to service ─────────────────────────────────────────────────
    filename = upload_file.filename or ""

    try:
        content = await upload_file.read()
        logger.info("Upload request received: '%s' (%d bytes).", filename, len(content))
        record = await service.ingest(content, upload_file.content_type or "", filename)

    except InvalidMediaTypeError as exc:
        logger.warning("Rejected upload '%s': %s", filename, exc)
        return _err("Only PDF files are allowed")

    except InvalidUploadError as exc:
        logger.warning("Rejected upload '%s': %s", filename, exc)
        return _err(str(exc))

    except (StorageUnavailableError, IngestFailedError) as exc:
        logger.error("Upload of '%s' failed: %s", filename, exc)
        return _err("Upload failed", status=500)

    except AppBaseException as exc:
        logger.exception("Application error during upload: %s", exc)
        return _err("Upload failed", status=500)

    finally:
        await upload_file.close()

    return JSONResponse(
        status_code=200,
        content=UploadResponse.from_record(record).model_dump(by_alias=True),
    )
