"""
pdf_store/core/constants.py

Application-wide fixed constants.

These are business rules that are part of the system's contract and are
NOT configurable via environment variables.
"""

# ── Accepted uploads ───────────────────────────────────────────────────────────

#: The only media type accepted on upload and the one served on download.
PDF_MEDIA_TYPE: str = "application/pdf"

#: Suffix appended to a file id to build its object-store key.
STORED_KEY_EXTENSION: str = ".pdf"

#: Multipart form field carrying the uploaded document.
UPLOAD_FIELD_NAME: str = "pdf"

# ── Relational layout ──────────────────────────────────────────────────────────

#: Table holding one row per uploaded document.
FILES_TABLE_NAME: str = "uploaded_files"
