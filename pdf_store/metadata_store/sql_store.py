"""
pdf_store/metadata_store/sql_store.py

SQLAlchemy implementation of the MetadataStore interface.

Works against any SQLAlchemy URL: PostgreSQL in the Docker Compose
deployment, SQLite for local development and tests. All backend-specific
details are fully contained here; the rest of the application never
imports from `sqlalchemy` directly.
"""

from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    func,
    select,
)
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from pdf_store.core.config import settings
from pdf_store.core.constants import FILES_TABLE_NAME
from pdf_store.core.exceptions import MetadataStoreError
from pdf_store.core.logger import get_logger
from pdf_store.metadata_store.base import FileRecord, MetadataStore

logger = get_logger(__name__)

metadata = MetaData()

# ``seq`` only records insertion order for tie-breaking; ``id`` is the
# identifier the rest of the system sees.
uploaded_files = Table(
    FILES_TABLE_NAME,
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", String(36), nullable=False, unique=True, index=True),
    Column("filename", String(255), nullable=False),
    Column("original_name", Text, nullable=False),
    Column("file_size", Integer, nullable=False),
    Column("upload_date", DateTime(timezone=True), nullable=False, server_default=func.now()),
    sqlite_autoincrement=True,
)


def build_engine(url: str) -> Engine:
    """Create an engine, adjusting pool settings for SQLite."""
    engine_kwargs: dict[str, Any] = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in url:
            # One shared connection, otherwise every checkout sees an empty DB.
            engine_kwargs["poolclass"] = StaticPool
    return create_engine(url, **engine_kwargs)


def _to_record(row: Row) -> FileRecord:
    return FileRecord(
        id=row.id,
        stored_key=row.filename,
        original_name=row.original_name,
        size_bytes=row.file_size,
        created_at=row.upload_date,
    )


class SQLMetadataStore(MetadataStore):
    """
    MetadataStore backed by the ``uploaded_files`` table.

    The engine (and its connection pool) is created once on construction
    and shared by every request; each operation checks out its own
    connection and runs in its own transaction.
    """

    def __init__(self, database_url: str | None = None, engine: Engine | None = None) -> None:
        """
        Args:
            database_url : SQLAlchemy URL. Defaults to ``settings.database_url``.
            engine       : Pre-built engine; takes precedence over ``database_url``.
        """
        self._engine = engine or build_engine(database_url or settings.database_url)
        logger.info("SQLMetadataStore ready: dialect=%s", self._engine.dialect.name)

    @property
    def engine(self) -> Engine:
        return self._engine

    # ── MetadataStore interface ────────────────────────────────────────────────

    def initialize(self) -> None:
        try:
            metadata.create_all(self._engine, checkfirst=True)
        except SQLAlchemyError as exc:
            raise MetadataStoreError(f"Schema creation failed: {exc}") from exc
        logger.info("Table '%s' created/verified.", FILES_TABLE_NAME)

    def insert(
        self,
        file_id: str,
        stored_key: str,
        original_name: str,
        size_bytes: int,
    ) -> FileRecord:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    uploaded_files.insert().values(
                        id=file_id,
                        filename=stored_key,
                        original_name=original_name,
                        file_size=size_bytes,
                    )
                )
                row = conn.execute(
                    select(uploaded_files).where(uploaded_files.c.id == file_id)
                ).one()
        except SQLAlchemyError as exc:
            raise MetadataStoreError(f"insert failed for '{file_id}': {exc}") from exc

        logger.debug("Inserted record '%s' (%d bytes).", file_id, size_bytes)
        return _to_record(row)

    def select_all(self) -> List[FileRecord]:
        stmt = select(uploaded_files).order_by(
            uploaded_files.c.upload_date.desc(),
            uploaded_files.c.seq.desc(),
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise MetadataStoreError(f"select_all failed: {exc}") from exc
        return [_to_record(row) for row in rows]

    def select_by_id(self, file_id: str) -> Optional[FileRecord]:
        stmt = select(uploaded_files).where(uploaded_files.c.id == file_id)
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            raise MetadataStoreError(f"select_by_id failed for '{file_id}': {exc}") from exc
        return _to_record(row) if row is not None else None
