"""
pdf_store/core/logger.py

Logging setup shared by the API, the services and both storage backends.
Obtain a logger with:

    from pdf_store.core.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
import sys
from pdf_store.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every request or SQL statement at INFO/DEBUG.
_QUIET_LOGGERS = (
    "uvicorn.access",
    "httpx",
    "botocore",
    "boto3",
    "s3transfer",
    "urllib3",
    "sqlalchemy.engine",
)


def _level() -> int:
    return logging.DEBUG if settings.debug else logging.INFO


def _build_handler() -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_level())
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _configure_root_logger() -> None:
    """Attach the stdout handler once; a pre-configured root is left as is."""
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(_level())
    root.addHandler(_build_handler())

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (normally the caller's ``__name__``)."""
    return logging.getLogger(name)
