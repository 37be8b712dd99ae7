"""Core package - configuration, database and error types."""

from .config import settings, get_settings, Settings
from .database import Database, db, get_db, get_test_db
from .errors import (
    ShortLinkError,
    InvalidInputError,
    NotFoundError,
    ExpiredError,
    StoreFailureError,
    DuplicateRecordError,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "Database",
    "db",
    "get_db",
    "get_test_db",
    "ShortLinkError",
    "InvalidInputError",
    "NotFoundError",
    "ExpiredError",
    "StoreFailureError",
    "DuplicateRecordError",
]
