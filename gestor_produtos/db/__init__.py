"""Database helpers (store handle, errors, result type)."""

from .errors import ConstraintError, OpenError, StoreError
from .result import StoreResult, capture
from .session import Base, Database, open_database

__all__ = [
    "Base",
    "ConstraintError",
    "Database",
    "OpenError",
    "StoreError",
    "StoreResult",
    "capture",
    "open_database",
]
