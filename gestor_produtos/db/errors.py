"""Store error taxonomy.

Absent records are not errors: lookups return None and deleting a missing
id is a no-op.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for persistence failures; ``code`` is the diagnostic name."""

    def __init__(self, code: str, message: str | None = None):
        super().__init__(message or code)
        self.code = code
        self.message = message or code


class OpenError(StoreError):
    """The embedded store could not be opened or created."""


class ConstraintError(StoreError):
    """An insert collided with an existing key."""
