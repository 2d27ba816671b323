# luna/common/errors.py
from __future__ import annotations


class CatalogError(Exception):
    """Base class for failures raised by the catalog core."""


class RecordIntegrityError(CatalogError):
    """
    A Record references a director/studio/label/series row that does not exist.

    This is corrupted referential integrity, not an ordinary "not found":
    callers must surface it as an internal failure.
    """

    def __init__(self, record_id: str, kind: str, missing_id: int) -> None:
        self.record_id = record_id
        self.kind = kind
        self.missing_id = missing_id
        super().__init__(f"{kind.capitalize()} not found")

    def __repr__(self) -> str:
        return f"<RecordIntegrityError record={self.record_id!r} {self.kind}={self.missing_id}>"


class UnknownLookupKind(CatalogError, ValueError):
    """Raised when a string does not name one of the lookup tables."""


class ProtectedLookupError(CatalogError):
    """Raised when deleting a seeded "Unknown" row that record FKs fall back to."""

    def __init__(self, kind: str, lookup_id: int) -> None:
        self.kind = kind
        self.lookup_id = lookup_id
        super().__init__(f"Unknown {kind} (id={lookup_id}) cannot be deleted")
