"""Custom exception hierarchy for the pose store."""

from __future__ import annotations


class PoseStoreError(Exception):
    """Base exception for all pose_store errors."""


class CatalogUnavailableError(PoseStoreError):
    """The pose catalog could not be read."""


class PersistenceError(PoseStoreError):
    """Reading or writing the backing store failed."""


class RecordNotFoundError(PoseStoreError):
    """A sequence, entry or pose id does not exist in the store."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} {record_id!r} not found")
        self.kind = kind
        self.record_id = record_id


class InvalidSequenceError(PoseStoreError):
    """A sequence or its entries failed validation and was not saved."""
