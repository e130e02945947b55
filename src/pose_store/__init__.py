"""Pose store — catalog and sequence persistence behind narrow interfaces."""

from pose_store.base import CatalogProvider, PersistenceGateway, SequenceRecord
from pose_store.exceptions import (
    CatalogUnavailableError,
    InvalidSequenceError,
    PersistenceError,
    PoseStoreError,
    RecordNotFoundError,
)
from pose_store.json_store import JsonPoseStore
from pose_store.saving import save_composed_sequence
from pose_store.seed import DEFAULT_POSES

__all__ = [
    "CatalogProvider",
    "CatalogUnavailableError",
    "DEFAULT_POSES",
    "InvalidSequenceError",
    "JsonPoseStore",
    "PersistenceError",
    "PersistenceGateway",
    "PoseStoreError",
    "RecordNotFoundError",
    "SequenceRecord",
    "save_composed_sequence",
]
