"""Abstract collaborators: the pose catalog and sequence persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from sequence_engine.models.segment import Segment
from sequence_engine.models.sequence import ComposedSequence, Entry, SequenceSpec

# Sentinel for "field not supplied" in partial updates, so that None can
# still mean "clear this field".
UNSET: object = object()


@dataclass(frozen=True)
class SequenceRecord:
    """A stored sequence's identity and metadata."""

    sequence_id: str
    spec: SequenceSpec
    entry_count: int = 0
    total_duration_seconds: int = 0


class CatalogProvider(ABC):
    """Supplies the full pose catalog."""

    @abstractmethod
    def fetch_segments(self) -> list[Segment]:
        """Return every pose ordered by name.

        Raises:
            CatalogUnavailableError: the catalog could not be read.
        """
        ...


class PersistenceGateway(ABC):
    """Durable storage for sequences and their ordered entries.

    Implementations must not partially apply an operation: on failure
    the store is left as it was before the call.
    """

    @abstractmethod
    def create_sequence(self, spec: SequenceSpec) -> str:
        """Store a new, empty sequence and return its id."""
        ...

    @abstractmethod
    def attach_entries(self, sequence_id: str, entries: Sequence[Entry]) -> list[str]:
        """Store *entries* under *sequence_id*; returns their new entry ids."""
        ...

    @abstractmethod
    def add_entry(
        self,
        sequence_id: str,
        segment_id: str,
        duration_override: int | None = None,
        notes: str | None = None,
    ) -> str:
        """Append a pose at the next position; returns the new entry id."""
        ...

    @abstractmethod
    def read_sequence(self, sequence_id: str) -> tuple[SequenceRecord, ComposedSequence]:
        """Return the sequence metadata and its entries joined with poses."""
        ...

    @abstractmethod
    def list_sequences(self) -> list[SequenceRecord]:
        """Return all stored sequences ordered by name."""
        ...

    @abstractmethod
    def update_entry(
        self,
        entry_id: str,
        *,
        duration_override: int | None | object = UNSET,
        notes: str | None | object = UNSET,
    ) -> None:
        """Change an entry's override and/or notes."""
        ...

    @abstractmethod
    def reorder_entries(self, sequence_id: str, entry_ids: Sequence[str]) -> None:
        """Persist positions 1..N following the order of *entry_ids*."""
        ...

    @abstractmethod
    def delete_entry(self, entry_id: str) -> None:
        """Remove an entry; the remaining positions are renumbered."""
        ...

    @abstractmethod
    def update_sequence(
        self,
        sequence_id: str,
        *,
        name: str | object = UNSET,
        description: str | object = UNSET,
        target_duration_seconds: int | object = UNSET,
    ) -> None:
        """Change a sequence's metadata."""
        ...

    @abstractmethod
    def delete_sequence(self, sequence_id: str) -> None:
        """Remove a sequence and all of its entries."""
        ...
