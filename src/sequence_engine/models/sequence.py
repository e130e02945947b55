"""Sequence models — the practitioner's intent and the composed result."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from sequence_engine.models.segment import Segment


@dataclass(frozen=True)
class SequenceSpec:
    """What the practitioner asked for: a named practice of a given length."""

    name: str
    target_duration_seconds: int
    description: str = ""

    def __post_init__(self) -> None:
        if self.target_duration_seconds < 1:
            raise ValueError(
                "Target duration must be >= 1s, "
                f"got {self.target_duration_seconds}"
            )


@dataclass(frozen=True)
class Entry:
    """One position within a composed sequence.

    ``duration_override`` replaces the segment's default hold when set.
    ``entry_id`` is assigned by the persistence gateway and is ``None``
    for freshly composed entries.
    """

    segment: Segment
    position: int                          # 1-based
    duration_override: int | None = None   # seconds
    notes: str | None = None
    entry_id: str | None = None

    @property
    def effective_duration(self) -> int:
        """Override if present (and positive), else the segment default."""
        if self.duration_override is not None and self.duration_override >= 1:
            return self.duration_override
        return self.segment.duration_seconds


@dataclass(frozen=True)
class ComposedSequence:
    """Ordered, duplicate-free list of entries.

    Positions must form the contiguous range 1..N in order, and each
    segment may appear at most once. Both are checked on construction.
    """

    entries: tuple[Entry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for expected, entry in enumerate(self.entries, start=1):
            if entry.position != expected:
                raise ValueError(
                    f"Entry positions must be contiguous from 1; "
                    f"expected {expected}, got {entry.position}"
                )
            if entry.segment.segment_id in seen:
                raise ValueError(
                    f"Segment {entry.segment.segment_id!r} appears more than once"
                )
            seen.add(entry.segment.segment_id)

    @classmethod
    def from_segments(
        cls,
        segments: Iterable[Segment],
        overrides: dict[str, int] | None = None,
    ) -> ComposedSequence:
        """Build a sequence from segments in order, numbering positions from 1."""
        overrides = overrides or {}
        return cls(entries=tuple(
            Entry(
                segment=seg,
                position=i,
                duration_override=overrides.get(seg.segment_id),
            )
            for i, seg in enumerate(segments, start=1)
        ))

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def total_duration_seconds(self) -> int:
        return sum(e.effective_duration for e in self.entries)

    @property
    def segment_ids(self) -> tuple[str, ...]:
        return tuple(e.segment.segment_id for e in self.entries)

    # ------------------------------------------------------------------
    # Editing (each returns a new sequence)
    # ------------------------------------------------------------------

    def with_override(self, position: int, seconds: int | None) -> ComposedSequence:
        """Return a copy with the entry at *position* given a new override."""
        return self._replace_at(position, duration_override=seconds)

    def with_notes(self, position: int, notes: str | None) -> ComposedSequence:
        """Return a copy with the entry at *position* given new notes."""
        return self._replace_at(position, notes=notes)

    def appended(self, segment: Segment, duration_override: int | None = None) -> ComposedSequence:
        """Return a copy with *segment* added at the next position."""
        entry = Entry(
            segment=segment,
            position=len(self.entries) + 1,
            duration_override=duration_override,
        )
        return ComposedSequence(entries=self.entries + (entry,))

    def removed(self, position: int) -> ComposedSequence:
        """Return a copy without the entry at *position*, renumbered."""
        self._check_position(position)
        kept = [e for e in self.entries if e.position != position]
        return ComposedSequence(entries=_renumber(kept))

    def reordered(self, segment_ids: Sequence[str]) -> ComposedSequence:
        """Return a copy whose entries follow *segment_ids*, renumbered 1..N.

        *segment_ids* must be a permutation of the current segment ids.
        """
        if sorted(segment_ids) != sorted(self.segment_ids):
            raise ValueError("Reorder must list every segment exactly once")
        by_id = {e.segment.segment_id: e for e in self.entries}
        return ComposedSequence(entries=_renumber(by_id[sid] for sid in segment_ids))

    def _replace_at(self, position: int, **changes) -> ComposedSequence:
        self._check_position(position)
        return ComposedSequence(entries=tuple(
            dataclasses.replace(e, **changes) if e.position == position else e
            for e in self.entries
        ))

    def _check_position(self, position: int) -> None:
        if not 1 <= position <= len(self.entries):
            raise ValueError(
                f"Position {position} out of range 1..{len(self.entries)}"
            )


def _renumber(entries: Iterable[Entry]) -> tuple[Entry, ...]:
    return tuple(
        dataclasses.replace(e, position=i)
        for i, e in enumerate(entries, start=1)
    )
