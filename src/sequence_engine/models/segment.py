"""Segment — a single pose from the catalog."""

from __future__ import annotations

from dataclasses import dataclass

from sequence_engine.models.enums import AnchorRole, Category, DifficultyLevel


@dataclass(frozen=True)
class Segment:
    """Catalog pose with a default hold duration and category metadata.

    Immutable from the engine's point of view. The anchor ``role`` is
    decided by the catalog provider, never by the composer.
    """

    segment_id: str
    name: str
    category: Category
    difficulty: DifficultyLevel
    duration_seconds: int                  # default hold, >= 1
    description: str = ""
    instructions: str = ""
    benefits: str = ""
    precautions: str = ""
    role: AnchorRole = AnchorRole.NONE

    def __post_init__(self) -> None:
        if self.duration_seconds < 1:
            raise ValueError(
                f"Segment {self.name!r} duration must be >= 1s, "
                f"got {self.duration_seconds}"
            )

    @property
    def is_opening_anchor(self) -> bool:
        return self.role == AnchorRole.OPENING

    @property
    def is_closing_anchor(self) -> bool:
        return self.role == AnchorRole.CLOSING

    @property
    def is_anchor(self) -> bool:
        return self.role != AnchorRole.NONE
