"""Pose catalog records — mapping stored dicts to Segment models."""

from __future__ import annotations

import dataclasses
from typing import Any, Collection, Sequence

from sequence_engine.models.enums import AnchorRole, Category, DifficultyLevel
from sequence_engine.models.segment import Segment

# Name fragments that mark a pose as an anchor when a record has no role
_OPENING_NAME_HINTS = ("mountain",)
_CLOSING_NAME_HINTS = ("savasana",)


def infer_anchor_role(name: str) -> AnchorRole:
    """Guess an anchor role from a pose name, for records stored without one."""
    lowered = name.lower()
    if any(hint in lowered for hint in _OPENING_NAME_HINTS):
        return AnchorRole.OPENING
    if any(hint in lowered for hint in _CLOSING_NAME_HINTS):
        return AnchorRole.CLOSING
    return AnchorRole.NONE


def segment_from_record(record: dict[str, Any]) -> Segment:
    """Build a Segment from a stored pose dict.

    Enum fields are stored by lower-case name (``"forward_fold"``).

    Raises:
        KeyError: a required field or enum name is missing.
        ValueError: a field has an invalid value.
    """
    name = record["name"]
    role_name = record.get("role")
    role = AnchorRole[role_name.upper()] if role_name else infer_anchor_role(name)
    return Segment(
        segment_id=str(record["id"]),
        name=name,
        category=Category[record["category"].upper()],
        difficulty=DifficultyLevel[record["difficulty_level"].upper()],
        duration_seconds=int(record["duration_seconds"]),
        description=record.get("description") or "",
        instructions=record.get("instructions") or "",
        benefits=record.get("benefits") or "",
        precautions=record.get("precautions") or "",
        role=role,
    )


def segment_to_record(segment: Segment) -> dict[str, Any]:
    """Inverse of :func:`segment_from_record`."""
    return {
        "id": segment.segment_id,
        "name": segment.name,
        "category": segment.category.name.lower(),
        "difficulty_level": segment.difficulty.name.lower(),
        "duration_seconds": segment.duration_seconds,
        "description": segment.description,
        "instructions": segment.instructions,
        "benefits": segment.benefits,
        "precautions": segment.precautions,
        "role": segment.role.name.lower(),
    }


def with_closing_fallback(
    segments: Sequence[Segment], role_less_ids: Collection[str]
) -> list[Segment]:
    """Tag a closing anchor when the catalog has none.

    The first relaxation pose (in the given order) whose record carries
    no explicit role becomes the closing anchor. Catalogs that already
    have a closing anchor are returned unchanged.
    """
    result = list(segments)
    if any(s.is_closing_anchor for s in result):
        return result
    for i, seg in enumerate(result):
        if seg.category == Category.RELAXATION and seg.segment_id in role_less_ids:
            result[i] = dataclasses.replace(seg, role=AnchorRole.CLOSING)
            break
    return result
