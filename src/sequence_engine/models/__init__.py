"""Data models for the sequence engine."""

from sequence_engine.models.enums import (
    AnchorRole,
    Category,
    CommandType,
    DifficultyLevel,
    Effect,
    PlaybackStatus,
)
from sequence_engine.models.playback import Command, PlaybackState, TransitionResult
from sequence_engine.models.segment import Segment
from sequence_engine.models.sequence import ComposedSequence, Entry, SequenceSpec

__all__ = [
    "AnchorRole",
    "Category",
    "Command",
    "CommandType",
    "ComposedSequence",
    "DifficultyLevel",
    "Effect",
    "Entry",
    "PlaybackState",
    "PlaybackStatus",
    "Segment",
    "SequenceSpec",
    "TransitionResult",
]
