"""Playback — timer-driven state machine for stepping through a sequence."""

from sequence_engine.playback.controller import PlaybackController
from sequence_engine.playback.timer import (
    ManualTickSource,
    SchedulerTickSource,
    TickSource,
    TimerHandle,
)
from sequence_engine.playback.transitions import initial_state, transition

__all__ = [
    "ManualTickSource",
    "PlaybackController",
    "SchedulerTickSource",
    "TickSource",
    "TimerHandle",
    "initial_state",
    "transition",
]
