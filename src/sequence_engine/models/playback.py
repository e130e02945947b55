"""Playback state values — the transient session snapshot and its commands."""

from __future__ import annotations

from dataclasses import dataclass, field

from sequence_engine.models.enums import CommandType, Effect, PlaybackStatus


@dataclass(frozen=True)
class PlaybackState:
    """Immutable snapshot of a practice session's progress."""

    current_index: int = 0
    remaining_seconds: int = 0
    status: PlaybackStatus = PlaybackStatus.IDLE

    @property
    def is_running(self) -> bool:
        return self.status == PlaybackStatus.RUNNING

    @property
    def is_completed(self) -> bool:
        return self.status == PlaybackStatus.COMPLETED


@dataclass(frozen=True)
class Command:
    """A playback command. ``target_index`` is only read by JUMP."""

    command_type: CommandType
    target_index: int | None = None

    @classmethod
    def jump(cls, target_index: int) -> Command:
        return cls(CommandType.JUMP, target_index=target_index)


PLAY = Command(CommandType.PLAY)
PAUSE = Command(CommandType.PAUSE)
TICK = Command(CommandType.TICK)
ADVANCE = Command(CommandType.ADVANCE)
RETREAT = Command(CommandType.RETREAT)


@dataclass(frozen=True)
class TransitionResult:
    """New state plus the side effects the owner must carry out."""

    state: PlaybackState
    effects: tuple[Effect, ...] = field(default_factory=tuple)
    changed: bool = False
