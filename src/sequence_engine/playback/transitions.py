"""Pure playback transitions: (sequence, state, command) -> TransitionResult.

Every command that is not valid from the current state is inert: the
state is returned unchanged with no effects and ``changed=False``.
Any transition out of RUNNING emits DISARM_TIMER, and entering RUNNING
emits ARM_TIMER. Every advance, automatic or manual, lands in PAUSED.
"""

from __future__ import annotations

import dataclasses
from typing import Callable

from sequence_engine.models.enums import (
    TICK_SECONDS,
    CommandType,
    Effect,
    PlaybackStatus,
)
from sequence_engine.models.playback import Command, PlaybackState, TransitionResult
from sequence_engine.models.sequence import ComposedSequence


def initial_state(sequence: ComposedSequence) -> PlaybackState:
    """IDLE at entry 0 with its full duration; an empty sequence stays at zero."""
    if sequence.is_empty:
        return PlaybackState()
    return PlaybackState(
        current_index=0,
        remaining_seconds=sequence[0].effective_duration,
        status=PlaybackStatus.IDLE,
    )


def transition(
    sequence: ComposedSequence, state: PlaybackState, command: Command
) -> TransitionResult:
    """Apply *command* to *state* for *sequence*."""
    if sequence.is_empty or state.is_completed:
        return _inert(state)
    handler = _HANDLERS[command.command_type]
    return handler(sequence, state, command)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _play(sequence: ComposedSequence, state: PlaybackState, command: Command) -> TransitionResult:
    if state.status not in (PlaybackStatus.IDLE, PlaybackStatus.PAUSED):
        return _inert(state)
    if state.remaining_seconds <= 0:
        return _inert(state)
    return TransitionResult(
        state=dataclasses.replace(state, status=PlaybackStatus.RUNNING),
        effects=(Effect.ARM_TIMER,),
        changed=True,
    )


def _pause(sequence: ComposedSequence, state: PlaybackState, command: Command) -> TransitionResult:
    if not state.is_running:
        return _inert(state)
    return TransitionResult(
        state=dataclasses.replace(state, status=PlaybackStatus.PAUSED),
        effects=(Effect.DISARM_TIMER,),
        changed=True,
    )


def _tick(sequence: ComposedSequence, state: PlaybackState, command: Command) -> TransitionResult:
    if not state.is_running or state.remaining_seconds <= 0:
        return _inert(state)
    remaining = max(state.remaining_seconds - TICK_SECONDS, 0)
    ticked = dataclasses.replace(state, remaining_seconds=remaining)
    if remaining == 0:
        return _advance(sequence, ticked, command)
    return TransitionResult(state=ticked, changed=True)


def _advance(sequence: ComposedSequence, state: PlaybackState, command: Command) -> TransitionResult:
    last_index = len(sequence) - 1
    if state.current_index < last_index:
        return _move_to(sequence, state, state.current_index + 1)

    effects = (Effect.DISARM_TIMER,) if state.is_running else ()
    return TransitionResult(
        state=dataclasses.replace(state, status=PlaybackStatus.COMPLETED),
        effects=effects + (Effect.COMPLETED,),
        changed=True,
    )


def _retreat(sequence: ComposedSequence, state: PlaybackState, command: Command) -> TransitionResult:
    if state.current_index <= 0:
        return _inert(state)
    return _move_to(sequence, state, state.current_index - 1)


def _jump(sequence: ComposedSequence, state: PlaybackState, command: Command) -> TransitionResult:
    target = command.target_index
    if target is None or not 0 <= target < len(sequence):
        return _inert(state)
    return _move_to(sequence, state, target)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _move_to(sequence: ComposedSequence, state: PlaybackState, index: int) -> TransitionResult:
    """Land on *index* with its full duration, paused."""
    effects = (Effect.DISARM_TIMER,) if state.is_running else ()
    return TransitionResult(
        state=PlaybackState(
            current_index=index,
            remaining_seconds=sequence[index].effective_duration,
            status=PlaybackStatus.PAUSED,
        ),
        effects=effects,
        changed=True,
    )


def _inert(state: PlaybackState) -> TransitionResult:
    return TransitionResult(state=state)


_Handler = Callable[[ComposedSequence, PlaybackState, Command], TransitionResult]

_HANDLERS: dict[CommandType, _Handler] = {
    CommandType.PLAY: _play,
    CommandType.PAUSE: _pause,
    CommandType.TICK: _tick,
    CommandType.ADVANCE: _advance,
    CommandType.RETREAT: _retreat,
    CommandType.JUMP: _jump,
}
