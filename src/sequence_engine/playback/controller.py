"""PlaybackController — owns one practice session and its timer."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from sequence_engine.models.enums import Effect, PlaybackStatus
from sequence_engine.models.playback import (
    ADVANCE,
    PAUSE,
    PLAY,
    RETREAT,
    TICK,
    Command,
    PlaybackState,
)
from sequence_engine.models.sequence import ComposedSequence, Entry
from sequence_engine.playback.timer import SchedulerTickSource, TickSource, TimerHandle
from sequence_engine.playback.transitions import initial_state, transition

logger = logging.getLogger(__name__)

CompletionListener = Callable[[], None]
ChangeListener = Callable[[PlaybackState], None]


class PlaybackController:
    """Steps a practitioner through a composed sequence.

    All state changes go through the pure ``transition`` function; the
    controller only carries out the resulting effects (arming and
    cancelling its tick handle, notifying listeners). A tick delivered by
    a handle that has since been cancelled is ignored.

    Usage::

        controller = PlaybackController(composed, tick_source=ManualTickSource())
        controller.on_complete(lambda: print("Namaste"))
        controller.play()
        ...
        controller.close()
    """

    def __init__(
        self,
        sequence: ComposedSequence,
        tick_source: TickSource | None = None,
    ) -> None:
        self.sequence = sequence
        self._owns_source = tick_source is None
        self._tick_source = tick_source or SchedulerTickSource()
        self._state = initial_state(sequence)
        self._lock = threading.RLock()
        self._handle: TimerHandle | None = None
        self._tick_token: object | None = None
        self._completion_listeners: list[CompletionListener] = []
        self._change_listeners: list[ChangeListener] = []
        self._completion_sent = False
        self._closed = False

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def on_complete(self, listener: CompletionListener) -> None:
        self._completion_listeners.append(listener)

    def on_change(self, listener: ChangeListener) -> None:
        self._change_listeners.append(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def play(self) -> bool:
        return self.dispatch(PLAY)

    def pause(self) -> bool:
        return self.dispatch(PAUSE)

    def toggle(self) -> bool:
        """Pause if running, otherwise play."""
        with self._lock:
            return self.dispatch(PAUSE if self._state.is_running else PLAY)

    def tick(self) -> bool:
        return self.dispatch(TICK)

    def advance(self) -> bool:
        """Skip forward; completes the session from the last entry."""
        return self.dispatch(ADVANCE)

    def retreat(self) -> bool:
        """Skip backward; inert at the first entry."""
        return self.dispatch(RETREAT)

    def jump(self, index: int) -> bool:
        return self.dispatch(Command.jump(index))

    def dispatch(self, command: Command) -> bool:
        """Apply *command*. Returns True if the session state changed."""
        with self._lock:
            if self._closed:
                return False
            result = transition(self.sequence, self._state, command)
            if not result.changed:
                logger.debug(
                    "Ignored %s in %s at index %d",
                    command.command_type.name,
                    self._state.status.name,
                    self._state.current_index,
                )
                return False

            self._state = result.state
            for effect in result.effects:
                self._apply(effect)

            for listener in self._change_listeners:
                listener(self._state)
            return True

    def close(self) -> None:
        """Tear down the session: cancel the timer and refuse further commands."""
        with self._lock:
            self._disarm()
            self._closed = True
        if self._owns_source:
            self._tick_source.shutdown()
        logger.debug("Playback session closed at index %d", self._state.current_index)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def status(self) -> PlaybackStatus:
        return self._state.status

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def remaining_seconds(self) -> int:
        return self._state.remaining_seconds

    @property
    def is_empty(self) -> bool:
        return self.sequence.is_empty

    @property
    def is_last(self) -> bool:
        return not self.is_empty and self._state.current_index == len(self.sequence) - 1

    @property
    def is_armed(self) -> bool:
        return self._handle is not None and self._handle.active

    @property
    def current_entry(self) -> Entry | None:
        if self.is_empty:
            return None
        return self.sequence[self._state.current_index]

    @property
    def progress(self) -> float:
        """Fraction of the whole sequence's time already practised (0-1)."""
        total = self.sequence.total_duration_seconds
        if total == 0:
            return 0.0
        if self._state.is_completed:
            return 1.0
        index = self._state.current_index
        done = sum(e.effective_duration for e in self.sequence.entries[:index])
        done += self.sequence[index].effective_duration - self._state.remaining_seconds
        return done / total

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _apply(self, effect: Effect) -> None:
        if effect == Effect.ARM_TIMER:
            self._arm()
        elif effect == Effect.DISARM_TIMER:
            self._disarm()
        elif effect == Effect.COMPLETED:
            self._notify_completed()

    def _arm(self) -> None:
        self._disarm()
        token = object()
        self._tick_token = token
        self._handle = self._tick_source.start(lambda: self._on_tick(token))

    def _disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._tick_token = None

    def _on_tick(self, token: object) -> None:
        with self._lock:
            if token is not self._tick_token:
                logger.debug("Dropped tick from a cancelled timer")
                return
            self.dispatch(TICK)

    def _notify_completed(self) -> None:
        if self._completion_sent:
            return
        self._completion_sent = True
        logger.info("Practice complete after %d poses", len(self.sequence))
        for listener in self._completion_listeners:
            listener()
