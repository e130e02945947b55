"""Composition policies for turning a catalog into a composed sequence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from sequence_engine.composer.selection import Selector
from sequence_engine.models.enums import (
    FILL_CEILING_PCT,
    MAIN_CATEGORIES,
    MAIN_SET_CEILING_PCT,
    MAX_WARMUP_CANDIDATES,
    STOCHASTIC_STOP_PCT,
    WARMUP_CEILING_PCT,
    Category,
    DifficultyLevel,
)
from sequence_engine.models.segment import Segment


class CompositionPolicy(ABC):
    """Base class for composition policies.

    A policy returns segments in practice order. It must never repeat a
    segment and never exceed the target, except where a policy documents
    an explicit exception.
    """

    name: str

    @abstractmethod
    def select(
        self,
        catalog: Sequence[Segment],
        target_seconds: int,
        selector: Selector,
    ) -> list[Segment]:
        """Choose and order segments from *catalog* for *target_seconds*."""
        ...


class _Accumulator:
    """Ordered picks plus their running duration."""

    def __init__(self) -> None:
        self.picked: list[Segment] = []
        self.used: set[str] = set()
        self.total = 0

    def add(self, segment: Segment) -> None:
        self.picked.append(segment)
        self.used.add(segment.segment_id)
        self.total += segment.duration_seconds

    def has(self, segment: Segment) -> bool:
        return segment.segment_id in self.used


class AnchoredBalancedPolicy(CompositionPolicy):
    """Opening anchor, warm-up, one pose per main category, fill, closing anchor.

    Algorithm:
    1. Opening anchor at position 1 (if tagged and it fits the target)
    2. Up to the first two warm-up candidates (core or beginner, not
       relaxation), each only while the total stays below 80%
    3. One selector pick per main category while the total is below 90%
    4. Fill with remaining non-relaxation poses in catalog order up to 95%
    5. Closing anchor last, regardless of the 95% cap
    """

    name = "anchored"

    def select(
        self,
        catalog: Sequence[Segment],
        target_seconds: int,
        selector: Selector,
    ) -> list[Segment]:
        acc = _Accumulator()

        opening = next((s for s in catalog if s.is_opening_anchor), None)
        closing = next((s for s in catalog if s.is_closing_anchor), None)

        # --- Opening anchor ---
        if opening is not None and opening.duration_seconds <= target_seconds:
            acc.add(opening)

        # --- Warm-up ---
        warmups = [
            s for s in catalog
            if not s.is_anchor
            and not acc.has(s)
            and s.category != Category.RELAXATION
            and (s.category == Category.CORE
                 or s.difficulty == DifficultyLevel.BEGINNER)
        ]
        for seg in warmups[:MAX_WARMUP_CANDIDATES]:
            if acc.total + seg.duration_seconds < target_seconds * WARMUP_CEILING_PCT:
                acc.add(seg)

        # --- Main set: one pose per category ---
        for category in MAIN_CATEGORIES:
            if acc.total >= target_seconds * MAIN_SET_CEILING_PCT:
                break
            candidates = [
                s for s in catalog
                if s.category == category
                and not s.is_anchor
                and not acc.has(s)
                and acc.total + s.duration_seconds <= target_seconds
            ]
            if candidates:
                acc.add(selector(candidates))

        # --- Fill ---
        for seg in catalog:
            if seg.is_anchor or acc.has(seg) or seg.category == Category.RELAXATION:
                continue
            if acc.total + seg.duration_seconds <= target_seconds * FILL_CEILING_PCT:
                acc.add(seg)

        # --- Closing anchor ---
        if closing is not None and not acc.has(closing):
            acc.add(closing)

        return acc.picked


class StochasticFillPolicy(CompositionPolicy):
    """Random draws without replacement until 90% of the target is reached.

    A drawn segment that would overshoot the target is discarded rather
    than returned to the pool, so the loop runs at most len(catalog)
    times. No category guarantees.
    """

    name = "stochastic"

    def select(
        self,
        catalog: Sequence[Segment],
        target_seconds: int,
        selector: Selector,
    ) -> list[Segment]:
        pool = list(catalog)
        acc = _Accumulator()

        while acc.total < target_seconds * STOCHASTIC_STOP_PCT and pool:
            seg = selector(pool)
            pool.remove(seg)
            if acc.has(seg):
                continue
            if acc.total + seg.duration_seconds <= target_seconds:
                acc.add(seg)

        return acc.picked


POLICIES: dict[str, type[CompositionPolicy]] = {
    AnchoredBalancedPolicy.name: AnchoredBalancedPolicy,
    StochasticFillPolicy.name: StochasticFillPolicy,
}


def get_policy(name: str) -> CompositionPolicy:
    """Look up a policy by name ("anchored" or "stochastic")."""
    try:
        return POLICIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown composition policy {name!r}; "
            f"expected one of {sorted(POLICIES)}"
        ) from None
