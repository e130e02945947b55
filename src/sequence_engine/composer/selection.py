"""Selectors — the injectable "pick one of N candidates" step."""

from __future__ import annotations

import random
from typing import Callable, Sequence

from sequence_engine.models.segment import Segment

Selector = Callable[[Sequence[Segment]], Segment]


def random_selector(seed: int | None = None) -> Selector:
    """Uniform random choice, optionally seeded for reproducible output."""
    rng = random.Random(seed)

    def select(candidates: Sequence[Segment]) -> Segment:
        return rng.choice(candidates)

    return select


def first_selector(candidates: Sequence[Segment]) -> Segment:
    """Deterministic choice: always the first candidate in catalog order."""
    return candidates[0]
