"""Tests for StochasticFillPolicy."""

from __future__ import annotations

from typing import Sequence

from sequence_engine.composer.selection import first_selector, random_selector
from sequence_engine.composer.strategies import StochasticFillPolicy
from sequence_engine.models.enums import Category, DifficultyLevel
from sequence_engine.models.segment import Segment


def _seg(segment_id: str, duration: int) -> Segment:
    return Segment(
        segment_id=segment_id,
        name=segment_id,
        category=Category.STANDING,
        difficulty=DifficultyLevel.BEGINNER,
        duration_seconds=duration,
    )


class TestStochasticFill:
    def test_overshooting_draw_is_discarded(self) -> None:
        catalog = [_seg("a", 30), _seg("b", 500), _seg("c", 40)]
        picked = StochasticFillPolicy().select(catalog, 100, first_selector)
        assert [s.segment_id for s in picked] == ["a", "c"]

    def test_stops_once_ninety_percent_reached(self) -> None:
        catalog = [_seg("a", 95), _seg("b", 1)]
        picked = StochasticFillPolicy().select(catalog, 100, first_selector)
        assert [s.segment_id for s in picked] == ["a"]

    def test_each_segment_drawn_at_most_once(self) -> None:
        calls = 0

        def counting(candidates: Sequence[Segment]) -> Segment:
            nonlocal calls
            calls += 1
            return candidates[0]

        catalog = [_seg(f"p{i}", 500) for i in range(5)]
        picked = StochasticFillPolicy().select(catalog, 100, counting)
        assert picked == []
        assert calls == 5

    def test_empty_catalog(self) -> None:
        assert StochasticFillPolicy().select([], 100, first_selector) == []


class TestStochasticProperties:
    def test_no_duplicates_and_never_over_target(self, full_catalog) -> None:
        policy = StochasticFillPolicy()
        for seed in range(40):
            for target in (30, 120, 600, 1200):
                picked = policy.select(full_catalog, target, random_selector(seed))
                ids = [s.segment_id for s in picked]
                assert len(ids) == len(set(ids)), (seed, target)
                assert sum(s.duration_seconds for s in picked) <= target, (seed, target)

    def test_same_seed_same_result(self, full_catalog) -> None:
        policy = StochasticFillPolicy()
        first = policy.select(full_catalog, 600, random_selector(7))
        second = policy.select(full_catalog, 600, random_selector(7))
        assert first == second
