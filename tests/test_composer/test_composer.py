"""Tests for SequenceComposer and the policy registry."""

from __future__ import annotations

import pytest

from sequence_engine.composer import SequenceComposer
from sequence_engine.composer.selection import first_selector
from sequence_engine.composer.strategies import (
    AnchoredBalancedPolicy,
    StochasticFillPolicy,
    get_policy,
)
from sequence_engine.models.sequence import SequenceSpec


class TestPolicyRegistry:
    def test_lookup_by_name(self) -> None:
        assert isinstance(get_policy("anchored"), AnchoredBalancedPolicy)
        assert isinstance(get_policy("stochastic"), StochasticFillPolicy)

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown composition policy"):
            get_policy("shuffle")


class TestSequenceComposer:
    def test_defaults_to_anchored(self) -> None:
        assert isinstance(SequenceComposer().policy, AnchoredBalancedPolicy)

    def test_policy_by_name(self) -> None:
        composer = SequenceComposer("stochastic", first_selector)
        assert isinstance(composer.policy, StochasticFillPolicy)

    def test_unknown_policy_name_raises(self) -> None:
        with pytest.raises(ValueError):
            SequenceComposer("shuffle")

    def test_empty_catalog_gives_empty_sequence(self) -> None:
        composed = SequenceComposer(selector=first_selector).compose([], 600)
        assert composed.is_empty

    def test_target_below_one_gives_empty_sequence(self, full_catalog) -> None:
        composed = SequenceComposer(selector=first_selector).compose(full_catalog, 0)
        assert composed.is_empty

    def test_positions_numbered_from_one(self, mountain, savasana) -> None:
        composed = SequenceComposer(selector=first_selector).compose(
            [mountain, savasana], 400,
        )
        assert [e.position for e in composed.entries] == [1, 2]
        assert composed.segment_ids == ("mountain", "savasana")
        assert composed.total_duration_seconds == 330

    def test_compose_for_uses_spec_target(self, full_catalog) -> None:
        composer = SequenceComposer(selector=first_selector)
        spec = SequenceSpec(name="Evening", target_duration_seconds=900)
        assert composer.compose_for(full_catalog, spec) == composer.compose(full_catalog, 900)

    def test_logs_summary(self, full_catalog, caplog) -> None:
        with caplog.at_level("INFO", logger="sequence_engine.composer.composer"):
            SequenceComposer(selector=first_selector).compose(full_catalog, 900)
        assert "Composed 12 poses" in caplog.text
