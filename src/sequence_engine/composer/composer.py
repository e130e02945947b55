"""SequenceComposer — turns a catalog snapshot into a composed sequence."""

from __future__ import annotations

import logging
from typing import Sequence

from sequence_engine.composer.selection import Selector, random_selector
from sequence_engine.composer.strategies import (
    AnchoredBalancedPolicy,
    CompositionPolicy,
    get_policy,
)
from sequence_engine.models.segment import Segment
from sequence_engine.models.sequence import ComposedSequence, SequenceSpec

logger = logging.getLogger(__name__)


class SequenceComposer:
    """Composes practice sequences from a catalog.

    Usage::

        composer = SequenceComposer()                        # anchored, random
        composer = SequenceComposer("stochastic", random_selector(42))
        composed = composer.compose(catalog, target_seconds=1800)
    """

    def __init__(
        self,
        policy: CompositionPolicy | str | None = None,
        selector: Selector | None = None,
    ) -> None:
        if isinstance(policy, str):
            policy = get_policy(policy)
        self.policy = policy or AnchoredBalancedPolicy()
        self.selector = selector or random_selector()

    def compose(
        self, catalog: Sequence[Segment], target_seconds: int
    ) -> ComposedSequence:
        """Compose a sequence approximating *target_seconds*.

        Never raises for an empty catalog or an unreachable target; the
        result may simply be empty. Callers gate on ``is_empty`` before
        saving or starting a practice.

        Args:
            catalog: Segments in catalog order (by name).
            target_seconds: Desired total practice length.

        Returns:
            A ComposedSequence with positions numbered from 1.
        """
        if not catalog or target_seconds < 1:
            logger.debug(
                "Nothing to compose (catalog=%d, target=%ds)",
                len(catalog), target_seconds,
            )
            return ComposedSequence()

        picked = self.policy.select(catalog, target_seconds, self.selector)
        composed = ComposedSequence.from_segments(picked)
        logger.info(
            "Composed %d poses (%ds of %ds target) with %s policy",
            len(composed),
            composed.total_duration_seconds,
            target_seconds,
            self.policy.name,
        )
        return composed

    def compose_for(
        self, catalog: Sequence[Segment], spec: SequenceSpec
    ) -> ComposedSequence:
        """Compose against a SequenceSpec's target duration."""
        return self.compose(catalog, spec.target_duration_seconds)
