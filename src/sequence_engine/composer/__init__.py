"""Sequence composer — selects and orders poses to fit a target duration."""

from sequence_engine.composer.composer import SequenceComposer
from sequence_engine.composer.selection import Selector, first_selector, random_selector
from sequence_engine.composer.strategies import (
    AnchoredBalancedPolicy,
    CompositionPolicy,
    StochasticFillPolicy,
    get_policy,
)

__all__ = [
    "AnchoredBalancedPolicy",
    "CompositionPolicy",
    "Selector",
    "SequenceComposer",
    "StochasticFillPolicy",
    "first_selector",
    "get_policy",
    "random_selector",
]
