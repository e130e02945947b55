"""Utility helpers bridging the Streamlit UI and the sequence engine.

Pure functions for labels, colors, table rows and store location.
"""

from __future__ import annotations

import os
from pathlib import Path

from sequence_engine.formatting import format_clock, format_hold, format_total
from sequence_engine.models.enums import Category, DifficultyLevel, PlaybackStatus
from sequence_engine.models.sequence import ComposedSequence

STORE_PATH = Path(os.environ.get("POSE_STORE_PATH", "~/.pose_store.json")).expanduser()

# ---------------------------------------------------------------------------
# Labels and color maps
# ---------------------------------------------------------------------------

CATEGORY_LABELS: dict[Category, str] = {
    Category.STANDING: "Standing",
    Category.BALANCE: "Balance",
    Category.BACKBEND: "Backbend",
    Category.FORWARD_FOLD: "Forward fold",
    Category.TWIST: "Twist",
    Category.CORE: "Core",
    Category.HIP_OPENER: "Hip opener",
    Category.INVERSION: "Inversion",
    Category.RELAXATION: "Relaxation",
}

CATEGORY_COLORS: dict[Category, str] = {
    Category.STANDING: "#82E0AA",
    Category.BALANCE: "#F9E79F",
    Category.BACKBEND: "#F5B041",
    Category.FORWARD_FOLD: "#AED6F1",
    Category.TWIST: "#D7BDE2",
    Category.CORE: "#E59866",
    Category.HIP_OPENER: "#F1948A",
    Category.INVERSION: "#85C1E9",
    Category.RELAXATION: "#D5DBDB",
}

DIFFICULTY_LABELS: dict[DifficultyLevel, str] = {
    DifficultyLevel.BEGINNER: "Beginner",
    DifficultyLevel.INTERMEDIATE: "Intermediate",
    DifficultyLevel.ADVANCED: "Advanced",
}

STATUS_LABELS: dict[PlaybackStatus, str] = {
    PlaybackStatus.IDLE: "Ready",
    PlaybackStatus.RUNNING: "Holding",
    PlaybackStatus.PAUSED: "Paused",
    PlaybackStatus.COMPLETED: "Complete",
}


def sequence_rows(composed: ComposedSequence) -> list[dict]:
    """Table rows for a composed sequence, one per entry."""
    return [
        {
            "#": e.position,
            "Pose": e.segment.name,
            "Category": CATEGORY_LABELS.get(e.segment.category, e.segment.category.name),
            "Level": DIFFICULTY_LABELS.get(e.segment.difficulty, e.segment.difficulty.name),
            "Hold": format_hold(e.effective_duration),
            "Notes": e.notes or "",
        }
        for e in composed.entries
    ]


def catch_up_ticks(last_tick: float, now: float) -> tuple[int, float]:
    """Whole seconds elapsed since *last_tick*, and the advanced reference.

    The fractional remainder carries over, so a rerun that arrives late
    does not slow the countdown against the wall clock.
    """
    ticks = max(int(now - last_tick), 0)
    return ticks, last_tick + ticks


__all__ = [
    "CATEGORY_COLORS",
    "CATEGORY_LABELS",
    "DIFFICULTY_LABELS",
    "STATUS_LABELS",
    "STORE_PATH",
    "catch_up_ticks",
    "format_clock",
    "format_hold",
    "format_total",
    "sequence_rows",
]
