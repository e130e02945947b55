"""Shared test fixtures: pose catalogs and temporary stores."""

from __future__ import annotations

import pytest

from pose_store.json_store import JsonPoseStore
from sequence_engine.models.enums import AnchorRole, Category, DifficultyLevel
from sequence_engine.models.segment import Segment


def make_segment(
    segment_id: str,
    duration: int = 60,
    category: Category = Category.STANDING,
    difficulty: DifficultyLevel = DifficultyLevel.INTERMEDIATE,
    role: AnchorRole = AnchorRole.NONE,
    name: str | None = None,
) -> Segment:
    return Segment(
        segment_id=segment_id,
        name=name or segment_id.replace("-", " ").title(),
        category=category,
        difficulty=difficulty,
        duration_seconds=duration,
        role=role,
    )


@pytest.fixture
def mountain() -> Segment:
    return make_segment(
        "mountain", 30, Category.STANDING, DifficultyLevel.BEGINNER,
        role=AnchorRole.OPENING, name="Mountain",
    )


@pytest.fixture
def savasana() -> Segment:
    return make_segment(
        "savasana", 300, Category.RELAXATION, DifficultyLevel.BEGINNER,
        role=AnchorRole.CLOSING, name="Savasana",
    )


@pytest.fixture
def full_catalog(mountain: Segment, savasana: Segment) -> list[Segment]:
    """A catalog covering every main category, ordered by name."""
    catalog = [
        make_segment("boat", 30, Category.CORE, DifficultyLevel.INTERMEDIATE, name="Boat"),
        make_segment("bridge", 45, Category.BACKBEND, DifficultyLevel.INTERMEDIATE, name="Bridge"),
        make_segment("cat-cow", 60, Category.CORE, DifficultyLevel.BEGINNER, name="Cat-Cow"),
        make_segment("cobra", 30, Category.BACKBEND, DifficultyLevel.BEGINNER, name="Cobra"),
        make_segment("eagle", 30, Category.BALANCE, DifficultyLevel.INTERMEDIATE, name="Eagle"),
        make_segment("forward-fold", 45, Category.FORWARD_FOLD, DifficultyLevel.BEGINNER, name="Forward Fold"),
        make_segment("happy-baby", 60, Category.RELAXATION, DifficultyLevel.BEGINNER, name="Happy Baby"),
        mountain,
        make_segment("pigeon", 60, Category.HIP_OPENER, DifficultyLevel.INTERMEDIATE, name="Pigeon"),
        savasana,
        make_segment("seated-twist", 45, Category.TWIST, DifficultyLevel.INTERMEDIATE, name="Seated Twist"),
        make_segment("tree", 45, Category.BALANCE, DifficultyLevel.INTERMEDIATE, name="Tree"),
        make_segment("warrior-2", 45, Category.STANDING, DifficultyLevel.INTERMEDIATE, name="Warrior II"),
    ]
    return sorted(catalog, key=lambda s: s.name)


@pytest.fixture
def store(tmp_path) -> JsonPoseStore:
    return JsonPoseStore(tmp_path / "store.json")


@pytest.fixture
def seeded_store(store: JsonPoseStore, full_catalog: list[Segment]) -> JsonPoseStore:
    store.seed_catalog(full_catalog)
    return store
