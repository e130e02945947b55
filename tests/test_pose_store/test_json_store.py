"""Tests for JsonPoseStore — catalog reads and sequence CRUD against a temp file."""

from __future__ import annotations

import json

import pytest

from pose_store.exceptions import (
    CatalogUnavailableError,
    InvalidSequenceError,
    PersistenceError,
    RecordNotFoundError,
)
from pose_store.json_store import JsonPoseStore
from sequence_engine.models.enums import AnchorRole
from sequence_engine.models.sequence import ComposedSequence, SequenceSpec


def _spec(name: str = "Morning Flow", target: int = 900) -> SequenceSpec:
    return SequenceSpec(name=name, target_duration_seconds=target, description="Gentle start")


def _saved(store: JsonPoseStore, catalog, ids=("mountain", "tree", "savasana"), overrides=None) -> str:
    by_id = {s.segment_id: s for s in catalog}
    composed = ComposedSequence.from_segments([by_id[i] for i in ids], overrides=overrides)
    sequence_id = store.create_sequence(_spec())
    store.attach_entries(sequence_id, composed.entries)
    return sequence_id


class TestCatalog:
    def test_missing_file_is_empty_catalog(self, store) -> None:
        assert store.fetch_segments() == []
        assert not store.path.exists()

    def test_seeded_catalog_sorted_by_name(self, seeded_store, full_catalog) -> None:
        segments = seeded_store.fetch_segments()
        assert [s.name for s in segments] == sorted(s.name for s in full_catalog)
        assert segments == full_catalog

    def test_seed_skips_existing_unless_replace(self, seeded_store, full_catalog) -> None:
        assert seeded_store.seed_catalog(full_catalog) == 0
        assert seeded_store.seed_catalog(full_catalog, replace=True) == len(full_catalog)
        assert len(seeded_store.fetch_segments()) == len(full_catalog)

    def test_anchor_roles_survive_storage(self, seeded_store) -> None:
        by_id = {s.segment_id: s for s in seeded_store.fetch_segments()}
        assert by_id["mountain"].role == AnchorRole.OPENING
        assert by_id["savasana"].role == AnchorRole.CLOSING
        assert by_id["tree"].role == AnchorRole.NONE

    def test_corrupt_file_raises_catalog_unavailable(self, store) -> None:
        store.path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogUnavailableError):
            store.fetch_segments()

    def test_malformed_pose_raises_catalog_unavailable(self, store) -> None:
        store.path.write_text(
            json.dumps({"poses": [{"id": "x", "name": "X", "category": "nope"}]}),
            encoding="utf-8",
        )
        with pytest.raises(CatalogUnavailableError, match="Malformed pose"):
            store.fetch_segments()


class TestCreateAndRead:
    def test_round_trip(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog, overrides={"tree": 90})
        record, composed = seeded_store.read_sequence(sequence_id)

        assert record.spec == _spec()
        assert record.entry_count == 3
        assert composed.segment_ids == ("mountain", "tree", "savasana")
        assert [e.position for e in composed.entries] == [1, 2, 3]
        assert composed[1].effective_duration == 90
        assert record.total_duration_seconds == 30 + 90 + 300
        assert all(e.entry_id for e in composed.entries)

    def test_blank_name_rejected(self, store) -> None:
        with pytest.raises(InvalidSequenceError, match="name is required"):
            store.create_sequence(_spec(name="   "))

    def test_read_unknown_sequence(self, store) -> None:
        with pytest.raises(RecordNotFoundError, match="Sequence 'nope' not found"):
            store.read_sequence("nope")

    def test_list_sorted_by_name(self, seeded_store) -> None:
        seeded_store.create_sequence(_spec(name="Zen"))
        seeded_store.create_sequence(_spec(name="Awake"))
        assert [r.spec.name for r in seeded_store.list_sequences()] == ["Awake", "Zen"]


class TestAttachEntries:
    def test_unknown_pose_rejected_and_nothing_written(self, store, full_catalog) -> None:
        store.seed_catalog([s for s in full_catalog if s.segment_id != "tree"])
        sequence_id = store.create_sequence(_spec())
        composed = ComposedSequence.from_segments(
            [s for s in full_catalog if s.segment_id in ("mountain", "tree")]
        )
        with pytest.raises(RecordNotFoundError, match="Pose 'tree'"):
            store.attach_entries(sequence_id, composed.entries)
        _, stored = store.read_sequence(sequence_id)
        assert stored.is_empty

    def test_duplicate_across_calls_rejected(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog, ids=("tree",))
        again = ComposedSequence.from_segments(
            [s for s in full_catalog if s.segment_id == "tree"]
        )
        with pytest.raises(InvalidSequenceError, match="already in sequence"):
            seeded_store.attach_entries(sequence_id, again.entries)

    def test_position_gap_rejected(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog, ids=("tree",))
        fresh = ComposedSequence.from_segments(
            [s for s in full_catalog if s.segment_id == "eagle"]
        )
        # position 1 is taken; the next attach must start at 2
        with pytest.raises(InvalidSequenceError, match="contiguous"):
            seeded_store.attach_entries(sequence_id, fresh.entries)

    def test_unknown_sequence(self, seeded_store, full_catalog) -> None:
        composed = ComposedSequence.from_segments(full_catalog[:1])
        with pytest.raises(RecordNotFoundError):
            seeded_store.attach_entries("missing", composed.entries)


class TestEditing:
    def test_add_entry_appends(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        seeded_store.add_entry(sequence_id, "eagle", duration_override=40, notes="Wobble ok")
        _, composed = seeded_store.read_sequence(sequence_id)
        assert composed.segment_ids[-1] == "eagle"
        assert composed[3].position == 4
        assert composed[3].effective_duration == 40
        assert composed[3].notes == "Wobble ok"

    def test_add_entry_duplicate_rejected(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        with pytest.raises(InvalidSequenceError):
            seeded_store.add_entry(sequence_id, "tree")

    def test_update_entry_partial(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        _, composed = seeded_store.read_sequence(sequence_id)
        entry_id = composed[1].entry_id

        seeded_store.update_entry(entry_id, notes="Switch sides")
        seeded_store.update_entry(entry_id, duration_override=75)
        _, composed = seeded_store.read_sequence(sequence_id)
        assert composed[1].notes == "Switch sides"
        assert composed[1].effective_duration == 75

        seeded_store.update_entry(entry_id, duration_override=None)
        _, composed = seeded_store.read_sequence(sequence_id)
        assert composed[1].effective_duration == 45
        assert composed[1].notes == "Switch sides"

    def test_update_entry_rejects_bad_override(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        _, composed = seeded_store.read_sequence(sequence_id)
        with pytest.raises(InvalidSequenceError, match=">= 1"):
            seeded_store.update_entry(composed[0].entry_id, duration_override=0)

    def test_boolean_override_rejected(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        _, composed = seeded_store.read_sequence(sequence_id)
        with pytest.raises(InvalidSequenceError):
            seeded_store.update_entry(composed[0].entry_id, duration_override=True)
        with pytest.raises(InvalidSequenceError):
            seeded_store.add_entry(sequence_id, "eagle", duration_override=True)

    def test_update_unknown_entry(self, store) -> None:
        with pytest.raises(RecordNotFoundError, match="Entry"):
            store.update_entry("nope", notes="x")

    def test_reorder(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        _, composed = seeded_store.read_sequence(sequence_id)
        ids = [e.entry_id for e in composed.entries]
        seeded_store.reorder_entries(sequence_id, [ids[2], ids[0], ids[1]])
        _, composed = seeded_store.read_sequence(sequence_id)
        assert composed.segment_ids == ("savasana", "mountain", "tree")

    def test_reorder_requires_every_entry(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        _, composed = seeded_store.read_sequence(sequence_id)
        with pytest.raises(InvalidSequenceError, match="exactly once"):
            seeded_store.reorder_entries(sequence_id, [composed[0].entry_id])

    def test_delete_entry_renumbers(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        _, composed = seeded_store.read_sequence(sequence_id)
        seeded_store.delete_entry(composed[0].entry_id)
        _, composed = seeded_store.read_sequence(sequence_id)
        assert composed.segment_ids == ("tree", "savasana")
        assert [e.position for e in composed.entries] == [1, 2]

    def test_update_sequence(self, seeded_store) -> None:
        sequence_id = seeded_store.create_sequence(_spec())
        seeded_store.update_sequence(sequence_id, name="Evening Flow", target_duration_seconds=1200)
        record, _ = seeded_store.read_sequence(sequence_id)
        assert record.spec.name == "Evening Flow"
        assert record.spec.target_duration_seconds == 1200
        assert record.spec.description == "Gentle start"

    def test_update_sequence_validates(self, seeded_store) -> None:
        sequence_id = seeded_store.create_sequence(_spec())
        with pytest.raises(InvalidSequenceError):
            seeded_store.update_sequence(sequence_id, name="")
        with pytest.raises(InvalidSequenceError):
            seeded_store.update_sequence(sequence_id, target_duration_seconds=0)
        record, _ = seeded_store.read_sequence(sequence_id)
        assert record.spec == _spec()

    def test_delete_sequence_removes_entries(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        seeded_store.delete_sequence(sequence_id)
        assert seeded_store.list_sequences() == []
        doc = json.loads(seeded_store.path.read_text(encoding="utf-8"))
        assert doc["entries"] == {}
        with pytest.raises(RecordNotFoundError):
            seeded_store.delete_sequence(sequence_id)


class TestStorageFailures:
    def test_dangling_pose_reference(self, seeded_store, full_catalog) -> None:
        sequence_id = _saved(seeded_store, full_catalog)
        doc = json.loads(seeded_store.path.read_text(encoding="utf-8"))
        doc["poses"] = [p for p in doc["poses"] if p["id"] != "tree"]
        seeded_store.path.write_text(json.dumps(doc), encoding="utf-8")
        with pytest.raises(PersistenceError, match="missing pose"):
            seeded_store.read_sequence(sequence_id)

    def test_non_object_document(self, store) -> None:
        store.path.write_text("[]", encoding="utf-8")
        with pytest.raises(PersistenceError, match="not a JSON object"):
            store.list_sequences()

    def test_no_temp_file_left_behind(self, seeded_store) -> None:
        seeded_store.create_sequence(_spec())
        assert not seeded_store.path.with_name(seeded_store.path.name + ".tmp").exists()
