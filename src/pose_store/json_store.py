"""JSON-file pose store — catalog provider and sequence persistence.

The whole store is one JSON document::

    {
      "poses":     [ {pose record}, ... ],
      "sequences": { sequence_id: {name, description, target_duration_seconds} },
      "entries":   { entry_id: {sequence_id, pose_id, position,
                                custom_duration_seconds, notes} }
    }

Every mutating call loads the document, validates the whole change,
then replaces the file atomically, so a failed call never leaves a
partial write behind.
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator, Sequence

from pose_store.base import (
    UNSET,
    CatalogProvider,
    PersistenceGateway,
    SequenceRecord,
)
from pose_store.catalog import (
    segment_from_record,
    segment_to_record,
    with_closing_fallback,
)
from pose_store.exceptions import (
    CatalogUnavailableError,
    InvalidSequenceError,
    PersistenceError,
    RecordNotFoundError,
)
from sequence_engine.models.segment import Segment
from sequence_engine.models.sequence import ComposedSequence, Entry, SequenceSpec

logger = logging.getLogger(__name__)

_DEFAULT_STORE_PATH = Path("~/.pose_store.json").expanduser()


def _empty_document() -> dict[str, Any]:
    return {"poses": [], "sequences": {}, "entries": {}}


class JsonPoseStore(CatalogProvider, PersistenceGateway):
    """Pose catalog and sequence storage backed by a single JSON file."""

    def __init__(self, path: Path | str = _DEFAULT_STORE_PATH) -> None:
        self.path = Path(path).expanduser()

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def fetch_segments(self) -> list[Segment]:
        try:
            doc = self._load()
        except PersistenceError as exc:
            raise CatalogUnavailableError(str(exc)) from exc
        segments = sorted(
            (self._to_segment(r) for r in doc["poses"]), key=lambda s: s.name
        )
        role_less = {str(r["id"]) for r in doc["poses"] if not r.get("role")}
        return with_closing_fallback(segments, role_less)

    def seed_catalog(self, segments: Iterable[Segment], replace: bool = False) -> int:
        """Add *segments* to the catalog; returns how many were written.

        Poses whose id is already present are skipped unless *replace*.
        """
        written = 0
        with self._transaction() as doc:
            index = {r["id"]: i for i, r in enumerate(doc["poses"])}
            for seg in segments:
                record = segment_to_record(seg)
                if seg.segment_id in index:
                    if not replace:
                        continue
                    doc["poses"][index[seg.segment_id]] = record
                else:
                    index[seg.segment_id] = len(doc["poses"])
                    doc["poses"].append(record)
                written += 1
        logger.info("Seeded %d poses into %s", written, self.path)
        return written

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    def create_sequence(self, spec: SequenceSpec) -> str:
        if not spec.name.strip():
            raise InvalidSequenceError("Sequence name is required")
        sequence_id = uuid.uuid4().hex
        with self._transaction() as doc:
            doc["sequences"][sequence_id] = {
                "name": spec.name.strip(),
                "description": spec.description,
                "target_duration_seconds": spec.target_duration_seconds,
            }
        logger.info("Created sequence %s (%r)", sequence_id, spec.name)
        return sequence_id

    def attach_entries(self, sequence_id: str, entries: Sequence[Entry]) -> list[str]:
        with self._transaction() as doc:
            self._require_sequence(doc, sequence_id)
            existing = self._entries_of(doc, sequence_id)
            known_poses = {r["id"] for r in doc["poses"]}
            used = {e["pose_id"] for _, e in existing}

            next_position = len(existing) + 1
            new_ids: list[str] = []
            for offset, entry in enumerate(entries):
                pose_id = entry.segment.segment_id
                if pose_id not in known_poses:
                    raise RecordNotFoundError("Pose", pose_id)
                if pose_id in used:
                    raise InvalidSequenceError(
                        f"Pose {pose_id!r} already in sequence {sequence_id}"
                    )
                if entry.position != next_position + offset:
                    raise InvalidSequenceError(
                        f"Entry position {entry.position} breaks the contiguous "
                        f"range; expected {next_position + offset}"
                    )
                _check_override(entry.duration_override)
                used.add(pose_id)
                entry_id = uuid.uuid4().hex
                doc["entries"][entry_id] = {
                    "sequence_id": sequence_id,
                    "pose_id": pose_id,
                    "position": entry.position,
                    "custom_duration_seconds": entry.duration_override,
                    "notes": entry.notes,
                }
                new_ids.append(entry_id)
        logger.info("Attached %d entries to sequence %s", len(new_ids), sequence_id)
        return new_ids

    def add_entry(
        self,
        sequence_id: str,
        segment_id: str,
        duration_override: int | None = None,
        notes: str | None = None,
    ) -> str:
        _check_override(duration_override)
        with self._transaction() as doc:
            self._require_sequence(doc, sequence_id)
            if segment_id not in {r["id"] for r in doc["poses"]}:
                raise RecordNotFoundError("Pose", segment_id)
            existing = self._entries_of(doc, sequence_id)
            if any(e["pose_id"] == segment_id for _, e in existing):
                raise InvalidSequenceError(
                    f"Pose {segment_id!r} already in sequence {sequence_id}"
                )
            entry_id = uuid.uuid4().hex
            doc["entries"][entry_id] = {
                "sequence_id": sequence_id,
                "pose_id": segment_id,
                "position": len(existing) + 1,
                "custom_duration_seconds": duration_override,
                "notes": notes,
            }
        return entry_id

    def read_sequence(self, sequence_id: str) -> tuple[SequenceRecord, ComposedSequence]:
        doc = self._load()
        return self._read(doc, sequence_id)

    def list_sequences(self) -> list[SequenceRecord]:
        doc = self._load()
        records = [self._read(doc, sid)[0] for sid in doc["sequences"]]
        return sorted(records, key=lambda r: r.spec.name)

    def update_entry(
        self,
        entry_id: str,
        *,
        duration_override: int | None | object = UNSET,
        notes: str | None | object = UNSET,
    ) -> None:
        if duration_override is not UNSET:
            _check_override(duration_override)  # type: ignore[arg-type]
        with self._transaction() as doc:
            entry = self._require_entry(doc, entry_id)
            if duration_override is not UNSET:
                entry["custom_duration_seconds"] = duration_override
            if notes is not UNSET:
                entry["notes"] = notes

    def reorder_entries(self, sequence_id: str, entry_ids: Sequence[str]) -> None:
        with self._transaction() as doc:
            self._require_sequence(doc, sequence_id)
            current = {eid for eid, _ in self._entries_of(doc, sequence_id)}
            if len(entry_ids) != len(current) or set(entry_ids) != current:
                raise InvalidSequenceError(
                    "Reorder must list every entry of the sequence exactly once"
                )
            for position, eid in enumerate(entry_ids, start=1):
                doc["entries"][eid]["position"] = position
        logger.info("Reordered %d entries of sequence %s", len(entry_ids), sequence_id)

    def delete_entry(self, entry_id: str) -> None:
        with self._transaction() as doc:
            entry = self._require_entry(doc, entry_id)
            del doc["entries"][entry_id]
            for position, (_, e) in enumerate(
                self._entries_of(doc, entry["sequence_id"]), start=1
            ):
                e["position"] = position

    def update_sequence(
        self,
        sequence_id: str,
        *,
        name: str | object = UNSET,
        description: str | object = UNSET,
        target_duration_seconds: int | object = UNSET,
    ) -> None:
        with self._transaction() as doc:
            record = self._require_sequence(doc, sequence_id)
            updated = dict(record)
            if name is not UNSET:
                updated["name"] = str(name).strip()
            if description is not UNSET:
                updated["description"] = description
            if target_duration_seconds is not UNSET:
                updated["target_duration_seconds"] = target_duration_seconds
            if not updated["name"]:
                raise InvalidSequenceError("Sequence name is required")
            try:
                SequenceSpec(
                    name=updated["name"],
                    target_duration_seconds=int(updated["target_duration_seconds"]),
                    description=updated["description"],
                )
            except (TypeError, ValueError) as exc:
                raise InvalidSequenceError(str(exc)) from exc
            doc["sequences"][sequence_id] = updated

    def delete_sequence(self, sequence_id: str) -> None:
        with self._transaction() as doc:
            self._require_sequence(doc, sequence_id)
            for eid, _ in self._entries_of(doc, sequence_id):
                del doc["entries"][eid]
            del doc["sequences"][sequence_id]
        logger.info("Deleted sequence %s", sequence_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read(self, doc: dict[str, Any], sequence_id: str) -> tuple[SequenceRecord, ComposedSequence]:
        record = self._require_sequence(doc, sequence_id)
        poses = {r["id"]: r for r in doc["poses"]}
        entries: list[Entry] = []
        for eid, e in self._entries_of(doc, sequence_id):
            pose = poses.get(e["pose_id"])
            if pose is None:
                raise PersistenceError(
                    f"Entry {eid} references missing pose {e['pose_id']!r}"
                )
            entries.append(Entry(
                segment=self._to_segment(pose),
                position=e["position"],
                duration_override=e.get("custom_duration_seconds"),
                notes=e.get("notes"),
                entry_id=eid,
            ))
        try:
            composed = ComposedSequence(entries=tuple(entries))
            spec = SequenceSpec(
                name=record["name"],
                target_duration_seconds=int(record["target_duration_seconds"]),
                description=record.get("description") or "",
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Sequence {sequence_id} is corrupt: {exc}") from exc
        return (
            SequenceRecord(
                sequence_id=sequence_id,
                spec=spec,
                entry_count=len(composed),
                total_duration_seconds=composed.total_duration_seconds,
            ),
            composed,
        )

    @staticmethod
    def _to_segment(record: dict[str, Any]) -> Segment:
        try:
            return segment_from_record(record)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise CatalogUnavailableError(
                f"Malformed pose record {record.get('id')!r}: {exc}"
            ) from exc

    @staticmethod
    def _entries_of(doc: dict[str, Any], sequence_id: str) -> list[tuple[str, dict[str, Any]]]:
        """Entries of one sequence as (entry_id, record), ordered by position."""
        found = [
            (eid, e) for eid, e in doc["entries"].items()
            if e["sequence_id"] == sequence_id
        ]
        return sorted(found, key=lambda item: item[1]["position"])

    @staticmethod
    def _require_sequence(doc: dict[str, Any], sequence_id: str) -> dict[str, Any]:
        try:
            return doc["sequences"][sequence_id]
        except KeyError:
            raise RecordNotFoundError("Sequence", sequence_id) from None

    @staticmethod
    def _require_entry(doc: dict[str, Any], entry_id: str) -> dict[str, Any]:
        try:
            return doc["entries"][entry_id]
        except KeyError:
            raise RecordNotFoundError("Entry", entry_id) from None

    @contextmanager
    def _transaction(self) -> Iterator[dict[str, Any]]:
        """Yield the loaded document; write it back only if the block succeeds."""
        doc = self._load()
        yield doc
        self._write(doc)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return _empty_document()
        try:
            with open(self.path, encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read store {self.path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise PersistenceError(f"Store {self.path} is not a JSON object")
        for key, default in _empty_document().items():
            doc.setdefault(key, default)
        return doc

    def _write(self, doc: dict[str, Any]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2)
            os.replace(tmp, self.path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write store {self.path}: {exc}") from exc


def _check_override(seconds: int | None) -> None:
    if seconds is not None and (
        isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 1
    ):
        raise InvalidSequenceError(
            f"Duration override must be a whole number of seconds >= 1, got {seconds!r}"
        )
