"""Practice CLI — compose, store and play pose sequences from the terminal.

Usage:
    python -m practice_cli.main seed
    python -m practice_cli.main compose --minutes 30 --name "Morning flow"
    python -m practice_cli.main list
    python -m practice_cli.main show <sequence_id>
    python -m practice_cli.main practice <sequence_id>
    python -m practice_cli.main delete <sequence_id>
    python -m practice_cli.main poses
    python -m practice_cli.main add-pose <sequence_id> <pose_id> [--hold 60]
    python -m practice_cli.main remove-pose <sequence_id> <position>
    python -m practice_cli.main set-pose <sequence_id> <position> [--hold 45] [--notes "..."]
    python -m practice_cli.main move <sequence_id> <position> up|down
    python -m practice_cli.main update <sequence_id> [--name ...] [--minutes 45]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from pose_store import (
    DEFAULT_POSES,
    JsonPoseStore,
    PoseStoreError,
    save_composed_sequence,
)
from sequence_engine.composer import SequenceComposer, random_selector
from sequence_engine.formatting import format_clock, format_hold, format_total
from sequence_engine.models.playback import PlaybackState
from sequence_engine.models.sequence import ComposedSequence, SequenceSpec
from sequence_engine.playback import PlaybackController, SchedulerTickSource

from practice_cli.config import (
    COMPOSITION_POLICY,
    LOG_LEVEL,
    POSE_STORE_PATH,
    TICK_INTERVAL_S,
)

logger = logging.getLogger(__name__)

_PRACTICE_HELP = "Commands: p = play/pause, n = next, b = back, j N = jump to pose N, q = quit"


def _print_sequence(composed: ComposedSequence) -> None:
    for entry in composed.entries:
        print(
            f"  {entry.position:>2}. {entry.segment.name:<28} "
            f"{format_hold(entry.effective_duration):>7}  "
            f"[{entry.segment.category.name.lower()}]"
        )
    print(f"  Total: {format_total(composed.total_duration_seconds)}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_seed(store: JsonPoseStore, args: argparse.Namespace) -> int:
    written = store.seed_catalog(DEFAULT_POSES, replace=args.replace)
    print(f"Seeded {written} poses into {store.path}")
    return 0


def cmd_compose(store: JsonPoseStore, args: argparse.Namespace) -> int:
    spec = SequenceSpec(
        name=args.name,
        target_duration_seconds=int(args.minutes * 60),
        description=args.description,
    )
    composer = SequenceComposer(args.policy, random_selector(args.seed))
    composed = composer.compose_for(store.fetch_segments(), spec)
    if composed.is_empty:
        print("No poses fit that duration. Seed the catalog or pick a longer practice.")
        return 1

    _print_sequence(composed)
    if args.dry_run:
        return 0
    sequence_id = save_composed_sequence(store, spec, composed)
    print(f"Saved as {sequence_id}")
    return 0


def cmd_list(store: JsonPoseStore, args: argparse.Namespace) -> int:
    records = store.list_sequences()
    if not records:
        print("No sequences yet.")
        return 0
    for rec in records:
        print(
            f"{rec.sequence_id}  {rec.spec.name:<28} "
            f"{rec.entry_count:>2} poses  {format_total(rec.total_duration_seconds)}"
        )
    return 0


def cmd_show(store: JsonPoseStore, args: argparse.Namespace) -> int:
    record, composed = store.read_sequence(args.sequence_id)
    print(record.spec.name)
    if record.spec.description:
        print(record.spec.description)
    _print_sequence(composed)
    return 0


def cmd_delete(store: JsonPoseStore, args: argparse.Namespace) -> int:
    store.delete_sequence(args.sequence_id)
    print(f"Deleted {args.sequence_id}")
    return 0


def cmd_poses(store: JsonPoseStore, args: argparse.Namespace) -> int:
    for seg in store.fetch_segments():
        print(
            f"{seg.segment_id:<22} {seg.name:<28} "
            f"{format_hold(seg.duration_seconds):>7}  [{seg.category.name.lower()}]"
        )
    return 0


# --- Editing a saved sequence ---


def _entry_id_at(composed: ComposedSequence, position: int) -> str:
    if not 1 <= position <= len(composed):
        raise ValueError(f"Position {position} out of range 1..{len(composed)}")
    return composed[position - 1].entry_id


def cmd_add_pose(store: JsonPoseStore, args: argparse.Namespace) -> int:
    store.add_entry(args.sequence_id, args.pose_id, duration_override=args.hold, notes=args.notes)
    _, composed = store.read_sequence(args.sequence_id)
    _print_sequence(composed)
    return 0


def cmd_remove_pose(store: JsonPoseStore, args: argparse.Namespace) -> int:
    _, composed = store.read_sequence(args.sequence_id)
    store.delete_entry(_entry_id_at(composed, args.position))
    _, composed = store.read_sequence(args.sequence_id)
    _print_sequence(composed)
    return 0


def cmd_set_pose(store: JsonPoseStore, args: argparse.Namespace) -> int:
    _, composed = store.read_sequence(args.sequence_id)
    entry_id = _entry_id_at(composed, args.position)
    changes: dict[str, object] = {}
    if args.default_hold:
        changes["duration_override"] = None
    elif args.hold is not None:
        changes["duration_override"] = args.hold
    if args.clear_notes:
        changes["notes"] = None
    elif args.notes is not None:
        changes["notes"] = args.notes
    if not changes:
        print("Nothing to change.")
        return 1
    store.update_entry(entry_id, **changes)
    _, composed = store.read_sequence(args.sequence_id)
    _print_sequence(composed)
    return 0


def cmd_move(store: JsonPoseStore, args: argparse.Namespace) -> int:
    _, composed = store.read_sequence(args.sequence_id)
    _entry_id_at(composed, args.position)  # range check
    index = args.position - 1
    target = index - 1 if args.direction == "up" else index + 1
    if not 0 <= target < len(composed):
        print(f"Pose {args.position} cannot move {args.direction}.")
        return 1
    ids = [e.entry_id for e in composed.entries]
    ids[index], ids[target] = ids[target], ids[index]
    store.reorder_entries(args.sequence_id, ids)
    _, composed = store.read_sequence(args.sequence_id)
    _print_sequence(composed)
    return 0


def cmd_update(store: JsonPoseStore, args: argparse.Namespace) -> int:
    changes: dict[str, object] = {}
    if args.name is not None:
        changes["name"] = args.name
    if args.description is not None:
        changes["description"] = args.description
    if args.minutes is not None:
        changes["target_duration_seconds"] = int(args.minutes * 60)
    if not changes:
        print("Nothing to change.")
        return 1
    store.update_sequence(args.sequence_id, **changes)
    record, _ = store.read_sequence(args.sequence_id)
    print(f"Updated {record.spec.name} (target {format_total(record.spec.target_duration_seconds)})")
    return 0


def cmd_practice(store: JsonPoseStore, args: argparse.Namespace) -> int:
    record, composed = store.read_sequence(args.sequence_id)
    if composed.is_empty:
        print("This sequence doesn't have any poses yet.")
        return 1

    source = SchedulerTickSource(interval_s=args.interval)
    controller = PlaybackController(composed, tick_source=source)

    def show(state: PlaybackState) -> None:
        entry = composed[state.current_index]
        print(
            f"\r[{state.current_index + 1}/{len(composed)}] {entry.segment.name:<28} "
            f"{format_clock(state.remaining_seconds):>6}  {state.status.name:<9}",
            end="",
            flush=True,
        )

    controller.on_change(show)
    controller.on_complete(
        lambda: print("\nPractice complete! Congratulations on completing your sequence.")
    )

    print(record.spec.name)
    print(_PRACTICE_HELP)
    show(controller.state)

    actions: dict[str, Callable[[], bool]] = {
        "p": controller.toggle,
        "n": controller.advance,
        "b": controller.retreat,
    }
    try:
        while not controller.state.is_completed:
            try:
                words = input().strip().lower().split()
            except EOFError:
                break
            if not words:
                continue
            if words[0] == "q":
                break
            if words[0] == "j" and len(words) == 2 and words[1].isdigit():
                controller.jump(int(words[1]) - 1)
            elif words[0] in actions:
                actions[words[0]]()
            else:
                print(_PRACTICE_HELP)
    finally:
        controller.close()
        source.shutdown()
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compose and practise pose sequences")
    parser.add_argument("--store", default=str(POSE_STORE_PATH), help="JSON store file")
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Write the starter pose catalog")
    seed.add_argument("--replace", action="store_true", help="Overwrite poses with the same id")
    seed.set_defaults(func=cmd_seed)

    compose = sub.add_parser("compose", help="Compose and save a sequence")
    compose.add_argument("--minutes", type=float, required=True)
    compose.add_argument("--name", required=True)
    compose.add_argument("--description", default="")
    compose.add_argument("--policy", default=COMPOSITION_POLICY, choices=("anchored", "stochastic"))
    compose.add_argument("--seed", type=int, default=None, help="Random seed for reproducible picks")
    compose.add_argument("--dry-run", action="store_true", help="Print without saving")
    compose.set_defaults(func=cmd_compose)

    lst = sub.add_parser("list", help="List saved sequences")
    lst.set_defaults(func=cmd_list)

    show = sub.add_parser("show", help="Print a saved sequence")
    show.add_argument("sequence_id")
    show.set_defaults(func=cmd_show)

    practice = sub.add_parser("practice", help="Practise a saved sequence")
    practice.add_argument("sequence_id")
    practice.add_argument("--interval", type=float, default=TICK_INTERVAL_S, help=argparse.SUPPRESS)
    practice.set_defaults(func=cmd_practice)

    delete = sub.add_parser("delete", help="Delete a saved sequence")
    delete.add_argument("sequence_id")
    delete.set_defaults(func=cmd_delete)

    poses = sub.add_parser("poses", help="List the pose catalog")
    poses.set_defaults(func=cmd_poses)

    add_pose = sub.add_parser("add-pose", help="Append a catalog pose to a sequence")
    add_pose.add_argument("sequence_id")
    add_pose.add_argument("pose_id")
    add_pose.add_argument("--hold", type=int, default=None, help="Hold in seconds")
    add_pose.add_argument("--notes", default=None)
    add_pose.set_defaults(func=cmd_add_pose)

    remove_pose = sub.add_parser("remove-pose", help="Remove the pose at a position")
    remove_pose.add_argument("sequence_id")
    remove_pose.add_argument("position", type=int)
    remove_pose.set_defaults(func=cmd_remove_pose)

    set_pose = sub.add_parser("set-pose", help="Change a pose's hold or notes")
    set_pose.add_argument("sequence_id")
    set_pose.add_argument("position", type=int)
    hold = set_pose.add_mutually_exclusive_group()
    hold.add_argument("--hold", type=int, default=None, help="Hold in seconds")
    hold.add_argument("--default-hold", action="store_true", help="Use the pose's default hold")
    notes = set_pose.add_mutually_exclusive_group()
    notes.add_argument("--notes", default=None)
    notes.add_argument("--clear-notes", action="store_true")
    set_pose.set_defaults(func=cmd_set_pose)

    move = sub.add_parser("move", help="Move a pose one place up or down")
    move.add_argument("sequence_id")
    move.add_argument("position", type=int)
    move.add_argument("direction", choices=("up", "down"))
    move.set_defaults(func=cmd_move)

    update = sub.add_parser("update", help="Rename or retarget a sequence")
    update.add_argument("sequence_id")
    update.add_argument("--name", default=None)
    update.add_argument("--description", default=None)
    update.add_argument("--minutes", type=float, default=None)
    update.set_defaults(func=cmd_update)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    store = JsonPoseStore(args.store)
    try:
        return args.func(store, args)
    except PoseStoreError as exc:
        logger.error("%s", exc)
        return 2
    except ValueError as exc:
        logger.error("Invalid input: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
