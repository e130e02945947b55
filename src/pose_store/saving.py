"""Save a freshly composed sequence through a persistence gateway."""

from __future__ import annotations

import logging

from pose_store.base import PersistenceGateway
from pose_store.exceptions import InvalidSequenceError, PoseStoreError
from sequence_engine.models.sequence import ComposedSequence, SequenceSpec

logger = logging.getLogger(__name__)


def save_composed_sequence(
    gateway: PersistenceGateway,
    spec: SequenceSpec,
    composed: ComposedSequence,
) -> str:
    """Create the sequence record and attach its entries.

    Refuses blank names and empty sequences. If attaching the entries
    fails, the just-created sequence record is deleted before the error
    propagates, so no sequence is left without its entries.

    Returns:
        The new sequence id.

    Raises:
        InvalidSequenceError: the name is blank or the sequence is empty.
        PoseStoreError: the gateway failed.
    """
    if not spec.name.strip():
        raise InvalidSequenceError("Sequence name is required")
    if composed.is_empty:
        raise InvalidSequenceError("Add at least one pose before saving")

    sequence_id = gateway.create_sequence(spec)
    try:
        gateway.attach_entries(sequence_id, composed.entries)
    except PoseStoreError:
        logger.warning("Attaching entries to %s failed, removing sequence", sequence_id)
        try:
            gateway.delete_sequence(sequence_id)
        except PoseStoreError:
            logger.exception("Could not remove half-saved sequence %s", sequence_id)
        raise

    logger.info(
        "Saved sequence %s: %d poses, %ds",
        sequence_id, len(composed), composed.total_duration_seconds,
    )
    return sequence_id
