"""Pose Flow — Streamlit practice dashboard.

Run with:
    streamlit run streamlit_app/app.py

Set POSE_STORE_PATH to choose the JSON store file.
"""

from __future__ import annotations

import time

import streamlit as st

from pose_store import (
    DEFAULT_POSES,
    JsonPoseStore,
    PoseStoreError,
    SequenceRecord,
    save_composed_sequence,
)
from sequence_engine.composer import SequenceComposer
from sequence_engine.models.enums import PlaybackStatus
from sequence_engine.models.sequence import ComposedSequence, SequenceSpec
from sequence_engine.playback import ManualTickSource, PlaybackController

from helpers import (
    CATEGORY_COLORS,
    CATEGORY_LABELS,
    DIFFICULTY_LABELS,
    STATUS_LABELS,
    STORE_PATH,
    catch_up_ticks,
    format_clock,
    format_hold,
    format_total,
    sequence_rows,
)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Pose Flow",
    page_icon="🧘",
    layout="wide",
)


# ---------------------------------------------------------------------------
# Cached store
# ---------------------------------------------------------------------------


@st.cache_resource
def get_store() -> JsonPoseStore:
    store = JsonPoseStore(STORE_PATH)
    if not store.fetch_segments():
        store.seed_catalog(DEFAULT_POSES)
    return store


def _bump_widget_version() -> None:
    """Force Streamlit to recreate draft-entry widgets after the draft changes."""
    st.session_state["_wv"] = st.session_state.get("_wv", 0) + 1


# ---------------------------------------------------------------------------
# Practice session lifecycle
# ---------------------------------------------------------------------------


def _open_practice(sequence_id: str) -> None:
    """Load a sequence into a fresh playback session, closing any previous one."""
    _close_practice()
    _, composed = get_store().read_sequence(sequence_id)
    source = ManualTickSource()
    controller = PlaybackController(composed, tick_source=source)
    controller.on_complete(lambda: st.session_state.update(practice_done=True))
    st.session_state["practice"] = {
        "sequence_id": sequence_id,
        "controller": controller,
        "source": source,
        "last_tick": time.monotonic(),
    }
    st.session_state["practice_done"] = False


def _close_practice() -> None:
    session = st.session_state.pop("practice", None)
    if session is not None:
        session["controller"].close()


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _render_draft(draft: ComposedSequence) -> None:
    """Editable list of composed entries: hold override, notes, remove."""
    v = st.session_state.get("_wv", 0)
    for entry in draft.entries:
        seg = entry.segment
        color = CATEGORY_COLORS.get(seg.category, "#CCCCCC")
        cols = st.columns([4, 2, 4, 1])
        cols[0].markdown(
            f'<div style="background:{color};padding:6px 12px;border-radius:4px;">'
            f"<strong>{entry.position}. {seg.name}</strong> "
            f"<small>{CATEGORY_LABELS.get(seg.category, '')} · "
            f"{DIFFICULTY_LABELS.get(seg.difficulty, '')}</small></div>",
            unsafe_allow_html=True,
        )
        hold = cols[1].number_input(
            "Hold (s)",
            min_value=1,
            value=entry.effective_duration,
            key=f"hold_{seg.segment_id}_{v}",
            label_visibility="collapsed",
        )
        notes = cols[2].text_input(
            "Notes",
            value=entry.notes or "",
            placeholder="Personal notes",
            key=f"notes_{seg.segment_id}_{v}",
            label_visibility="collapsed",
        )
        if cols[3].button("✕", key=f"remove_{seg.segment_id}_{v}"):
            st.session_state["draft"] = draft.removed(entry.position)
            _bump_widget_version()
            st.rerun()

        override = int(hold) if int(hold) != seg.duration_seconds else None
        if override != entry.duration_override or (notes or None) != entry.notes:
            draft = draft.with_override(entry.position, override)
            draft = draft.with_notes(entry.position, notes or None)
            st.session_state["draft"] = draft


def _render_compose_tab() -> None:
    store = get_store()
    left, right = st.columns([1, 2])

    with left:
        st.subheader("Sequence settings")
        name = st.text_input("Name", key="draft_name")
        description = st.text_area("Description", key="draft_description")
        minutes = st.slider("Target length (minutes)", 5, 120, 60, step=5)
        policy = st.selectbox(
            "Composition",
            ("anchored", "stochastic"),
            format_func=lambda p: {"anchored": "Balanced", "stochastic": "Random fill"}[p],
        )
        if st.button("Generate sequence", type="primary"):
            try:
                catalog = store.fetch_segments()
            except PoseStoreError as e:
                st.error(f"Error loading poses: {e}")
            else:
                st.session_state["draft"] = SequenceComposer(policy).compose(
                    catalog, minutes * 60,
                )
                _bump_widget_version()

    with right:
        draft: ComposedSequence | None = st.session_state.get("draft")
        if draft is None:
            st.info("Choose a length and generate a sequence.")
            return
        if draft.is_empty:
            st.warning("No poses fit that length. Try a longer practice.")
            return

        st.subheader(f"Your sequence — {format_total(draft.total_duration_seconds)}")
        _render_draft(draft)

        if st.button("Save sequence"):
            draft = st.session_state["draft"]
            try:
                spec = SequenceSpec(
                    name=name,
                    target_duration_seconds=minutes * 60,
                    description=description,
                )
                sequence_id = save_composed_sequence(store, spec, draft)
            except (PoseStoreError, ValueError) as e:
                st.error(f"Error saving sequence: {e}")
            else:
                st.success("Sequence saved!")
                st.session_state.pop("draft", None)
                st.session_state["library_selected"] = sequence_id


def _store_call(action: str, fn, *args, **kwargs) -> bool:
    """Run a store mutation, reporting failures inline. Returns True on success."""
    try:
        fn(*args, **kwargs)
    except PoseStoreError as e:
        st.error(f"Error {action}: {e}")
        return False
    return True


def _render_editor(store: JsonPoseStore, rec: SequenceRecord, composed: ComposedSequence) -> None:
    """Edit a saved sequence: metadata, per-pose hold/notes, order, add/remove."""
    sid = rec.sequence_id

    with st.form(key=f"meta_{sid}"):
        name = st.text_input("Name", value=rec.spec.name)
        description = st.text_area("Description", value=rec.spec.description)
        minutes = st.number_input(
            "Target length (minutes)",
            min_value=1,
            value=max(rec.spec.target_duration_seconds // 60, 1),
        )
        if st.form_submit_button("Save details") and _store_call(
            "updating sequence",
            store.update_sequence,
            sid,
            name=name,
            description=description,
            target_duration_seconds=int(minutes) * 60,
        ):
            st.rerun()

    ids = [e.entry_id for e in composed.entries]
    for i, entry in enumerate(composed.entries):
        seg = entry.segment
        cols = st.columns([4, 2, 4, 1, 1, 1])
        cols[0].markdown(f"**{entry.position}. {seg.name}**")
        hold = cols[1].number_input(
            "Hold (s)",
            min_value=1,
            value=entry.effective_duration,
            key=f"ehold_{entry.entry_id}",
            label_visibility="collapsed",
        )
        notes = cols[2].text_input(
            "Notes",
            value=entry.notes or "",
            key=f"enotes_{entry.entry_id}",
            label_visibility="collapsed",
        )
        override = int(hold) if int(hold) != seg.duration_seconds else None
        if (override != entry.duration_override or (notes or None) != entry.notes) and _store_call(
            "updating pose",
            store.update_entry,
            entry.entry_id,
            duration_override=override,
            notes=notes or None,
        ):
            st.rerun()

        if cols[3].button("↑", key=f"up_{entry.entry_id}", disabled=i == 0):
            ids[i - 1], ids[i] = ids[i], ids[i - 1]
            if _store_call("reordering poses", store.reorder_entries, sid, ids):
                st.rerun()
        if cols[4].button("↓", key=f"down_{entry.entry_id}", disabled=i == len(ids) - 1):
            ids[i], ids[i + 1] = ids[i + 1], ids[i]
            if _store_call("reordering poses", store.reorder_entries, sid, ids):
                st.rerun()
        if cols[5].button("✕", key=f"del_{entry.entry_id}"):
            if _store_call("removing pose", store.delete_entry, entry.entry_id):
                st.rerun()

    try:
        catalog = store.fetch_segments()
    except PoseStoreError as e:
        st.error(f"Error loading poses: {e}")
        return
    available = [s for s in catalog if s.segment_id not in composed.segment_ids]
    if not available:
        return
    c1, c2 = st.columns([4, 1])
    choice = c1.selectbox(
        "Add pose",
        available,
        format_func=lambda s: f"{s.name} ({format_hold(s.duration_seconds)})",
        key=f"add_choice_{sid}",
    )
    if c2.button("Add", key=f"add_{sid}") and _store_call(
        "adding pose", store.add_entry, sid, choice.segment_id,
    ):
        st.rerun()


def _render_library_tab() -> None:
    store = get_store()
    try:
        records = store.list_sequences()
    except PoseStoreError as e:
        st.error(f"Error loading sequences: {e}")
        return

    if not records:
        st.info("No saved sequences yet.")
        return

    for rec in records:
        label = f"{rec.spec.name} — {rec.entry_count} poses, {format_total(rec.total_duration_seconds)}"
        with st.expander(label, expanded=rec.sequence_id == st.session_state.get("library_selected")):
            if rec.spec.description:
                st.caption(rec.spec.description)
            _, composed = store.read_sequence(rec.sequence_id)
            st.dataframe(sequence_rows(composed), hide_index=True, use_container_width=True)
            c1, c2, c3 = st.columns(3)
            if c1.button("Practice", key=f"practice_{rec.sequence_id}", disabled=composed.is_empty):
                _open_practice(rec.sequence_id)
                st.success("Loaded — open the Practice tab.")
            if c2.button("Delete", key=f"delete_{rec.sequence_id}"):
                try:
                    store.delete_sequence(rec.sequence_id)
                except PoseStoreError as e:
                    st.error(f"Error deleting sequence: {e}")
                else:
                    session = st.session_state.get("practice")
                    if session and session["sequence_id"] == rec.sequence_id:
                        _close_practice()
                    st.rerun()
            editing = st.session_state.get("editing") == rec.sequence_id
            if c3.button("Done editing" if editing else "Edit", key=f"edit_{rec.sequence_id}"):
                st.session_state["editing"] = None if editing else rec.sequence_id
                st.rerun()
            if editing:
                _render_editor(store, rec, composed)


@st.fragment(run_every=1)
def _render_practice() -> None:
    session = st.session_state.get("practice")
    if session is None:
        st.info("Pick a sequence from the Library to start practising.")
        return

    controller: PlaybackController = session["controller"]
    source: ManualTickSource = session["source"]
    if controller.is_empty:
        st.warning("This sequence doesn't have any poses yet.")
        return

    # One tick per whole elapsed second; the fractional remainder carries over
    ticks, session["last_tick"] = catch_up_ticks(session["last_tick"], time.monotonic())
    if ticks:
        source.fire(ticks)

    entry = controller.current_entry
    seg = entry.segment
    st.markdown(f"### Pose {controller.current_index + 1} of {len(controller.sequence)}")
    st.markdown(f"# {seg.name}")
    st.markdown(
        f"<div style='font-size:3em;font-weight:bold;'>{format_clock(controller.remaining_seconds)}</div>",
        unsafe_allow_html=True,
    )
    st.caption(
        f"{CATEGORY_LABELS.get(seg.category, '')} · {DIFFICULTY_LABELS.get(seg.difficulty, '')} · "
        f"{STATUS_LABELS[controller.status]}"
    )
    st.progress(controller.progress)

    done = controller.status == PlaybackStatus.COMPLETED
    c1, c2, c3 = st.columns(3)
    if c1.button("⏮ Back", disabled=controller.current_index == 0 or done):
        controller.retreat()
        st.rerun(scope="fragment")
    play_label = "⏸ Pause" if controller.state.is_running else "▶ Play"
    if c2.button(play_label, type="primary", disabled=done):
        controller.toggle()
        st.rerun(scope="fragment")
    if c3.button("⏭ Next", disabled=controller.is_last or done):
        controller.advance()
        st.rerun(scope="fragment")

    if st.session_state.get("practice_done"):
        st.success("Practice complete! Congratulations on completing your sequence.")

    for title, text in (
        ("Description", seg.description),
        ("Instructions", seg.instructions),
        ("Benefits", seg.benefits),
        ("Precautions", seg.precautions),
        ("Personal notes", entry.notes),
    ):
        if text:
            st.markdown(f"**{title}**  \n{text}")

    st.divider()
    st.markdown("**Sequence overview**")
    cols = st.columns(min(len(controller.sequence), 6))
    for i, e in enumerate(controller.sequence.entries):
        col = cols[i % len(cols)]
        marker = "▶ " if i == controller.current_index else ""
        if col.button(
            f"{marker}{e.position}. {e.segment.name} ({format_hold(e.effective_duration)})",
            key=f"jump_{i}",
            disabled=done,
        ):
            controller.jump(i)
            st.rerun(scope="fragment")


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

st.title("Pose Flow")

tab_compose, tab_library, tab_practice = st.tabs(["Compose", "Library", "Practice"])

with tab_compose:
    _render_compose_tab()

with tab_library:
    _render_library_tab()

with tab_practice:
    _render_practice()
