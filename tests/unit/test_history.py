"""Tests for snapshot history."""

import pytest
from hypothesis import given, settings, strategies as st

from screenforge.editor import mutations
from screenforge.editor.history import HistoryManager, HistoryState
from screenforge.editor.models import Document, Screen
from screenforge.editor.session import EditorSession
from screenforge.editor.tree import iter_document_nodes


def _document(name: str = "Home") -> Document:
    return Document(screens=[Screen(id="scr_1", name=name, is_home=True)])


@pytest.mark.unit
class TestHistoryManager:
    """Test the raw stacks."""

    def test_empty_stacks_are_noops(self):
        history = HistoryManager()
        assert history.undo(_document()) is None
        assert history.redo(_document()) is None

    def test_undo_redo_round_trip(self):
        history = HistoryManager()
        before = _document("Before")
        after = _document("After")

        history.record(before)
        restored = history.undo(after)
        assert restored == before
        assert history.can_redo

        again = history.redo(restored)
        assert again == after
        assert history.depth == (1, 0)

    def test_record_clears_future(self):
        history = HistoryManager()
        history.record(_document("a"))
        history.undo(_document("b"))
        history.record(_document("c"))
        assert not history.can_redo

    def test_bounded(self):
        history = HistoryManager(limit=3)
        for i in range(10):
            history.record(_document(f"v{i}"))
        assert history.depth == (3, 0)
        names = []
        current = _document("now")
        while history.can_undo:
            current = history.undo(current)
            names.append(current.screens[0].name)
        assert names == ["v9", "v8", "v7"]

    def test_snapshots_are_independent(self):
        history = HistoryManager()
        document = _document()
        history.record(document)
        document.screens[0].name = "Mutated"
        assert history.undo(document).screens[0].name == "Home"

    def test_mutating_state(self):
        history = HistoryManager()
        with history.mutating():
            assert history.state is HistoryState.MUTATING
            with history.mutating():
                assert history.state is HistoryState.MUTATING
        assert history.state is HistoryState.IDLE

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            HistoryManager(limit=0)


@pytest.mark.unit
class TestSessionHistory:
    """Test history through the session."""

    def test_scenario_add_update_undo(self, session):
        node_id = session.add_node("button", {"text": "Join"})
        session.update_node_props(node_id, {"backgroundColor": "#3b82f6"})

        assert session.undo()

        node = session.document.screens[0].components[0]
        assert node.id == node_id
        assert node.props["text"] == "Join"
        assert node.props["backgroundColor"] == "#2563EB"

    def test_undo_clears_selection(self, session):
        node_id = session.add_node("text")
        assert session.selected_id == node_id
        session.undo()
        assert session.selected_id is None
        assert session.document.screens[0].components == []

    def test_noop_edit_records_nothing(self, session):
        assert not session.update_node_props("cmp_missing", {"text": "x"})
        assert not session.can_undo

    def test_failed_transaction_restores(self, session):
        session.add_node("text")
        before = session.document.snapshot()
        with pytest.raises(RuntimeError):
            with session.transaction() as document:
                mutations.add_node(document, "scr_home", "button")
                raise RuntimeError("boom")
        assert session.document == before
        assert session.history.depth == (1, 0)

    def test_redo_after_undo(self, session):
        node_id = session.add_node("text")
        session.undo()
        assert session.redo()
        assert session.document.screens[0].components[0].id == node_id
        assert not session.redo()


_edit = st.one_of(
    st.tuples(st.just("add"), st.sampled_from(["text", "button", "hero", "container", "spacer"])),
    st.tuples(st.just("update"), st.text(min_size=1, max_size=10)),
    st.tuples(st.just("delete"), st.integers(min_value=0, max_value=20)),
)


@pytest.mark.unit
@settings(max_examples=40, deadline=None)
@given(edits=st.lists(_edit, min_size=1, max_size=12))
def test_undo_all_then_redo_all_round_trips(edits):
    session = EditorSession(document=_document())
    states = [session.document.snapshot()]

    for action, arg in edits:
        nodes = [node for _, node in iter_document_nodes(session.document)]
        if action == "add":
            session.add_node(arg)
        elif action == "update" and nodes:
            session.update_node_props(nodes[0].id, {"text": arg})
        elif action == "delete" and nodes:
            session.delete_node(nodes[arg % len(nodes)].id)
        if session.document != states[-1]:
            states.append(session.document.snapshot())

    final = session.document.snapshot()
    while session.undo():
        pass
    assert session.document == states[0]

    while session.redo():
        pass
    assert session.document == final

    ids = [node.id for _, node in iter_document_nodes(session.document)]
    assert len(ids) == len(set(ids))
