"""Tests for the editing session."""

import pytest

from screenforge.core.errors import ConstraintViolation, DocumentValidationError
from screenforge.editor.models import Document, Screen
from screenforge.editor.session import EditorSession
from screenforge.editor.tree import document_node_ids


@pytest.mark.unit
class TestSessionSetup:
    """Test session construction."""

    def test_default_document_seeded(self):
        session = EditorSession(app_name="Bakery")
        names = [screen.name for screen in session.document.screens]
        assert names == ["Home", "About", "Contact"]
        assert session.active_screen.name == "Home"
        assert session.document.screens[0].components[0].props["title"] == "Bakery"

    def test_empty_document_refused(self):
        with pytest.raises(ValueError):
            EditorSession(document=Document(screens=[]))

    def test_edit_removing_every_screen_rolled_back(self):
        session = EditorSession(app_name="Bakery")
        before = session.document.snapshot()

        with pytest.raises(ConstraintViolation):
            with session.transaction() as document:
                document.screens.clear()

        assert session.document == before
        assert not session.can_undo

    def test_screenless_document_raises_constraint_violation(self):
        session = EditorSession(app_name="Bakery")
        session.document = Document(screens=[])

        with pytest.raises(ConstraintViolation):
            with session.transaction():
                pass

    def test_home_enforced(self):
        document = Document(screens=[Screen(id="a", name="A"), Screen(id="b", name="B")])
        session = EditorSession(document=document)
        assert session.document.screens[0].is_home
        assert session.active_screen_id == "a"


@pytest.mark.unit
class TestScreens:
    """Test screen management through the session."""

    def test_delete_only_screen_refused(self, session):
        assert not session.delete_screen("scr_home")
        assert [screen.id for screen in session.document.screens] == ["scr_home"]
        assert not session.can_undo

    def test_add_screen_activates_it(self, session):
        screen_id = session.add_screen("Menu", "🍔")
        assert session.active_screen_id == screen_id
        assert session.can_undo

    def test_delete_active_screen_falls_back_home(self, sample_session):
        sample_session.set_active_screen("scr_about")
        assert sample_session.delete_screen("scr_about")
        assert sample_session.active_screen_id == "scr_home"

    def test_undo_restores_deleted_screen(self, sample_session):
        sample_session.delete_screen("scr_about")
        sample_session.undo()
        assert sample_session.document.screen("scr_about") is not None

    def test_rename_and_home(self, sample_session):
        assert sample_session.rename_screen("scr_about", "Team")
        assert sample_session.set_home_screen("scr_about")
        assert sample_session.document.home_screen().id == "scr_about"
        assert sample_session.history.depth == (2, 0)


@pytest.mark.unit
class TestSelection:
    """Test selection bookkeeping."""

    def test_select_switches_screen(self, sample_session):
        heading = sample_session.document.screen("scr_about").components[0]
        assert sample_session.select(heading.id)
        assert sample_session.active_screen_id == "scr_about"
        assert sample_session.selected_node.id == heading.id

    def test_select_unknown(self, sample_session):
        assert not sample_session.select("cmp_missing")
        assert sample_session.selected_id is None

    def test_delete_selected_node_clears_selection(self, sample_session):
        button = sample_session.document.screens[0].components[1]
        sample_session.select(button.id)
        sample_session.delete_node(button.id)
        assert sample_session.selected_id is None

    def test_changing_screen_clears_selection(self, sample_session):
        button = sample_session.document.screens[0].components[1]
        sample_session.select(button.id)
        sample_session.set_active_screen("scr_about")
        assert sample_session.selected_id is None


@pytest.mark.unit
class TestEdits:
    """Test node edits through the session."""

    def test_reorder_via_drag_result(self, sample_session):
        screen = sample_session.active_screen
        order = [node.id for node in screen.components][::-1]
        assert sample_session.reorder(order)
        assert [node.id for node in sample_session.active_screen.components] == order

    def test_duplicate_selects_clone(self, sample_session):
        button = sample_session.document.screens[0].components[1]
        clone_id = sample_session.duplicate(button.id)
        assert sample_session.selected_id == clone_id

    def test_insert_section(self, sample_session):
        inserted = sample_session.insert_section("contact-form", "scr_about")
        assert len(inserted) == 1
        assert sample_session.document.screen("scr_about").components[-1].id == inserted[0]

    def test_insert_unknown_section(self, sample_session):
        with pytest.raises(KeyError):
            sample_session.insert_section("pricing-table")


@pytest.mark.unit
class TestReplaceDocument:
    """Test bulk replacement."""

    def test_resets_history(self, session, sample_document):
        session.add_node("text")
        session.replace_document(sample_document)
        assert not session.can_undo
        assert not session.undo()
        assert session.active_screen_id == "scr_home"

    def test_invalid_document_rejected(self, session, sample_document):
        sample_document.screens[1].components.append(sample_document.screens[0].components[0])
        with pytest.raises(DocumentValidationError):
            session.replace_document(sample_document)
        assert "scr_about" not in {screen.id for screen in session.document.screens}

    def test_ids_unique_after_replace(self, session, sample_document):
        session.replace_document(sample_document)
        session.add_node("text")
        assert len(document_node_ids(session.document)) == 6
