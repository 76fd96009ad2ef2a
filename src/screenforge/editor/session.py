"""Editing session - owns the document, selection, active screen and history."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from ..core import ConstraintViolation, get_logger, validate_document
from ..core.id import new_session_id
from ..monitoring import metrics_collector
from . import mutations
from .history import DEFAULT_HISTORY_LIMIT, HistoryManager, HistoryState
from .kinds import ComponentKind
from .models import ComponentNode, Document, Screen
from .industries import seed_document
from .templates import SECTION_TEMPLATES
from .tree import find_in_document, locate

logger = get_logger(__name__)


class EditorSession:
    """
    The single writer of one document.

    Every edit runs inside ``transaction()``, which snapshots the document
    before the edit and commits the snapshot to history only when something
    actually changed. Selection and active screen are re-validated after
    every transaction, undo and redo.

    Examples:
        >>> session = EditorSession()
        >>> node_id = session.add_node(ComponentKind.BUTTON, {"text": "Join"})
        >>> session.update_node_props(node_id, {"backgroundColor": "#3b82f6"})
        >>> session.undo()
    """

    def __init__(
        self,
        document: Document | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        app_name: str | None = None,
        session_id: str | None = None,
        industry: str | None = None,
    ) -> None:
        self.id = session_id or new_session_id()
        self.document = document if document is not None else seed_document(app_name, industry)
        if not self.document.screens:
            raise ValueError("A session needs a document with at least one screen")
        mutations.ensure_single_home(self.document)

        self.history = HistoryManager(limit=history_limit)
        self.selected_id: str | None = None
        self.active_screen_id: str = self._home_id()

    # ========================================================================
    # View state
    # ========================================================================

    @property
    def active_screen(self) -> Screen:
        screen = self.document.screen(self.active_screen_id)
        return screen if screen is not None else self.document.screens[0]

    @property
    def selected_node(self) -> ComponentNode | None:
        if self.selected_id is None:
            return None
        return find_in_document(self.document, self.selected_id)

    def select(self, node_id: str | None) -> bool:
        """Select a node (and switch to its screen); None clears the selection."""
        if node_id is None:
            self.selected_id = None
            return True
        location = locate(self.document, node_id)
        if location is None:
            return False
        self.selected_id = node_id
        self.active_screen_id = location.screen.id
        return True

    def set_active_screen(self, screen_id: str) -> bool:
        if self.document.screen(screen_id) is None:
            return False
        if screen_id != self.active_screen_id:
            self.selected_id = None
        self.active_screen_id = screen_id
        return True

    def _home_id(self) -> str:
        home = self.document.home_screen()
        if home is None:
            raise ConstraintViolation("Document has no screens")
        return home.id

    def _repair_view(self) -> None:
        if self.selected_id is not None and find_in_document(self.document, self.selected_id) is None:
            self.selected_id = None
        if self.document.screen(self.active_screen_id) is None:
            self.active_screen_id = self._home_id()

    # ========================================================================
    # Transactions and history
    # ========================================================================

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """
        Run a batch of mutations as one undoable step.

        On an exception the pre-batch document is restored and the error
        re-raised. Nested transactions fold into the outermost one.
        """
        if self.history.state is not HistoryState.IDLE:
            yield self.document
            return

        before = self.document.snapshot()
        with self.history.mutating():
            try:
                yield self.document
            except Exception:
                self.document = before
                self._repair_view()
                raise

        if not self.document.screens:
            self.document = before
            raise ConstraintViolation("A document must keep at least one screen")

        if self.document != before:
            self.history.record(before)
            metrics_collector.record_history("commit")
        self._repair_view()

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def undo(self) -> bool:
        """Restore the previous document. Returns False when there is none."""
        previous = self.history.undo(self.document)
        if previous is None:
            return False
        self._restore(previous)
        metrics_collector.record_history("undo")
        return True

    def redo(self) -> bool:
        """Re-apply the last undone document. Returns False when there is none."""
        following = self.history.redo(self.document)
        if following is None:
            return False
        self._restore(following)
        metrics_collector.record_history("redo")
        return True

    def _restore(self, document: Document) -> None:
        self.document = document
        self.selected_id = None
        self._repair_view()

    def replace_document(self, document: Document) -> None:
        """
        Swap in a whole new document and start history over.

        Raises:
            DocumentValidationError: If the document breaks a structural limit
        """
        mutations.ensure_single_home(document)
        validate_document(document)
        self.document = document
        self.history.reset()
        self.selected_id = None
        self.active_screen_id = self._home_id()
        metrics_collector.record_history("reset")
        logger.info("document_replaced", session_id=self.id, screens=len(document.screens))

    # ========================================================================
    # Node edits
    # ========================================================================

    def add_node(
        self,
        kind: ComponentKind | str,
        props: dict[str, Any] | None = None,
        screen_id: str | None = None,
        select: bool = True,
    ) -> str | None:
        with self.transaction() as document:
            node_id = mutations.add_node(document, screen_id or self.active_screen_id, kind, props)
        if node_id is not None and select:
            self.select(node_id)
        return node_id

    def update_node_props(self, node_id: str, props: dict[str, Any]) -> bool:
        with self.transaction() as document:
            return mutations.update_node_props(document, node_id, props)

    def delete_node(self, node_id: str) -> bool:
        with self.transaction() as document:
            return mutations.delete_node(document, node_id)

    def reorder(self, order: list[str], screen_id: str | None = None) -> bool:
        """Apply a drag-and-drop result to a screen's top-level order."""
        with self.transaction() as document:
            return mutations.reorder_screen_children(document, screen_id or self.active_screen_id, order)

    def duplicate(self, node_id: str) -> str | None:
        with self.transaction() as document:
            clone_id = mutations.duplicate_node(document, node_id)
        if clone_id is not None:
            self.select(clone_id)
        return clone_id

    def insert_section(self, template: str, screen_id: str | None = None) -> list[str]:
        """
        Append a named section template to a screen.

        Raises:
            KeyError: If the template name is unknown
        """
        nodes = SECTION_TEMPLATES[template]()
        with self.transaction() as document:
            return mutations.insert_section(document, screen_id or self.active_screen_id, nodes)

    # ========================================================================
    # Screen edits
    # ========================================================================

    def add_screen(self, name: str | None = None, icon: str | None = None) -> str:
        with self.transaction() as document:
            screen_id = mutations.add_screen(document, name, icon)
        self.set_active_screen(screen_id)
        return screen_id

    def delete_screen(self, screen_id: str) -> bool:
        with self.transaction() as document:
            return mutations.delete_screen(document, screen_id)

    def rename_screen(self, screen_id: str, name: str, icon: str | None = None) -> bool:
        with self.transaction() as document:
            return mutations.rename_screen(document, screen_id, name, icon)

    def set_home_screen(self, screen_id: str) -> bool:
        with self.transaction() as document:
            return mutations.set_home_screen(document, screen_id)
