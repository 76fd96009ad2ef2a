"""Document Handler."""

import asyncio
from typing import Literal

from ..core import get_logger
from ..clients.persistence import DocumentStore
from ..editor.export import export_document, export_node, export_screen
from ..editor.models import Document
from ..editor.session import EditorSession

logger = get_logger(__name__)


class DocumentHandler:
    """Loads, saves and exports the session's document."""

    def __init__(self, session: EditorSession, store: DocumentStore) -> None:
        self.session = session
        self.store = store

    async def load(self) -> Document:
        """Load the saved document into the session (history starts over)."""
        document = await asyncio.to_thread(self.store.load)
        self.session.replace_document(document)
        logger.info("document_loaded", session_id=self.session.id, screens=len(document.screens))
        return self.session.document

    async def save(self) -> None:
        """
        Save the current document. A failed save leaves the session untouched.

        Raises:
            PersistenceError: If the store rejects the save
        """
        snapshot = self.session.document.snapshot()
        await asyncio.to_thread(self.store.save, snapshot)
        logger.info("document_saved", session_id=self.session.id)

    def export(self, scope: Literal["screen", "document", "selected"] = "screen") -> str:
        match scope:
            case "screen":
                return export_screen(self.session.active_screen)
            case "document":
                return export_document(self.session.document)
            case "selected":
                return export_node(self.session.selected_node)
            case _:
                raise ValueError(f"Unknown export scope: {scope}")
