"""Blueprint Import Handler."""

import asyncio

from ..core import get_logger, validate_document
from ..core.errors import DocumentValidationError, MalformedImport
from ..blueprint import BlueprintBuilder, BlueprintParser, BuildResult
from ..clients.persistence import DocumentStore
from ..editor.session import EditorSession
from ..monitoring import metrics_collector

logger = get_logger(__name__)


class BlueprintImportHandler:
    """Parses, builds, persists and swaps in a blueprint."""

    def __init__(
        self,
        session: EditorSession,
        store: DocumentStore | None = None,
        parser: BlueprintParser | None = None,
        builder: BlueprintBuilder | None = None,
    ) -> None:
        self.session = session
        self.store = store
        self.parser = parser or BlueprintParser()
        self.builder = builder or BlueprintBuilder()

    async def import_text(self, content: str) -> BuildResult:
        """
        Replace the session's document with the one a blueprint describes.

        The built document is validated before anything is persisted; it is
        only swapped in (with a fresh history) once the patch was saved.

        Raises:
            MalformedImport: If the blueprint cannot be parsed or builds a
                document that breaks a structural limit
            PersistenceError: If the patch cannot be saved
        """
        try:
            blueprint = self.parser.parse(content)
        except MalformedImport:
            metrics_collector.record_blueprint_import("malformed")
            raise

        result = self.builder.build(blueprint)
        try:
            validate_document(result.document)
        except DocumentValidationError as e:
            metrics_collector.record_blueprint_import("malformed")
            logger.error("blueprint_document_invalid", error=str(e))
            raise MalformedImport(f"Blueprint builds an invalid document: {e}", e) from e

        if self.store is not None:
            try:
                await asyncio.to_thread(self.store.update_app, result.patch)
            except Exception:
                metrics_collector.record_blueprint_import("persist_failed")
                raise

        self.session.replace_document(result.document)
        metrics_collector.record_blueprint_import("success", len(result.screens))
        logger.info(
            "blueprint_imported",
            session_id=self.session.id,
            screens=len(result.screens),
            skipped=len(result.skipped_blocks),
        )
        return result
