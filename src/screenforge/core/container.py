"""Dependency Injection Container."""

from functools import partial

from injector import Injector, Module, provider, singleton

from .config import Settings, get_settings
from .logging_config import configure_logging
from ..clients.assistant import AssistantClient
from ..clients.persistence import DocumentStore, MemoryStore, PersistenceClient
from ..editor.applier import OperationApplier
from ..editor.industries import seed_document
from ..editor.session import EditorSession
from ..handlers.blueprint import BlueprintImportHandler
from ..handlers.command import CommandHandler
from ..handlers.document import DocumentHandler
from ..interpreter.local import LocalRuleInterpreter
from ..interpreter.remote import RemoteInterpreter
from ..interpreter.selector import FallbackInterpreter


class EditorModule(Module):
    """Editor engine dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    def _assistant_client(self) -> AssistantClient | None:
        """Assistant client when the assistant is enabled."""
        if not self.settings.assistant_enabled:
            return None
        return AssistantClient(
            self.settings.assistant_url,
            timeout=self.settings.assistant_timeout,
            fail_max=self.settings.breaker_fail_max,
            reset_timeout=self.settings.breaker_reset_timeout,
        )

    @singleton
    @provider
    def provide_document_store(self) -> DocumentStore:
        """Provide the persistence API client, or an in-memory store without an app id."""
        seed = partial(seed_document, self.settings.app_name, self.settings.industry)
        if not self.settings.app_id:
            return MemoryStore(seed=seed)
        return PersistenceClient(
            self.settings.persistence_url,
            self.settings.app_id,
            timeout=self.settings.persistence_timeout,
            fail_max=self.settings.breaker_fail_max,
            reset_timeout=self.settings.breaker_reset_timeout,
            seed=seed,
        )

    @singleton
    @provider
    def provide_local_interpreter(self) -> LocalRuleInterpreter:
        return LocalRuleInterpreter()

    @singleton
    @provider
    def provide_interpreter(self, local: LocalRuleInterpreter) -> FallbackInterpreter:
        """Provide remote-first interpreter with local fallback."""
        remote = None
        client = self._assistant_client()
        if client is not None:
            remote = RemoteInterpreter(client, context_node_cap=self.settings.context_node_cap)
        return FallbackInterpreter(local=local, remote=remote)

    @singleton
    @provider
    def provide_session(self) -> EditorSession:
        return EditorSession(
            history_limit=self.settings.history_limit,
            app_name=self.settings.app_name,
            industry=self.settings.industry,
        )

    @singleton
    @provider
    def provide_applier(self, session: EditorSession) -> OperationApplier:
        return OperationApplier(session)

    @singleton
    @provider
    def provide_command_handler(
        self,
        session: EditorSession,
        applier: OperationApplier,
        interpreter: FallbackInterpreter,
        local: LocalRuleInterpreter,
    ) -> CommandHandler:
        """Provide command handler with all dependencies."""
        return CommandHandler(
            session,
            applier,
            interpreter,
            local=local,
            app_name=self.settings.app_name,
            industry=self.settings.industry,
            max_length=self.settings.max_command_length,
        )

    @singleton
    @provider
    def provide_blueprint_handler(self, session: EditorSession, store: DocumentStore) -> BlueprintImportHandler:
        return BlueprintImportHandler(session, store)

    @singleton
    @provider
    def provide_document_handler(self, session: EditorSession, store: DocumentStore) -> DocumentHandler:
        return DocumentHandler(session, store)


def create_container(settings: Settings | None = None) -> Injector:
    """Configure logging and create the injector."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    return Injector([EditorModule(settings)])
