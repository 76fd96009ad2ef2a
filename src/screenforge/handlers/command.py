"""Command Handler."""

import time
from dataclasses import dataclass, field

from ..core import get_logger, CommandRequest, LogContext
from ..editor.applier import OperationApplier
from ..editor.operations import DeleteSelectedOp, Operation, UpdateSelectedOp
from ..editor.session import EditorSession
from ..interpreter import Interpretation, InterpretationContext, Interpreter
from ..monitoring import metrics_collector

logger = get_logger(__name__)

BUSY_MESSAGE = "Still working on the previous command."


@dataclass
class CommandResult:
    """Outcome of one submitted command."""

    applied: int
    message: str
    source: str
    operations: list[Operation] = field(default_factory=list)
    degraded: bool = False
    rejected: bool = False


class CommandHandler:
    """
    Handles free-text commands end to end: validate, interpret, apply.

    Operations that target "the selection" are bound to the node selected
    when the prompt was submitted, so a selection change during the
    interpretation round trip cannot redirect them.
    """

    def __init__(
        self,
        session: EditorSession,
        applier: OperationApplier,
        interpreter: Interpreter,
        local: Interpreter | None = None,
        app_name: str | None = None,
        industry: str | None = None,
        max_length: int | None = None,
    ) -> None:
        self.session = session
        self.applier = applier
        self.interpreter = interpreter
        self.local = local
        self.app_name = app_name
        self.industry = industry
        self.max_length = max_length
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def submit(self, prompt: str) -> CommandResult:
        """
        Interpret a command and apply its operations as one undo step.

        Raises:
            pydantic.ValidationError: If the prompt is empty or too long
        """
        validated = CommandRequest(prompt=prompt)
        if self.max_length is not None and len(validated.prompt) > self.max_length:
            raise ValueError(f"Command exceeds {self.max_length} characters")

        if self._busy:
            logger.info("command_rejected", reason="busy")
            return CommandResult(applied=0, message=BUSY_MESSAGE, source="none", rejected=True)

        self._busy = True
        start_time = time.time()
        try:
            with LogContext(session_id=self.session.id):
                selected_at_prompt = self.session.selected_id
                context = InterpretationContext.from_session(self.session, self.app_name, self.industry)
                logger.info("command", prompt=validated.prompt[:50], selected=selected_at_prompt)

                interpretation = await self.interpreter.interpret(validated.prompt, context)
                applied = self._apply(interpretation, selected_at_prompt)

                if applied == 0 and interpretation.source != "local" and self.local is not None:
                    logger.info("remote_batch_ineffective", operations=len(interpretation.operations))
                    fallback = await self.local.interpret(validated.prompt, context)
                    if fallback.operations:
                        interpretation = fallback
                        applied = self._apply(fallback, selected_at_prompt)

                logger.info(
                    "command_complete",
                    source=interpretation.source,
                    applied=applied,
                    duration_ms=(time.time() - start_time) * 1000,
                )
                return CommandResult(
                    applied=applied,
                    message=interpretation.message,
                    source=interpretation.source,
                    operations=list(interpretation.operations),
                    degraded=interpretation.degraded,
                )
        except Exception as e:
            metrics_collector.record_error(type(e).__name__, "command_handler")
            logger.error("command_failed", error=str(e))
            raise
        finally:
            self._busy = False

    def _apply(self, interpretation: Interpretation, selected_at_prompt: str | None) -> int:
        operations = []
        for operation in interpretation.operations:
            if isinstance(operation, (UpdateSelectedOp, DeleteSelectedOp)) and operation.target_id is None:
                if selected_at_prompt is None:
                    logger.info("operation_dropped", op=operation.op, reason="no_selection")
                    continue
                operation = operation.model_copy(update={"target_id": selected_at_prompt})
            operations.append(operation)
        if not operations:
            return 0
        return self.applier.apply(operations)
