"""Remote interpreter - delegates to the assistant service."""

import asyncio

from ..core import get_logger
from ..core.errors import InterpretationUnavailable
from ..editor.operations import parse_operations
from ..clients.assistant import AssistantClient
from .base import Interpretation, InterpretationContext

logger = get_logger(__name__)

DEFAULT_REPLY = "Done."


class RemoteInterpreter:
    """
    Sends the prompt and a bounded context to the assistant.

    Raw operations with unknown tags are dropped one by one; the rest of the
    reply is still used.
    """

    name = "remote"

    def __init__(self, client: AssistantClient | None, context_node_cap: int = 25) -> None:
        self.client = client
        self.context_node_cap = context_node_cap

    async def interpret(self, prompt: str, context: InterpretationContext) -> Interpretation:
        """
        Raises:
            InterpretationUnavailable: If no client is configured, the request
                fails or the reply has no operations list
        """
        if self.client is None:
            raise InterpretationUnavailable("Assistant is not configured")

        payload = {"prompt": prompt, "context": context.to_wire(self.context_node_cap)}
        data = await asyncio.to_thread(self.client.editor_command, payload)

        raw_operations = data.get("operations")
        if not isinstance(raw_operations, list):
            raise InterpretationUnavailable("Assistant reply has no operations list")

        operations, problems = parse_operations(raw_operations)
        if problems:
            logger.warning("remote_operations_dropped", dropped=len(problems), kept=len(operations))

        message = data.get("message")
        return Interpretation(
            operations=operations,
            message=message if isinstance(message, str) and message.strip() else DEFAULT_REPLY,
            source=self.name,
        )
