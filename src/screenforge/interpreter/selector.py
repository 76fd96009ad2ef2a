"""Fallback selection between the remote and local strategies."""

import time

from ..core import get_logger
from ..core.errors import InterpretationUnavailable
from ..monitoring import metrics_collector
from .base import Interpretation, InterpretationContext, Interpreter

logger = get_logger(__name__)

UNAVAILABLE_NOTE = "Assistant unavailable, used built-in commands."


class FallbackInterpreter:
    """
    Tries the remote strategy first and the local one when the remote is
    unavailable or returns no operations.
    """

    name = "fallback"

    def __init__(self, local: Interpreter, remote: Interpreter | None = None) -> None:
        self.local = local
        self.remote = remote
        logger.info("initialized", mode="remote+local" if remote is not None else "local")

    async def interpret(self, prompt: str, context: InterpretationContext) -> Interpretation:
        remote_reply: Interpretation | None = None
        unavailable = False

        if self.remote is not None:
            start = time.time()
            try:
                remote_reply = await self.remote.interpret(prompt, context)
            except InterpretationUnavailable as e:
                unavailable = True
                metrics_collector.record_interpretation(self.remote.name, "unavailable", time.time() - start)
                logger.warning("remote_unavailable", error=str(e))
            else:
                status = "success" if remote_reply.operations else "empty"
                metrics_collector.record_interpretation(self.remote.name, status, time.time() - start)
                if remote_reply.operations:
                    return remote_reply
                logger.info("remote_empty", message=remote_reply.message[:80])

        start = time.time()
        local_reply = await self.local.interpret(prompt, context)
        status = "success" if local_reply.operations else "empty"
        metrics_collector.record_interpretation(self.local.name, status, time.time() - start)

        return self.merge(local_reply, remote_reply, unavailable)

    @staticmethod
    def merge(local: Interpretation, remote: Interpretation | None, unavailable: bool) -> Interpretation:
        """Local result annotated with why the remote one was not used."""
        if unavailable:
            return Interpretation(
                operations=local.operations,
                message=f"{UNAVAILABLE_NOTE} {local.message}".strip(),
                source=local.source,
                degraded=True,
            )
        if remote is not None and not local.operations:
            # neither produced anything: the assistant's explanation is the better reply
            return Interpretation(operations=[], message=remote.message, source=remote.source)
        return local
