"""Snapshot-based undo/redo of the whole multi-screen document."""

from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from ..core import get_logger
from .models import Document

logger = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 100


class HistoryState(str, Enum):
    """Per-session history state machine."""

    IDLE = "idle"
    MUTATING = "mutating"
    TIME_TRAVELING = "time_traveling"


class HistoryManager:
    """
    Linear undo/redo over full document snapshots.

    The past stack holds the document as it was before each committed edit;
    the future stack holds documents displaced by undo. Both are bounded and
    drop their oldest entry on overflow.

    Examples:
        >>> history = HistoryManager(limit=10)
        >>> history.record(document)          # before editing
        >>> previous = history.undo(document)  # restore
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._past: deque[Document] = deque(maxlen=limit)
        self._future: deque[Document] = deque(maxlen=limit)
        self._state = HistoryState.IDLE

    @property
    def state(self) -> HistoryState:
        return self._state

    @property
    def time_traveling(self) -> bool:
        return self._state is HistoryState.TIME_TRAVELING

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def depth(self) -> tuple[int, int]:
        """(past, future) stack sizes."""
        return len(self._past), len(self._future)

    @contextmanager
    def mutating(self) -> Iterator[None]:
        """Mark the span of one interactive edit."""
        if self._state is not HistoryState.IDLE:
            # nested edits fold into the outer one
            yield
            return
        self._state = HistoryState.MUTATING
        try:
            yield
        finally:
            self._state = HistoryState.IDLE

    def record(self, snapshot: Document) -> None:
        """
        Push a pre-mutation snapshot and clear the redo stack.

        Ignored while a snapshot is being restored, so restoring never
        becomes an undoable action of its own.
        """
        if self.time_traveling:
            return
        self._past.append(snapshot.snapshot())
        self._future.clear()
        logger.debug("history_recorded", past=len(self._past))

    def undo(self, current: Document) -> Document | None:
        """Return the previous document, or None when there is nothing to undo."""
        if not self._past:
            return None
        with self._time_travel():
            previous = self._past.pop()
            self._future.append(current.snapshot())
        logger.debug("history_undo", past=len(self._past), future=len(self._future))
        return previous

    def redo(self, current: Document) -> Document | None:
        """Return the next document, or None when there is nothing to redo."""
        if not self._future:
            return None
        with self._time_travel():
            following = self._future.pop()
            self._past.append(current.snapshot())
        logger.debug("history_redo", past=len(self._past), future=len(self._future))
        return following

    def reset(self) -> None:
        """Drop both stacks (bulk replacement boundary)."""
        self._past.clear()
        self._future.clear()
        logger.debug("history_reset")

    @contextmanager
    def _time_travel(self) -> Iterator[None]:
        previous = self._state
        self._state = HistoryState.TIME_TRAVELING
        try:
            yield
        finally:
            self._state = previous
