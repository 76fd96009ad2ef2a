"""Operation Applier - the single funnel from operation lists into the document."""

from collections.abc import Iterable
from typing import Any

from ..core import get_logger
from ..core.errors import (
    ConstraintViolation,
    UnknownComponentKind,
    UnknownOperationKind,
    UnresolvedReference,
)
from ..monitoring import metrics_collector
from . import mutations
from .models import Document
from .normalize import normalize_props
from .operations import (
    AddOp,
    BaseOperation,
    DeleteByIdOp,
    DeleteSelectedOp,
    ReorderOp,
    UpdatePropsByIdOp,
    UpdateSelectedOp,
    parse_operation,
)
from .session import EditorSession
from .tree import find_in_document

logger = get_logger(__name__)


class OperationApplier:
    """
    Applies operation batches to an editing session.

    A batch is one undo step. Operations run in order; an operation whose
    target does not resolve, or that is not recognized, is skipped and
    logged while the rest of the batch proceeds.
    """

    def __init__(self, session: EditorSession) -> None:
        self.session = session

    def apply(self, operations: Iterable[BaseOperation | dict[str, Any]], select_added: bool = True) -> int:
        """
        Apply a batch of operations.

        Args:
            operations: Typed operations, or raw dicts in the wire shape
            select_added: Select the last node created by the batch

        Returns:
            Number of operations that took effect
        """
        applied = 0
        last_added: str | None = None

        with self.session.transaction() as document:
            for index, raw in enumerate(operations):
                tag = _tag_of(raw)
                try:
                    operation = parse_operation(raw)
                    added = self._apply_one(document, operation)
                except (UnknownOperationKind, UnknownComponentKind, ValueError) as e:
                    logger.warning("operation_unrecognized", index=index, op=tag, error=str(e))
                    metrics_collector.record_skipped_operation("unknown", "unrecognized")
                    continue
                except UnresolvedReference as e:
                    logger.info("operation_unresolved", index=index, op=tag, ref=e.ref)
                    metrics_collector.record_skipped_operation(operation.op, "unresolved")
                    continue
                except ConstraintViolation as e:
                    logger.warning("operation_rejected", index=index, op=tag, error=str(e))
                    metrics_collector.record_skipped_operation(operation.op, "constraint")
                    continue

                applied += 1
                metrics_collector.record_operation(operation.op)
                if added is not None:
                    last_added = added

        if select_added and last_added is not None:
            self.session.select(last_added)

        logger.debug("batch_applied", session_id=self.session.id, applied=applied)
        return applied

    def _apply_one(self, document: Document, operation: BaseOperation) -> str | None:
        """Apply one operation; returns the id of a node it created."""
        match operation:
            case AddOp(kind=kind, props=props, screen_id=screen_id):
                target_screen = screen_id or self.session.active_screen_id
                node_id = mutations.add_node(document, target_screen, kind, normalize_props(kind, props))
                if node_id is None:
                    raise UnresolvedReference(target_screen)
                return node_id

            case UpdatePropsByIdOp(node_id=node_id, props=props):
                self._update(document, node_id, props)

            case UpdateSelectedOp(props=props, target_id=target_id):
                self._update(document, self._selected_target(target_id), props)

            case DeleteByIdOp(node_id=node_id):
                if not mutations.delete_node(document, node_id):
                    raise UnresolvedReference(node_id)

            case DeleteSelectedOp(target_id=target_id):
                node_id = self._selected_target(target_id)
                if not mutations.delete_node(document, node_id):
                    raise UnresolvedReference(node_id)
                if self.session.selected_id == node_id:
                    self.session.selected_id = None

            case ReorderOp(screen_id=screen_id, order=order):
                screen = document.screen(screen_id)
                if screen is None:
                    raise UnresolvedReference(screen_id)
                if not mutations.reorder_screen_children(document, screen_id, list(order)):
                    raise ConstraintViolation(f"Order for screen {screen_id} is not a permutation of its components")

            case _:
                raise UnknownOperationKind(getattr(operation, "op", type(operation).__name__))

        return None

    def _selected_target(self, target_id: str | None) -> str:
        node_id = target_id or self.session.selected_id
        if node_id is None:
            raise UnresolvedReference("<selection>")
        return node_id

    @staticmethod
    def _update(document: Document, node_id: str, props: dict[str, Any]) -> None:
        node = find_in_document(document, node_id)
        if node is None:
            raise UnresolvedReference(node_id)
        mutations.update_node_props(document, node_id, normalize_props(node.kind, props))


def _tag_of(raw: Any) -> str:
    if isinstance(raw, BaseOperation):
        return getattr(raw, "op", "unknown")
    if isinstance(raw, dict):
        tag = raw.get("op") or raw.get("action") or raw.get("type")
        return str(tag) if tag else "unknown"
    return "unknown"
