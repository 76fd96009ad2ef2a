"""Component tree editing: model, mutations, history and operations."""

from .kinds import ComponentKind, CONTAINER_KINDS, parse_kind, is_container, default_props
from .models import ComponentNode, Screen, Document
from .history import HistoryManager, HistoryState
from .normalize import normalize_props, canonical_key
from .operations import (
    Operation,
    AddOp,
    UpdatePropsByIdOp,
    UpdateSelectedOp,
    DeleteSelectedOp,
    DeleteByIdOp,
    ReorderOp,
    parse_operation,
    parse_operations,
    operation_to_wire,
)
from .session import EditorSession
from .applier import OperationApplier
from .templates import SECTION_TEMPLATES, default_document
from .industries import INDUSTRY_TEMPLATES, normalize_industry, seed_document
from .export import export_screen, export_document, export_node

__all__ = [
    # Kinds
    "ComponentKind",
    "CONTAINER_KINDS",
    "parse_kind",
    "is_container",
    "default_props",
    # Models
    "ComponentNode",
    "Screen",
    "Document",
    # History
    "HistoryManager",
    "HistoryState",
    # Normalization
    "normalize_props",
    "canonical_key",
    # Operations
    "Operation",
    "AddOp",
    "UpdatePropsByIdOp",
    "UpdateSelectedOp",
    "DeleteSelectedOp",
    "DeleteByIdOp",
    "ReorderOp",
    "parse_operation",
    "parse_operations",
    "operation_to_wire",
    # Session
    "EditorSession",
    "OperationApplier",
    # Templates
    "SECTION_TEMPLATES",
    "default_document",
    "INDUSTRY_TEMPLATES",
    "normalize_industry",
    "seed_document",
    # Export
    "export_screen",
    "export_document",
    "export_node",
]
