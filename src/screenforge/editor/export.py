"""Read-only export of screens, documents and nodes as JSON text."""

from ..core import safe_json_dumps
from .models import ComponentNode, Document, Screen, node_to_wire, screen_to_wire


def export_screen(screen: Screen, indent: int = 2) -> str:
    return safe_json_dumps(screen_to_wire(screen), indent=indent)


def export_document(document: Document, indent: int = 2) -> str:
    return safe_json_dumps({"screens": document.to_wire()}, indent=indent)


def export_node(node: ComponentNode | None, indent: int = 2) -> str:
    """Export one node; ``None`` (nothing selected) exports as ``null``."""
    return safe_json_dumps(node_to_wire(node) if node is not None else None, indent=indent)
