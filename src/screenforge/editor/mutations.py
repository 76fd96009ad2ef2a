"""Mutation API - the only legal ways to change a document.

Every function edits the document it is handed in place and reports whether
its target resolved. History bookkeeping and selection tracking live elsewhere
(see ``history`` and ``session``); these functions never touch either.
"""

import copy
from typing import Any

from ..core import get_logger
from ..core.id import new_screen_id
from .kinds import ComponentKind, default_props, is_container, parse_kind
from .models import ComponentNode, Document, Screen
from .tree import clone_with_new_ids, document_node_ids, fresh_node_id, locate

logger = get_logger(__name__)

DEFAULT_SCREEN_ICON = "📄"


# ============================================================================
# Nodes
# ============================================================================


def build_node(
    kind: ComponentKind | str,
    props: dict[str, Any] | None = None,
    taken: set[str] | None = None,
) -> ComponentNode:
    """
    Construct a detached node with defaults merged with overrides.

    Raises:
        UnknownComponentKind: If ``kind`` is outside the kind set
    """
    resolved = parse_kind(kind)
    merged = default_props(resolved)
    if props:
        merged.update(copy.deepcopy(props))
    return ComponentNode(
        id=fresh_node_id(taken if taken is not None else set()),
        kind=resolved,
        props=merged,
        children=[] if is_container(resolved) else None,
    )


def add_node(
    document: Document,
    screen_id: str,
    kind: ComponentKind | str,
    props: dict[str, Any] | None = None,
) -> str | None:
    """
    Append a new node as the last top-level child of a screen.

    Args:
        document: Document to edit
        screen_id: Target screen
        kind: Component kind
        props: Property overrides merged over the kind's defaults

    Returns:
        The new node id, or None when the screen does not resolve

    Raises:
        UnknownComponentKind: If ``kind`` is outside the kind set
    """
    resolved = parse_kind(kind)
    screen = document.screen(screen_id)
    if screen is None:
        logger.debug("add_node_skipped", reason="unknown_screen", screen_id=screen_id)
        return None

    node = build_node(resolved, props, taken=document_node_ids(document))
    screen.components.append(node)
    logger.debug("node_added", node_id=node.id, kind=resolved.value, screen_id=screen_id)
    return node.id


def update_node_props(document: Document, node_id: str, props: dict[str, Any]) -> bool:
    """
    Shallow-merge ``props`` into a node's property bag.

    Keys absent from ``props`` are preserved. Returns False (no-op) when the
    node is not found.
    """
    location = locate(document, node_id)
    if location is None:
        logger.debug("update_skipped", reason="unknown_node", node_id=node_id)
        return False

    node = location.node
    node.props = {**node.props, **copy.deepcopy(props)}
    return True


def delete_node(document: Document, node_id: str) -> bool:
    """Remove a node and its whole subtree. Returns False if not found."""
    location = locate(document, node_id)
    if location is None:
        logger.debug("delete_skipped", reason="unknown_node", node_id=node_id)
        return False

    del location.siblings[location.index]
    logger.debug("node_deleted", node_id=node_id, screen_id=location.screen.id)
    return True


def reorder_screen_children(document: Document, screen_id: str, order: list[str]) -> bool:
    """
    Replace the top-level child order of a screen.

    ``order`` must be a permutation of the current top-level ids; anything
    else is rejected without mutation. Nested children are never reordered.
    """
    screen = document.screen(screen_id)
    if screen is None:
        logger.debug("reorder_skipped", reason="unknown_screen", screen_id=screen_id)
        return False

    by_id = {node.id: node for node in screen.components}
    if len(order) != len(by_id) or set(order) != set(by_id):
        logger.warning(
            "reorder_rejected",
            screen_id=screen_id,
            expected=len(by_id),
            received=len(order),
        )
        return False

    screen.components = [by_id[node_id] for node_id in order]
    return True


def duplicate_node(document: Document, node_id: str) -> str | None:
    """Copy a subtree with fresh ids and place it right after the source."""
    location = locate(document, node_id)
    if location is None:
        return None
    clone = clone_with_new_ids(location.node, taken=document_node_ids(document))
    location.siblings.insert(location.index + 1, clone)
    return clone.id


def insert_section(document: Document, screen_id: str, template: list[ComponentNode]) -> list[str]:
    """Append a pre-built section (cloned with fresh ids) to a screen."""
    screen = document.screen(screen_id)
    if screen is None:
        return []
    taken = document_node_ids(document)
    clones = [clone_with_new_ids(node, taken) for node in template]
    screen.components.extend(clones)
    return [clone.id for clone in clones]


# ============================================================================
# Screens
# ============================================================================


def add_screen(document: Document, name: str | None = None, icon: str | None = None) -> str:
    """Append a new empty screen and return its id."""
    screen = Screen(
        id=new_screen_id(),
        name=name or f"Screen {len(document.screens) + 1}",
        icon=icon or DEFAULT_SCREEN_ICON,
        components=[],
    )
    document.screens.append(screen)
    ensure_single_home(document)
    logger.debug("screen_added", screen_id=screen.id)
    return screen.id


def delete_screen(document: Document, screen_id: str) -> bool:
    """
    Remove a screen.

    Returns False and leaves the document untouched when the screen does
    not exist or is the last one left.
    """
    screen = document.screen(screen_id)
    if screen is None:
        return False
    if len(document.screens) <= 1:
        logger.info("delete_screen_rejected", reason="last_screen", screen_id=screen_id)
        return False

    document.screens.remove(screen)
    ensure_single_home(document)
    return True


def rename_screen(document: Document, screen_id: str, name: str, icon: str | None = None) -> bool:
    """Change a screen's display name (and optionally its icon)."""
    screen = document.screen(screen_id)
    name = name.strip()
    if screen is None or not name:
        return False
    screen.name = name[:80]
    if icon is not None:
        screen.icon = icon
    return True


def set_home_screen(document: Document, screen_id: str) -> bool:
    """Flag one screen as home and clear the flag everywhere else."""
    if document.screen(screen_id) is None:
        return False
    for screen in document.screens:
        screen.is_home = screen.id == screen_id
    return True


def ensure_single_home(document: Document) -> None:
    """Keep exactly one home screen, defaulting to the first."""
    if not document.screens:
        return
    homes = [screen for screen in document.screens if screen.is_home]
    keep = homes[0] if homes else document.screens[0]
    for screen in document.screens:
        screen.is_home = screen is keep
