"""Depth-first traversal helpers over owned component trees.

Parents exclusively own their children and nodes hold no back references,
so every walk here is a plain recursive descent.
"""

import copy
from collections.abc import Iterator
from dataclasses import dataclass

from ..core.id import new_node_id
from .models import ComponentNode, Document, Screen


@dataclass(frozen=True)
class NodeLocation:
    """Where a node lives: its screen, its sibling list and its index in it."""

    screen: Screen
    siblings: list[ComponentNode]
    index: int
    parent: ComponentNode | None

    @property
    def node(self) -> ComponentNode:
        return self.siblings[self.index]


def iter_nodes(nodes: list[ComponentNode]) -> Iterator[ComponentNode]:
    """Yield every node in pre-order."""
    for node in nodes:
        yield node
        if node.children:
            yield from iter_nodes(node.children)


def iter_document_nodes(document: Document) -> Iterator[tuple[Screen, ComponentNode]]:
    """Yield (screen, node) for every node in the document."""
    for screen in document.screens:
        for node in iter_nodes(screen.components):
            yield screen, node


def find_node(nodes: list[ComponentNode], node_id: str) -> ComponentNode | None:
    """Find a node anywhere below ``nodes``."""
    for node in nodes:
        if node.id == node_id:
            return node
        if node.children:
            found = find_node(node.children, node_id)
            if found is not None:
                return found
    return None


def locate(document: Document, node_id: str) -> NodeLocation | None:
    """Find the screen, sibling list and index of a node."""
    for screen in document.screens:
        found = _locate_in(screen, screen.components, None, node_id)
        if found is not None:
            return found
    return None


def _locate_in(
    screen: Screen,
    siblings: list[ComponentNode],
    parent: ComponentNode | None,
    node_id: str,
) -> NodeLocation | None:
    for index, node in enumerate(siblings):
        if node.id == node_id:
            return NodeLocation(screen=screen, siblings=siblings, index=index, parent=parent)
        if node.children:
            found = _locate_in(screen, node.children, node, node_id)
            if found is not None:
                return found
    return None


def find_in_document(document: Document, node_id: str) -> ComponentNode | None:
    """Find a node in any screen."""
    for screen in document.screens:
        found = find_node(screen.components, node_id)
        if found is not None:
            return found
    return None


def document_node_ids(document: Document) -> set[str]:
    """All node ids in the document."""
    return {node.id for _, node in iter_document_nodes(document)}


def clone_with_new_ids(node: ComponentNode, taken: set[str] | None = None) -> ComponentNode:
    """Deep copy of a subtree where every node gets a fresh id."""
    taken = taken if taken is not None else set()
    node_id = fresh_node_id(taken)
    taken.add(node_id)
    children = None
    if node.children is not None:
        children = [clone_with_new_ids(child, taken) for child in node.children]
    return ComponentNode(id=node_id, kind=node.kind, props=copy.deepcopy(node.props), children=children)


def fresh_node_id(taken: set[str]) -> str:
    """A new node id not present in ``taken``."""
    node_id = new_node_id()
    while node_id in taken:
        node_id = new_node_id()
    return node_id
