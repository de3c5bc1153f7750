"""
Tree queries.

All searches walk the tree in document order (pre-order, depth-first) starting
at the root's first child; the root itself is never part of the result.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from .node import Node, NodeType

logger = logging.getLogger(__name__)


def iter_descendants(root: Node) -> Iterator[Node]:
    """
    Yield every descendant of ``root`` in document order.

    Uses an explicit stack so very deep trees do not hit the recursion limit.
    The tree must not be restructured while the iterator is alive.
    """
    stack = list(reversed(root.child_nodes))
    while stack:
        node = stack.pop()
        yield node
        if node.child_nodes:
            stack.extend(reversed(node.child_nodes))


def get_elements_by_tag_name(root: Node, tag_name: str) -> List[Node]:
    """
    Get all descendant elements with the given tag name.

    Args:
        root: The node to search below
        tag_name: The tag name to match (case-insensitive), "*" matches every element

    Returns:
        List of matching elements, empty when nothing matches
    """
    match_all = tag_name == "*"
    tag_name_lower = tag_name.lower()

    result = [
        node for node in iter_descendants(root)
        if node.node_type == NodeType.ELEMENT_NODE
        and (match_all or node.tag_name.lower() == tag_name_lower)
    ]

    logger.debug(f"get_elements_by_tag_name({tag_name!r}) found {len(result)} elements below {root!r}")
    return result


def get_all_nodes_with_tag(root: Node, *tag_names: str) -> List[Node]:
    """
    Get all descendant elements whose tag name is any of ``tag_names``.

    The order of ``tag_names`` does not matter and repeated names do not
    repeat matches; results stay in document order.
    """
    wanted = {name.lower() for name in tag_names}
    if not wanted:
        return []

    result = [
        node for node in iter_descendants(root)
        if node.node_type == NodeType.ELEMENT_NODE and node.tag_name.lower() in wanted
    ]

    logger.debug(f"get_all_nodes_with_tag({sorted(wanted)}) found {len(result)} elements below {root!r}")
    return result


def include_node(nodes: Iterable[Node], candidate: Optional[Node]) -> bool:
    """Check whether ``candidate`` is one of ``nodes`` by identity."""
    for node in nodes:
        if node is candidate:
            return True
    return False


def document_element(root: Node) -> Optional[Node]:
    """Return the first ``html`` element at or below ``root``."""
    if root.node_type == NodeType.ELEMENT_NODE and root.tag_name == "html":
        return root
    for node in iter_descendants(root):
        if node.node_type == NodeType.ELEMENT_NODE and node.tag_name == "html":
            return node
    return None


def get_element_by_id(root: Node, element_id: str) -> Optional[Node]:
    """
    Get the first descendant element with the given id.

    Args:
        root: The node to search below
        element_id: The id to search for

    Returns:
        The element with the specified id, or None if not found
    """
    if not element_id:
        return None
    for node in iter_descendants(root):
        if node.node_type == NodeType.ELEMENT_NODE and node.get_attribute("id") == element_id:
            return node
    return None
