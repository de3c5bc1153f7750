"""
Mutations that operate on more than one node at a time.

Single-node structural edits (append, prepend, insert, replace, remove) and
attribute edits are methods of :class:`~pagedom.dom.node.Node`.
"""

import logging
from typing import Iterable, List, Optional

from .node import Node, NodePredicate, NodeType, create_text_node

logger = logging.getLogger(__name__)


def remove_nodes(nodes: Iterable[Node], predicate: Optional[NodePredicate] = None) -> int:
    """
    Detach nodes from their parents.

    Each node is removed together with its whole subtree. Nodes are visited
    last to first, so ``nodes`` may be a live ``child_nodes`` list.

    Args:
        nodes: Candidate nodes
        predicate: Only nodes for which this returns True are removed; None removes all

    Returns:
        The number of nodes removed
    """
    removed = 0
    for node in reversed(list(nodes)):
        if node.parent_node is None:
            continue
        if predicate is None or predicate(node):
            node.parent_node.remove_child(node)
            removed += 1

    logger.debug(f"remove_nodes removed {removed} nodes")
    return removed


def set_text_content(node: Node, text: str) -> None:
    """
    Replace everything inside ``node`` with a single text node.

    On a text node the payload itself is replaced.
    """
    if text is None:
        text = ""

    if node.node_type == NodeType.TEXT_NODE:
        node.data = text
        return

    while node.child_nodes:
        node._unlink(len(node.child_nodes) - 1)
    node.append_child(create_text_node(text))


def clone_node(node: Node) -> Node:
    """
    Deep-copy ``node`` and its subtree.

    The copy shares nothing with the source and has no parent.
    """
    clone = node.clone_node(deep=False)

    # (source, copy) pairs whose children still need copying
    pending: List[tuple] = [(node, clone)]
    while pending:
        source, copy = pending.pop()
        for child in source.child_nodes:
            child_copy = child.clone_node(deep=False)
            copy._link(len(copy.child_nodes), child_copy)
            if child.child_nodes:
                pending.append((child, child_copy))

    return clone
