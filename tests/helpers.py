"""Shared helpers for the pagedom tests."""

from pagedom.dom import Node, iter_descendants
from pagedom.parser import parse_fragment


def parse_html_source(source: str) -> Node:
    """Parse ``source`` as body content and return the first parsed node."""
    return parse_fragment(source).first_child


def assert_tree_consistent(root: Node) -> None:
    """Check parent and sibling links below ``root`` against the child lists."""
    seen = set()
    for node in [root, *iter_descendants(root)]:
        assert id(node) not in seen, f"{node!r} reachable twice"
        seen.add(id(node))

        children = node.child_nodes
        if node.is_text:
            assert children == []
            assert node.attributes == []
        for i, child in enumerate(children):
            assert child.parent_node is node
            assert child.previous_sibling is (children[i - 1] if i > 0 else None)
            assert child.next_sibling is (children[i + 1] if i + 1 < len(children) else None)
