"""HTML serialization for pagedom nodes."""

import logging
from typing import List, Optional, Union

from .node import Node, NodeType

logger = logging.getLogger(__name__)

# Elements that never have children and render as a single self-closing tag
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "keygen",
    "link", "meta", "param", "source", "track", "wbr",
})

# Elements whose text children are written verbatim
# (noscript is left out: with scripting disabled its content parses as markup)
RAW_TEXT_ELEMENTS = frozenset({
    "iframe", "noembed", "noframes", "plaintext", "script", "style", "xmp",
})

# Parsers drop one leading newline inside these, so it has to be doubled
LEADING_NEWLINE_ELEMENTS = frozenset({"listing", "pre", "textarea"})

_ESCAPES = (
    ("&", "&amp;"),
    ("'", "&#39;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&#34;"),
    ("\r", "&#13;"),
)


def escape_text(text: Optional[str]) -> str:
    """Escape markup-significant characters in text or attribute values."""
    if not text:
        return ""
    # "&" goes first so the entities added below are not escaped again.
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


escape_attribute = escape_text


def serialize_start_tag(node: Node) -> str:
    parts: List[str] = ["<", node.tag_name]
    for attr in node.attributes:
        parts.extend([" ", attr.name, '="', escape_attribute(attr.value), '"'])
    parts.append("/>" if node.tag_name in VOID_ELEMENTS else ">")
    return "".join(parts)


def serialize_end_tag(node: Node) -> str:
    return f"</{node.tag_name}>"


def _render(node: Node, parts: List[str], raw: bool = False) -> None:
    # Stack items are (node, raw) pairs or literal end tags.
    stack: List[Union[str, tuple]] = [(node, raw)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        current, raw = item
        if current.node_type == NodeType.TEXT_NODE:
            parts.append(current.data if raw else escape_text(current.data))
            continue

        parts.append(serialize_start_tag(current))
        if current.tag_name in VOID_ELEMENTS:
            if current.child_nodes:
                logger.warning(f"Void element {current!r} has child nodes, skipping them")
            continue

        first = current.first_child
        if (current.tag_name in LEADING_NEWLINE_ELEMENTS and first is not None
                and first.node_type == NodeType.TEXT_NODE and first.data.startswith("\n")):
            parts.append("\n")

        child_raw = current.tag_name in RAW_TEXT_ELEMENTS
        stack.append(serialize_end_tag(current))
        stack.extend((child, child_raw) for child in reversed(current.child_nodes))


def outer_html(node: Optional[Node]) -> str:
    """
    Render ``node`` and its subtree as markup.

    Args:
        node: The node to render; None renders as an empty string

    Returns:
        The markup text
    """
    if node is None:
        return ""
    parent = node.parent_node
    raw = (node.node_type == NodeType.TEXT_NODE and parent is not None
           and parent.tag_name in RAW_TEXT_ELEMENTS)
    parts: List[str] = []
    _render(node, parts, raw)
    return "".join(parts)


def inner_html(node: Optional[Node]) -> str:
    """Render the children of ``node``, without the node's own tags."""
    if node is None or node.node_type == NodeType.TEXT_NODE:
        return ""
    if node.tag_name in VOID_ELEMENTS:
        if node.child_nodes:
            logger.warning(f"Void element {node!r} has child nodes, skipping them")
        return ""
    raw = node.tag_name in RAW_TEXT_ELEMENTS
    parts: List[str] = []
    for child in node.child_nodes:
        _render(child, parts, raw)
    return "".join(parts)


def text_content(node: Optional[Node]) -> str:
    """
    Concatenate the literal text below ``node`` in document order.

    Text nodes return their own payload unescaped; tags contribute nothing.
    """
    if node is None:
        return ""
    if node.node_type == NodeType.TEXT_NODE:
        return node.data

    from .query import iter_descendants
    return "".join(
        child.data for child in iter_descendants(node)
        if child.node_type == NodeType.TEXT_NODE
    )
