"""
DOM manipulation layer for parsed HTML trees.
This package provides the node model, tree queries, mutations and markup
serialization used to rewrite a parsed page and emit it again as text.
"""

from .attr import Attr
from .node import Node, NodeType, create_element, create_text_node
from .query import (
    document_element,
    get_all_nodes_with_tag,
    get_element_by_id,
    get_elements_by_tag_name,
    include_node,
    iter_descendants,
)
from .mutation import clone_node, remove_nodes, set_text_content
from .serializer import escape_text, inner_html, outer_html, text_content

__all__ = [
    'Attr', 'Node', 'NodeType', 'create_element', 'create_text_node',
    'document_element', 'get_all_nodes_with_tag', 'get_element_by_id',
    'get_elements_by_tag_name', 'include_node', 'iter_descendants',
    'clone_node', 'remove_nodes', 'set_text_content',
    'escape_text', 'inner_html', 'outer_html', 'text_content',
]
