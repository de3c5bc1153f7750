"""
pagedom - DOM-style querying, rewriting and serialization of parsed HTML.
"""

import logging

from pagedom.dom import (
    Node,
    NodeType,
    clone_node,
    create_element,
    create_text_node,
    get_all_nodes_with_tag,
    get_elements_by_tag_name,
    include_node,
    inner_html,
    outer_html,
    remove_nodes,
    set_text_content,
    text_content,
)
from pagedom.errors import PageDomError, ParserError
from pagedom.parser import HTMLParser, parse_document, parse_fragment

# Library code never configures handlers; applications call setup_logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Package information
__version__ = "0.1.0"
__description__ = "DOM-style querying, rewriting and serialization of parsed HTML"

__all__ = [
    'Node', 'NodeType', 'clone_node', 'create_element', 'create_text_node',
    'get_all_nodes_with_tag', 'get_elements_by_tag_name', 'include_node',
    'inner_html', 'outer_html', 'remove_nodes', 'set_text_content', 'text_content',
    'PageDomError', 'ParserError',
    'HTMLParser', 'parse_document', 'parse_fragment',
]
