"""
HTML parser adapter.
This module drives an external HTML5 parser (html5lib directly, or
BeautifulSoup) and converts its output into pagedom nodes. No parsing logic
lives here; the adapter only walks the foreign tree.
"""

import logging
from typing import List, Optional, Tuple, Union

import html5lib
from bs4 import (
    BeautifulSoup,
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)

from ..dom.node import Node, create_element, create_text_node
from ..errors import ParserError

logger = logging.getLogger(__name__)

BACKENDS = ("html5lib", "bs4")

# minidom node types produced by html5lib's "dom" tree builder
_DOM_ELEMENT_NODE = 1
_DOM_TEXT_NODE = 3

# bs4 strings that are markup constructs rather than text
_SKIPPED_STRINGS = (Comment, Doctype, Declaration, CData, ProcessingInstruction)

Source = Union[str, bytes]


class HTMLParser:
    """Build pagedom trees with html5lib or BeautifulSoup."""

    def __init__(self, backend: str = "html5lib", features: str = "html5lib"):
        """
        Initialize the HTML parser.

        Args:
            backend: "html5lib" to use html5lib's dom tree builder, "bs4" for BeautifulSoup
            features: Parser name handed to BeautifulSoup (bs4 backend only)

        Raises:
            ValueError: If the backend is unknown
        """
        if backend not in BACKENDS:
            raise ValueError(f"Unknown parser backend {backend!r}, expected one of {BACKENDS}")
        self.backend = backend
        self.features = features
        logger.debug(f"HTML parser initialized (backend: {backend}, features: {features})")

    def parse_document(self, source: Source) -> Node:
        """
        Parse a whole document.

        Args:
            source: HTML text, or UTF-8 bytes

        Returns:
            The document's html element

        Raises:
            ParserError: If the underlying parser fails
        """
        source = self._decode(source)
        logger.debug(f"Parsing document (first 100 chars): {source[:100]!r}")

        if self.backend == "html5lib":
            parsed = self._run(lambda: self._html5lib_parser().parse(source))
            root = parsed.documentElement
            if root is None:
                return create_element("html")
            return self._convert_dom(root)

        soup = self._run(lambda: BeautifulSoup(source, self.features, multi_valued_attributes=None))
        root_tag = soup.find("html")
        if root_tag is not None:
            return self._convert_soup(root_tag)

        # html.parser does not synthesize a root element
        html = create_element("html")
        self._convert_soup_children(soup, html)
        return html

    def parse_fragment(self, source: Source) -> Node:
        """
        Parse markup as the content of a body element.

        Args:
            source: HTML text, or UTF-8 bytes

        Returns:
            A detached body element holding the parsed nodes

        Raises:
            ParserError: If the underlying parser fails
        """
        source = self._decode(source)
        body = create_element("body")

        if self.backend == "html5lib":
            fragment = self._run(lambda: self._html5lib_parser().parseFragment(source, container="body"))
            for child in fragment.childNodes:
                self._convert_dom(child, body)
            return body

        soup = self._run(lambda: BeautifulSoup(source, self.features, multi_valued_attributes=None))
        container = soup.find("body") or soup
        self._convert_soup_children(container, body)
        return body

    @staticmethod
    def _decode(source: Source) -> str:
        if source is None:
            return ""
        if isinstance(source, bytes):
            return source.decode("utf-8", errors="replace")
        return source

    @staticmethod
    def _html5lib_parser() -> html5lib.HTMLParser:
        return html5lib.HTMLParser(tree=html5lib.treebuilders.getTreeBuilder("dom"))

    def _run(self, parse):
        try:
            return parse()
        except Exception as e:
            logger.error(f"Error in HTML parser ({self.backend}): {e}")
            raise ParserError(f"{self.backend} failed to parse markup: {e}") from e

    @staticmethod
    def _append_text(parent: Node, data: str) -> Node:
        # html5lib emits one text node per tokenizer chunk, and dropped
        # comments leave neighbours behind; both are folded into one node.
        last = parent.last_child
        if last is not None and last.is_text:
            last.data += data
            return last
        return parent.append_child(create_text_node(data))

    @classmethod
    def _convert_dom(cls, root, parent: Optional[Node] = None) -> Optional[Node]:
        """
        Convert an html5lib (minidom) node and its subtree.

        Comments, doctypes and processing instructions are dropped. Adjacent
        text ends up in a single text node.

        Args:
            root: The parsed node from html5lib
            parent: Node to append the converted node to, if any

        Returns:
            The converted node, or None if the node kind was dropped
        """
        converted: Optional[Node] = None
        pending: List[Tuple[object, Optional[Node]]] = [(root, parent)]
        while pending:
            source, target = pending.pop()
            if source.nodeType == _DOM_TEXT_NODE:
                if target is not None:
                    node = cls._append_text(target, source.data)
                    if converted is None:
                        converted = node
                    continue
                node = create_text_node(source.data)
            elif source.nodeType == _DOM_ELEMENT_NODE:
                node = create_element(source.tagName)
                for name, value in source.attributes.items():
                    node.set_attribute(name, value)
                pending.extend((child, node) for child in reversed(source.childNodes))
            else:
                continue

            if target is not None:
                target.append_child(node)
            if converted is None:
                converted = node
        return converted

    @classmethod
    def _convert_soup(cls, tag: Tag) -> Node:
        element = create_element(tag.name)
        for name, value in tag.attrs.items():
            element.set_attribute(name, value)
        cls._convert_soup_children(tag, element)
        return element

    @classmethod
    def _convert_soup_children(cls, tag: Tag, parent: Node) -> None:
        for child in tag.children:
            if isinstance(child, Tag):
                parent.append_child(cls._convert_soup(child))
            elif isinstance(child, _SKIPPED_STRINGS):
                continue
            elif isinstance(child, NavigableString):
                cls._append_text(parent, str(child))


def parse_document(source: Source, backend: str = "html5lib") -> Node:
    """Parse a whole document with a default parser and return its html element."""
    return HTMLParser(backend=backend).parse_document(source)


def parse_fragment(source: Source, backend: str = "html5lib") -> Node:
    """Parse markup with a default parser and return a body element holding it."""
    return HTMLParser(backend=backend).parse_fragment(source)
