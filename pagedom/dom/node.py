"""
Node implementation for the DOM.
This module implements the single node structure shared by every part of the
engine. A node is either an element or a text leaf; the kind is carried in
``node_type`` and every operation branches on it explicitly.
"""

import logging
from enum import IntEnum
from typing import Callable, List, Optional

from .attr import Attr

logger = logging.getLogger(__name__)


class NodeType(IntEnum):
    """Node kinds, numbered as in the DOM standard."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3


class Node:
    """
    A node of an HTML tree.

    Element nodes carry a lower-cased ``tag_name``, an ordered list of
    ``attributes`` and an ordered list of ``child_nodes``. Text nodes carry
    only ``data``.

    The parent owns its ``child_nodes``. ``parent_node``, ``previous_sibling``
    and ``next_sibling`` are back-references rewired by the structural methods
    below so that they always mirror the order of the parent's child list.

    Nodes compare by identity; use ``is_equal_node`` for structural equality.
    """

    __slots__ = (
        "node_type",
        "tag_name",
        "data",
        "attributes",
        "child_nodes",
        "parent_node",
        "previous_sibling",
        "next_sibling",
    )

    def __init__(self, node_type: NodeType, tag_name: str = "", data: str = ""):
        """
        Initialize a new Node.

        Args:
            node_type: The kind of node to build
            tag_name: Tag name for element nodes
            data: Text payload for text nodes

        Raises:
            ValueError: If the node type is unknown or an element has no tag name
        """
        if node_type == NodeType.ELEMENT_NODE:
            if not tag_name:
                raise ValueError("Empty tag_name passed to element constructor")
            self.tag_name = tag_name.lower()
            self.data = ""
        elif node_type == NodeType.TEXT_NODE:
            self.tag_name = ""
            self.data = "" if data is None else data
        else:
            raise ValueError(f"Unsupported node type: {node_type!r}")

        self.node_type = NodeType(node_type)
        self.attributes: List[Attr] = []
        self.child_nodes: List['Node'] = []
        self.parent_node: Optional['Node'] = None
        self.previous_sibling: Optional['Node'] = None
        self.next_sibling: Optional['Node'] = None

    @property
    def is_element(self) -> bool:
        return self.node_type == NodeType.ELEMENT_NODE

    @property
    def is_text(self) -> bool:
        return self.node_type == NodeType.TEXT_NODE

    # Structure

    @property
    def first_child(self) -> Optional['Node']:
        return self.child_nodes[0] if self.child_nodes else None

    @property
    def last_child(self) -> Optional['Node']:
        return self.child_nodes[-1] if self.child_nodes else None

    def has_child_nodes(self) -> bool:
        """Check if this node has any child nodes."""
        return len(self.child_nodes) > 0

    def _index_of(self, child: 'Node') -> int:
        # Identity scan; a structurally equal node elsewhere must not match.
        # Scanned from the end: remove_nodes detaches siblings last to first.
        if child is None or child.parent_node is not self:
            return -1
        for index in range(len(self.child_nodes) - 1, -1, -1):
            if self.child_nodes[index] is child:
                return index
        return -1

    def _can_adopt(self, child: 'Node') -> bool:
        if self.node_type != NodeType.ELEMENT_NODE:
            logger.warning(f"Cannot insert {child!r} into text node {self!r}")
            return False

        current: Optional['Node'] = self
        while current is not None:
            if current is child:
                logger.warning(f"Inserting {child!r} into {self!r} would create a cycle")
                return False
            current = current.parent_node
        return True

    def _link(self, index: int, child: 'Node') -> None:
        """Place a detached child at ``index`` and rewire the sibling chain."""
        self.child_nodes.insert(index, child)
        child.parent_node = self

        prev_sibling = self.child_nodes[index - 1] if index > 0 else None
        next_sibling = self.child_nodes[index + 1] if index + 1 < len(self.child_nodes) else None

        child.previous_sibling = prev_sibling
        child.next_sibling = next_sibling
        if prev_sibling is not None:
            prev_sibling.next_sibling = child
        if next_sibling is not None:
            next_sibling.previous_sibling = child

    def _unlink(self, index: int) -> 'Node':
        """Take the child at ``index`` out of this node and clear its links."""
        child = self.child_nodes.pop(index)

        prev_sibling = child.previous_sibling
        next_sibling = child.next_sibling
        if prev_sibling is not None:
            prev_sibling.next_sibling = next_sibling
        if next_sibling is not None:
            next_sibling.previous_sibling = prev_sibling

        child.parent_node = None
        child.previous_sibling = None
        child.next_sibling = None
        return child

    @staticmethod
    def _detach(node: 'Node') -> None:
        parent = node.parent_node
        if parent is None:
            return
        index = parent._index_of(node)
        if index >= 0:
            parent._unlink(index)

    def append_child(self, child: 'Node') -> Optional['Node']:
        """
        Append a child node to this node.

        A child that already sits somewhere in a tree is moved, never copied.

        Args:
            child: The node to append

        Returns:
            The appended node, or None if the insertion was refused
        """
        if not self._can_adopt(child):
            return None
        self._detach(child)
        self._link(len(self.child_nodes), child)
        return child

    def prepend_child(self, child: 'Node') -> Optional['Node']:
        """
        Insert a child node as the first child of this node.

        Args:
            child: The node to prepend

        Returns:
            The prepended node, or None if the insertion was refused
        """
        if not self._can_adopt(child):
            return None
        self._detach(child)
        self._link(0, child)
        return child

    def insert_before(self, new_child: 'Node', reference_child: Optional['Node'] = None) -> Optional['Node']:
        """
        Insert a node before a reference node.

        Args:
            new_child: The node to insert
            reference_child: The reference node to insert before, or None to append

        Returns:
            The inserted node, or None if ``reference_child`` is not a child of this node
        """
        if reference_child is None:
            return self.append_child(new_child)

        if self._index_of(reference_child) < 0:
            logger.warning(f"Reference child {reference_child!r} not found in {self!r}")
            return None
        if new_child is reference_child:
            return new_child
        if not self._can_adopt(new_child):
            return None

        self._detach(new_child)
        self._link(self._index_of(reference_child), new_child)
        return new_child

    def replace_child(self, new_child: 'Node', old_child: 'Node') -> Optional['Node']:
        """
        Replace a child node with another node.

        ``new_child`` is taken out of its current position first and ends up
        exactly where ``old_child`` was. If ``old_child`` is not a child of this
        node nothing changes.

        Args:
            new_child: The replacement node
            old_child: The node to replace

        Returns:
            The replaced node, or None when the call was a no-op
        """
        if self._index_of(old_child) < 0:
            logger.warning(f"Old child {old_child!r} not found in {self!r}, nothing replaced")
            return None
        if new_child is old_child:
            return old_child
        if not self._can_adopt(new_child):
            return None

        self._detach(new_child)
        index = self._index_of(old_child)
        self._unlink(index)
        self._link(index, new_child)
        return old_child

    def remove_child(self, child: 'Node') -> Optional['Node']:
        """
        Remove a child node from this node.

        Args:
            child: The node to remove

        Returns:
            The removed node, or None if it is not a child of this node
        """
        index = self._index_of(child)
        if index < 0:
            logger.warning(f"Child {child!r} not found in {self!r}, nothing removed")
            return None
        return self._unlink(index)

    def remove(self) -> None:
        """Detach this node from its parent, if it has one."""
        self._detach(self)

    # Attributes

    def _find_attribute(self, name: str) -> Optional[Attr]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def has_attribute(self, name: str) -> bool:
        """
        Check if the element has the specified attribute.

        Args:
            name: The attribute name

        Returns:
            True if the attribute exists, False otherwise (always False for text nodes)
        """
        return self._find_attribute(name) is not None

    def get_attribute(self, name: str) -> str:
        """
        Get the value of an attribute.

        Args:
            name: The attribute name

        Returns:
            The attribute value, or an empty string if the attribute doesn't exist
        """
        attr = self._find_attribute(name)
        return attr.value if attr is not None else ""

    def set_attribute(self, name: str, value: str) -> None:
        """
        Set an attribute value.

        An existing attribute keeps its position; a new one goes last.

        Args:
            name: The attribute name
            value: The attribute value
        """
        if self.node_type != NodeType.ELEMENT_NODE:
            logger.debug(f"Ignoring set_attribute({name!r}) on {self!r}")
            return

        attr = self._find_attribute(name)
        if attr is not None:
            attr.value = "" if value is None else str(value)
        else:
            self.attributes.append(Attr(name, value))

    def remove_attribute(self, name: str) -> None:
        """
        Remove an attribute.

        Args:
            name: The attribute name
        """
        self.attributes = [attr for attr in self.attributes if attr.name != name]

    def has_attributes(self) -> bool:
        """Check if the element has any attributes."""
        return bool(self.attributes)

    # Accessors

    @property
    def id(self) -> str:
        return self.get_attribute("id")

    @property
    def class_name(self) -> str:
        """The class attribute with surrounding whitespace trimmed."""
        return self.get_attribute("class").strip()

    @property
    def class_list(self) -> List[str]:
        """Class tokens in attribute order, without duplicates."""
        classes: List[str] = []
        for token in self.get_attribute("class").split():
            if token not in classes:
                classes.append(token)
        return classes

    @property
    def children(self) -> List['Node']:
        """Get a list of child elements."""
        return [child for child in self.child_nodes if child.node_type == NodeType.ELEMENT_NODE]

    @property
    def child_element_count(self) -> int:
        return sum(1 for child in self.child_nodes if child.node_type == NodeType.ELEMENT_NODE)

    @property
    def first_element_child(self) -> Optional['Node']:
        for child in self.child_nodes:
            if child.node_type == NodeType.ELEMENT_NODE:
                return child
        return None

    @property
    def last_element_child(self) -> Optional['Node']:
        for child in reversed(self.child_nodes):
            if child.node_type == NodeType.ELEMENT_NODE:
                return child
        return None

    @property
    def next_element_sibling(self) -> Optional['Node']:
        sibling = self.next_sibling
        while sibling is not None and sibling.node_type != NodeType.ELEMENT_NODE:
            sibling = sibling.next_sibling
        return sibling

    @property
    def previous_element_sibling(self) -> Optional['Node']:
        sibling = self.previous_sibling
        while sibling is not None and sibling.node_type != NodeType.ELEMENT_NODE:
            sibling = sibling.previous_sibling
        return sibling

    @property
    def parent_element(self) -> Optional['Node']:
        parent = self.parent_node
        if parent is not None and parent.node_type == NodeType.ELEMENT_NODE:
            return parent
        return None

    # Queries, text and markup

    def get_elements_by_tag_name(self, tag_name: str) -> List['Node']:
        """
        Get all descendant elements with the given tag name.

        Args:
            tag_name: The tag name to match (case-insensitive), or "*" for all elements

        Returns:
            List of matching elements in document order
        """
        from .query import get_elements_by_tag_name
        return get_elements_by_tag_name(self, tag_name)

    def get_all_nodes_with_tag(self, *tag_names: str) -> List['Node']:
        from .query import get_all_nodes_with_tag
        return get_all_nodes_with_tag(self, *tag_names)

    @property
    def text_content(self) -> str:
        """Get or set the text content of this node and its descendants."""
        from .serializer import text_content
        return text_content(self)

    @text_content.setter
    def text_content(self, text: str) -> None:
        from .mutation import set_text_content
        set_text_content(self, text)

    @property
    def inner_html(self) -> str:
        from .serializer import inner_html
        return inner_html(self)

    @property
    def outer_html(self) -> str:
        from .serializer import outer_html
        return outer_html(self)

    def clone_node(self, deep: bool = True) -> 'Node':
        """
        Clone this node.

        Args:
            deep: Whether to clone the whole subtree or only this node

        Returns:
            The cloned node, detached from any tree
        """
        from .mutation import clone_node
        if deep:
            return clone_node(self)

        clone = Node(self.node_type, self.tag_name, self.data)
        clone.attributes = [attr.clone() for attr in self.attributes]
        return clone

    def is_equal_node(self, other: Optional['Node']) -> bool:
        """
        Check if this node is structurally equal to another node.

        Args:
            other: The node to compare with

        Returns:
            True if kind, tag, data, attributes and children all match
        """
        if not isinstance(other, Node) or self.node_type != other.node_type:
            return False
        if self.tag_name != other.tag_name or self.data != other.data:
            return False
        if [(a.name, a.value) for a in self.attributes] != [(a.name, a.value) for a in other.attributes]:
            return False
        if len(self.child_nodes) != len(other.child_nodes):
            return False
        return all(mine.is_equal_node(theirs) for mine, theirs in zip(self.child_nodes, other.child_nodes))

    def __repr__(self) -> str:
        if self.node_type == NodeType.TEXT_NODE:
            return f"Node(#text={self.data[:30]!r})"
        return f"Node(<{self.tag_name}>, children={len(self.child_nodes)})"


def create_element(tag_name: str) -> Node:
    """
    Create a new element with no attributes and no children.

    Args:
        tag_name: The tag name of the element

    Returns:
        The new element
    """
    return Node(NodeType.ELEMENT_NODE, tag_name=tag_name)


def create_text_node(data: str) -> Node:
    """
    Create a new text node.

    Args:
        data: The text content

    Returns:
        The new text node
    """
    return Node(NodeType.TEXT_NODE, data=data)


NodePredicate = Callable[[Node], bool]
