"""
Attr implementation for the DOM.
This module implements a single name/value attribute pair of an element.
"""


class Attr:
    """
    Attribute of an element node.

    Names are kept exactly as given; lookups on an element compare them
    case-sensitively.
    """

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: str):
        """
        Initialize a new attribute.

        Args:
            name: The attribute name
            value: The attribute value
        """
        self.name = name
        self.value = "" if value is None else str(value)

    def clone(self) -> 'Attr':
        """
        Clone this attribute.

        Returns:
            A new Attr instance with the same name and value
        """
        return Attr(self.name, self.value)

    def __repr__(self) -> str:
        return f"Attr({self.name!r}, {self.value!r})"
