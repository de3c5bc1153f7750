"""Exceptions raised by pagedom."""


class PageDomError(Exception):
    """Base class for pagedom errors."""


class ParserError(PageDomError):
    """The external markup parser could not build a tree."""
