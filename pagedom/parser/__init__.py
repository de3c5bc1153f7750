"""
Adapters around external HTML parsers.
"""

from .html_parser import BACKENDS, HTMLParser, parse_document, parse_fragment

__all__ = ['BACKENDS', 'HTMLParser', 'parse_document', 'parse_fragment']
