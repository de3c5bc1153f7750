#!/usr/bin/env python3
"""
pagedom - Command line entry point

Parses an HTML page, strips unwanted elements and prints what is left of the
body as markup or plain text.
"""

import argparse
import logging
import sys
from typing import List, Optional

from pagedom import __version__
from pagedom.dom import get_all_nodes_with_tag, get_elements_by_tag_name, remove_nodes
from pagedom.dom.serializer import inner_html, outer_html, text_content
from pagedom.errors import ParserError
from pagedom.parser import BACKENDS, HTMLParser
from pagedom.utils.config import Config
from pagedom.utils.logging import PerformanceLogger, log_exception, setup_logging

logger = logging.getLogger("pagedom.main")

RENDERERS = {
    "outer": outer_html,
    "inner": inner_html,
    "text": text_content,
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Strip elements from an HTML page and print the result")

    parser.add_argument("file", nargs="?", help="HTML file to read (stdin when omitted)", default=None)
    parser.add_argument("--remove", action="append", metavar="TAG",
                        help="Remove every element with this tag (repeatable, replaces the configured list)")
    parser.add_argument("--mode", choices=sorted(RENDERERS), help="What to print for the body")
    parser.add_argument("--backend", choices=BACKENDS, help="Parser backend")
    parser.add_argument("--config", help="Path to a JSON config file", default=None)
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"pagedom {__version__}")

    return parser.parse_args(argv)


def read_source(path: Optional[str]) -> bytes:
    if path is None:
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = parse_args(argv)
    config = Config(args.config)

    setup_logging(
        log_file=config.get("logging.file"),
        console_level="DEBUG" if args.debug else config.get("logging.console_level", "WARNING"),
    )
    timer = PerformanceLogger(logger, "pagedom")

    backend = args.backend or config.get("parser.backend", "html5lib")
    mode = args.mode or config.get("output.mode", "inner")
    remove_tags = args.remove if args.remove is not None else config.get("output.remove_tags", [])
    if mode not in RENDERERS:
        logger.error(f"Unknown output mode {mode!r}")
        return 1

    try:
        source = read_source(args.file)
        timer.start("parse")
        root = HTMLParser(backend=backend, features=config.get("parser.features", "html5lib")).parse_document(source)
        timer.end("parse")
    except (OSError, ParserError, ValueError) as e:
        log_exception(logger, e, "Could not load document")
        return 1

    if remove_tags:
        removed = remove_nodes(get_all_nodes_with_tag(root, *remove_tags))
        logger.info(f"Removed {removed} elements ({', '.join(remove_tags)})")

    bodies = get_elements_by_tag_name(root, "body")
    target = bodies[0] if bodies else root

    timer.start("render")
    output = RENDERERS[mode](target)
    timer.end("render")

    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
