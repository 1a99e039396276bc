"""Match elements of an HTML document by CSS selector and text pattern."""

from __future__ import annotations

import logging
import re

import soupsieve
from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from testarossa.errors import MarkupError

logger = logging.getLogger(__name__)


def parse(markup: bytes | str) -> BeautifulSoup:
    """Parse *markup*, raising MarkupError if the parser rejects it."""
    try:
        return BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as e:
        raise MarkupError(f"Failed to parse HTML: {e}") from e


def compile_selector(query: str) -> soupsieve.SoupSieve:
    """Compile a CSS selector, raising MarkupError if it is invalid."""
    try:
        return soupsieve.compile(query)
    except soupsieve.SelectorSyntaxError as e:
        raise MarkupError(f"Invalid selector '{query}': {e}") from e


def compile_pattern(pattern: str) -> re.Pattern[str] | None:
    """Compile the text pattern; an empty pattern compiles to None."""
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise MarkupError(f"Invalid pattern '{pattern}': {e}") from e


def _is_text(node: PageElement) -> bool:
    # Comments, doctypes and CDATA are PreformattedString subclasses
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def text_matches(node: PageElement, pattern: re.Pattern[str]) -> bool:
    """Depth-first search of *node* and its descendants for matching text."""
    if _is_text(node):
        return pattern.search(str(node)) is not None
    if isinstance(node, Tag):
        return any(text_matches(child, pattern) for child in node.children)
    return False


def match(markup: bytes | str, query: str, pattern: str) -> bool:
    """Whether an element selected by *query* has text matching *pattern*.

    With an empty *pattern*, any selected element is a match. Raises
    MarkupError for unparseable markup, an invalid selector or an invalid
    pattern, before any matching is attempted.
    """
    document = parse(markup)
    selector = compile_selector(query)
    compiled = compile_pattern(pattern)
    elements: list[Tag] = list(selector.select(document))
    logger.debug(f"Selector '{query}' matched {len(elements)} element(s)")
    if compiled is None:
        return bool(elements)
    return any(text_matches(el, compiled) for el in elements)
