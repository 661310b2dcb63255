"""
Tree helpers shared by the extractors.

Parsing is delegated to BeautifulSoup (lxml builder); everything here only
reads the resulting tree and never mutates it.
"""

from typing import Iterator, Optional
import logging

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PageElement, PreformattedString

logger = logging.getLogger(__name__)


class ParseFailure(Exception):
    """Raised when no tree can be built from the markup."""


def parse_html(markup: str) -> BeautifulSoup:
    """
    Build a DOM tree from raw markup.

    Args:
        markup: HTML document or fragment

    Returns:
        BeautifulSoup document

    Raises:
        ParseFailure: If the parser rejects the markup
    """
    try:
        return BeautifulSoup(markup, 'lxml')
    except ParserRejectedMarkup as e:
        raise ParseFailure(str(e)) from e


def iter_nodes(root: PageElement) -> Iterator[PageElement]:
    """
    Yield every node under root (root included) in document order.

    Uses an explicit stack so deeply nested documents cannot exhaust
    the interpreter's recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Tag):
            stack.extend(reversed(node.contents))


def is_text_node(node: PageElement) -> bool:
    """True for character data; comments, doctypes, CDATA and friends are not text."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def tag_name(node: PageElement) -> Optional[str]:
    """Lower-cased element name, or None for non-element nodes."""
    if isinstance(node, Tag):
        return node.name.lower()
    return None


def get_attribute(node: Tag, key: str) -> Optional[str]:
    """
    Look up an attribute by case-insensitive key.

    Multi-valued attributes (e.g. class) are joined with single spaces.
    """
    wanted = key.lower()
    for name, value in node.attrs.items():
        if name.lower() == wanted:
            if isinstance(value, (list, tuple)):
                return ' '.join(value)
            return value
    return None


def node_text(node: PageElement) -> str:
    """Concatenate the raw text of every descendant text node."""
    return ''.join(str(n) for n in iter_nodes(node) if is_text_node(n))


def find_body(root: PageElement) -> Optional[Tag]:
    """Return the first <body> element in document order, if any."""
    for node in iter_nodes(root):
        if tag_name(node) == 'body':
            return node
    return None
