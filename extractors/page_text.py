"""
Plain-text extraction for single documents.

Turns a parsed document into paragraph-preserving text suitable for a
line-oriented terminal. These functions are pure and never raise on bad
markup: when no tree can be built they fall back to a tag stripper.
"""

from typing import List
import html
import logging

from bs4 import Tag
from bs4.element import PageElement

from browser_config import BLOCK_TAGS, SKIP_TAGS
from .tree import ParseFailure, find_body, is_text_node, iter_nodes, node_text, parse_html, tag_name

logger = logging.getLogger(__name__)


class _TextBuffer:
    """Output buffer that remembers its last character."""

    def __init__(self):
        self.parts: List[str] = []
        self.last = ''

    def write(self, text: str) -> None:
        if text:
            self.parts.append(text)
            self.last = text[-1]

    def newline_if_needed(self) -> None:
        # Never open with a separator and never stack two in a row
        if self.last and self.last != '\n':
            self.write('\n')

    def getvalue(self) -> str:
        return ''.join(self.parts)


def extract_text(root: PageElement) -> str:
    """
    Convert a document tree into normalized plain text.

    Traversal starts at <body> when the tree has one. Script-like elements
    are dropped with all of their content, block elements are separated by
    line breaks and adjacent inline text is joined with a single space.

    Args:
        root: Parsed document (or any subtree)

    Returns:
        Extracted text with at most one blank line between paragraphs
    """
    start = find_body(root)
    if start is None:
        start = root

    buf = _TextBuffer()

    # (node, leaving) pairs; leaving entries emit the trailing separator
    stack = [(start, False)]
    while stack:
        node, leaving = stack.pop()

        if leaving:
            buf.newline_if_needed()
            continue

        if is_text_node(node):
            text = str(node).strip()
            if not text:
                continue
            if buf.last and buf.last not in ('\n', ' '):
                buf.write(' ')
            buf.write(html.unescape(text))
            continue

        if not isinstance(node, Tag):
            continue

        name = tag_name(node)
        if name in SKIP_TAGS:
            continue

        if name in BLOCK_TAGS:
            buf.newline_if_needed()
            if name != 'br':
                stack.append((node, True))

        stack.extend((child, False) for child in reversed(node.contents))

    return _normalize_spacing(buf.getvalue())


def _normalize_spacing(text: str) -> str:
    """Unify line endings, cap blank runs at one empty line and trim."""
    text = text.replace('\r\n', '\n')
    while '\n\n\n' in text:
        text = text.replace('\n\n\n', '\n\n')
    return text.strip()


def strip_tags_fallback(markup: str) -> str:
    """
    Crude character-level tag stripper for markup no parser accepts.

    Everything between '<' and '>' is dropped along with the brackets.
    """
    out = []
    in_tag = False
    for ch in markup:
        if ch == '<':
            in_tag = True
        elif ch == '>':
            in_tag = False
        elif not in_tag:
            out.append(ch)
    return ''.join(out)


def html_to_text(markup: str) -> str:
    """
    Convert raw HTML to readable text.

    Args:
        markup: HTML document

    Returns:
        Extracted text; falls back to tag stripping if parsing fails
    """
    try:
        doc = parse_html(markup)
    except ParseFailure as e:
        logger.warning(f"Parser rejected markup, using tag stripper: {e}")
        return html.unescape(strip_tags_fallback(markup))

    text = extract_text(doc)
    logger.debug(f"Extracted {len(text)} characters of text")
    return text


def extract_title(markup: str) -> str:
    """Return the decoded text of the document's first non-empty <title>."""
    try:
        doc = parse_html(markup)
    except ParseFailure:
        return ''

    for node in iter_nodes(doc):
        if tag_name(node) == 'title':
            title = node_text(node)
            if title:
                return html.unescape(title).strip()
    return ''
