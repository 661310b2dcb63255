"""
Search result extraction.

Mines the anchors of a search-engine results page for title/URL pairs,
unwraps redirect links, drops duplicates and ranks destination links
above search-engine-internal ones. Pure functions, no I/O.
"""

from typing import List, Optional
from urllib.parse import unquote_plus, urlsplit
import html
import logging
import re

from bs4.element import PageElement

from browser_config import MAX_SEARCH_RESULTS, SEARCH_AGGREGATOR_DOMAINS
from result_models import SearchResult
from .tree import ParseFailure, get_attribute, iter_nodes, node_text, parse_html, tag_name
from .urls import sanitize_url

logger = logging.getLogger(__name__)

REDIRECT_PARAM = 'uddg'

# A '%' not followed by two hex digits
_BAD_ESCAPE_RE = re.compile(r'%(?![0-9A-Fa-f]{2})')


def _query_unescape(value: str) -> Optional[str]:
    """Strictly decode a form-encoded query value; None if malformed."""
    if _BAD_ESCAPE_RE.search(value):
        return None
    try:
        return unquote_plus(value, errors='strict')
    except UnicodeDecodeError:
        return None


def unwrap_redirect(href: str) -> str:
    """
    Extract the destination of a search-engine redirect link.

    Links of the form /l/?uddg=<encoded url> (or any link carrying a uddg
    parameter) are replaced by the destination. The value is unescaped as a
    query parameter and then unescaped once more, so a doubly encoded
    destination comes out plain. Anything that cannot be decoded is
    returned unchanged.

    Args:
        href: Raw href attribute value

    Returns:
        Destination URL or the original href
    """
    if not (href.startswith('/l/?') or REDIRECT_PARAM + '=' in href):
        return href

    try:
        query = urlsplit(href).query
    except ValueError:
        return href

    for pair in query.split('&'):
        key, _, raw_value = pair.partition('=')
        if key != REDIRECT_PARAM:
            continue
        value = _query_unescape(raw_value)
        if not value:
            break
        decoded = _query_unescape(value)
        if decoded is not None:
            return decoded
        break

    return href


def score_result(url: str) -> int:
    """
    Rank a result URL: 2 for https, 1 for http, 0 for other schemes and
    for links pointing back at a search engine.
    """
    try:
        parsed = urlsplit(url)
    except ValueError:
        return 0

    host = parsed.hostname or ''
    if any(domain in host for domain in SEARCH_AGGREGATOR_DOMAINS):
        return 0

    scheme = parsed.scheme.lower()
    if scheme == 'https':
        return 2
    if scheme == 'http':
        return 1
    return 0


def extract_results(root: PageElement, search_origin: str,
                    cap: int = MAX_SEARCH_RESULTS) -> List[SearchResult]:
    """
    Extract ranked, deduplicated search results from a results page.

    Args:
        root: Parsed results page
        search_origin: Origin used to absolutize root-relative links
        cap: Maximum number of results returned

    Returns:
        Results in ranked order, at most cap entries
    """
    results: List[SearchResult] = []
    seen = set()
    anchors = 0

    for node in iter_nodes(root):
        if tag_name(node) != 'a':
            continue
        anchors += 1

        href = (get_attribute(node, 'href') or '').strip()
        if not href:
            continue

        # Collapse runs of whitespace in the visible text
        title = ' '.join(node_text(node).split())

        href = unwrap_redirect(href)

        if href.startswith('/'):
            href = search_origin + href

        # Skip script pseudo-links and in-page anchors
        if href.lower().startswith('javascript:') or href.startswith('#'):
            continue

        href = sanitize_url(href)

        if href in seen:
            continue
        seen.add(href)

        title = html.unescape(title) if title else href
        results.append(SearchResult(title=title, url=href))

    # Stable: equal scores keep document order
    results.sort(key=lambda result: -score_result(result.url))

    logger.debug(f"Found {anchors} anchors, kept {len(results)} unique results")
    return results[:max(cap, 0)]


def parse_search_results(markup: str, search_origin: str,
                         cap: int = MAX_SEARCH_RESULTS) -> List[SearchResult]:
    """
    Parse a results page and extract its results.

    Returns an empty list when the markup cannot be parsed.
    """
    try:
        doc = parse_html(markup)
    except ParseFailure as e:
        logger.warning(f"Could not parse search results page: {e}")
        return []
    return extract_results(doc, search_origin, cap)
