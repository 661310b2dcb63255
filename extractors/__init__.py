"""
Extractors for the omnibar text browser.

This package contains pure, unit-testable functions that turn parsed
HTML into plain text and search results, plus URL helpers.
"""

from .page_text import (
    extract_text,
    extract_title,
    html_to_text,
    strip_tags_fallback
)
from .search_results import (
    extract_results,
    parse_search_results,
    score_result,
    unwrap_redirect
)
from .tree import ParseFailure, parse_html
from .urls import ensure_scheme, is_url_like, sanitize_url

__all__ = [
    'extract_text',
    'extract_title',
    'html_to_text',
    'strip_tags_fallback',
    'extract_results',
    'parse_search_results',
    'score_result',
    'unwrap_redirect',
    'ParseFailure',
    'parse_html',
    'ensure_scheme',
    'is_url_like',
    'sanitize_url'
]
