"""
Navigation state for the omnibar text browser.

This package holds the per-session pagination engine for search results.
"""

from .result_pager import (
    AddressOutOfRangeError,
    EmptyResultSetError,
    NavigationBoundaryError,
    NavigationError,
    ResultPager
)

__all__ = [
    'AddressOutOfRangeError',
    'EmptyResultSetError',
    'NavigationBoundaryError',
    'NavigationError',
    'ResultPager'
]
