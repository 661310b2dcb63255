"""
Pagination state for search results.

Holds the most recently loaded result set and the current page, and
validates forward/back movement and "open Nth item" requests. One pager
belongs to one browsing session; it has no internal locking.
"""

from typing import Iterable, Tuple
import logging

from browser_config import PAGE_SIZE
from result_models import PageSlice, SearchResult

logger = logging.getLogger(__name__)


class NavigationError(ValueError):
    """Base class for recoverable pagination conditions."""


class EmptyResultSetError(NavigationError):
    def __init__(self):
        super().__init__("No search results to navigate. Run a search first.")


class NavigationBoundaryError(NavigationError):
    """Forward on the last page or back on the first."""

    def __init__(self, direction: str):
        self.direction = direction
        if direction == 'forward':
            message = "Already on the last page. Cannot go forward."
        else:
            message = "Already on the first page. Cannot go back."
        super().__init__(message)


class AddressOutOfRangeError(NavigationError):
    """
    A 1-based index that does not resolve from the current page.

    Attributes:
        requested: The index that was asked for
        valid_range: (1, number of items on the current page)
        page_start: 1-based position of the page's first item
        page_end: 1-based position of the page's last item
        total: Number of results in the set
    """

    def __init__(self, requested: int, page_start: int, page_end: int, total: int):
        self.requested = requested
        self.page_start = page_start
        self.page_end = page_end
        self.total = total
        self.valid_range = (1, page_end - page_start + 1)
        super().__init__(
            f"Invalid choice. On this page choose N between 1 and {self.valid_range[1]} "
            f"(showing results {page_start}..{page_end} of {total})."
        )


class ResultPager:
    """
    Fixed-size windows over one ordered result set.

    Loading a new set replaces the previous one and rewinds to page 0;
    there is no history of earlier sets.
    """

    def __init__(self, page_size: int = PAGE_SIZE):
        """
        Initialize an empty pager.

        Args:
            page_size: Rows per page
        """
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size
        self._results: Tuple[SearchResult, ...] = ()
        self._current_page = 0

    @property
    def results(self) -> Tuple[SearchResult, ...]:
        return self._results

    @property
    def total(self) -> int:
        return len(self._results)

    @property
    def is_empty(self) -> bool:
        return not self._results

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def last_page(self) -> int:
        if not self._results:
            return 0
        return (len(self._results) - 1) // self.page_size

    def load(self, results: Iterable[SearchResult]) -> None:
        """Replace the result set and rewind to the first page."""
        self._results = tuple(results)
        self._current_page = 0
        logger.debug(f"Loaded {self.total} results ({self.last_page + 1} pages)")

    def clear(self) -> None:
        self.load(())

    def _require_results(self) -> None:
        if not self._results:
            raise EmptyResultSetError()

    def _bounds(self) -> Tuple[int, int]:
        """0-based [start, end) of the current page."""
        start = self._current_page * self.page_size
        end = min(len(self._results), start + self.page_size)
        return start, end

    def current_slice(self) -> PageSlice:
        """
        Return the items on the current page.

        Raises:
            EmptyResultSetError: If no results are loaded
        """
        self._require_results()
        start, end = self._bounds()
        return PageSlice(
            page=self._current_page,
            last_page=self.last_page,
            start=start + 1,
            end=end,
            total=self.total,
            items=list(self._results[start:end])
        )

    def forward(self) -> PageSlice:
        """
        Advance one page.

        Raises:
            EmptyResultSetError: If no results are loaded
            NavigationBoundaryError: If already on the last page
        """
        self._require_results()
        if self._current_page >= self.last_page:
            raise NavigationBoundaryError('forward')
        self._current_page += 1
        return self.current_slice()

    def back(self) -> PageSlice:
        """
        Go back one page.

        Raises:
            EmptyResultSetError: If no results are loaded
            NavigationBoundaryError: If already on the first page
        """
        self._require_results()
        if self._current_page == 0:
            raise NavigationBoundaryError('back')
        self._current_page -= 1
        return self.current_slice()

    def resolve_index(self, n: int) -> SearchResult:
        """
        Look up the n-th (1-based) item counted from the start of the current page.

        Raises:
            EmptyResultSetError: If no results are loaded
            AddressOutOfRangeError: If n is below 1 or runs past the last result
        """
        self._require_results()
        global_index = self._current_page * self.page_size + (n - 1)
        if n < 1 or global_index >= self.total:
            start, end = self._bounds()
            raise AddressOutOfRangeError(n, start + 1, end, self.total)
        return self._results[global_index]
