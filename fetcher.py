"""
HTTP retrieval for the omnibar text browser.

Thin wrapper around a curl_cffi session that applies the configured user
agent, timeout and body size limits. Parsing happens elsewhere.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import quote_plus
import logging

from curl_cffi import requests
from curl_cffi.requests import exceptions as requests_exceptions

from settings_loader import NetworkSettings

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a page cannot be retrieved."""


@dataclass
class FetchedPage:
    url: str
    status_code: int
    reason: str
    text: str


class PageFetcher:
    """Fetches documents and search result pages."""

    def __init__(self, settings: Optional[NetworkSettings] = None, session=None):
        """
        Initialize the fetcher.

        Args:
            settings: Network settings (defaults from browser_config)
            session: Pre-built HTTP session (tests pass a fake)
        """
        self.settings = settings or NetworkSettings()
        self.session = session if session is not None else requests.Session()

    def fetch(self, url: str, max_bytes: Optional[int] = None) -> FetchedPage:
        """
        Fetch a URL and decode its body.

        Args:
            url: Absolute URL
            max_bytes: Body size limit (defaults to max_page_bytes)

        Returns:
            FetchedPage with the body text, cut at the byte limit

        Raises:
            FetchError: On connection errors and timeouts
        """
        limit = self.settings.max_page_bytes if max_bytes is None else max_bytes
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(
                url,
                headers={'User-Agent': self.settings.user_agent},
                timeout=self.settings.timeout,
                stream=True
            )
            try:
                body, truncated = _read_limited(response, limit)
            finally:
                response.close()
        except requests_exceptions.RequestException as e:
            logger.error(f"Fetch failed for {url}: {e}")
            raise FetchError(str(e)) from e

        if truncated:
            logger.info(f"Truncated body of {url} to {limit} bytes")

        return FetchedPage(
            url=url,
            status_code=response.status_code,
            reason=response.reason or '',
            text=_decode(body, response.encoding)
        )

    def search(self, query: str) -> FetchedPage:
        """
        Fetch the search engine's results page for a query.

        Raises:
            FetchError: On request failure or a non-200 response
        """
        url = self.settings.search_url + quote_plus(query)
        page = self.fetch(url, self.settings.max_search_bytes)
        if page.status_code != 200:
            raise FetchError(f"search engine returned {page.status_code} {page.reason}".rstrip())
        return page

    def close(self) -> None:
        try:
            self.session.close()
        except Exception as e:
            logger.warning(f"Error closing HTTP session: {e}")


def _decode(body: bytes, encoding: Optional[str]) -> str:
    try:
        return body.decode(encoding or 'utf-8', errors='replace')
    except LookupError:
        return body.decode('utf-8', errors='replace')


def _read_limited(response, limit: int) -> Tuple[bytes, bool]:
    """Read a streamed body, stopping once limit bytes have arrived."""
    chunks = []
    size = 0
    for chunk in response.iter_content():
        if not chunk:
            continue
        chunks.append(chunk[:max(limit - size, 0)])
        size += len(chunk)
        if size >= limit:
            break
    return b''.join(chunks), size > limit
