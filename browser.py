"""
Omnibar Text Browser

A terminal browser that:
- Fetches URLs and prints their readable text
- Sends anything that isn't a URL to a search engine
- Pages through search results 10 rows at a time (F / B)
- Opens the Nth result on the current page (open N)
"""

import sys
import logging
import argparse
from pathlib import Path
from urllib.parse import urlsplit

import yaml

from browser_config import MAX_SEARCH_RESULTS
from extractors import ensure_scheme, extract_title, html_to_text, is_url_like, parse_search_results
from fetcher import FetchError, PageFetcher
from navigation import NavigationError, ResultPager
from result_models import PageSlice
from settings_loader import BrowserSettings, load_settings, validate_settings

logger = logging.getLogger(__name__)

ANSI_GREEN = "\033[32m"
ANSI_RESET = "\033[0m"

PROMPT = "omnibar> "


class BrowserSession:
    """
    One interactive browsing session.

    Owns the result pager, so every session navigates its own results.
    """

    def __init__(self, settings=None, fetcher=None, out=None, err=None):
        """
        Initialize the session.

        Args:
            settings: BrowserSettings (None = defaults)
            fetcher: PageFetcher (None = build one from settings)
            out: Stream for normal output (default stdout)
            err: Stream for error messages (default stderr)
        """
        self.settings = settings or BrowserSettings()
        self.fetcher = fetcher or PageFetcher(self.settings.network)
        self.pager = ResultPager()
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    # --- Output ---

    def _green(self, text):
        if not self.settings.display.color:
            return text
        return ANSI_GREEN + text + ANSI_RESET

    def _print(self, text=""):
        print(text, file=self.out)

    def _error(self, text):
        print(text, file=self.err)

    def print_header(self):
        self._print(self._green("Terminal Browser — omnibar (enter URL or search). Type 'exit' to quit."))
        self._print(self._green(
            f"Search results are paginated: {self.pager.page_size} rows per page. "
            "Use 'F' for forward, 'B' for back."
        ))
        self._print(self._green("Use 'open N' to open the Nth result on the current page."))
        self._print()

    def render_page(self, page: PageSlice):
        """Print one page of results with its position and navigation tips."""
        self._print()
        self._print(self._green(
            f"Search results — Page {page.page + 1}/{page.last_page + 1}  "
            f"(showing results {page.start}..{page.end} of {page.total})"
        ))
        self._print()

        for row, result in enumerate(page.items, start=1):
            self._print(self._green(f"{row}) {result.title}\n   {result.url}\n"))

        tips = ["Type 'open N' to open the Nth item on this page."]
        if page.has_previous:
            tips.append("B to go Back")
        if page.has_next:
            tips.append("F to go Forward")
        tips.append("Or paste a URL at the omnibar.")
        self._print(self._green(" | ".join(tips)))
        self._print()

    def render_document(self, markup):
        """Print a document's title and text, truncated for the terminal."""
        title = extract_title(markup)
        if title:
            self._print(self._green("Title: ") + title)
            self._print()

        text = html_to_text(markup)
        max_chars = self.settings.display.max_chars
        if len(text) > max_chars:
            text = text[:max_chars] + "\n\n[output truncated]"

        self._print(self._green(text))
        self._print()

    # --- Commands ---

    def search(self, query):
        """
        Search and show the first page of results.

        Raises:
            FetchError: If the search page cannot be retrieved
        """
        self._print()
        self._print(self._green("Searching for: ") + query)

        page = self.fetcher.search(query)
        results = parse_search_results(page.text, self.settings.network.search_origin, MAX_SEARCH_RESULTS)
        logger.info(f"Search '{query}' returned {len(results)} results")

        if not results:
            self.pager.clear()
            self._print(self._green("[no results found]"))
            return

        self.pager.load(results)
        self.render_page(self.pager.current_slice())

    def open_url(self, url):
        """
        Fetch a URL and print its text.

        Raises:
            FetchError: If the page cannot be retrieved
        """
        url = ensure_scheme(url)
        self._print()
        self._print(self._green("Fetching: " + url))

        page = self.fetcher.fetch(url)
        scheme = urlsplit(url).scheme
        self._print(self._green(f"HTTP {scheme} — {page.status_code} {page.reason}".rstrip()))
        self._print()
        self.render_document(page.text)

    def open_file(self, path):
        """Print the text of a local HTML file."""
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            markup = f.read()
        self._print()
        self._print(self._green(f"File: {path}"))
        self._print()
        self.render_document(markup)

    def open_result(self, n):
        """
        Open the Nth result counted from the current page.

        Raises:
            NavigationError: If there are no results or n is out of range
            FetchError: If the page cannot be retrieved
        """
        result = self.pager.resolve_index(n)
        self.open_url(result.url)

    def forward(self):
        self.render_page(self.pager.forward())

    def back(self):
        self.render_page(self.pager.back())

    def handle(self, line):
        """
        Dispatch one line of omnibar input.

        Returns:
            False when the session should end, True otherwise
        """
        text = line.strip()
        if not text:
            return True

        lowered = text.lower()
        if lowered in ('exit', 'quit'):
            self._print("Goodbye.")
            return False

        try:
            if lowered == 'f':
                self.forward()
                return True

            if lowered == 'b':
                self.back()
                return True

            parts = text.split()
            if len(parts) == 2 and parts[0].lower() == 'open':
                self._handle_open(parts[1])
                return True

            if is_url_like(text):
                self._run(self.open_url, text, "fetch error")
            else:
                self._run(self.search, text, "search error")

        except NavigationError as e:
            self._error(str(e))

        return True

    def _handle_open(self, arg):
        try:
            n = int(arg)
        except ValueError:
            n = 0
        if n <= 0:
            self._error("Usage: open <N>   (N must be a positive integer)")
            return
        self._run(self.open_result, n, "open error")

    def _run(self, command, arg, label):
        try:
            command(arg)
        except FetchError as e:
            self._error(f"{label}: {e}")

    def run(self):
        """Read omnibar commands until exit or end of input."""
        self.print_header()
        while True:
            try:
                line = input(self._green(PROMPT))
            except (EOFError, KeyboardInterrupt):
                self._print("\nbye.")
                return
            if not self.handle(line):
                return

    def close(self):
        self.fetcher.close()


def main():
    """Main entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description='Terminal text browser with paginated search results',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive omnibar
  python browser.py
  python browser.py --settings browser.yaml

  # One-shot modes
  python browser.py --url https://example.com
  python browser.py --search "python html parsing"
  python browser.py --file saved_page.html
        """
    )

    parser.add_argument('--settings', help='YAML settings file')
    parser.add_argument('--no-color', action='store_true', help='Disable ANSI colour output')
    parser.add_argument('--url', help='Fetch a single URL, print its text and exit')
    parser.add_argument('--search', help='Run a single search, print the first page and exit')
    parser.add_argument('--file', help='Print the text of a local HTML file and exit')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    settings = BrowserSettings()
    if args.settings:
        try:
            settings = load_settings(args.settings)
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Could not load settings: {e}")
            sys.exit(1)
        for warning in validate_settings(settings):
            logger.warning(f"Settings: {warning}")

    if args.no_color:
        settings.display.color = False

    session = BrowserSession(settings)
    try:
        if args.file:
            if not Path(args.file).exists():
                logger.error(f"File not found: {args.file}")
                sys.exit(1)
            session.open_file(args.file)
        elif args.url:
            session.open_url(args.url)
        elif args.search:
            session.search(args.search)
        else:
            session.run()
    except FetchError as e:
        logger.error(f"Request failed: {e}")
        sys.exit(1)
    finally:
        session.close()


if __name__ == "__main__":
    main()
