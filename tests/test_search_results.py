"""
Unit tests for search result extraction.

Tests the pure extraction functions without requiring network access.
"""

import unittest
from pathlib import Path
from unittest import mock

from extractors import ParseFailure, extract_results, parse_html, parse_search_results, score_result, unwrap_redirect

ORIGIN = "https://duckduckgo.com"
FIXTURES = Path(__file__).parent / "fixtures"


def _results(html, cap=200):
    return extract_results(parse_html(html), ORIGIN, cap)


class TestUnwrapRedirect(unittest.TestCase):
    """Test redirect link unwrapping."""

    def test_redirect_path(self):
        """/l/?uddg= links should yield the decoded destination."""
        href = "/l/?uddg=https%3A%2F%2Fexample.com%2Fpage&rut=abc"
        self.assertEqual(unwrap_redirect(href), "https://example.com/page")

    def test_uddg_on_other_path(self):
        """Any link carrying a uddg parameter should be unwrapped."""
        href = "https://duckduckgo.com/y.js?ad=1&uddg=https%3A%2F%2Fshop.example%2F"
        self.assertEqual(unwrap_redirect(href), "https://shop.example/")

    def test_plain_link_untouched(self):
        """Links without a redirect parameter should come back unchanged."""
        self.assertEqual(unwrap_redirect("https://example.com/?q=1"), "https://example.com/?q=1")

    def test_empty_destination(self):
        """An empty uddg value should leave the link alone."""
        self.assertEqual(unwrap_redirect("/l/?uddg="), "/l/?uddg=")

    def test_malformed_destination(self):
        """A malformed escape should leave the link alone."""
        self.assertEqual(unwrap_redirect("/l/?uddg=%zz"), "/l/?uddg=%zz")

    def test_doubly_encoded_destination(self):
        """The destination should be unescaped a second time."""
        href = "/l/?uddg=https%3A%2F%2Fexample.com%2Fa%2520b"
        self.assertEqual(unwrap_redirect(href), "https://example.com/a b")

    def test_second_unescape_fails(self):
        """A destination that breaks on the second unescape should leave the link alone."""
        href = "/l/?uddg=https%3A%2F%2Fexample.com%2F%25zz"
        self.assertEqual(unwrap_redirect(href), href)

    def test_missing_destination(self):
        """A redirect path without uddg should leave the link alone."""
        self.assertEqual(unwrap_redirect("/l/?kh=-1"), "/l/?kh=-1")


class TestScoreResult(unittest.TestCase):
    """Test result ranking scores."""

    def test_scores(self):
        """https beats http, everything else scores zero."""
        self.assertEqual(score_result("https://example.com/"), 2)
        self.assertEqual(score_result("http://example.com/"), 1)
        self.assertEqual(score_result("ftp://example.com/"), 0)
        self.assertEqual(score_result("mailto:someone@example.com"), 0)

    def test_search_engine_hosts(self):
        """Links back to search engines should score zero."""
        self.assertEqual(score_result("https://duckduckgo.com/html/"), 0)
        self.assertEqual(score_result("https://www.google.com/search?q=x"), 0)
        self.assertEqual(score_result("https://www.bing.com/"), 0)

    def test_only_host_counts(self):
        """A search engine named in the path should not demote the link."""
        self.assertEqual(score_result("https://example.com/why-not-google.com"), 2)


class TestExtractResults(unittest.TestCase):
    """Test anchor mining."""

    def test_redirect_unwrapped(self):
        """Redirect links should resolve to their destination."""
        results = _results('<a href="/l/?uddg=https%3A%2F%2Fexample.com%2Fpage">Example</a>')

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].url, "https://example.com/page")
        self.assertEqual(results[0].title, "Example")

    def test_unwrapped_destination_sanitized(self):
        """Tracking parameters inside the destination should be stripped."""
        href = "/l/?uddg=https%3A%2F%2Fexample.com%2F%3Futm_source%3Dddg%26id%3D7"
        results = _results(f'<a href="{href}">Example</a>')

        self.assertEqual(results[0].url, "https://example.com/?id=7")

    def test_relative_links_absolutized(self):
        """Root-relative links should be resolved against the search origin."""
        results = _results('<a href="/html/?q=next">Next</a>')
        self.assertEqual(results[0].url, "https://duckduckgo.com/html/?q=next")

    def test_skip_invalid_hrefs(self):
        """Should skip javascript:, fragment, blank and missing hrefs."""
        html = """
        <div>
            <a href="javascript:void(0)">JS Link</a>
            <a href="JavaScript:alert(1)">Shouty JS</a>
            <a href="#section">Anchor</a>
            <a href="   ">Blank</a>
            <a name="target">No href</a>
            <a href="https://example.com/valid">Valid</a>
        </div>
        """

        results = _results(html)

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].url, "https://example.com/valid")

    def test_title_whitespace_collapsed(self):
        """Visible text should be collapsed to single spaces."""
        results = _results('<a href="https://a.example/">  Hello \n\t <b>big</b>   world </a>')
        self.assertEqual(results[0].title, "Hello big world")

    def test_title_falls_back_to_url(self):
        """Anchors without text should use their URL as title."""
        results = _results('<a href="https://a.example/x?fbclid=1"><img src="i.png"></a>')

        self.assertEqual(results[0].title, "https://a.example/x")
        self.assertEqual(results[0].url, "https://a.example/x")

    def test_duplicates_removed(self):
        """URLs equal after sanitizing should be kept once, first title wins."""
        html = """
        <a href="https://example.com/page">First</a>
        <a href="https://example.com/page?utm_medium=email">Second</a>
        <a href="https://example.com/page">Third</a>
        """

        results = _results(html)

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].title, "First")

    def test_ranking_is_stable(self):
        """Destination links should rank above search engine links, ties keep order."""
        html = """
        <a href="https://duckduckgo.com/about">About DDG</a>
        <a href="http://plain.example/">Plain</a>
        <a href="https://secure.example/">Secure</a>
        <a href="ftp://files.example/">Files</a>
        <a href="https://secure2.example/">Secure 2</a>
        <a href="https://www.google.com/search?q=x">Google</a>
        """

        titles = [r.title for r in _results(html)]

        self.assertEqual(titles, ["Secure", "Secure 2", "Plain", "About DDG", "Files", "Google"])

    def test_anchors_in_skipped_elements_included(self):
        """Anchors inside elements the text extractor skips still count."""
        html = '<body><svg><a href="https://svg.example/">Svg link</a></svg></body>'
        results = _results(html)

        self.assertEqual([r.url for r in results], ["https://svg.example/"])

    def test_cap_enforced(self):
        """Only the first cap results should be kept."""
        html = "".join(f'<a href="https://site{i}.example/">Site {i}</a>' for i in range(500))

        results = _results(html)

        self.assertEqual(len(results), 200)
        self.assertEqual(results[0].url, "https://site0.example/")
        self.assertEqual(results[-1].url, "https://site199.example/")

    def test_cap_applied_after_ranking(self):
        """Capping should keep the best-ranked results."""
        html = (
            '<a href="https://duckduckgo.com/a">Internal</a>'
            '<a href="http://plain.example/">Plain</a>'
            '<a href="https://secure.example/">Secure</a>'
        )

        results = _results(html, cap=2)

        self.assertEqual([r.title for r in results], ["Secure", "Plain"])

    def test_no_anchors(self):
        """Pages without links should give no results."""
        self.assertEqual(_results("<p>Nothing to see</p>"), [])


class TestSearchResultsFixture(unittest.TestCase):
    """Test extraction from a realistic results page."""

    def setUp(self):
        """Load sample HTML fixture."""
        with open(FIXTURES / "sample_search_results.html", 'r', encoding='utf-8') as f:
            self.html = f.read()

    def test_extract_from_fixture(self):
        """Should extract, clean, dedupe and rank the page's links."""
        results = parse_search_results(self.html, ORIGIN)

        self.assertEqual([r.url for r in results], [
            "https://docs.python.org/3/library/html.parser.html",
            "https://www.crummy.com/software/BeautifulSoup/bs4/doc/",
            "https://realpython.com/python-web-scraping-practical-introduction/",
            "http://lxml.de/lxmlhtml.html",
            "https://duckduckgo.com/html/",
            "https://www.google.com/search?q=python+html+parsing",
            "https://duckduckgo.com/html/?q=python+html+parsing&s=30",
            "https://duckduckgo.com/feedback",
        ])
        self.assertEqual(results[0].title, "html.parser - Simple HTML and XHTML parser")
        self.assertEqual(results[1].title, "Beautiful Soup Documentation")
        self.assertEqual(results[-1].title, "https://duckduckgo.com/feedback")

    def test_urls_unique(self):
        """Extracted URLs should be pairwise distinct."""
        urls = [r.url for r in parse_search_results(self.html, ORIGIN)]
        self.assertEqual(len(urls), len(set(urls)))

    def test_parse_failure_gives_no_results(self):
        """Unparseable pages should give an empty list."""
        with mock.patch('extractors.search_results.parse_html', side_effect=ParseFailure("broken")):
            self.assertEqual(parse_search_results(self.html, ORIGIN), [])


if __name__ == '__main__':
    unittest.main()
