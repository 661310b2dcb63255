"""
Configuration settings for the omnibar text browser.
"""

# Search engine endpoint - the query is appended URL-encoded
SEARCH_ENGINE_HTML = "https://duckduckgo.com/html/?q="

# Origin prepended to root-relative links found on search result pages
SEARCH_ORIGIN = "https://duckduckgo.com"

# User agent sent with every request
USER_AGENT = "TerminalBrowser/1.0 (+https://example.local/terminal-browser)"

# Request timeout in seconds
HTTP_TIMEOUT = 15

# Body size limits in bytes (documents / search result pages)
MAX_PAGE_BYTES = 5 * 1024 * 1024
MAX_SEARCH_BYTES = 2 * 1024 * 1024

# Maximum number of characters of document text printed to the terminal
MAX_DISPLAY_CHARS = 20_000

# Rows per page of search results
PAGE_SIZE = 10

# Maximum number of parsed search results kept for pagination
MAX_SEARCH_RESULTS = 200

# Query parameters stripped from result URLs
TRACKING_PARAMS = (
    "utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content",
    "gclid", "fbclid",
)

# Elements whose content never reaches the extracted text
SKIP_TAGS = frozenset({"script", "style", "noscript", "iframe", "svg"})

# Elements separated from their neighbours by a line break
BLOCK_TAGS = frozenset({
    "p", "div", "section", "article", "header", "footer", "aside",
    "h1", "h2", "h3", "h4", "h5", "h6", "br", "li", "tr", "table",
})

# Hosts ranked below destination links (the search engine itself and its peers)
SEARCH_AGGREGATOR_DOMAINS = ("duckduckgo.com", "google.com", "bing.com")
