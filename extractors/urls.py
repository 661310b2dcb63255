"""
URL helpers: tracking-parameter removal and omnibar input classification.
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from browser_config import TRACKING_PARAMS


def sanitize_url(url: str) -> str:
    """
    Remove common tracking parameters from a URL.

    The query string is only rebuilt (keys sorted) when something was
    actually removed; otherwise the URL is returned verbatim, so the
    function is idempotent. Unparseable URLs are returned unchanged.

    Args:
        url: URL to clean

    Returns:
        URL without utm_*/gclid/fbclid parameters
    """
    try:
        parsed = urlsplit(url)
    except ValueError:
        return url

    if not parsed.query:
        return url

    params = parse_qsl(parsed.query, keep_blank_values=True)
    kept = [(key, value) for key, value in params if key not in TRACKING_PARAMS]
    if len(kept) == len(params):
        return url

    kept.sort(key=lambda pair: pair[0])
    return urlunsplit(parsed._replace(query=urlencode(kept)))


def is_url_like(text: str) -> bool:
    """
    Decide whether omnibar input should be fetched rather than searched.

    True for explicit http(s) URLs and for single words containing a dot.
    """
    lowered = text.strip().lower()
    if lowered.startswith('http:') or lowered.startswith('https:'):
        return True
    if ' ' in text:
        return False
    return '.' in text


def ensure_scheme(url: str) -> str:
    """Prefix http:// unless the URL already names http or https."""
    lowered = url.lower()
    if lowered.startswith('http://') or lowered.startswith('https://'):
        return url
    return 'http://' + url
