"""
Omnibar API Server

FastAPI server exposing the text extractor and paginated search results
over HTTP. Every search creates its own session holding its own result
pager, so concurrent clients never share navigation state. At most
MAX_SESSIONS sessions are kept; opening one more evicts the least recently
used.

Endpoints are plain functions rather than coroutines because the curl_cffi
session blocks. FastAPI runs them in its threadpool, so the session map is
guarded by a module lock and each pager by its own lock.

Usage:
    python -m uvicorn api_server:app --host 0.0.0.0 --port 8080

Environment variables:
    OMNIBAR_SETTINGS     - Optional YAML settings file
    OMNIBAR_MAX_SESSIONS - Result sessions kept in memory (default: 32)
"""

import logging
import os
import threading
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from browser_config import MAX_SEARCH_RESULTS
from extractors import ensure_scheme, extract_title, html_to_text, parse_search_results
from fetcher import FetchError, PageFetcher
from navigation import AddressOutOfRangeError, NavigationError, ResultPager
from result_models import PageSlice, SearchResult
from settings_loader import BrowserSettings, load_settings

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Omnibar API",
    description="Plain-text documents and paginated search results",
    version="1.0.0",
)

# --- Configuration ---

SETTINGS_FILE = os.environ.get("OMNIBAR_SETTINGS")
settings = load_settings(SETTINGS_FILE) if SETTINGS_FILE else BrowserSettings()
MAX_SESSIONS = int(os.environ.get("OMNIBAR_MAX_SESSIONS", "32"))

# --- In-memory storage ---


class _Session:
    def __init__(self, query: str):
        self.pager = ResultPager()
        self.lock = threading.Lock()
        self.query = query
        self.created_at = datetime.now(timezone.utc).isoformat()


# Least recently used first
sessions: "OrderedDict[str, _Session]" = OrderedDict()
_sessions_lock = threading.Lock()

_fetcher: Optional[PageFetcher] = None


def get_fetcher() -> PageFetcher:
    global _fetcher
    if _fetcher is None:
        _fetcher = PageFetcher(settings.network)
    return _fetcher


# --- Request/Response models ---


class TextRequest(BaseModel):
    url: Optional[str] = None
    html: Optional[str] = None


class TextResponse(BaseModel):
    url: Optional[str] = None
    status_code: Optional[int] = None
    title: str
    text: str


class SearchRequest(BaseModel):
    query: Optional[str] = None
    html: Optional[str] = None  # pre-fetched results page


class SearchResponse(BaseModel):
    session_id: Optional[str] = None
    query: str
    total: int
    page: Optional[PageSlice] = None


class SessionInfo(BaseModel):
    session_id: str
    query: str
    created_at: str
    total: int
    current_page: int


# --- Helpers ---


def _get_session(session_id: str) -> _Session:
    with _sessions_lock:
        session = sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Session not found")
        sessions.move_to_end(session_id)
    return session


def _add_session(session_id: str, session: _Session) -> None:
    """Store a new session, evicting the least recently used ones over the limit."""
    with _sessions_lock:
        sessions[session_id] = session
        while len(sessions) > max(MAX_SESSIONS, 1):
            evicted_id, _ = sessions.popitem(last=False)
            logger.info(f"Session {evicted_id} evicted")


def _navigation_error(e: NavigationError) -> HTTPException:
    """Map a pager condition onto an HTTP error."""
    if isinstance(e, AddressOutOfRangeError):
        return HTTPException(
            status_code=416,
            detail={
                "message": str(e),
                "requested": e.requested,
                "valid_range": list(e.valid_range),
                "page_start": e.page_start,
                "page_end": e.page_end,
                "total": e.total,
            },
        )
    return HTTPException(status_code=409, detail=str(e))


def _document(markup: str, url: Optional[str] = None, status_code: Optional[int] = None) -> TextResponse:
    return TextResponse(
        url=url,
        status_code=status_code,
        title=extract_title(markup),
        text=html_to_text(markup),
    )


def _fetch_document(url: str, fetcher: PageFetcher) -> TextResponse:
    url = ensure_scheme(url)
    try:
        page = fetcher.fetch(url)
    except FetchError as e:
        raise HTTPException(status_code=502, detail=f"fetch error: {e}")
    return _document(page.text, url=url, status_code=page.status_code)


# --- Endpoints ---


@app.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.post("/api/text", response_model=TextResponse)
def document_text(req: TextRequest, fetcher: PageFetcher = Depends(get_fetcher)):
    """Return the title and plain text of a URL or of posted HTML."""
    if req.html is not None:
        return _document(req.html)
    if not req.url or not req.url.strip():
        raise HTTPException(status_code=400, detail="Provide 'url' or 'html'")
    return _fetch_document(req.url.strip(), fetcher)


@app.post("/api/search", response_model=SearchResponse)
def search(req: SearchRequest, fetcher: PageFetcher = Depends(get_fetcher)):
    """
    Run a search and open a session on its first page.

    An empty result set creates no session.
    """
    query = (req.query or "").strip()
    if req.html is not None:
        markup = req.html
    elif query:
        try:
            markup = fetcher.search(query).text
        except FetchError as e:
            raise HTTPException(status_code=502, detail=f"search error: {e}")
    else:
        raise HTTPException(status_code=400, detail="Provide 'query' or 'html'")

    results = parse_search_results(markup, settings.network.search_origin, MAX_SEARCH_RESULTS)
    if not results:
        return SearchResponse(query=query, total=0)

    session_id = str(uuid.uuid4())
    session = _Session(query)
    session.pager.load(results)
    _add_session(session_id, session)
    logger.info(f"Session {session_id}: {len(results)} results for '{query}'")

    return SearchResponse(
        session_id=session_id,
        query=query,
        total=len(results),
        page=session.pager.current_slice(),
    )


@app.get("/api/sessions")
def list_sessions() -> list[SessionInfo]:
    """List live sessions, least recently used first."""
    with _sessions_lock:
        snapshot = list(sessions.items())
    return [
        SessionInfo(
            session_id=session_id,
            query=s.query,
            created_at=s.created_at,
            total=s.pager.total,
            current_page=s.pager.current_page,
        )
        for session_id, s in snapshot
    ]


@app.get("/api/sessions/{session_id}/page", response_model=PageSlice)
def current_page(session_id: str):
    session = _get_session(session_id)
    with session.lock:
        try:
            return session.pager.current_slice()
        except NavigationError as e:
            raise _navigation_error(e)


@app.post("/api/sessions/{session_id}/forward", response_model=PageSlice)
def forward(session_id: str):
    session = _get_session(session_id)
    with session.lock:
        try:
            return session.pager.forward()
        except NavigationError as e:
            raise _navigation_error(e)


@app.post("/api/sessions/{session_id}/back", response_model=PageSlice)
def back(session_id: str):
    session = _get_session(session_id)
    with session.lock:
        try:
            return session.pager.back()
        except NavigationError as e:
            raise _navigation_error(e)


@app.get("/api/sessions/{session_id}/results/{n}", response_model=SearchResult)
def get_result(session_id: str, n: int):
    """Resolve the Nth result counted from the session's current page."""
    session = _get_session(session_id)
    with session.lock:
        try:
            return session.pager.resolve_index(n)
        except NavigationError as e:
            raise _navigation_error(e)


@app.post("/api/sessions/{session_id}/results/{n}/open", response_model=TextResponse)
def open_result(session_id: str, n: int, fetcher: PageFetcher = Depends(get_fetcher)):
    """Fetch the Nth result of the current page and return its text."""
    result = get_result(session_id, n)
    return _fetch_document(result.url, fetcher)


@app.delete("/api/sessions/{session_id}")
def delete_session(session_id: str):
    with _sessions_lock:
        removed = sessions.pop(session_id, None)
    if removed is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "deleted", "session_id": session_id}
