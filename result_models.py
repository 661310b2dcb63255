"""
Search result data models.

Defines the shapes shared by the extractors, the pager and the HTTP API.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str  # absolute and tracking-sanitized


class PageSlice(BaseModel):
    """One window over a loaded result set."""

    page: int  # 0-based
    last_page: int
    start: int  # 1-based, inclusive
    end: int  # 1-based, inclusive
    total: int
    items: list[SearchResult] = Field(default_factory=list)

    @computed_field
    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.last_page
