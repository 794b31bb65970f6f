"""
Search Endpoints

POST /v1/search - flat list of {filename, pagenumber, bookchapterurl, contextsnippet}
POST /v1/search/grouped - nested filename -> page -> {bookurl, snippet}

Patterns Applied:
- FastAPI router pattern
- Pydantic request/response models
- Dependency injection for the search engine
"""

from __future__ import annotations

import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, StrictInt, StrictStr

from booksearch.core.config import Settings, get_settings
from booksearch.core.exceptions import InvalidSectionError
from booksearch.core.logging import get_logger
from booksearch.search.engine import SearchEngine, flatten_results
from booksearch.search.models import SearchResults, Section

logger = get_logger(__name__)

# =============================================================================
# Request/Response Models
# =============================================================================


class SectionItem(BaseModel):
    """One content section supplied by the content provider.

    Fields are strict: a JSON true or "3" is rejected as a page number
    instead of being coerced.
    """

    content: StrictStr
    filename: StrictStr
    page: StrictInt
    bookurl: StrictStr = ""


class SearchRequest(BaseModel):
    """Request body for the search endpoints."""

    sections: list[SectionItem] = Field(default_factory=list)
    search_term: str = Field(..., description="Literal term, matched case-insensitively")
    context_length: StrictInt | None = Field(
        default=None,
        ge=0,
        description="Words of context on each side of a match",
    )


class SearchResultItem(BaseModel):
    """One matching page."""

    filename: str
    pagenumber: int
    bookchapterurl: str
    contextsnippet: str


class SearchMetadata(BaseModel):
    """Metadata about the search execution."""

    processing_time_ms: float
    total_results: int = 0
    sections_searched: int = 0


class SearchResponse(BaseModel):
    """Response from the flat search endpoint."""

    results: list[SearchResultItem]
    metadata: SearchMetadata


class PageSnippet(BaseModel):
    """Snippet and link for one page in the grouped response."""

    bookurl: str
    snippet: str


class GroupedSearchResponse(BaseModel):
    """Response from the grouped search endpoint."""

    results: dict[str, dict[int, PageSnippet]]
    metadata: SearchMetadata


# =============================================================================
# Dependencies
# =============================================================================

_engine: SearchEngine | None = None


def get_search_engine() -> SearchEngine:
    """Get the shared search engine, building it from settings on first use."""
    global _engine
    if _engine is None:
        _engine = SearchEngine(case_folding=get_settings().case_folding)
    return _engine


EngineDep = Annotated[SearchEngine, Depends(get_search_engine)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


# =============================================================================
# Router
# =============================================================================

search_router = APIRouter(prefix="/v1", tags=["search"])


def _run_search(
    request: SearchRequest,
    engine: SearchEngine,
    settings: Settings,
) -> SearchResults:
    """Validate the request, convert sections and run the engine.

    Raises:
        HTTPException: 422 for an out-of-range context length or an
            invalid section
    """
    context_length = request.context_length
    if context_length is None:
        context_length = settings.default_context_length

    if context_length > settings.max_context_length:
        logger.warning(
            "search_rejected",
            reason="context_length_too_large",
            context_length=context_length,
        )
        raise HTTPException(
            status_code=422,
            detail=f"context_length must be at most {settings.max_context_length}",
        )

    try:
        sections = [
            Section(
                content=item.content,
                filename=item.filename,
                page=item.page,
                book_url=item.bookurl,
            )
            for item in request.sections
        ]
    except InvalidSectionError as e:
        logger.warning("search_rejected", reason="invalid_section", field=e.field)
        raise HTTPException(
            status_code=422,
            detail=str(e),
        ) from e

    logger.info(
        "search_request",
        sections=len(sections),
        term_length=len(request.search_term),
        context_length=context_length,
    )
    return engine.aggregate(sections, request.search_term, context_length)


@search_router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    engine: EngineDep,
    settings: SettingsDep,
) -> SearchResponse:
    """Search the supplied sections and return one record per matching page.

    Args:
        request: Sections, search term and optional context length

    Returns:
        SearchResponse with records in first-seen file and page order
    """
    start_time = time.perf_counter()

    results = _run_search(request, engine, settings)
    items = [
        SearchResultItem(
            filename=r.filename,
            pagenumber=r.page,
            bookchapterurl=r.book_url,
            contextsnippet=r.snippet,
        )
        for r in flatten_results(results)
    ]

    elapsed_ms = (time.perf_counter() - start_time) * 1000

    return SearchResponse(
        results=items,
        metadata=SearchMetadata(
            processing_time_ms=elapsed_ms,
            total_results=len(items),
            sections_searched=len(request.sections),
        ),
    )


@search_router.post("/search/grouped", response_model=GroupedSearchResponse)
async def search_grouped(
    request: SearchRequest,
    engine: EngineDep,
    settings: SettingsDep,
) -> GroupedSearchResponse:
    """Search the supplied sections and keep the filename -> page grouping."""
    start_time = time.perf_counter()

    results = _run_search(request, engine, settings)
    grouped = {
        filename: {
            page: PageSnippet(bookurl=r.book_url, snippet=r.snippet)
            for page, r in pages.items()
        }
        for filename, pages in results.items()
    }

    elapsed_ms = (time.perf_counter() - start_time) * 1000

    return GroupedSearchResponse(
        results=grouped,
        metadata=SearchMetadata(
            processing_time_ms=elapsed_ms,
            total_results=sum(len(pages) for pages in grouped.values()),
            sections_searched=len(request.sections),
        ),
    )
