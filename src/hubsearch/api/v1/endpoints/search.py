"""Search endpoint — Multi-type search over content, groups and profiles."""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import APIRouter, Depends, HTTPException

from hubsearch.api.deps import get_engine, get_user_id
from hubsearch.core.engine import HubSearchEngine
from hubsearch.core.exceptions import SEARCH_FAILED_MESSAGE, AggregationError, ValidationError
from hubsearch.models.query import SearchQuery
from hubsearch.models.response import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Search",
    description=(
        "Search posts, communities and profiles for a free-text term.\n\n"
        "Each targeted entity type contributes at most `page_size` candidates, "
        "so an `all` search may return up to `3 × page_size` results. "
        "A blank term returns an empty result list. If some sources fail the "
        "response is still returned and lists them in `failed_sources`; "
        "if all fail the endpoint answers 503."
    ),
    responses={
        400: {"description": "Malformed cursor"},
        422: {"description": "Validation error — invalid request body"},
        503: {"description": "Search failed — every targeted source was unavailable"},
    },
)
async def search(
    query: SearchQuery,
    engine: HubSearchEngine = Depends(get_engine),
    user_id: str | None = Depends(get_user_id),
) -> SearchResponse:
    """Run one search and return the merged, ranked page."""
    start_time = time.monotonic()
    request_id = f"req_{uuid.uuid4().hex[:12]}"

    try:
        page = await engine.search_page(query)
    except AggregationError as e:
        logger.error(
            "Search %s failed on every source: %s",
            request_id,
            {t.value: str(err) for t, err in e.failures.items()},
        )
        raise HTTPException(status_code=503, detail=SEARCH_FAILED_MESSAGE) from e
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    if user_id:
        engine.track_search(user_id, query.search_term, len(page.results))

    return SearchResponse(
        request_id=request_id,
        status="completed" if page.results else "no_results",
        query=query.search_term,
        results=page.results,
        total=len(page.results),
        next_cursor=page.next_cursor,
        failed_sources=page.failed_sources,
        processing_time_ms=int((time.monotonic() - start_time) * 1000),
    )
