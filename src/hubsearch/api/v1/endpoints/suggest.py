"""Suggestion endpoint — Autocomplete over a sampled window."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from hubsearch.api.deps import get_engine
from hubsearch.core.engine import HubSearchEngine
from hubsearch.models.query import SearchType
from hubsearch.models.response import SuggestResponse

router = APIRouter()


@router.get(
    "/suggest",
    response_model=SuggestResponse,
    summary="Autocomplete Suggestions",
    description=(
        "Return up to 10 titles containing the partial term, sampled from each "
        "targeted entity type. Terms shorter than 2 characters return no "
        "suggestions. This endpoint never fails because of a backend error."
    ),
)
async def suggest(
    q: str = Query(default="", max_length=200, description="Partial search term"),
    type: SearchType = Query(default=SearchType.ALL, description="Entity type to sample"),
    engine: HubSearchEngine = Depends(get_engine),
) -> SuggestResponse:
    suggestions = await engine.suggest(q, type)
    return SuggestResponse(query=q, suggestions=suggestions)
