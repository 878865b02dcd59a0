"""Recent searches endpoints — Per-caller search memory."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hubsearch.api.deps import get_recent_store
from hubsearch.cache.recent import RecentQueryStore
from hubsearch.models.response import RecentSearchesResponse, RecentSearchRequest

router = APIRouter(prefix="/recent")


@router.get("", response_model=RecentSearchesResponse, summary="List Recent Searches")
async def list_recent(store: RecentQueryStore = Depends(get_recent_store)) -> RecentSearchesResponse:
    return RecentSearchesResponse(terms=await store.list())


@router.post("", response_model=RecentSearchesResponse, summary="Save a Recent Search")
async def save_recent(
    body: RecentSearchRequest,
    store: RecentQueryStore = Depends(get_recent_store),
) -> RecentSearchesResponse:
    await store.save(body.term)
    return RecentSearchesResponse(terms=await store.list())


@router.delete("", response_model=RecentSearchesResponse, summary="Clear Recent Searches")
async def clear_recent(store: RecentQueryStore = Depends(get_recent_store)) -> RecentSearchesResponse:
    await store.clear()
    return RecentSearchesResponse(terms=[])
