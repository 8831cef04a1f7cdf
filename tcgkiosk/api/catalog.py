"""
Catalog API endpoints.

Serves the catalog snapshot, evaluates browse queries and exposes the
load report of the cached catalog.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Field

from tcgkiosk.api.snapshot import (
    CamelModel,
    CatalogSnapshotResponse,
    LoadReportResponse,
    ResultPageResponse,
    TypeOptionResponse,
    build_snapshot,
    report_to_response,
    result_to_response,
    type_option_to_response,
)
from tcgkiosk.config import settings
from tcgkiosk.models.catalog import GameGroup
from tcgkiosk.models.query import Query as BrowseQuery
from tcgkiosk.services.catalog_loader import CatalogCache, get_catalog_cache
from tcgkiosk.services.query_engine import evaluate, set_options, type_options

router = APIRouter(prefix="/catalog", tags=["catalog"])

CatalogCacheDep = Annotated[CatalogCache, Depends(get_catalog_cache)]


class SetOptionsResponse(CamelModel):
    """Ordered set names of one game."""

    game: str
    sets: list[str] = Field(default_factory=list)


class TypeOptionsResponse(CamelModel):
    """Type filter label and choices of one game."""

    game: str
    label: str
    match_mode: str
    case_insensitive: bool
    options: list[TypeOptionResponse] = Field(default_factory=list)


class ReloadResponse(CamelModel):
    games: int
    total_cards: int
    last_modified: int


def _require_group(cache: CatalogCache, game: str) -> GameGroup:
    group = cache.get().get_group(game)
    if group is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Game '{game}' not found",
        )
    return group


@router.get("", response_model=CatalogSnapshotResponse)
def get_catalog(cache: CatalogCacheDep) -> CatalogSnapshotResponse:
    """
    Full catalog snapshot.

    Handed to the browser once at session start: every game with its cards,
    the UI string table, image proxy settings and type icons.
    """
    return build_snapshot(cache.get())


@router.get("/query", response_model=ResultPageResponse)
def query_catalog(
    cache: CatalogCacheDep,
    game: str | None = None,
    set_name: Annotated[str | None, Query(alias="set")] = None,
    type_value: Annotated[str | None, Query(alias="type")] = None,
    search: str = "",
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[
        int, Query(alias="pageSize", ge=1, le=settings.max_page_size)
    ] = settings.default_page_size,
) -> ResultPageResponse:
    """
    Evaluate a browse query.

    Without a game nothing is returned unless require_game_selection is
    disabled. Out-of-range pages are clamped.
    """
    query = BrowseQuery(
        game_slug=game,
        set_name=set_name,
        type_value=type_value,
        search_text=search,
        page=page,
        page_size=page_size,
    )
    result = evaluate(cache.get(), query, require_game=settings.require_game_selection)
    return result_to_response(result)


@router.get("/report", response_model=LoadReportResponse)
def get_load_report(cache: CatalogCacheDep) -> LoadReportResponse:
    """Per-file outcomes of the cached catalog build."""
    return report_to_response(cache.get().report)


@router.post("/reload", response_model=ReloadResponse)
def reload_catalog(cache: CatalogCacheDep) -> ReloadResponse:
    """
    Drop the cached catalog and rebuild it from disk.

    Use after updating the card database files.
    """
    cache.invalidate()
    catalog = cache.get()
    return ReloadResponse(
        games=len(catalog.groups),
        total_cards=sum(len(g.cards) for g in catalog.groups),
        last_modified=catalog.last_modified,
    )


@router.get("/{game}/sets", response_model=SetOptionsResponse)
def get_set_options(game: str, cache: CatalogCacheDep) -> SetOptionsResponse:
    """Set names for the set selector, in display order."""
    group = _require_group(cache, game)
    return SetOptionsResponse(game=group.slug, sets=set_options(group))


@router.get("/{game}/types", response_model=TypeOptionsResponse)
def get_type_options(game: str, cache: CatalogCacheDep) -> TypeOptionsResponse:
    """Type filter configuration for a game."""
    group = _require_group(cache, game)
    return TypeOptionsResponse(
        game=group.slug,
        label=group.type_label,
        match_mode=group.type_match_mode,
        case_insensitive=group.type_case_insensitive,
        options=[type_option_to_response(o) for o in type_options(group)],
    )
