"""
Routes de la bibliotheque locale : anime importes, watchlist et favoris.

Sans userId, les listes portent sur l'utilisateur de demonstration.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from ...container import Container
from ...services.library import LibraryService, parse_status
from ..deps import get_container, get_library_service
from ..schemas import (
    AnimeOut,
    FavoriteIn,
    FavoriteOut,
    RemovedOut,
    WatchlistEntryOut,
    WatchlistIn,
    WatchlistUpdateIn,
)

router = APIRouter(prefix="/api")


def _user_or_demo(user_id: Optional[str], container: Container) -> str:
    return user_id or container.config().demo_user_id


# ----------------------------------------------------------------------
# Anime
# ----------------------------------------------------------------------


@router.get("/library/anime", response_model=list[AnimeOut])
async def library_anime(
    q: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    service: LibraryService = Depends(get_library_service),
):
    """Recherche locale (titre, synopsis) ou, sans q, les mieux notes."""
    if q:
        return service.search_anime(q, limit)
    return service.popular_anime(limit)


@router.post("/library/anime", response_model=AnimeOut, status_code=201)
async def import_anime(
    record: dict[str, Any] = Body(...),
    service: LibraryService = Depends(get_library_service),
):
    """Importe un enregistrement canonique (AniList ou Kitsu normalise)."""
    return service.import_anime(record)


@router.get("/library/anime/{anime_id}", response_model=AnimeOut)
async def library_anime_detail(
    anime_id: str,
    service: LibraryService = Depends(get_library_service),
):
    return service.get_anime(anime_id)


@router.get("/library/genres", response_model=list[str])
async def library_genres(service: LibraryService = Depends(get_library_service)):
    return service.genres()


# ----------------------------------------------------------------------
# Watchlist
# ----------------------------------------------------------------------


@router.get("/watchlist", response_model=list[WatchlistEntryOut])
async def watchlist(
    user_id: Optional[str] = Query(None, alias="userId"),
    container: Container = Depends(get_container),
    service: LibraryService = Depends(get_library_service),
):
    return service.get_watchlist(_user_or_demo(user_id, container))


@router.post("/watchlist", response_model=WatchlistEntryOut, status_code=201)
async def add_to_watchlist(
    body: WatchlistIn,
    service: LibraryService = Depends(get_library_service),
):
    return service.add_to_watchlist(
        body.user_id,
        body.anime_id,
        status=parse_status(body.status),
        progress=body.progress,
    )


@router.patch("/watchlist/{entry_id}", response_model=WatchlistEntryOut)
async def update_watchlist(
    entry_id: str,
    body: WatchlistUpdateIn,
    user_id: Optional[str] = Query(None, alias="userId"),
    service: LibraryService = Depends(get_library_service),
):
    """Sans userId, toute entree existante peut etre mise a jour."""
    return service.update_watchlist(
        entry_id, parse_status(body.status), body.progress, user_id=user_id
    )


@router.delete("/watchlist", response_model=RemovedOut)
async def remove_from_watchlist(
    anime_id: str = Query(..., alias="animeId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    container: Container = Depends(get_container),
    service: LibraryService = Depends(get_library_service),
):
    removed = service.remove_from_watchlist(_user_or_demo(user_id, container), anime_id)
    return RemovedOut(removed=removed)


# ----------------------------------------------------------------------
# Favoris
# ----------------------------------------------------------------------


@router.get("/favorites", response_model=list[FavoriteOut])
async def favorites(
    user_id: Optional[str] = Query(None, alias="userId"),
    container: Container = Depends(get_container),
    service: LibraryService = Depends(get_library_service),
):
    return service.get_favorites(_user_or_demo(user_id, container))


@router.post("/favorites", response_model=FavoriteOut, status_code=201)
async def add_to_favorites(
    body: FavoriteIn,
    service: LibraryService = Depends(get_library_service),
):
    return service.add_to_favorites(body.user_id, body.anime_id)


@router.delete("/favorites", response_model=RemovedOut)
async def remove_from_favorites(
    anime_id: str = Query(..., alias="animeId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    container: Container = Depends(get_container),
    service: LibraryService = Depends(get_library_service),
):
    removed = service.remove_from_favorites(_user_or_demo(user_id, container), anime_id)
    return RemovedOut(removed=removed)
