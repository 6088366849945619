"""
Routes du catalogue : agregation AniList/Kitsu et acces direct a chaque fournisseur.

Les parametres sont valides avant tout appel amont ; les erreurs sont
converties en {"error": message} par les gestionnaires de l'application.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ...adapters.api.anilist_client import AniListClient
from ...adapters.api.kitsu_client import KitsuClient
from ...core.entities.catalog import CatalogQuery
from ...services.aggregator import AnimeAggregatorService, parse_fallback, parse_source
from ..deps import get_aggregator, get_anilist_client, get_kitsu_client

router = APIRouter(prefix="/api")


@router.get("/anime")
async def anime(
    type: Optional[str] = None,
    search: Optional[str] = None,
    id: Optional[str] = None,
    season: Optional[str] = None,
    year: Optional[str] = None,
    source: Optional[str] = None,
    fallback: Optional[str] = None,
    aggregator: AnimeAggregatorService = Depends(get_aggregator),
):
    """Catalogue agrege : AniList, puis Kitsu normalise si AniList echoue."""
    query = CatalogQuery.build(type, search=search, id=id, season=season, year=year)
    return await aggregator.fetch(
        query,
        source=parse_source(source),
        fallback=parse_fallback(fallback),
    )


@router.get("/anilist")
async def anilist(
    type: Optional[str] = None,
    search: Optional[str] = None,
    id: Optional[str] = None,
    season: Optional[str] = None,
    year: Optional[str] = None,
    client: AniListClient = Depends(get_anilist_client),
):
    """Acces direct a AniList (forme canonique)."""
    query = CatalogQuery.build(type, search=search, id=id, season=season, year=year)
    return await client.fetch(query)


@router.get("/kitsu")
async def kitsu(
    type: Optional[str] = None,
    search: Optional[str] = None,
    id: Optional[str] = None,
    season: Optional[str] = None,
    year: Optional[str] = None,
    client: KitsuClient = Depends(get_kitsu_client),
):
    """Acces direct a Kitsu (ressources JSON:API, non normalisees)."""
    query = CatalogQuery.build(type, search=search, id=id, season=season, year=year)
    return await client.fetch(query)
