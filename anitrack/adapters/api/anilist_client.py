"""
Client AniList pour la recuperation des metadonnees anime.

Implemente l'interface IAnimeProvider pour AniList (GraphQL). Les donnees sont
retournees telles que fournies par l'API (forme canonique de l'application).
Utilise le cache persistant et le mecanisme de retry pour gerer
le rate limiting.

Usage:
    cache = APICache()
    client = AniListClient(base_url="https://graphql.anilist.co", cache=cache)
    media = await client.fetch(CatalogQuery.build("trending"))
    await client.close()
"""

from typing import Any, Optional

import httpx

from anitrack.adapters.api.anilist_queries import (
    ANIME_BY_GENRE_QUERY,
    DETAIL_QUERY,
    GENRES_QUERY,
    POPULAR_QUERY,
    SEARCH_QUERY,
    SEASONAL_QUERY,
    TRENDING_QUERY,
)
from anitrack.adapters.api.cache import APICache
from anitrack.adapters.api.retry import RateLimitError, request_with_retry
from anitrack.core.entities.catalog import CatalogQuery, RequestKind
from anitrack.core.exceptions import BadRequestError, NotFoundError, ProviderError
from anitrack.core.ports.api_clients import IAnimeProvider, ProviderPayload
from anitrack.logging_config import provider_logger

logger = provider_logger("anilist")


class AniListClient(IAnimeProvider):
    """
    Client API AniList.

    Implemente IAnimeProvider avec:
    - Listes tendances, saison, populaires et recherche (Page.media)
    - Detail d'un anime (Media)
    - Collection des genres et anime par genre pagines
    - Cache persistant (1h par defaut)
    - Retry automatique sur rate limiting (429)

    Example:
        client = AniListClient(base_url="https://graphql.anilist.co", cache=cache)
        media = await client.fetch(CatalogQuery.build("detail", id="16498"))
        print(media["title"]["romaji"])
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        cache: APICache,
        timeout: float = 15.0,
        max_attempts: int = 3,
    ) -> None:
        """
        Initialise le client AniList.

        Args:
            base_url: URL du endpoint GraphQL
            cache: Instance APICache pour le caching des resultats
            timeout: Timeout HTTP en secondes
            max_attempts: Tentatives maximales sur 429
        """
        self._base_url = base_url
        self._cache = cache
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "anilist"

    async def fetch(self, query: CatalogQuery) -> ProviderPayload:
        """
        Execute une requete catalogue sur AniList.

        Utilise le pattern cache-first: verifie le cache AVANT de faire
        un appel API.

        Args:
            query: Requete validee

        Returns:
            Liste Page.media pour les types liste, Media pour detail

        Raises:
            BadRequestError: id non numerique
            NotFoundError: anime absent (detail)
            ProviderError: echec amont
        """
        cache_key = query.cache_key(self.source)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        if query.kind is RequestKind.DETAIL:
            result = await self._fetch_detail(query.id or "")
        else:
            graphql, variables = self._build_list_query(query)
            data = await self._execute(graphql, variables)
            result = self._extract(data, "Page", "media")

        await self._cache.set(cache_key, result)
        return result

    def _build_list_query(self, query: CatalogQuery) -> tuple[str, Optional[dict[str, Any]]]:
        """Associe un type de requete liste a sa requete GraphQL et ses variables."""
        if query.kind is RequestKind.TRENDING:
            return TRENDING_QUERY, None
        if query.kind is RequestKind.POPULAR:
            return POPULAR_QUERY, None
        if query.kind is RequestKind.SEARCH:
            return SEARCH_QUERY, {"search": query.search}
        season, year = query.resolved_season()
        return SEASONAL_QUERY, {"season": season.value, "year": year}

    async def _fetch_detail(self, anime_id: str) -> dict[str, Any]:
        """Recupere le detail d'un anime par son ID AniList."""
        try:
            numeric_id = int(anime_id)
        except ValueError:
            raise BadRequestError("Anime ID must be numeric") from None

        try:
            data = await self._execute(DETAIL_QUERY, {"id": numeric_id})
        except ProviderError as e:
            if e.upstream_status == 404:
                raise NotFoundError("Anime not found") from e
            raise

        media = data.get("Media")
        if media is None:
            raise NotFoundError("Anime not found")
        return media

    async def get_genres(self) -> list[str]:
        """Retourne la collection des genres AniList."""
        cache_key = f"{self.source}:genres"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._execute(GENRES_QUERY)
        genres = self._extract(data, "GenreCollection")
        await self._cache.set(cache_key, genres)
        return genres

    async def get_anime_by_genre(self, genre: str, page: int = 1) -> dict[str, Any]:
        """
        Retourne une page d'anime d'un genre, par popularite.

        Returns:
            {"anime": [...], "pageInfo": {"hasNextPage": bool}}
        """
        cache_key = f"{self.source}:genre:{genre.lower()}:{page}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._execute(ANIME_BY_GENRE_QUERY, {"genre": genre, "page": page})
        result = {
            "anime": self._extract(data, "Page", "media"),
            "pageInfo": self._extract(data, "Page", "pageInfo"),
        }
        await self._cache.set(cache_key, result)
        return result

    async def _execute(
        self, graphql: str, variables: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Envoie une requete GraphQL et retourne le contenu de `data`.

        Raises:
            ProviderError: reponse non-2xx, erreur reseau ou erreurs GraphQL sans donnees
        """
        client = self._get_client()
        logger.debug("Requete AniList", variables=variables)
        try:
            response = await request_with_retry(
                client,
                "POST",
                self._base_url,
                max_attempts=self._max_attempts,
                max_wait=10,
                json={"query": graphql, "variables": variables or {}},
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ProviderError(self.source, f"AniList API error: {status}", status) from e
        except RateLimitError as e:
            raise ProviderError(self.source, "AniList API error: 429", 429) from e
        except httpx.HTTPError as e:
            raise ProviderError(self.source, f"AniList unreachable: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError(self.source, "AniList API error: invalid response") from e
        if not isinstance(payload, dict):
            raise ProviderError(self.source, "AniList API error: invalid response")

        data = payload.get("data")
        errors = payload.get("errors")
        if errors and not data:
            message = errors[0].get("message", "unknown error")
            raise ProviderError(self.source, f"AniList API error: {message}", errors[0].get("status"))
        if data is None:
            raise ProviderError(self.source, "AniList API error: empty response")
        if not isinstance(data, dict):
            raise ProviderError(self.source, "AniList API error: invalid response")
        return data

    def _extract(self, data: dict[str, Any], *keys: str) -> Any:
        """
        Lit un chemin de cles dans `data`.

        Raises:
            ProviderError: cle absente ou valeur nulle (reponse inexploitable)
        """
        value: Any = data
        try:
            for key in keys:
                value = value[key]
        except (KeyError, TypeError) as e:
            raise ProviderError(self.source, "AniList API error: invalid response") from e
        if value is None:
            raise ProviderError(self.source, "AniList API error: invalid response")
        return value

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
