"""
Client Kitsu pour la recuperation des metadonnees anime.

Implemente l'interface IAnimeProvider pour Kitsu (JSON:API). Les donnees sont
retournees dans la forme native Kitsu ({id, type, attributes}) ; la traduction
vers la forme canonique est faite par le service de normalisation.

Kitsu sert de fournisseur de repli : les erreurs transitoires sont relancees
avec un delai fixe court plutot qu'un backoff exponentiel.
"""

from typing import Any, Optional

import httpx

from anitrack.adapters.api.cache import APICache
from anitrack.adapters.api.retry import RateLimitError, request_with_fixed_retry
from anitrack.core.entities.catalog import CatalogQuery, RequestKind
from anitrack.core.exceptions import NotFoundError, ProviderError
from anitrack.core.ports.api_clients import IAnimeProvider, ProviderPayload
from anitrack.logging_config import provider_logger

logger = provider_logger("kitsu")

JSON_API_MEDIA_TYPE = "application/vnd.api+json"


class KitsuClient(IAnimeProvider):
    """
    Client API Kitsu.

    Implemente IAnimeProvider avec:
    - Listes tendances (-user_count), populaires (-average_rating), saison et recherche
    - Detail d'un anime, enrichi des noms de genres (include=genres)
    - Cache persistant (1h par defaut)
    - Retry a delai fixe sur erreur reseau ou 5xx

    Example:
        client = KitsuClient(base_url="https://kitsu.io/api/edge", cache=cache)
        records = await client.fetch(CatalogQuery.build("search", search="one piece"))
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        cache: APICache,
        timeout: float = 15.0,
        max_attempts: int = 2,
        retry_delay: float = 1.0,
    ) -> None:
        """
        Initialise le client Kitsu.

        Args:
            base_url: URL de base de l'API (ex: https://kitsu.io/api/edge)
            cache: Instance APICache pour le caching des resultats
            timeout: Timeout HTTP en secondes
            max_attempts: Nombre de tentatives sur erreur transitoire
            retry_delay: Delai fixe entre deux tentatives, en secondes
        """
        self._base_url = base_url
        self._cache = cache
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "Accept": JSON_API_MEDIA_TYPE,
                    "Content-Type": JSON_API_MEDIA_TYPE,
                },
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "kitsu"

    async def fetch(self, query: CatalogQuery) -> ProviderPayload:
        """
        Execute une requete catalogue sur Kitsu.

        Utilise le pattern cache-first: verifie le cache AVANT de faire
        un appel API.

        Returns:
            Liste de ressources `data` pour les types liste, ressource unique pour detail

        Raises:
            NotFoundError: anime absent (detail)
            ProviderError: echec amont apres les tentatives
        """
        cache_key = query.cache_key(self.source)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        if query.kind is RequestKind.DETAIL:
            result = await self._fetch_detail(query.id or "")
        else:
            payload = await self._get("/anime", self._build_list_params(query))
            result = payload.get("data") or []
            if not isinstance(result, list):
                raise ProviderError(self.source, "Kitsu API error: invalid response")

        await self._cache.set(cache_key, result)
        return result

    def _build_list_params(self, query: CatalogQuery) -> dict[str, str]:
        """Associe un type de requete liste a ses filtres JSON:API."""
        if query.kind is RequestKind.TRENDING:
            return {"sort": "-user_count", "page[limit]": "12"}
        if query.kind is RequestKind.POPULAR:
            return {"sort": "-average_rating", "page[limit]": "12"}
        if query.kind is RequestKind.SEARCH:
            return {"filter[text]": query.search or "", "page[limit]": "20"}
        season, year = query.resolved_season()
        return {
            "filter[season]": season.value.lower(),
            "filter[seasonYear]": str(year),
            "sort": "-user_count",
            "page[limit]": "12",
        }

    async def _fetch_detail(self, anime_id: str) -> dict[str, Any]:
        """Recupere le detail d'un anime, enrichi de ses genres si possible."""
        try:
            payload = await self._get(f"/anime/{anime_id}")
        except ProviderError as e:
            if e.upstream_status == 404:
                raise NotFoundError("Anime not found") from e
            raise

        record = payload.get("data")
        if not record:
            raise NotFoundError("Anime not found")
        if not isinstance(record, dict):
            raise ProviderError(self.source, "Kitsu API error: invalid response")

        genres = await self._fetch_genres(anime_id)
        if genres is not None:
            record = {**record, "genres": genres}
        return record

    async def _fetch_genres(self, anime_id: str) -> Optional[list[str]]:
        """
        Recupere les noms de genres d'un anime (second appel include=genres).

        Returns:
            Noms des genres, ou None si l'enrichissement a echoue
        """
        try:
            payload = await self._get(f"/anime/{anime_id}", {"include": "genres"})
        except ProviderError as e:
            logger.warning(f"Enrichissement des genres Kitsu impossible pour {anime_id}: {e}")
            return None

        return [
            item["attributes"]["name"]
            for item in payload.get("included", [])
            if item.get("type") == "genres" and item.get("attributes", {}).get("name")
        ]

    async def _get(self, path: str, params: Optional[dict[str, str]] = None) -> dict[str, Any]:
        """
        Execute un GET JSON:API.

        Raises:
            ProviderError: reponse non-2xx ou erreur reseau persistante
        """
        client = self._get_client()
        logger.debug("Requete Kitsu", path=path, params=params)
        try:
            response = await request_with_fixed_retry(
                client,
                "GET",
                path,
                max_attempts=self._max_attempts,
                delay=self._retry_delay,
                params=params,
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ProviderError(self.source, f"Kitsu API error: {status}", status) from e
        except RateLimitError as e:
            raise ProviderError(self.source, "Kitsu API error: 429", 429) from e
        except httpx.HTTPError as e:
            raise ProviderError(self.source, f"Kitsu unreachable: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError(self.source, "Kitsu API error: invalid response") from e
        if not isinstance(payload, dict):
            raise ProviderError(self.source, "Kitsu API error: invalid response")
        return payload

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
