"""
Service d'agregation des fournisseurs de metadonnees.

AniList est la source de reference ; Kitsu sert de repli. Politique, dans l'ordre:
1. source=kitsu : Kitsu seul, normalise ; son echec est terminal
2. sinon AniList ; son resultat est retourne tel quel
3. si AniList est indisponible (et que le repli n'est pas desactive) :
   Kitsu, normalise
4. si les deux echouent : erreur agregee nommant les deux causes

Les requetes invalides sont rejetees avant tout appel, et un anime absent
(NotFoundError) n'est jamais cherche chez l'autre fournisseur : les
identifiants AniList et Kitsu ne designent pas les memes oeuvres.
"""

from enum import Enum
from typing import Optional

from loguru import logger

from anitrack.core.entities.catalog import CatalogQuery
from anitrack.core.exceptions import (
    AggregateProviderError,
    BadRequestError,
    ProviderError,
    ProviderUnavailableError,
)
from anitrack.core.ports.api_clients import IAnimeProvider, ProviderPayload
from anitrack.services.normalizer import normalize_kitsu_payload


class Source(str, Enum):
    """Fournisseur demande explicitement par l'appelant."""

    ANILIST = "anilist"
    KITSU = "kitsu"


def parse_source(value: Optional[str]) -> Optional[Source]:
    """Valide le parametre source (vide = politique par defaut)."""
    if not value:
        return None
    try:
        return Source(value.lower())
    except ValueError:
        raise BadRequestError("Invalid source parameter") from None


def parse_fallback(value: Optional[str]) -> bool:
    """Le repli est actif sauf si fallback vaut explicitement false/0/no."""
    if value is None:
        return True
    return value.strip().lower() not in {"false", "0", "no", "off"}


class AnimeAggregatorService:
    """
    Agrege AniList (principal) et Kitsu (repli) derriere une requete unique.

    Aucun etat n'est conserve entre deux appels : chaque requete sollicite
    les fournisseurs a nouveau (hors cache de reponses des clients).
    """

    def __init__(self, anilist_client: IAnimeProvider, kitsu_client: IAnimeProvider) -> None:
        """
        Initialise le service.

        Args:
            anilist_client: Fournisseur principal
            kitsu_client: Fournisseur de repli
        """
        self._anilist = anilist_client
        self._kitsu = kitsu_client

    async def fetch(
        self,
        query: CatalogQuery,
        source: Optional[Source] = None,
        fallback: bool = True,
    ) -> ProviderPayload:
        """
        Execute une requete catalogue selon la politique de repli.

        Args:
            query: Requete validee
            source: Fournisseur impose (None = AniList puis Kitsu)
            fallback: False pour desactiver le repli vers Kitsu

        Returns:
            Donnees en forme canonique (liste ou enregistrement unique)

        Raises:
            ProviderError: echec de Kitsu quand il est impose
            ProviderUnavailableError: AniList indisponible, repli desactive
            AggregateProviderError: echec des deux fournisseurs
            NotFoundError: anime absent
        """
        if source is Source.KITSU:
            return await self._fetch_kitsu(query)

        try:
            return await self._anilist.fetch(query)
        except ProviderError as anilist_error:
            if source is Source.ANILIST or not fallback:
                logger.warning(f"AniList indisponible, repli desactive: {anilist_error}")
                raise ProviderUnavailableError("AniList API unavailable") from anilist_error

            logger.warning(f"AniList indisponible, repli sur Kitsu: {anilist_error}")
            try:
                return await self._fetch_kitsu(query)
            except ProviderError as kitsu_error:
                logger.error(f"AniList et Kitsu indisponibles: {kitsu_error}")
                raise AggregateProviderError(
                    "Both AniList and Kitsu APIs are unavailable",
                    {
                        "anilist": anilist_error.message,
                        "kitsu": kitsu_error.message,
                    },
                ) from kitsu_error

    async def _fetch_kitsu(self, query: CatalogQuery) -> ProviderPayload:
        """Interroge Kitsu et normalise sa reponse."""
        payload = await self._kitsu.fetch(query)
        return normalize_kitsu_payload(payload)
