"""
Interfaces ports pour les clients API.

Interface abstraite (port) définissant le contrat des fournisseurs de métadonnées
anime. Les implémentations (adaptateurs) fournissent les clients concrets
(AniList en GraphQL, Kitsu en JSON:API).
"""

from abc import ABC, abstractmethod
from typing import Any

from anitrack.core.entities.catalog import CatalogQuery

# Donnees renvoyees par un fournisseur : liste d'enregistrements ou enregistrement unique
ProviderPayload = list[dict[str, Any]] | dict[str, Any]


class IAnimeProvider(ABC):
    """
    Interface de base pour les fournisseurs de métadonnées anime.

    Chaque fournisseur exécute une requête catalogue validée et retourne les
    données dans SA forme native. La traduction vers la forme canonique
    (AniList) est faite par le service de normalisation.
    """

    @abstractmethod
    async def fetch(self, query: CatalogQuery) -> ProviderPayload:
        """
        Exécute une requête catalogue.

        Args :
            query : Requête validée (type, recherche, id, saison)

        Retourne :
            Liste d'enregistrements pour les types liste, enregistrement unique pour detail

        Lève :
            ProviderError : réponse amont non-2xx ou erreur réseau
            NotFoundError : id absent pour une requête detail
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant du fournisseur (ex: 'anilist', 'kitsu')."""
        ...

    async def close(self) -> None:
        """Libère les ressources réseau."""
