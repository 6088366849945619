"""
Clients API externes pour les metadonnees anime.

Ce module fournit les adaptateurs pour communiquer avec les API externes:
- AniList: fournisseur principal (GraphQL), forme canonique
- Kitsu: fournisseur de repli (JSON:API)

Infrastructure partagee:
- APICache: Cache persistant avec duree de vie fixe (1h par defaut)
- RateLimitError: Exception pour les erreurs 429
- request_with_retry / request_with_fixed_retry: politiques de relance

Les clients implementent IAnimeProvider defini dans core/ports/api_clients.py.
"""

from anitrack.adapters.api.anilist_client import AniListClient
from anitrack.adapters.api.cache import APICache
from anitrack.adapters.api.kitsu_client import KitsuClient
from anitrack.adapters.api.retry import (
    RateLimitError,
    request_with_fixed_retry,
    request_with_retry,
)

__all__ = [
    "AniListClient",
    "APICache",
    "KitsuClient",
    "RateLimitError",
    "request_with_fixed_retry",
    "request_with_retry",
]
