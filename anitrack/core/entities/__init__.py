"""Entités du domaine : requêtes catalogue et état utilisateur persisté."""

from anitrack.core.entities.catalog import (
    CatalogQuery,
    RequestKind,
    Season,
    current_season,
    display_title,
)
from anitrack.core.entities.library import (
    Anime,
    AnimeTitle,
    Episode,
    Favorite,
    User,
    UserStatus,
    WatchHistory,
    WatchlistEntry,
)

__all__ = [
    "CatalogQuery",
    "RequestKind",
    "Season",
    "current_season",
    "display_title",
    "Anime",
    "AnimeTitle",
    "Episode",
    "Favorite",
    "User",
    "UserStatus",
    "WatchHistory",
    "WatchlistEntry",
]
