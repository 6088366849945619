"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans anitrack/core/ports/repositories.py, utilisant SQLModel pour
la persistance.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from anitrack.infrastructure.persistence.repositories.anime_repository import (
    SQLModelAnimeRepository,
)
from anitrack.infrastructure.persistence.repositories.episode_repository import (
    SQLModelEpisodeRepository,
)
from anitrack.infrastructure.persistence.repositories.favorite_repository import (
    SQLModelFavoriteRepository,
)
from anitrack.infrastructure.persistence.repositories.user_repository import (
    SQLModelUserRepository,
)
from anitrack.infrastructure.persistence.repositories.watch_history_repository import (
    SQLModelWatchHistoryRepository,
)
from anitrack.infrastructure.persistence.repositories.watchlist_repository import (
    SQLModelWatchlistRepository,
)

__all__ = [
    "SQLModelAnimeRepository",
    "SQLModelEpisodeRepository",
    "SQLModelFavoriteRepository",
    "SQLModelUserRepository",
    "SQLModelWatchHistoryRepository",
    "SQLModelWatchlistRepository",
]
