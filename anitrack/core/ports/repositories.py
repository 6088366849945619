"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance de
l'état utilisateur. Les implémentations (adaptateurs) fournissent le stockage
concret (SQLite via SQLModel, en mémoire pour les tests, etc.).
"""

from abc import ABC, abstractmethod
from typing import Optional

from anitrack.core.entities.library import (
    Anime,
    Episode,
    Favorite,
    User,
    UserStatus,
    WatchHistory,
    WatchlistEntry,
)


class IUserRepository(ABC):
    """Interface de stockage des utilisateurs."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        """Récupère un utilisateur par son ID."""
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Récupère un utilisateur par son email."""
        ...

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[User]:
        """Récupère un utilisateur par son nom d'utilisateur."""
        ...

    @abstractmethod
    def save(self, user: User) -> User:
        """Sauvegarde un utilisateur. Lève ConflictError si email/username pris."""
        ...


class IAnimeRepository(ABC):
    """Interface de stockage des anime de la bibliothèque locale."""

    @abstractmethod
    def get_by_id(self, anime_id: str) -> Optional[Anime]:
        """Récupère un anime par son ID interne."""
        ...

    @abstractmethod
    def get_by_anilist_id(self, anilist_id: int) -> Optional[Anime]:
        """Récupère un anime par son ID AniList."""
        ...

    @abstractmethod
    def get_by_kitsu_id(self, kitsu_id: str) -> Optional[Anime]:
        """Récupère un anime par son ID Kitsu."""
        ...

    @abstractmethod
    def search(self, query: str, limit: int = 20) -> list[Anime]:
        """Recherche dans les titres et synopsis, par note décroissante."""
        ...

    @abstractmethod
    def list_popular(self, limit: int = 12) -> list[Anime]:
        """Liste les anime les mieux notés."""
        ...

    @abstractmethod
    def list_genres(self) -> list[str]:
        """Liste les genres distincts de la bibliothèque."""
        ...

    @abstractmethod
    def save(self, anime: Anime) -> Anime:
        """Sauvegarde un anime (insertion ou mise à jour)."""
        ...


class IWatchlistRepository(ABC):
    """Interface de stockage des watchlists."""

    @abstractmethod
    def get_by_id(self, entry_id: str) -> Optional[WatchlistEntry]:
        """Récupère une entrée par son ID."""
        ...

    @abstractmethod
    def get(self, user_id: str, anime_id: str) -> Optional[WatchlistEntry]:
        """Récupère l'entrée d'un couple (utilisateur, anime)."""
        ...

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[WatchlistEntry]:
        """Liste la watchlist d'un utilisateur, plus récentes en premier."""
        ...

    @abstractmethod
    def add(self, entry: WatchlistEntry) -> WatchlistEntry:
        """Ajoute une entrée. Lève ConflictError si le couple existe déjà."""
        ...

    @abstractmethod
    def update(
        self, entry_id: str, status: UserStatus, progress: Optional[int] = None
    ) -> Optional[WatchlistEntry]:
        """Met à jour le statut (et la progression). None si absente."""
        ...

    @abstractmethod
    def remove(self, user_id: str, anime_id: str) -> int:
        """Supprime l'entrée d'un couple. Retourne le nombre de lignes supprimées."""
        ...


class IFavoriteRepository(ABC):
    """Interface de stockage des favoris."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Favorite]:
        """Liste les favoris d'un utilisateur, plus récents en premier."""
        ...

    @abstractmethod
    def add(self, favorite: Favorite) -> Favorite:
        """Ajoute un favori. Lève ConflictError si le couple existe déjà."""
        ...

    @abstractmethod
    def remove(self, user_id: str, anime_id: str) -> int:
        """Supprime un favori. Retourne le nombre de lignes supprimées."""
        ...


class IEpisodeRepository(ABC):
    """Interface de stockage des épisodes."""

    @abstractmethod
    def get_by_id(self, episode_id: str) -> Optional[Episode]:
        """Récupère un épisode par son ID."""
        ...

    @abstractmethod
    def list_by_anime(self, anime_id: str, season: Optional[int] = None) -> list[Episode]:
        """Liste les épisodes d'un anime, triés par saison puis numéro."""
        ...

    @abstractmethod
    def save(self, episode: Episode) -> Episode:
        """Sauvegarde un épisode (insertion ou mise à jour)."""
        ...


class IWatchHistoryRepository(ABC):
    """Interface de stockage de l'historique de visionnage."""

    @abstractmethod
    def get(self, user_id: str, episode_id: str) -> Optional[WatchHistory]:
        """Récupère la progression d'un couple (utilisateur, épisode)."""
        ...

    @abstractmethod
    def upsert(
        self,
        user_id: str,
        episode_id: str,
        watch_time: float,
        completed: bool,
    ) -> WatchHistory:
        """Crée ou met à jour la progression d'un couple (utilisateur, épisode)."""
        ...
