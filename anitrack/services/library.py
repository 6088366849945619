"""
Service de bibliotheque utilisateur.

Regroupe les operations CRUD sur les utilisateurs, la bibliotheque locale
d'anime, les watchlists et les favoris. Les enregistrements canoniques
(AniList ou Kitsu normalise) peuvent etre importes dans la bibliotheque.
"""

from typing import Any, Optional

from loguru import logger

from anitrack.core.entities.catalog import display_title
from anitrack.core.entities.library import (
    Anime,
    AnimeTitle,
    Favorite,
    User,
    UserStatus,
    WatchlistEntry,
)
from anitrack.core.exceptions import BadRequestError, ConflictError, NotFoundError
from anitrack.core.ports.repositories import (
    IAnimeRepository,
    IFavoriteRepository,
    IUserRepository,
    IWatchlistRepository,
)


def parse_status(value: Optional[str]) -> UserStatus:
    """Valide un statut de watchlist (defaut: planned)."""
    if not value:
        return UserStatus.PLANNED
    try:
        return UserStatus(value.lower())
    except ValueError:
        raise BadRequestError("Invalid status parameter") from None


def anime_from_record(record: dict[str, Any]) -> Anime:
    """
    Construit une entite Anime depuis un enregistrement canonique.

    Un enregistrement issu de Kitsu porte kitsuId ; sinon l'id est celui d'AniList.
    La note canonique (0-100) est ramenee a l'echelle locale (0-10).
    """
    title = record.get("title") or {}
    kitsu_id = record.get("kitsuId")
    anilist_id = None
    if kitsu_id is None and record.get("id") is not None:
        try:
            anilist_id = int(record["id"])
        except (TypeError, ValueError):
            raise BadRequestError("Invalid AniList id") from None

    score = record.get("averageScore")
    studios = (record.get("studios") or {}).get("nodes") or []

    return Anime(
        anilist_id=anilist_id,
        kitsu_id=str(kitsu_id) if kitsu_id is not None else None,
        title=AnimeTitle(
            english=title.get("english"),
            romaji=title.get("romaji"),
            native=title.get("native"),
        ),
        cover_image=(record.get("coverImage") or {}).get("large") or "",
        banner_image=record.get("bannerImage"),
        synopsis=record.get("description"),
        episodes=record.get("episodes"),
        status=record.get("status"),
        genres=tuple(record.get("genres") or ()),
        studio=studios[0].get("name") if studios else None,
        rating=round(score / 10, 1) if score is not None else None,
    )


class LibraryService:
    """Operations sur l'etat utilisateur persiste."""

    def __init__(
        self,
        user_repo: IUserRepository,
        anime_repo: IAnimeRepository,
        watchlist_repo: IWatchlistRepository,
        favorite_repo: IFavoriteRepository,
    ) -> None:
        self._user_repo = user_repo
        self._anime_repo = anime_repo
        self._watchlist_repo = watchlist_repo
        self._favorite_repo = favorite_repo

    # ------------------------------------------------------------------
    # Utilisateurs
    # ------------------------------------------------------------------

    def create_user(
        self,
        email: str,
        username: str,
        avatar: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> User:
        """Cree un utilisateur ; email et nom d'utilisateur sont uniques."""
        if self._user_repo.get_by_email(email) or self._user_repo.get_by_username(username):
            raise ConflictError("User already exists")
        user = self._user_repo.save(User(id=user_id, email=email, username=username, avatar=avatar))
        logger.info(f"Utilisateur cree: {user.username}")
        return user

    def get_user(self, user_id: str) -> User:
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    # ------------------------------------------------------------------
    # Bibliotheque locale
    # ------------------------------------------------------------------

    def import_anime(self, record: dict[str, Any]) -> Anime:
        """
        Importe (ou met a jour) un enregistrement canonique dans la bibliotheque.

        L'anime existant est retrouve par son ID AniList ou Kitsu.
        """
        anime = anime_from_record(record)
        existing = None
        if anime.anilist_id is not None:
            existing = self._anime_repo.get_by_anilist_id(anime.anilist_id)
        elif anime.kitsu_id is not None:
            existing = self._anime_repo.get_by_kitsu_id(anime.kitsu_id)
        else:
            raise BadRequestError("Anime record without id")

        if existing:
            anime.id = existing.id
        saved = self._anime_repo.save(anime)
        logger.info(f"Anime importe: {display_title(record)}")
        return saved

    def get_anime(self, anime_id: str) -> Anime:
        anime = self._anime_repo.get_by_id(anime_id)
        if anime is None:
            raise NotFoundError("Anime not found")
        return anime

    def get_anime_by_anilist_id(self, anilist_id: int) -> Anime:
        anime = self._anime_repo.get_by_anilist_id(anilist_id)
        if anime is None:
            raise NotFoundError("Anime not found")
        return anime

    def search_anime(self, query: str, limit: int = 20) -> list[Anime]:
        return self._anime_repo.search(query, limit)

    def popular_anime(self, limit: int = 12) -> list[Anime]:
        return self._anime_repo.list_popular(limit)

    def genres(self) -> list[str]:
        return self._anime_repo.list_genres()

    # ------------------------------------------------------------------
    # Watchlist
    # ------------------------------------------------------------------

    def add_to_watchlist(
        self,
        user_id: str,
        anime_id: str,
        status: UserStatus = UserStatus.PLANNED,
        progress: int = 0,
    ) -> WatchlistEntry:
        """Ajoute un anime a la watchlist ; l'utilisateur et l'anime doivent exister."""
        self.get_user(user_id)
        self.get_anime(anime_id)
        if progress < 0:
            raise BadRequestError("progress must be positive")
        if self._watchlist_repo.get(user_id, anime_id) is not None:
            raise ConflictError("Anime already in watchlist")
        return self._watchlist_repo.add(
            WatchlistEntry(user_id=user_id, anime_id=anime_id, status=status, progress=progress)
        )

    def update_watchlist(
        self,
        entry_id: str,
        status: UserStatus,
        progress: Optional[int] = None,
        user_id: Optional[str] = None,
    ) -> WatchlistEntry:
        """
        Met a jour le statut (et la progression) d'une entree.

        Avec user_id, l'entree d'un autre utilisateur est traitee comme absente.
        """
        if progress is not None and progress < 0:
            raise BadRequestError("progress must be positive")
        existing = self._watchlist_repo.get_by_id(entry_id)
        if existing is None or (user_id and existing.user_id != user_id):
            raise NotFoundError("Watchlist entry not found")
        entry = self._watchlist_repo.update(entry_id, status, progress)
        if entry is None:
            raise NotFoundError("Watchlist entry not found")
        return entry

    def remove_from_watchlist(self, user_id: str, anime_id: str) -> int:
        return self._watchlist_repo.remove(user_id, anime_id)

    def get_watchlist(self, user_id: str) -> list[WatchlistEntry]:
        return self._watchlist_repo.list_by_user(user_id)

    # ------------------------------------------------------------------
    # Favoris
    # ------------------------------------------------------------------

    def add_to_favorites(self, user_id: str, anime_id: str) -> Favorite:
        self.get_user(user_id)
        self.get_anime(anime_id)
        return self._favorite_repo.add(Favorite(user_id=user_id, anime_id=anime_id))

    def remove_from_favorites(self, user_id: str, anime_id: str) -> int:
        return self._favorite_repo.remove(user_id, anime_id)

    def get_favorites(self, user_id: str) -> list[Favorite]:
        return self._favorite_repo.list_by_user(user_id)
