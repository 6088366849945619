"""
Service des episodes et de l'historique de visionnage.

Fournit les listes d'episodes (groupees par saison), le detail d'un episode
avec la progression de l'utilisateur, et l'enregistrement de la progression.
"""

from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from anitrack.core.entities.library import Anime, Episode, WatchHistory
from anitrack.core.exceptions import BadRequestError, NotFoundError
from anitrack.core.ports.repositories import (
    IAnimeRepository,
    IEpisodeRepository,
    IUserRepository,
    IWatchHistoryRepository,
)


@dataclass
class EpisodeListing:
    """Episodes d'un anime groupes par saison (0 pour les episodes sans saison)."""

    anime_id: str
    episodes_by_season: dict[int, list[Episode]] = field(default_factory=dict)

    @property
    def total_episodes(self) -> int:
        return sum(len(episodes) for episodes in self.episodes_by_season.values())


@dataclass
class EpisodeDetail:
    """Episode, anime parent et progression de l'utilisateur courant."""

    episode: Episode
    anime: Optional[Anime] = None
    watch_history: Optional[WatchHistory] = None


class EpisodeService:
    """
    Service de consultation des episodes et de suivi de progression.

    L'utilisateur courant est l'utilisateur de demonstration configure
    (pas d'authentification).
    """

    def __init__(
        self,
        episode_repo: IEpisodeRepository,
        history_repo: IWatchHistoryRepository,
        anime_repo: IAnimeRepository,
        user_repo: IUserRepository,
        current_user_id: str,
    ) -> None:
        """
        Initialise le service.

        Args:
            episode_repo: Repository des episodes
            history_repo: Repository de l'historique de visionnage
            anime_repo: Repository des anime (resume de l'anime parent)
            user_repo: Repository des utilisateurs (auteur de la progression)
            current_user_id: Utilisateur dont la progression est affichee
        """
        self._episode_repo = episode_repo
        self._history_repo = history_repo
        self._anime_repo = anime_repo
        self._user_repo = user_repo
        self._current_user_id = current_user_id

    def list_episodes(self, anime_id: Optional[str]) -> EpisodeListing:
        """Liste les episodes d'un anime, groupes par saison."""
        if not anime_id:
            raise BadRequestError("Anime ID required")

        listing = EpisodeListing(anime_id=anime_id)
        for episode in self._episode_repo.list_by_anime(anime_id):
            listing.episodes_by_season.setdefault(episode.season or 0, []).append(episode)
        return listing

    def get_episode(self, episode_id: Optional[str]) -> EpisodeDetail:
        """
        Retourne le detail d'un episode.

        Raises:
            BadRequestError: episode_id manquant
            NotFoundError: episode absent
        """
        if not episode_id:
            raise BadRequestError("Episode ID required")

        episode = self._episode_repo.get_by_id(episode_id)
        if episode is None:
            raise NotFoundError("Episode not found")

        return EpisodeDetail(
            episode=episode,
            anime=self._anime_repo.get_by_id(episode.anime_id),
            watch_history=self._history_repo.get(self._current_user_id, episode_id),
        )

    def list_season(self, anime_id: Optional[str], season: Optional[str | int]) -> list[Episode]:
        """Liste les episodes d'une saison, par numero."""
        if not anime_id or season is None or season == "":
            raise BadRequestError("Anime ID and season required")
        try:
            season_number = int(season)
        except ValueError:
            raise BadRequestError("Invalid season parameter") from None
        return self._episode_repo.list_by_anime(anime_id, season=season_number)

    def record_progress(
        self,
        user_id: Optional[str],
        episode_id: Optional[str],
        watch_time: float,
        completed: bool = False,
    ) -> WatchHistory:
        """
        Enregistre la progression d'un utilisateur sur un episode (upsert).

        Raises:
            BadRequestError: episode_id ou user_id manquant, watch_time negatif
            NotFoundError: episode ou utilisateur absent
        """
        if not episode_id:
            raise BadRequestError("Episode ID required")
        if not user_id:
            raise BadRequestError("User ID required")
        if watch_time < 0:
            raise BadRequestError("watchTime must be positive")
        if self._episode_repo.get_by_id(episode_id) is None:
            raise NotFoundError("Episode not found")
        if self._user_repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found")

        history = self._history_repo.upsert(user_id, episode_id, watch_time, completed)
        logger.debug(
            "Progression enregistree",
            user_id=user_id,
            episode_id=episode_id,
            watch_time=watch_time,
            completed=completed,
        )
        return history
