"""
Schemas pydantic de l'API web.

Les reponses et les corps de requete utilisent des cles camelCase
(animeId, watchTime...) ; les entites du domaine sont converties via
from_attributes.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from anitrack.core.entities.library import UserStatus


class CamelModel(BaseModel):
    """Base des schemas : alias camelCase, lecture depuis les dataclasses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ----------------------------------------------------------------------
# Reponses
# ----------------------------------------------------------------------


class UserOut(CamelModel):
    id: str
    email: str
    username: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None


class AnimeTitleOut(CamelModel):
    english: Optional[str] = None
    romaji: Optional[str] = None
    native: Optional[str] = None


class AnimeSummaryOut(CamelModel):
    """Resume d'un anime joint a un episode."""

    id: str
    title: AnimeTitleOut
    cover_image: str = ""


class AnimeOut(AnimeSummaryOut):
    anilist_id: Optional[int] = None
    kitsu_id: Optional[str] = None
    banner_image: Optional[str] = None
    synopsis: Optional[str] = None
    episodes: Optional[int] = None
    status: Optional[str] = None
    genres: list[str] = Field(default_factory=list)
    studio: Optional[str] = None
    rating: Optional[float] = None
    created_at: Optional[datetime] = None


class EpisodeOut(CamelModel):
    id: str
    anime_id: str
    number: int
    season: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    duration: Optional[int] = None
    air_date: Optional[datetime] = None


class WatchProgressOut(CamelModel):
    """Progression de l'utilisateur courant sur un episode."""

    watch_time: float
    total_time: int
    completed: bool


class WatchHistoryOut(WatchProgressOut):
    id: str
    user_id: str
    episode_id: str
    updated_at: Optional[datetime] = None


class EpisodeDetailOut(EpisodeOut):
    anime: Optional[AnimeSummaryOut] = None
    watch_history: Optional[WatchProgressOut] = None


class EpisodeListOut(CamelModel):
    anime_id: str
    episodes_by_season: dict[int, list[EpisodeOut]]
    total_episodes: int


class SeasonEpisodesOut(CamelModel):
    anime_id: str
    season: int
    episodes: list[EpisodeOut]
    total_episodes: int


class ProgressSavedOut(CamelModel):
    success: bool = True
    watch_history: WatchHistoryOut


class WatchlistEntryOut(CamelModel):
    id: str
    user_id: str
    anime_id: str
    status: UserStatus
    progress: int
    anime: Optional[AnimeOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FavoriteOut(CamelModel):
    id: str
    user_id: str
    anime_id: str
    anime: Optional[AnimeOut] = None
    created_at: Optional[datetime] = None


class RemovedOut(CamelModel):
    removed: int


class HealthOut(CamelModel):
    status: str = "ok"
    version: str


# ----------------------------------------------------------------------
# Corps de requete
# ----------------------------------------------------------------------


class ProgressIn(CamelModel):
    user_id: Optional[str] = None
    episode_id: Optional[str] = None
    watch_time: float = 0.0
    completed: bool = False


class UserIn(CamelModel):
    email: str = Field(min_length=3)
    username: str = Field(min_length=1)
    avatar: Optional[str] = None


class WatchlistIn(CamelModel):
    user_id: str
    anime_id: str
    status: Optional[str] = None
    progress: int = 0


class WatchlistUpdateIn(CamelModel):
    status: str
    progress: Optional[int] = None


class FavoriteIn(CamelModel):
    user_id: str
    anime_id: str
