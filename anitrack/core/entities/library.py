"""
Library entities.

Entities representing the persisted user state: users, locally stored anime,
watchlist entries, favorites, episodes and watch history.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class UserStatus(str, Enum):
    """Watchlist status of an anime for a user."""

    WATCHING = "watching"
    COMPLETED = "completed"
    PLANNED = "planned"
    DROPPED = "dropped"


@dataclass
class User:
    """
    Application user.

    Attributes:
        id: Internal id (string, "demo-user" for the placeholder user)
        email: Unique email address
        username: Unique username
        avatar: Optional avatar URL
    """

    id: Optional[str] = None
    email: str = ""
    username: str = ""
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class AnimeTitle:
    """Title variants; any of them may be missing."""

    english: Optional[str] = None
    romaji: Optional[str] = None
    native: Optional[str] = None

    @property
    def display(self) -> str:
        return self.english or self.romaji or self.native or "Unknown Title"


@dataclass
class Anime:
    """
    Anime stored in the local library.

    Attributes:
        id: Internal id
        anilist_id: AniList id, if known
        kitsu_id: Kitsu id, if known
        title: Title variants
        cover_image: Cover image URL
        banner_image: Banner image URL
        synopsis: Description (HTML fragment)
        episodes: Episode count
        status: Upstream status (free text)
        genres: Genre names
        studio: Main studio name
        rating: Rating on the 0-10 scale
    """

    id: Optional[str] = None
    anilist_id: Optional[int] = None
    kitsu_id: Optional[str] = None
    title: AnimeTitle = field(default_factory=AnimeTitle)
    cover_image: str = ""
    banner_image: Optional[str] = None
    synopsis: Optional[str] = None
    episodes: Optional[int] = None
    status: Optional[str] = None
    genres: tuple[str, ...] = ()
    studio: Optional[str] = None
    rating: Optional[float] = None
    created_at: Optional[datetime] = None


@dataclass
class WatchlistEntry:
    """An anime on a user's watchlist, unique per (user, anime)."""

    id: Optional[str] = None
    user_id: str = ""
    anime_id: str = ""
    status: UserStatus = UserStatus.PLANNED
    progress: int = 0
    anime: Optional[Anime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Favorite:
    """An anime marked as favorite, unique per (user, anime)."""

    id: Optional[str] = None
    user_id: str = ""
    anime_id: str = ""
    anime: Optional[Anime] = None
    created_at: Optional[datetime] = None


@dataclass
class Episode:
    """
    Individual episode of an anime.

    Attributes:
        season: Season number, None for single-season shows
        number: Episode number within the season
        duration: Runtime in seconds
    """

    id: Optional[str] = None
    anime_id: str = ""
    number: int = 1
    season: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    duration: Optional[int] = None
    air_date: Optional[datetime] = None


@dataclass
class WatchHistory:
    """
    Playback progress of a user on an episode, unique per (user, episode).

    Attributes:
        watch_time: Position reached, in seconds
        total_time: Episode length in seconds (24 minutes when unknown)
    """

    id: Optional[str] = None
    user_id: str = ""
    episode_id: str = ""
    watch_time: float = 0.0
    total_time: int = 1440
    completed: bool = False
    updated_at: Optional[datetime] = None
