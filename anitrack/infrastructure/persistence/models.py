"""
Modeles SQLModel pour la base de donnees AniTrack.

Ces modeles representent les tables de la base de donnees.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- users: Utilisateurs
- anime: Anime de la bibliotheque locale (metadonnees AniList/Kitsu)
- watchlists: Anime suivis par un utilisateur, unique par (user_id, anime_id)
- favorites: Anime favoris, unique par (user_id, anime_id)
- episodes: Episodes d'un anime
- watch_history: Progression de visionnage, unique par (user_id, episode_id)

Les champs JSON (*_json) permettent de stocker des listes et objets
de maniere serialisee.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel, UniqueConstraint


def _new_id() -> str:
    """Identifiant texte (hex UUID4)."""
    return uuid4().hex


class UserModel(SQLModel, table=True):
    """Modele representant un utilisateur."""

    __tablename__ = "users"

    id: str = Field(default_factory=_new_id, primary_key=True)
    email: str = Field(unique=True, index=True)
    username: str = Field(unique=True, index=True)
    avatar: str | None = None
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)


class AnimeModel(SQLModel, table=True):
    """
    Modele representant un anime de la bibliotheque locale.

    title_json stocke les variantes {english, romaji, native} ;
    genres_json la liste des genres.
    """

    __tablename__ = "anime"

    id: str = Field(default_factory=_new_id, primary_key=True)
    anilist_id: int | None = Field(default=None, unique=True, index=True)
    kitsu_id: str | None = Field(default=None, unique=True, index=True)
    title_json: str = "{}"  # JSON: {"english": ..., "romaji": ..., "native": ...}
    cover_image: str = ""
    banner_image: str | None = None
    synopsis: str | None = None
    episodes: int | None = None
    status: str | None = None
    genres_json: str | None = None  # JSON: ["Action", "Drama"]
    studio: str | None = None
    rating: float | None = Field(default=None, index=True)  # Note 0-10
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)

    @property
    def title(self) -> dict[str, Optional[str]]:
        """Retourne les variantes de titre deserialisees."""
        return json.loads(self.title_json) if self.title_json else {}

    @title.setter
    def title(self, value: dict[str, Optional[str]]) -> None:
        """Serialise les variantes de titre en JSON."""
        self.title_json = json.dumps(value, ensure_ascii=False)

    @property
    def genres(self) -> list[str]:
        """Retourne les genres deserialises."""
        if self.genres_json:
            return json.loads(self.genres_json)
        return []

    @genres.setter
    def genres(self, value: list[str]) -> None:
        """Serialise les genres en JSON."""
        self.genres_json = json.dumps(value, ensure_ascii=False)


class WatchlistModel(SQLModel, table=True):
    """Modele representant une entree de watchlist."""

    __tablename__ = "watchlists"
    __table_args__ = (UniqueConstraint("user_id", "anime_id", name="uq_watchlist_user_anime"),)

    id: str = Field(default_factory=_new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    anime_id: str = Field(foreign_key="anime.id", index=True)
    status: str = Field(default="planned")  # watching, completed, planned, dropped
    progress: int = Field(default=0)
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)


class FavoriteModel(SQLModel, table=True):
    """Modele representant un anime favori."""

    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("user_id", "anime_id", name="uq_favorite_user_anime"),)

    id: str = Field(default_factory=_new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    anime_id: str = Field(foreign_key="anime.id", index=True)
    created_at: datetime | None = Field(default_factory=datetime.utcnow)


class EpisodeModel(SQLModel, table=True):
    """Modele representant un episode d'anime."""

    __tablename__ = "episodes"

    id: str = Field(default_factory=_new_id, primary_key=True)
    anime_id: str = Field(foreign_key="anime.id", index=True)
    number: int
    season: int | None = Field(default=None, index=True)
    title: str | None = None
    description: str | None = None
    thumbnail: str | None = None
    video_url: str | None = None
    duration: int | None = None  # Secondes
    air_date: datetime | None = None


class WatchHistoryModel(SQLModel, table=True):
    """Modele representant la progression d'un utilisateur sur un episode."""

    __tablename__ = "watch_history"
    __table_args__ = (UniqueConstraint("user_id", "episode_id", name="uq_history_user_episode"),)

    id: str = Field(default_factory=_new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    episode_id: str = Field(foreign_key="episodes.id", index=True)
    watch_time: float = Field(default=0.0)  # Position en secondes
    total_time: int = Field(default=1440)  # 24 minutes par defaut
    completed: bool = Field(default=False)
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)
