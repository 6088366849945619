"""
Module de persistance pour AniTrack.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Configuration de l'engine, session factory, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementations des ports de persistance

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.
"""

from anitrack.infrastructure.persistence.database import get_engine, get_session, init_db
from anitrack.infrastructure.persistence.models import (
    AnimeModel,
    EpisodeModel,
    FavoriteModel,
    UserModel,
    WatchHistoryModel,
    WatchlistModel,
)

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "AnimeModel",
    "EpisodeModel",
    "FavoriteModel",
    "UserModel",
    "WatchHistoryModel",
    "WatchlistModel",
]
