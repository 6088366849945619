"""
Implementation SQLModel du repository Anime.

Implemente l'interface IAnimeRepository pour la bibliotheque locale.
"""

import json
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, or_, select

from anitrack.core.entities.library import Anime, AnimeTitle
from anitrack.core.exceptions import ConflictError
from anitrack.core.ports.repositories import IAnimeRepository
from anitrack.infrastructure.persistence.models import AnimeModel


def anime_to_entity(model: AnimeModel) -> Anime:
    """
    Convertit un modele DB en entite domaine.

    Partage avec les repositories watchlist et favoris qui joignent l'anime.
    """
    title = model.title
    return Anime(
        id=model.id,
        anilist_id=model.anilist_id,
        kitsu_id=model.kitsu_id,
        title=AnimeTitle(
            english=title.get("english"),
            romaji=title.get("romaji"),
            native=title.get("native"),
        ),
        cover_image=model.cover_image,
        banner_image=model.banner_image,
        synopsis=model.synopsis,
        episodes=model.episodes,
        status=model.status,
        genres=tuple(model.genres),
        studio=model.studio,
        rating=model.rating,
        created_at=model.created_at,
    )


class SQLModelAnimeRepository(IAnimeRepository):
    """
    Repository SQLModel pour les anime de la bibliotheque.

    Implemente IAnimeRepository avec conversion bidirectionnelle
    entre l'entite Anime (domaine) et AnimeModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _apply(self, model: AnimeModel, entity: Anime) -> None:
        """Copie les champs de l'entite dans le modele."""
        model.anilist_id = entity.anilist_id
        model.kitsu_id = entity.kitsu_id
        model.title_json = json.dumps(
            {
                "english": entity.title.english,
                "romaji": entity.title.romaji,
                "native": entity.title.native,
            },
            ensure_ascii=False,
        )
        model.cover_image = entity.cover_image
        model.banner_image = entity.banner_image
        model.synopsis = entity.synopsis
        model.episodes = entity.episodes
        model.status = entity.status
        model.genres_json = json.dumps(list(entity.genres), ensure_ascii=False)
        model.studio = entity.studio
        model.rating = entity.rating

    def get_by_id(self, anime_id: str) -> Optional[Anime]:
        """Recupere un anime par son ID interne."""
        model = self._session.get(AnimeModel, anime_id)
        return anime_to_entity(model) if model else None

    def get_by_anilist_id(self, anilist_id: int) -> Optional[Anime]:
        """Recupere un anime par son ID AniList."""
        statement = select(AnimeModel).where(AnimeModel.anilist_id == anilist_id)
        model = self._session.exec(statement).first()
        return anime_to_entity(model) if model else None

    def get_by_kitsu_id(self, kitsu_id: str) -> Optional[Anime]:
        """Recupere un anime par son ID Kitsu."""
        statement = select(AnimeModel).where(AnimeModel.kitsu_id == kitsu_id)
        model = self._session.exec(statement).first()
        return anime_to_entity(model) if model else None

    def search(self, query: str, limit: int = 20) -> list[Anime]:
        """
        Recherche dans les titres et synopsis (insensible a la casse).

        Les titres etant stockes en JSON, la recherche porte sur le texte
        serialise des trois variantes.
        """
        pattern = f"%{query}%"
        statement = (
            select(AnimeModel)
            .where(
                or_(
                    col(AnimeModel.title_json).ilike(pattern),
                    col(AnimeModel.synopsis).ilike(pattern),
                )
            )
            .order_by(col(AnimeModel.rating).desc())
            .limit(limit)
        )
        return [anime_to_entity(m) for m in self._session.exec(statement).all()]

    def list_popular(self, limit: int = 12) -> list[Anime]:
        """Liste les anime les mieux notes."""
        statement = select(AnimeModel).order_by(col(AnimeModel.rating).desc()).limit(limit)
        return [anime_to_entity(m) for m in self._session.exec(statement).all()]

    def list_genres(self) -> list[str]:
        """Liste les genres distincts, dans l'ordre de premiere apparition."""
        genres: dict[str, None] = {}
        for genres_json in self._session.exec(select(AnimeModel.genres_json)).all():
            for genre in json.loads(genres_json) if genres_json else []:
                genres.setdefault(genre, None)
        return list(genres)

    def save(self, anime: Anime) -> Anime:
        """Sauvegarde un anime (insertion ou mise a jour)."""
        existing = self._session.get(AnimeModel, anime.id) if anime.id else None
        if existing:
            model = existing
            model.updated_at = datetime.utcnow()
        else:
            model = AnimeModel()
            if anime.id:
                model.id = anime.id
        self._apply(model, anime)

        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            raise ConflictError("Anime already exists") from None
        self._session.refresh(model)
        return anime_to_entity(model)
