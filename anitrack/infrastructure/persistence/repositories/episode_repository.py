"""
Implementation SQLModel du repository Episode.

Implemente l'interface IEpisodeRepository pour la persistance des episodes
d'anime via SQLModel.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from anitrack.core.entities.library import Episode
from anitrack.core.exceptions import NotFoundError
from anitrack.core.ports.repositories import IEpisodeRepository
from anitrack.infrastructure.persistence.database import is_foreign_key_violation
from anitrack.infrastructure.persistence.models import EpisodeModel


class SQLModelEpisodeRepository(IEpisodeRepository):
    """
    Repository SQLModel pour les episodes d'anime.

    Implemente IEpisodeRepository avec conversion bidirectionnelle
    entre l'entite Episode (domaine) et EpisodeModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: EpisodeModel) -> Episode:
        """Convertit un modele DB en entite domaine."""
        return Episode(
            id=model.id,
            anime_id=model.anime_id,
            number=model.number,
            season=model.season,
            title=model.title,
            description=model.description,
            thumbnail=model.thumbnail,
            video_url=model.video_url,
            duration=model.duration,
            air_date=model.air_date,
        )

    def _apply(self, model: EpisodeModel, entity: Episode) -> None:
        """Copie les champs de l'entite dans le modele."""
        model.anime_id = entity.anime_id
        model.number = entity.number
        model.season = entity.season
        model.title = entity.title
        model.description = entity.description
        model.thumbnail = entity.thumbnail
        model.video_url = entity.video_url
        model.duration = entity.duration
        model.air_date = entity.air_date

    def get_by_id(self, episode_id: str) -> Optional[Episode]:
        """Recupere un episode par son ID."""
        model = self._session.get(EpisodeModel, episode_id)
        if model:
            return self._to_entity(model)
        return None

    def list_by_anime(self, anime_id: str, season: Optional[int] = None) -> list[Episode]:
        """
        Recupere les episodes d'un anime.

        Args :
            anime_id : L'ID de l'anime
            season : Filtre optionnel par numero de saison

        Retourne :
            Episodes tries par saison puis par numero
        """
        statement = select(EpisodeModel).where(EpisodeModel.anime_id == anime_id)
        if season is not None:
            statement = statement.where(EpisodeModel.season == season)
        statement = statement.order_by(col(EpisodeModel.season), col(EpisodeModel.number))
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def save(self, episode: Episode) -> Episode:
        """Sauvegarde un episode (insertion ou mise a jour)."""
        existing = None
        if episode.id:
            existing = self._session.get(EpisodeModel, episode.id)

        if existing:
            model = existing
        else:
            model = EpisodeModel(anime_id=episode.anime_id, number=episode.number)
            if episode.id:
                model.id = episode.id
        self._apply(model, episode)

        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            if is_foreign_key_violation(e):
                raise NotFoundError("Anime not found") from None
            raise
        self._session.refresh(model)
        return self._to_entity(model)
