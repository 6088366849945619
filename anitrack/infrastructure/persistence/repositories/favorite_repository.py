"""
Implementation SQLModel du repository Favorite.
"""

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from anitrack.core.entities.library import Favorite
from anitrack.core.exceptions import ConflictError, NotFoundError
from anitrack.core.ports.repositories import IFavoriteRepository
from anitrack.infrastructure.persistence.database import is_foreign_key_violation
from anitrack.infrastructure.persistence.models import AnimeModel, FavoriteModel
from anitrack.infrastructure.persistence.repositories.anime_repository import anime_to_entity


class SQLModelFavoriteRepository(IFavoriteRepository):
    """Repository SQLModel pour les favoris, uniques par (user_id, anime_id)."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_by_user(self, user_id: str) -> list[Favorite]:
        statement = (
            select(FavoriteModel, AnimeModel)
            .join(AnimeModel, AnimeModel.id == FavoriteModel.anime_id)
            .where(FavoriteModel.user_id == user_id)
            .order_by(col(FavoriteModel.created_at).desc())
        )
        return [
            Favorite(
                id=favorite.id,
                user_id=favorite.user_id,
                anime_id=favorite.anime_id,
                anime=anime_to_entity(anime),
                created_at=favorite.created_at,
            )
            for favorite, anime in self._session.exec(statement).all()
        ]

    def add(self, favorite: Favorite) -> Favorite:
        model = FavoriteModel(user_id=favorite.user_id, anime_id=favorite.anime_id)
        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            if is_foreign_key_violation(e):
                raise NotFoundError("User or anime not found") from None
            raise ConflictError("Anime already in favorites") from None
        self._session.refresh(model)
        return Favorite(
            id=model.id,
            user_id=model.user_id,
            anime_id=model.anime_id,
            created_at=model.created_at,
        )

    def remove(self, user_id: str, anime_id: str) -> int:
        statement = select(FavoriteModel).where(
            FavoriteModel.user_id == user_id,
            FavoriteModel.anime_id == anime_id,
        )
        models = self._session.exec(statement).all()
        for model in models:
            self._session.delete(model)
        self._session.commit()
        return len(models)
