"""
Implementation SQLModel du repository Watchlist.

Les entrees sont uniques par couple (user_id, anime_id) ; la contrainte est
portee par la table, une insertion en double leve ConflictError.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from anitrack.core.entities.library import UserStatus, WatchlistEntry
from anitrack.core.exceptions import ConflictError, NotFoundError
from anitrack.core.ports.repositories import IWatchlistRepository
from anitrack.infrastructure.persistence.database import is_foreign_key_violation
from anitrack.infrastructure.persistence.models import AnimeModel, WatchlistModel
from anitrack.infrastructure.persistence.repositories.anime_repository import anime_to_entity


class SQLModelWatchlistRepository(IWatchlistRepository):
    """Repository SQLModel pour les watchlists."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(
        self, model: WatchlistModel, anime: Optional[AnimeModel] = None
    ) -> WatchlistEntry:
        """Convertit un modele DB (et son anime joint) en entite domaine."""
        return WatchlistEntry(
            id=model.id,
            user_id=model.user_id,
            anime_id=model.anime_id,
            status=UserStatus(model.status),
            progress=model.progress,
            anime=anime_to_entity(anime) if anime else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def get_by_id(self, entry_id: str) -> Optional[WatchlistEntry]:
        model = self._session.get(WatchlistModel, entry_id)
        return self._to_entity(model) if model else None

    def get(self, user_id: str, anime_id: str) -> Optional[WatchlistEntry]:
        statement = select(WatchlistModel).where(
            WatchlistModel.user_id == user_id,
            WatchlistModel.anime_id == anime_id,
        )
        model = self._session.exec(statement).first()
        return self._to_entity(model) if model else None

    def list_by_user(self, user_id: str) -> list[WatchlistEntry]:
        """Liste la watchlist avec les anime joints, plus recentes en premier."""
        statement = (
            select(WatchlistModel, AnimeModel)
            .join(AnimeModel, AnimeModel.id == WatchlistModel.anime_id)
            .where(WatchlistModel.user_id == user_id)
            .order_by(col(WatchlistModel.created_at).desc())
        )
        return [
            self._to_entity(entry, anime)
            for entry, anime in self._session.exec(statement).all()
        ]

    def add(self, entry: WatchlistEntry) -> WatchlistEntry:
        model = WatchlistModel(
            user_id=entry.user_id,
            anime_id=entry.anime_id,
            status=entry.status.value,
            progress=entry.progress,
        )
        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            if is_foreign_key_violation(e):
                raise NotFoundError("User or anime not found") from None
            raise ConflictError("Anime already in watchlist") from None
        self._session.refresh(model)
        return self._to_entity(model)

    def update(
        self, entry_id: str, status: UserStatus, progress: Optional[int] = None
    ) -> Optional[WatchlistEntry]:
        """Met a jour le statut ; la progression n'est modifiee que si fournie."""
        model = self._session.get(WatchlistModel, entry_id)
        if model is None:
            return None
        model.status = status.value
        if progress is not None:
            model.progress = progress
        model.updated_at = datetime.utcnow()
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def remove(self, user_id: str, anime_id: str) -> int:
        statement = select(WatchlistModel).where(
            WatchlistModel.user_id == user_id,
            WatchlistModel.anime_id == anime_id,
        )
        models = self._session.exec(statement).all()
        for model in models:
            self._session.delete(model)
        self._session.commit()
        return len(models)
