"""
Implementation SQLModel du repository WatchHistory.

Une seule ligne par couple (user_id, episode_id) : upsert() met a jour la
ligne existante ou la cree avec une duree totale par defaut de 24 minutes.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from anitrack.core.entities.library import WatchHistory
from anitrack.core.exceptions import ConflictError, NotFoundError
from anitrack.core.ports.repositories import IWatchHistoryRepository
from anitrack.infrastructure.persistence.database import is_foreign_key_violation
from anitrack.infrastructure.persistence.models import WatchHistoryModel

DEFAULT_TOTAL_TIME = 1440


class SQLModelWatchHistoryRepository(IWatchHistoryRepository):
    """Repository SQLModel pour l'historique de visionnage."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: WatchHistoryModel) -> WatchHistory:
        return WatchHistory(
            id=model.id,
            user_id=model.user_id,
            episode_id=model.episode_id,
            watch_time=model.watch_time,
            total_time=model.total_time,
            completed=model.completed,
            updated_at=model.updated_at,
        )

    def _find(self, user_id: str, episode_id: str) -> Optional[WatchHistoryModel]:
        statement = select(WatchHistoryModel).where(
            WatchHistoryModel.user_id == user_id,
            WatchHistoryModel.episode_id == episode_id,
        )
        return self._session.exec(statement).first()

    def get(self, user_id: str, episode_id: str) -> Optional[WatchHistory]:
        model = self._find(user_id, episode_id)
        return self._to_entity(model) if model else None

    def upsert(
        self,
        user_id: str,
        episode_id: str,
        watch_time: float,
        completed: bool,
    ) -> WatchHistory:
        model = self._find(user_id, episode_id)
        if model:
            model.watch_time = watch_time
            model.completed = completed
            model.updated_at = datetime.utcnow()
        else:
            model = WatchHistoryModel(
                user_id=user_id,
                episode_id=episode_id,
                watch_time=watch_time,
                total_time=DEFAULT_TOTAL_TIME,
                completed=completed,
            )

        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            if is_foreign_key_violation(e):
                raise NotFoundError("User or episode not found") from None
            raise ConflictError("Watch history already exists") from None
        self._session.refresh(model)
        return self._to_entity(model)
