"""
Implementation SQLModel du repository User.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from anitrack.core.entities.library import User
from anitrack.core.exceptions import ConflictError
from anitrack.core.ports.repositories import IUserRepository
from anitrack.infrastructure.persistence.models import UserModel


class SQLModelUserRepository(IUserRepository):
    """Repository SQLModel pour les utilisateurs."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            username=model.username,
            avatar=model.avatar,
            created_at=model.created_at,
        )

    def get_by_id(self, user_id: str) -> Optional[User]:
        model = self._session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(UserModel).where(UserModel.email == email)
        model = self._session.exec(statement).first()
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> Optional[User]:
        statement = select(UserModel).where(UserModel.username == username)
        model = self._session.exec(statement).first()
        return self._to_entity(model) if model else None

    def save(self, user: User) -> User:
        """Sauvegarde un utilisateur (insertion ou mise a jour)."""
        existing = self._session.get(UserModel, user.id) if user.id else None
        if existing:
            existing.email = user.email
            existing.username = user.username
            existing.avatar = user.avatar
            model = existing
        else:
            model = UserModel(email=user.email, username=user.username, avatar=user.avatar)
            if user.id:
                model.id = user.id

        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            raise ConflictError("User already exists") from None
        self._session.refresh(model)
        return self._to_entity(model)
