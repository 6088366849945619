"""
Configuration de la base de donnees pour AniTrack.

Ce module fournit :
- Engine SQLAlchemy (SQLite par defaut) configure pour un usage multi-thread
- Session factory
- Fonction d'initialisation des tables
- Activation des cles etrangeres sur SQLite (PRAGMA foreign_keys)

La base de donnees est configuree via ANITRACK_DATABASE_URL (defaut: sqlite:///data/anitrack.db).
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None


def enable_sqlite_foreign_keys(engine: Engine) -> Engine:
    """Active PRAGMA foreign_keys sur chaque nouvelle connexion SQLite."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """Distingue une reference absente d'une violation d'unicite."""
    return "FOREIGN KEY" in str(error.orig).upper()


def _create_engine(db_url: str) -> Engine:
    """Cree l'engine, en preparant le repertoire des fichiers SQLite."""
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        # Base en memoire partagee entre les threads (tests, demo)
        return enable_sqlite_foreign_keys(
            create_engine(
                db_url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        )

    connect_args = {}
    if db_url.startswith("sqlite:///"):
        db_path = Path(db_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)
        connect_args = {"check_same_thread": False}

    engine = create_engine(db_url, echo=False, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        enable_sqlite_foreign_keys(engine)
    return engine


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Retourne l'engine, en le creant si necessaire.

    Args:
        database_url: URL explicite (defaut: configuration de l'application).
            Une URL differente de celle de l'engine courant le remplace.
    """
    global _engine
    if database_url is None and _engine is not None:
        return _engine

    if database_url is None:
        from anitrack.config import Settings

        database_url = Settings().database_url

    if _engine is None or str(_engine.url) != database_url:
        _engine = _create_engine(database_url)
    return _engine


def get_session() -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation avec next() :
        session = next(get_session())
        try:
            # operations
        finally:
            session.close()

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(get_engine()) as session:
        yield session


def init_db(database_url: Optional[str] = None) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables manquantes.

    Doit etre appelee une fois au demarrage de l'application.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from anitrack.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(get_engine(database_url))
