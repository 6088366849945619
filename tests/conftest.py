"""
Fixtures pytest partagees pour les tests AniTrack.

Ce module contient les fixtures communes utilisees dans les tests:
- Mock du cache API (cache miss par defaut)
- Session SQLModel sur une base SQLite en memoire
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from anitrack.adapters.api.cache import APICache
from anitrack.config import Settings
from anitrack.infrastructure.persistence import models  # noqa: F401
from anitrack.infrastructure.persistence.database import enable_sqlite_foreign_keys


@pytest.fixture
def mock_cache() -> AsyncMock:
    """Mock APICache : get() retourne None (cache miss) par defaut."""
    cache = AsyncMock(spec=APICache)
    cache.get.return_value = None
    return cache


@pytest.fixture
def engine():
    """Engine SQLite en memoire partage entre threads, cles etrangeres actives."""
    engine = enable_sqlite_foreign_keys(
        create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    """Session SQLModel sur la base en memoire."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Les URL des fournisseurs gardent leurs valeurs par defaut : les appels
    sont interceptes par respx.
    """
    return Settings(
        database_url="sqlite://",
        cache_dir=tmp_path / "cache",
        cache_ttl=0,
        kitsu_retry_delay=0,
        log_file=tmp_path / "test.log",
    )
