"""
Tests pour SeederService.

Verifie l'insertion des anime de demonstration, la creation de
l'utilisateur de demonstration et l'idempotence du seed.
"""

import pytest
from sqlmodel import Session

from anitrack.infrastructure.persistence.repositories import (
    SQLModelAnimeRepository,
    SQLModelEpisodeRepository,
    SQLModelUserRepository,
)
from anitrack.services.seeder import SEED_ANIME, SeederService


@pytest.fixture
def repos(session: Session):
    return (
        SQLModelAnimeRepository(session),
        SQLModelUserRepository(session),
        SQLModelEpisodeRepository(session),
    )


@pytest.fixture
def seeder(repos) -> SeederService:
    anime_repo, user_repo, episode_repo = repos
    return SeederService(anime_repo, user_repo, episode_repo, demo_user_id="demo-user")


class TestSeed:
    """Tests pour seed()."""

    def test_first_run(self, seeder: SeederService, repos):
        anime_repo, user_repo, _ = repos

        report = seeder.seed()

        assert report.anime_created == len(SEED_ANIME)
        assert report.anime_updated == 0
        assert report.user_created is True
        assert user_repo.get_by_id("demo-user").email == "demo-user@anitrack.local"
        titan = anime_repo.get_by_anilist_id(16498)
        assert titan.title.romaji == "Shingeki no Kyojin"
        assert titan.cover_image.startswith("https://s4.anilist.co/")

    def test_second_run_updates(self, seeder: SeederService, repos):
        anime_repo, _, _ = repos
        seeder.seed()

        report = seeder.seed()

        assert report.anime_created == 0
        assert report.anime_updated == len(SEED_ANIME)
        assert report.user_created is False
        assert len(anime_repo.list_popular(limit=50)) == len(SEED_ANIME)

    def test_no_episodes_by_default(self, seeder: SeederService, repos):
        anime_repo, _, episode_repo = repos

        report = seeder.seed()

        assert report.episodes_created == 0
        titan = anime_repo.get_by_anilist_id(16498)
        assert episode_repo.list_by_anime(titan.id) == []

    def test_placeholder_episodes(self, seeder: SeederService, repos):
        anime_repo, _, episode_repo = repos

        report = seeder.seed(episodes_per_anime=3)

        assert report.episodes_created == 3 * len(SEED_ANIME)
        titan = anime_repo.get_by_anilist_id(16498)
        episodes = episode_repo.list_by_anime(titan.id)
        assert [e.number for e in episodes] == [1, 2, 3]
        assert all(e.season == 1 and e.duration == 1440 for e in episodes)

    def test_placeholder_episodes_not_duplicated(self, seeder: SeederService):
        seeder.seed(episodes_per_anime=2)

        report = seeder.seed(episodes_per_anime=2)

        assert report.episodes_created == 0
