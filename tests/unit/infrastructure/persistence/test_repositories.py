"""
Tests pour les repositories SQLModel (base SQLite en memoire).

Verifie la conversion entites/modeles, l'unicite des couples
utilisateur/anime et utilisateur/episode, et les requetes de la bibliotheque.
"""

import pytest
from sqlmodel import Session

from anitrack.core.entities.library import (
    Anime,
    AnimeTitle,
    Episode,
    Favorite,
    User,
    UserStatus,
    WatchlistEntry,
)
from anitrack.core.exceptions import ConflictError, NotFoundError
from anitrack.infrastructure.persistence.models import AnimeModel
from anitrack.infrastructure.persistence.repositories import (
    SQLModelAnimeRepository,
    SQLModelEpisodeRepository,
    SQLModelFavoriteRepository,
    SQLModelUserRepository,
    SQLModelWatchHistoryRepository,
    SQLModelWatchlistRepository,
)


def _anime(anilist_id: int, english: str, rating: float, genres=(), synopsis=None) -> Anime:
    return Anime(
        anilist_id=anilist_id,
        title=AnimeTitle(english=english, romaji=english),
        synopsis=synopsis,
        genres=tuple(genres),
        rating=rating,
    )


@pytest.fixture
def anime_repo(session: Session) -> SQLModelAnimeRepository:
    return SQLModelAnimeRepository(session)


@pytest.fixture
def user(session: Session) -> User:
    return SQLModelUserRepository(session).save(
        User(id="demo-user", email="demo@anitrack.local", username="demo")
    )


@pytest.fixture
def titan(anime_repo: SQLModelAnimeRepository) -> Anime:
    return anime_repo.save(
        _anime(
            16498,
            "Attack on Titan",
            9.0,
            genres=["Action", "Drama"],
            synopsis="Humans were nearly exterminated by titans.",
        )
    )


@pytest.fixture
def death_note(anime_repo: SQLModelAnimeRepository) -> Anime:
    return anime_repo.save(
        _anime(30, "Death Note", 8.8, genres=["Mystery", "Drama"], synopsis="A shinigami notebook.")
    )


class TestUserRepository:
    """Tests pour SQLModelUserRepository."""

    def test_save_keeps_explicit_id(self, user: User):
        assert user.id == "demo-user"
        assert user.created_at is not None

    def test_lookup_by_email_and_username(self, session: Session, user: User):
        repo = SQLModelUserRepository(session)
        assert repo.get_by_email("demo@anitrack.local").id == "demo-user"
        assert repo.get_by_username("demo").id == "demo-user"
        assert repo.get_by_id("nobody") is None

    def test_duplicate_email_raises_conflict(self, session: Session, user: User):
        repo = SQLModelUserRepository(session)
        with pytest.raises(ConflictError):
            repo.save(User(email="demo@anitrack.local", username="other"))


class TestAnimeRepository:
    """Tests pour SQLModelAnimeRepository."""

    def test_round_trip_keeps_titles_and_genres(self, anime_repo, titan: Anime):
        stored = anime_repo.get_by_id(titan.id)

        assert stored.title == AnimeTitle(english="Attack on Titan", romaji="Attack on Titan")
        assert stored.genres == ("Action", "Drama")
        assert stored.rating == 9.0

    def test_titles_are_stored_as_json(self, session: Session, titan: Anime):
        model = session.get(AnimeModel, titan.id)
        assert model.title["english"] == "Attack on Titan"

    def test_get_by_provider_ids(self, anime_repo, titan: Anime):
        assert anime_repo.get_by_anilist_id(16498).id == titan.id
        assert anime_repo.get_by_kitsu_id("7442") is None

    def test_save_updates_existing(self, anime_repo, titan: Anime):
        titan.episodes = 87
        anime_repo.save(titan)
        assert anime_repo.get_by_id(titan.id).episodes == 87

    def test_duplicate_anilist_id_raises_conflict(self, anime_repo, titan: Anime):
        with pytest.raises(ConflictError):
            anime_repo.save(_anime(16498, "Shingeki no Kyojin", 8.0))

    def test_search_matches_title_and_synopsis_by_rating(self, anime_repo, titan, death_note):
        assert [a.id for a in anime_repo.search("titan")] == [titan.id]
        assert [a.id for a in anime_repo.search("SHINIGAMI")] == [death_note.id]
        assert anime_repo.search("naruto") == []

    def test_search_limit(self, anime_repo, titan, death_note):
        assert len(anime_repo.search("a", limit=1)) == 1

    def test_list_popular_orders_by_rating(self, anime_repo, titan, death_note):
        assert [a.id for a in anime_repo.list_popular()] == [titan.id, death_note.id]

    def test_list_genres_unique(self, anime_repo, titan, death_note):
        assert anime_repo.list_genres() == ["Action", "Drama", "Mystery"]


class TestWatchlistRepository:
    """Tests pour SQLModelWatchlistRepository."""

    @pytest.fixture
    def repo(self, session: Session) -> SQLModelWatchlistRepository:
        return SQLModelWatchlistRepository(session)

    def test_add_and_list_with_anime(self, repo, user, titan):
        repo.add(WatchlistEntry(user_id=user.id, anime_id=titan.id, status=UserStatus.WATCHING))

        entries = repo.list_by_user(user.id)

        assert len(entries) == 1
        assert entries[0].status is UserStatus.WATCHING
        assert entries[0].anime.title.english == "Attack on Titan"

    def test_list_is_newest_first(self, repo, user, titan, death_note):
        repo.add(WatchlistEntry(user_id=user.id, anime_id=titan.id))
        repo.add(WatchlistEntry(user_id=user.id, anime_id=death_note.id))

        assert [e.anime_id for e in repo.list_by_user(user.id)] == [death_note.id, titan.id]

    def test_pair_is_unique(self, repo, user, titan):
        repo.add(WatchlistEntry(user_id=user.id, anime_id=titan.id))
        with pytest.raises(ConflictError, match="already in watchlist"):
            repo.add(WatchlistEntry(user_id=user.id, anime_id=titan.id))

    def test_update_status_keeps_progress(self, repo, user, titan):
        entry = repo.add(WatchlistEntry(user_id=user.id, anime_id=titan.id, progress=3))

        updated = repo.update(entry.id, UserStatus.COMPLETED)

        assert updated.status is UserStatus.COMPLETED
        assert updated.progress == 3

    def test_update_unknown_entry(self, repo):
        assert repo.update("missing", UserStatus.DROPPED) is None

    def test_remove_returns_count(self, repo, user, titan):
        repo.add(WatchlistEntry(user_id=user.id, anime_id=titan.id))

        assert repo.remove(user.id, titan.id) == 1
        assert repo.remove(user.id, titan.id) == 0
        assert repo.get(user.id, titan.id) is None


class TestFavoriteRepository:
    """Tests pour SQLModelFavoriteRepository."""

    def test_add_list_remove(self, session, user, titan):
        repo = SQLModelFavoriteRepository(session)
        repo.add(Favorite(user_id=user.id, anime_id=titan.id))

        favorites = repo.list_by_user(user.id)
        assert [f.anime.title.english for f in favorites] == ["Attack on Titan"]

        with pytest.raises(ConflictError, match="already in favorites"):
            repo.add(Favorite(user_id=user.id, anime_id=titan.id))

        assert repo.remove(user.id, titan.id) == 1
        assert repo.list_by_user(user.id) == []


class TestEpisodeAndHistoryRepositories:
    """Tests pour les episodes et l'historique de visionnage."""

    def test_list_by_anime_orders_by_season_then_number(self, session, titan):
        repo = SQLModelEpisodeRepository(session)
        for season, number in [(2, 1), (1, 2), (1, 1)]:
            repo.save(Episode(anime_id=titan.id, season=season, number=number))

        episodes = repo.list_by_anime(titan.id)

        assert [(e.season, e.number) for e in episodes] == [(1, 1), (1, 2), (2, 1)]
        assert [e.number for e in repo.list_by_anime(titan.id, season=2)] == [1]

    def test_history_upsert_creates_then_updates(self, session, user, titan):
        episode = SQLModelEpisodeRepository(session).save(Episode(anime_id=titan.id, number=1))
        repo = SQLModelWatchHistoryRepository(session)

        created = repo.upsert(user.id, episode.id, 120.0, False)
        updated = repo.upsert(user.id, episode.id, 1400.0, True)

        assert created.total_time == 1440
        assert updated.id == created.id
        assert updated.watch_time == 1400.0
        assert updated.completed is True
        assert repo.get(user.id, episode.id).completed is True
        assert repo.get("someone-else", episode.id) is None


class TestForeignKeys:
    """Les references vers des lignes absentes sont refusees par SQLite."""

    def test_watchlist_unknown_user(self, session, titan):
        repo = SQLModelWatchlistRepository(session)

        with pytest.raises(NotFoundError, match="User or anime not found"):
            repo.add(WatchlistEntry(user_id="ghost", anime_id=titan.id))

        assert repo.list_by_user("ghost") == []

    def test_favorite_unknown_anime(self, session, user):
        repo = SQLModelFavoriteRepository(session)

        with pytest.raises(NotFoundError):
            repo.add(Favorite(user_id=user.id, anime_id="missing"))

    def test_history_unknown_user(self, session, titan):
        episode = SQLModelEpisodeRepository(session).save(Episode(anime_id=titan.id, number=1))
        repo = SQLModelWatchHistoryRepository(session)

        with pytest.raises(NotFoundError, match="User or episode not found"):
            repo.upsert("ghost", episode.id, 10.0, False)

        assert repo.get("ghost", episode.id) is None

    def test_episode_unknown_anime(self, session):
        with pytest.raises(NotFoundError, match="Anime not found"):
            SQLModelEpisodeRepository(session).save(Episode(anime_id="missing", number=1))
