"""
Tests for the FastAPI routes.

The application is built around a real Container whose configuration and
session are overridden (in-memory SQLite, cache disabled). Upstream calls to
AniList and Kitsu are mocked with respx.
"""

import httpx
import pytest
import respx
from dependency_injector import providers
from fastapi.testclient import TestClient
from loguru import logger
from sqlmodel import Session

from anitrack.config import Settings
from anitrack.container import Container
from anitrack.core.entities.library import Anime, AnimeTitle, Episode, User
from anitrack.infrastructure.persistence.repositories import (
    SQLModelAnimeRepository,
    SQLModelEpisodeRepository,
    SQLModelUserRepository,
)
from anitrack.web.app import create_app
from tests.fixtures.anilist_responses import (
    ANILIST_DETAIL_RESPONSE,
    ANILIST_GENRE_PAGE_RESPONSE,
    ANILIST_GENRES_RESPONSE,
    ANILIST_PAGE_RESPONSE,
    ATTACK_ON_TITAN_MEDIA,
)
from tests.fixtures.kitsu_responses import KITSU_LIST_RESPONSE

ANILIST_URL = "https://graphql.anilist.co"
KITSU_ANIME_URL = "https://kitsu.io/api/edge/anime"


@pytest.fixture
def container(test_settings: Settings, session: Session) -> Container:
    container = Container()
    container.config.override(providers.Object(test_settings))
    container.session.override(providers.Object(session))
    yield container
    container.reset_override()


@pytest.fixture
def client(container: Container):
    with TestClient(create_app(container)) as client:
        yield client


@pytest.fixture
def demo_user(session: Session) -> User:
    return SQLModelUserRepository(session).save(
        User(id="demo-user", email="demo@anitrack.local", username="demo")
    )


@pytest.fixture
def titan(session: Session) -> Anime:
    return SQLModelAnimeRepository(session).save(
        Anime(
            anilist_id=16498,
            title=AnimeTitle(english="Attack on Titan", romaji="Shingeki no Kyojin"),
            cover_image="https://example.com/aot.jpg",
            genres=("Action", "Drama"),
            rating=8.4,
        )
    )


@pytest.fixture
def episodes(session: Session, titan: Anime) -> list[Episode]:
    repo = SQLModelEpisodeRepository(session)
    return [
        repo.save(Episode(anime_id=titan.id, season=1, number=1, title="To You, in 2000 Years")),
        repo.save(Episode(anime_id=titan.id, season=1, number=2, title="That Day")),
        repo.save(Episode(anime_id=titan.id, season=2, number=1, title="Beast Titan")),
    ]


class TestHealth:
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["version"]


class TestCatalog:
    """Tests for /api/anime, /api/anilist and /api/kitsu."""

    def test_search_without_text_is_rejected(self, client: TestClient):
        with respx.mock(assert_all_called=False) as mock:
            route = mock.post(ANILIST_URL)
            response = client.get("/api/anime", params={"type": "search"})

        assert response.status_code == 400
        assert response.json() == {"error": "Search query required"}
        assert not route.called

    def test_invalid_type(self, client: TestClient):
        response = client.get("/api/anime", params={"type": "random"})

        assert response.status_code == 400
        assert "error" in response.json()

    @respx.mock
    def test_trending_from_anilist(self, client: TestClient):
        respx.post(ANILIST_URL).mock(return_value=httpx.Response(200, json=ANILIST_PAGE_RESPONSE))

        response = client.get("/api/anime", params={"type": "trending"})

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [16498, 1535]

    @respx.mock
    def test_detail_from_anilist(self, client: TestClient):
        respx.post(ANILIST_URL).mock(return_value=httpx.Response(200, json=ANILIST_DETAIL_RESPONSE))

        response = client.get("/api/anime", params={"type": "detail", "id": "16498"})

        assert response.status_code == 200
        assert response.json()["title"]["romaji"] == "Shingeki no Kyojin"

    @respx.mock
    def test_fallback_to_kitsu(self, client: TestClient):
        respx.post(ANILIST_URL).mock(return_value=httpx.Response(500))
        respx.get(KITSU_ANIME_URL).mock(return_value=httpx.Response(200, json=KITSU_LIST_RESPONSE))

        response = client.get("/api/anime", params={"type": "popular"})

        assert response.status_code == 200
        first = response.json()[0]
        assert first["kitsuId"] == "7442"
        assert first["title"]["romaji"] == "Shingeki no Kyojin"

    @respx.mock
    def test_fallback_when_anilist_body_is_not_json(self, client: TestClient):
        respx.post(ANILIST_URL).mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )
        respx.get(KITSU_ANIME_URL).mock(return_value=httpx.Response(200, json=KITSU_LIST_RESPONSE))

        response = client.get("/api/anime", params={"type": "trending"})

        assert response.status_code == 200
        assert response.json()[0]["kitsuId"] == "7442"

    @respx.mock
    def test_fallback_warning_carries_request(self, client: TestClient):
        respx.post(ANILIST_URL).mock(return_value=httpx.Response(500))
        respx.get(KITSU_ANIME_URL).mock(return_value=httpx.Response(200, json=KITSU_LIST_RESPONSE))
        records: list[dict] = []
        handler_id = logger.add(lambda message: records.append(message.record), level="WARNING")
        try:
            client.get("/api/anime", params={"type": "popular"})
        finally:
            logger.remove(handler_id)

        warning = next(r for r in records if "repli sur Kitsu" in r["message"])
        assert warning["extra"]["request"] == "GET /api/anime"

    def test_fallback_disabled(self, client: TestClient):
        with respx.mock(assert_all_called=False) as mock:
            mock.post(ANILIST_URL).mock(return_value=httpx.Response(500))
            kitsu = mock.get(KITSU_ANIME_URL)

            response = client.get("/api/anime", params={"type": "popular", "fallback": "false"})

        assert response.status_code == 503
        assert response.json() == {"error": "AniList API unavailable"}
        assert not kitsu.called

    @respx.mock
    def test_both_providers_down(self, client: TestClient):
        respx.post(ANILIST_URL).mock(return_value=httpx.Response(500))
        respx.get(KITSU_ANIME_URL).mock(return_value=httpx.Response(503))

        response = client.get("/api/anime", params={"type": "trending"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Both AniList and Kitsu APIs are unavailable"
        assert set(body["details"]) == {"anilist", "kitsu"}

    def test_kitsu_source_skips_anilist(self, client: TestClient):
        with respx.mock(assert_all_called=False) as mock:
            anilist = mock.post(ANILIST_URL)
            mock.get(KITSU_ANIME_URL).mock(
                return_value=httpx.Response(200, json=KITSU_LIST_RESPONSE)
            )

            response = client.get("/api/anime", params={"type": "trending", "source": "kitsu"})

        assert response.status_code == 200
        assert response.json()[0]["kitsuId"] == "7442"
        assert not anilist.called

    def test_invalid_source(self, client: TestClient):
        response = client.get("/api/anime", params={"type": "trending", "source": "mal"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid source parameter"}

    @respx.mock
    def test_anilist_detail_not_found(self, client: TestClient):
        respx.post(ANILIST_URL).mock(
            return_value=httpx.Response(404, json={"errors": [{"message": "Not Found."}]})
        )

        response = client.get("/api/anilist", params={"type": "detail", "id": "999999"})

        assert response.status_code == 404
        assert response.json() == {"error": "Anime not found"}

    @respx.mock
    def test_kitsu_direct_returns_raw_resources(self, client: TestClient):
        respx.get(KITSU_ANIME_URL).mock(return_value=httpx.Response(200, json=KITSU_LIST_RESPONSE))

        response = client.get("/api/kitsu", params={"type": "popular"})

        assert response.status_code == 200
        assert response.json()[0]["attributes"]["canonicalTitle"] == "Attack on Titan"


class TestGenres:
    """Tests for /api/genres."""

    @respx.mock
    def test_genre_collection(self, client: TestClient):
        respx.post(ANILIST_URL).mock(return_value=httpx.Response(200, json=ANILIST_GENRES_RESPONSE))

        response = client.get("/api/genres", params={"type": "genres"})

        assert response.status_code == 200
        assert "Action" in response.json()

    @respx.mock
    def test_anime_by_genre(self, client: TestClient):
        respx.post(ANILIST_URL).mock(
            return_value=httpx.Response(200, json=ANILIST_GENRE_PAGE_RESPONSE)
        )

        response = client.get("/api/genres", params={"type": "anime", "genre": "Action", "page": "2"})

        assert response.status_code == 200
        assert response.json()["pageInfo"]["hasNextPage"] is True

    def test_missing_genre(self, client: TestClient):
        response = client.get("/api/genres", params={"type": "anime"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid parameters")

    def test_invalid_page(self, client: TestClient):
        response = client.get("/api/genres", params={"type": "anime", "genre": "Action", "page": "x"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid page parameter"}


class TestEpisodes:
    """Tests for /api/episodes."""

    def test_list_grouped_by_season(self, client: TestClient, titan, episodes):
        response = client.get("/api/episodes", params={"type": "list", "animeId": titan.id})

        assert response.status_code == 200
        body = response.json()
        assert body["animeId"] == titan.id
        assert body["totalEpisodes"] == 3
        assert [e["number"] for e in body["episodesBySeason"]["1"]] == [1, 2]

    def test_detail(self, client: TestClient, titan, episodes):
        response = client.get("/api/episodes", params={"type": "detail", "episodeId": episodes[0].id})

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "To You, in 2000 Years"
        assert body["anime"]["title"]["english"] == "Attack on Titan"
        assert body["watchHistory"] is None

    def test_season(self, client: TestClient, titan, episodes):
        response = client.get(
            "/api/episodes", params={"type": "season", "animeId": titan.id, "season": "2"}
        )

        assert response.status_code == 200
        assert response.json()["season"] == 2
        assert response.json()["episodes"][0]["title"] == "Beast Titan"

    def test_invalid_type(self, client: TestClient):
        response = client.get("/api/episodes", params={"type": "all"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid type parameter"}

    def test_unknown_episode(self, client: TestClient):
        response = client.get("/api/episodes", params={"type": "detail", "episodeId": "missing"})

        assert response.status_code == 404

    def test_record_progress(self, client: TestClient, demo_user, episodes):
        response = client.post(
            "/api/episodes",
            params={"episodeId": episodes[0].id},
            json={"userId": demo_user.id, "watchTime": 720, "completed": False},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["watchHistory"]["watchTime"] == 720
        assert body["watchHistory"]["totalTime"] == 1440

        detail = client.get("/api/episodes", params={"type": "detail", "episodeId": episodes[0].id})
        assert detail.json()["watchHistory"]["watchTime"] == 720

    def test_record_progress_requires_user(self, client: TestClient, episodes):
        response = client.post(
            "/api/episodes", params={"episodeId": episodes[0].id}, json={"watchTime": 10}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "User ID required"}

    def test_record_progress_unknown_user(self, client: TestClient, episodes):
        response = client.post(
            "/api/episodes",
            params={"episodeId": episodes[0].id},
            json={"userId": "ghost", "watchTime": 10},
        )

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}


class TestUsers:
    def test_create_and_get(self, client: TestClient):
        created = client.post("/api/users", json={"email": "faye@bebop.space", "username": "faye"})

        assert created.status_code == 201
        user_id = created.json()["id"]
        assert client.get(f"/api/users/{user_id}").json()["username"] == "faye"

    def test_duplicate(self, client: TestClient):
        client.post("/api/users", json={"email": "faye@bebop.space", "username": "faye"})

        response = client.post("/api/users", json={"email": "faye@bebop.space", "username": "faye"})

        assert response.status_code == 409

    def test_invalid_body(self, client: TestClient):
        response = client.post("/api/users", json={"username": "faye"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_unknown_user(self, client: TestClient):
        response = client.get("/api/users/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}


class TestLibrary:
    """Tests for the local library, watchlist and favorites routes."""

    def test_import_and_search(self, client: TestClient):
        imported = client.post("/api/library/anime", json=ATTACK_ON_TITAN_MEDIA)

        assert imported.status_code == 201
        assert imported.json()["anilistId"] == 16498
        assert imported.json()["rating"] == 8.4

        results = client.get("/api/library/anime", params={"q": "kyojin"}).json()
        assert [a["anilistId"] for a in results] == [16498]
        assert client.get("/api/library/genres").json()[0] == "Action"

    def test_unknown_anime(self, client: TestClient):
        response = client.get("/api/library/anime/missing")

        assert response.status_code == 404

    def test_watchlist_flow(self, client: TestClient, demo_user, titan):
        created = client.post(
            "/api/watchlist",
            json={"userId": demo_user.id, "animeId": titan.id, "status": "watching"},
        )
        assert created.status_code == 201
        entry_id = created.json()["id"]

        updated = client.patch(f"/api/watchlist/{entry_id}", json={"status": "completed", "progress": 25})
        assert updated.json()["status"] == "completed"
        assert updated.json()["progress"] == 25

        # sans userId : utilisateur de demonstration
        [listed] = client.get("/api/watchlist").json()
        assert listed["anime"]["title"]["english"] == "Attack on Titan"

        removed = client.delete("/api/watchlist", params={"animeId": titan.id})
        assert removed.json() == {"removed": 1}

    def test_watchlist_invalid_status(self, client: TestClient, demo_user, titan):
        response = client.post(
            "/api/watchlist",
            json={"userId": demo_user.id, "animeId": titan.id, "status": "binging"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid status parameter"}

    def test_favorites_flow(self, client: TestClient, demo_user, titan):
        created = client.post("/api/favorites", json={"userId": demo_user.id, "animeId": titan.id})
        assert created.status_code == 201

        duplicate = client.post("/api/favorites", json={"userId": demo_user.id, "animeId": titan.id})
        assert duplicate.status_code == 409

        assert len(client.get("/api/favorites", params={"userId": demo_user.id}).json()) == 1
        removed = client.delete("/api/favorites", params={"animeId": titan.id})
        assert removed.json() == {"removed": 1}

    def test_watchlist_unknown_user(self, client: TestClient, titan):
        response = client.post("/api/watchlist", json={"userId": "ghost", "animeId": titan.id})

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}
        assert client.get("/api/watchlist", params={"userId": "ghost"}).json() == []

    def test_favorites_unknown_user(self, client: TestClient, titan):
        response = client.post("/api/favorites", json={"userId": "ghost", "animeId": titan.id})

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}
        assert client.get("/api/favorites", params={"userId": "ghost"}).json() == []

    def test_watchlist_update_checks_owner(self, client: TestClient, demo_user, titan):
        entry_id = client.post(
            "/api/watchlist", json={"userId": demo_user.id, "animeId": titan.id}
        ).json()["id"]

        response = client.patch(
            f"/api/watchlist/{entry_id}",
            params={"userId": "someone-else"},
            json={"status": "dropped"},
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Watchlist entry not found"}
