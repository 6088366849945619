"""
Donnees de demonstration de la bibliotheque locale.

Insere quelques anime connus (upsert par ID AniList), l'utilisateur de
demonstration et, optionnellement, des episodes factices pour la page de
lecture.
"""

from dataclasses import dataclass

from loguru import logger

from anitrack.core.entities.library import Anime, AnimeTitle, Episode, User
from anitrack.core.ports.repositories import (
    IAnimeRepository,
    IEpisodeRepository,
    IUserRepository,
)

_COVER_BASE = "https://s4.anilist.co/file/anilistcdn/media/anime"

SEED_ANIME: tuple[dict, ...] = (
    {
        "anilist_id": 16498,
        "title": ("Attack on Titan", "Shingeki no Kyojin", "進撃の巨人"),
        "cover": "bx9CtSE1A7nXIL5auxPA.jpg",
        "synopsis": "Several hundred years ago, humans were nearly exterminated by titans...",
        "episodes": 87,
        "status": "Finished",
        "genres": ("Action", "Drama", "Fantasy", "Military", "Shounen"),
        "studio": "Wit Studio",
        "rating": 9.0,
    },
    {
        "anilist_id": 21,
        "title": ("One Piece", "One Piece", "ワンピース"),
        "cover": "nx24j76Jc34dCljY1N3.jpg",
        "synopsis": "Gol D. Roger, known as the Pirate King, was executed...",
        "episodes": 1000,
        "status": "Releasing",
        "genres": ("Adventure", "Comedy", "Drama", "Shounen"),
        "studio": "Toei Animation",
        "rating": 9.1,
    },
    {
        "anilist_id": 52991,
        "title": ("Jujutsu Kaisen", "Jujutsu Kaisen", "呪術廻戦"),
        "cover": "n9ew2ymdOcEl5B8xJfM.jpg",
        "synopsis": "Yuji Itadori is a genius with track and field...",
        "episodes": 24,
        "status": "Finished",
        "genres": ("Action", "School", "Shounen", "Supernatural"),
        "studio": "MAPPA",
        "rating": 8.5,
    },
    {
        "anilist_id": 113415,
        "title": ("Chainsaw Man", "Chainsaw Man", "チェンソーマン"),
        "cover": "epGgrn874DrcrU3p26c.jpg",
        "synopsis": "Denji has a simple dream, to live a happy and peaceful life...",
        "episodes": 12,
        "status": "Finished",
        "genres": ("Action", "Supernatural", "Shounen"),
        "studio": "MAPPA",
        "rating": 8.6,
    },
    {
        "anilist_id": 30,
        "title": ("Death Note", "Death Note", "デスノート"),
        "cover": "ynboWAiAwJiI8Y3d3fQ.jpg",
        "synopsis": "A shinigami, as a god of death, can kill any person...",
        "episodes": 37,
        "status": "Finished",
        "genres": ("Mystery", "Psychological", "Supernatural", "Thriller"),
        "studio": "Madhouse",
        "rating": 9.0,
    },
)


@dataclass
class SeedReport:
    """Compteurs d'une execution du seed."""

    anime_created: int = 0
    anime_updated: int = 0
    episodes_created: int = 0
    user_created: bool = False


def _seed_entity(data: dict) -> Anime:
    english, romaji, native = data["title"]
    anilist_id = data["anilist_id"]
    return Anime(
        anilist_id=anilist_id,
        title=AnimeTitle(english=english, romaji=romaji, native=native),
        cover_image=f"{_COVER_BASE}/cover/large/{data['cover']}",
        banner_image=f"{_COVER_BASE}/banner/{anilist_id}.jpg",
        synopsis=data["synopsis"],
        episodes=data["episodes"],
        status=data["status"],
        genres=data["genres"],
        studio=data["studio"],
        rating=data["rating"],
    )


class SeederService:
    """Remplit la base avec les donnees de demonstration."""

    def __init__(
        self,
        anime_repo: IAnimeRepository,
        user_repo: IUserRepository,
        episode_repo: IEpisodeRepository,
        demo_user_id: str,
    ) -> None:
        self._anime_repo = anime_repo
        self._user_repo = user_repo
        self._episode_repo = episode_repo
        self._demo_user_id = demo_user_id

    def seed(self, episodes_per_anime: int = 0) -> SeedReport:
        """
        Execute le seed (idempotent pour les anime et l'utilisateur).

        Args:
            episodes_per_anime: Nombre d'episodes factices a creer pour chaque
                anime qui n'en a encore aucun (0 = aucun)
        """
        report = SeedReport()

        if self._user_repo.get_by_id(self._demo_user_id) is None:
            self._user_repo.save(
                User(
                    id=self._demo_user_id,
                    email=f"{self._demo_user_id}@anitrack.local",
                    username=self._demo_user_id,
                )
            )
            report.user_created = True

        for data in SEED_ANIME:
            anime = _seed_entity(data)
            existing = self._anime_repo.get_by_anilist_id(anime.anilist_id)
            if existing:
                anime.id = existing.id
                report.anime_updated += 1
            else:
                report.anime_created += 1
            saved = self._anime_repo.save(anime)

            if episodes_per_anime > 0 and not self._episode_repo.list_by_anime(saved.id):
                count = min(episodes_per_anime, saved.episodes or episodes_per_anime)
                for number in range(1, count + 1):
                    self._episode_repo.save(
                        Episode(
                            anime_id=saved.id,
                            number=number,
                            season=1,
                            title=f"Episode {number}",
                            duration=1440,
                        )
                    )
                report.episodes_created += count

        logger.info(
            "Seed termine",
            anime_created=report.anime_created,
            anime_updated=report.anime_updated,
            episodes_created=report.episodes_created,
        )
        return report
