"""
Dépendances partagées de l'application web.

Fournit les services du Container DI stocké dans app.state, sous forme de
dépendances FastAPI utilisables avec Depends().
"""

import tomllib
from pathlib import Path

from fastapi import Request

from ..adapters.api.anilist_client import AniListClient
from ..adapters.api.kitsu_client import KitsuClient
from ..container import Container
from ..services.aggregator import AnimeAggregatorService
from ..services.episodes import EpisodeService
from ..services.library import LibraryService

_PROJECT_ROOT = Path(__file__).parent.parent.parent


def _read_version() -> str:
    """Version lue depuis pyproject.toml, ou celle du package installé."""
    pyproject = _PROJECT_ROOT / "pyproject.toml"
    if pyproject.exists():
        with open(pyproject, "rb") as f:
            return tomllib.load(f)["project"]["version"]
    from .. import __version__

    return __version__


app_version = _read_version()


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_aggregator(request: Request) -> AnimeAggregatorService:
    return get_container(request).aggregator_service()


def get_anilist_client(request: Request) -> AniListClient:
    return get_container(request).anilist_client()


def get_kitsu_client(request: Request) -> KitsuClient:
    return get_container(request).kitsu_client()


def get_episode_service(request: Request) -> EpisodeService:
    return get_container(request).episode_service()


def get_library_service(request: Request) -> LibraryService:
    return get_container(request).library_service()
