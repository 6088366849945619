"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web :
configuration, cache, clients AniList/Kitsu, repositories SQLModel et services.
"""

from dependency_injector import containers, providers

from .adapters.api.anilist_client import AniListClient
from .adapters.api.cache import APICache
from .adapters.api.kitsu_client import KitsuClient
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import (
    SQLModelAnimeRepository,
    SQLModelEpisodeRepository,
    SQLModelFavoriteRepository,
    SQLModelUserRepository,
    SQLModelWatchHistoryRepository,
    SQLModelWatchlistRepository,
)
from .services.aggregator import AnimeAggregatorService
from .services.episodes import EpisodeService
from .services.library import LibraryService
from .services.seeder import SeederService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        aggregator = container.aggregator_service()
        library = container.library_service()

    En test, la session et la configuration se surchargent :
        container.config.override(providers.Object(settings))
        container.session.override(providers.Object(session))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, database_url=config.provided.database_url)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Cache API - Singleton pour partage entre clients
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
        ttl=config.provided.cache_ttl,
    )

    # Clients API - Singleton, le client HTTP est cree a la premiere requete
    anilist_client = providers.Singleton(
        AniListClient,
        base_url=config.provided.anilist_api_url,
        cache=api_cache,
        timeout=config.provided.http_timeout,
    )

    kitsu_client = providers.Singleton(
        KitsuClient,
        base_url=config.provided.kitsu_api_url,
        cache=api_cache,
        timeout=config.provided.http_timeout,
        max_attempts=config.provided.kitsu_max_attempts,
        retry_delay=config.provided.kitsu_retry_delay,
    )

    # Repositories - Factory pour nouvelle instance avec session fraiche
    user_repository = providers.Factory(SQLModelUserRepository, session=session)
    anime_repository = providers.Factory(SQLModelAnimeRepository, session=session)
    watchlist_repository = providers.Factory(SQLModelWatchlistRepository, session=session)
    favorite_repository = providers.Factory(SQLModelFavoriteRepository, session=session)
    episode_repository = providers.Factory(SQLModelEpisodeRepository, session=session)
    watch_history_repository = providers.Factory(
        SQLModelWatchHistoryRepository,
        session=session,
    )

    # Agregation des fournisseurs (stateless - Singleton)
    aggregator_service = providers.Singleton(
        AnimeAggregatorService,
        anilist_client=anilist_client,
        kitsu_client=kitsu_client,
    )

    # Services de bibliotheque - Factory car dependent de repositories
    episode_service = providers.Factory(
        EpisodeService,
        episode_repo=episode_repository,
        history_repo=watch_history_repository,
        anime_repo=anime_repository,
        user_repo=user_repository,
        current_user_id=config.provided.demo_user_id,
    )

    library_service = providers.Factory(
        LibraryService,
        user_repo=user_repository,
        anime_repo=anime_repository,
        watchlist_repo=watchlist_repository,
        favorite_repo=favorite_repository,
    )

    seeder_service = providers.Factory(
        SeederService,
        anime_repo=anime_repository,
        user_repo=user_repository,
        episode_repo=episode_repository,
        demo_user_id=config.provided.demo_user_id,
    )
