"""
Application FastAPI d'AniTrack.

Initialise l'application web avec le Container DI, installe les gestionnaires
d'erreurs ({"error": message}) et monte les routes de l'API.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from ..container import Container
from ..core.exceptions import AggregateProviderError, AniTrackError
from .deps import app_version
from .routes.catalog import router as catalog_router
from .routes.episodes import router as episodes_router
from .routes.genres import router as genres_router
from .routes.health import router as health_router
from .routes.library import router as library_router
from .routes.users import router as users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au démarrage et ferme les clients à l'arrêt."""
    container: Container = getattr(app.state, "container", None) or Container()
    container.database.init()
    app.state.container = container
    logger.info("Demarrage du serveur AniTrack", version=app_version)
    yield
    await container.anilist_client().close()
    await container.kitsu_client().close()
    container.api_cache().close()


async def _request_context(request: Request, call_next):
    """Lie la requete en cours aux logs emis pendant son traitement."""
    with logger.contextualize(request=f"{request.method} {request.url.path}"):
        return await call_next(request)


async def _domain_error_handler(request: Request, exc: AniTrackError) -> JSONResponse:
    content: dict = {"error": exc.message}
    if isinstance(exc, AggregateProviderError):
        content["details"] = exc.errors
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Erreur inattendue sur {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container preconfigure (tests), sinon cree au demarrage
    """
    app = FastAPI(title="AniTrack", version=app_version, lifespan=lifespan)
    if container is not None:
        app.state.container = container

    app.middleware("http")(_request_context)
    app.add_exception_handler(AniTrackError, _domain_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    # Routes
    app.include_router(health_router)
    app.include_router(catalog_router)
    app.include_router(genres_router)
    app.include_router(episodes_router)
    app.include_router(library_router)
    app.include_router(users_router)
    return app


app = create_app()
