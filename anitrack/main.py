"""
Point d'entrée CLI d'AniTrack.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import clear_cache, fetch, init_db, seed
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="anitrack",
    help="Catalogue anime agrege (AniList, Kitsu) et suivi de visionnage",
)
container = Container()


@app.callback()
def main_callback() -> None:
    """AniTrack - Catalogue anime et suivi de visionnage."""


# Commandes de base de donnees et de cache
app.command(name="init-db")(init_db)
app.command()(seed)
app.command(name="clear-cache")(clear_cache)

# Interrogation du catalogue
app.command()(fetch)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration AniTrack")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"API AniList : {config.anilist_api_url}")
    typer.echo(f"API Kitsu : {config.kitsu_api_url}")
    typer.echo(f"Cache : {config.cache_dir} (TTL {config.cache_ttl}s)")
    typer.echo(f"Utilisateur de démonstration : {config.demo_user_id}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"AniTrack v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web AniTrack."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("anitrack.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage d'AniTrack", version=__version__)

    app()


if __name__ == "__main__":
    main()
