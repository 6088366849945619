"""
Configuration du logging d'AniTrack via loguru.

Chaque enregistrement porte deux champs de contexte :
- source : fournisseur interroge (anilist, kitsu), lie par les clients API
- request : requete HTTP en cours ("GET /api/anime"), pose par le middleware web

La console affiche ces champs en clair ; le fichier JSON les conserve dans
`record.extra` pour filtrer le trafic par fournisseur ou par route.
"""

import sys
from pathlib import Path

from loguru import logger

# Valeur affichee quand aucun contexte n'a ete lie
NO_CONTEXT = "-"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[source]}</magenta> | "
    "<cyan>{extra[request]}</cyan> | "
    "<level>{message}</level>"
)


def provider_logger(source: str):
    """Logger lie a un fournisseur de catalogue."""
    return logger.bind(source=source)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/anitrack.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
    enqueue: bool = True,
) -> None:
    """Configure la console et le fichier JSON.

    Args :
        log_level : Niveau minimum pour la console
        log_file : Fichier JSON recevant tout le trafic (niveau DEBUG)
        rotation_size : Taille avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conserves
        enqueue : Ecriture fichier en arriere-plan (desactivable en test)

    Les requetes vers AniList et Kitsu sont en DEBUG : elles n'apparaissent
    que dans le fichier, sauf si log_level le demande.
    """
    logger.remove()
    logger.configure(extra={"source": NO_CONTEXT, "request": NO_CONTEXT})

    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=enqueue,
    )

    logger.debug("Logging configure", log_file=str(log_file), rotation=rotation_size)
