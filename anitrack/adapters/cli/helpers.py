"""
Utilitaires partages pour les commandes CLI d'AniTrack.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- make_container : container initialise pour les commandes
"""

from contextlib import contextmanager

from loguru import logger as loguru_logger
from rich.console import Console

from anitrack.container import Container

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("anitrack")
    try:
        yield
    finally:
        loguru_logger.enable("anitrack")


def make_container(requires_db: bool = True) -> Container:
    """Cree un container, en initialisant la base si demande."""
    container = Container()
    if requires_db:
        container.database.init()
    return container

