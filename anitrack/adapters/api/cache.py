"""
Cache persistant des réponses amont avec durée de vie fixe.

Le cache utilise diskcache pour la persistence sur disque, ce qui permet
de conserver les donnees entre les redemarrages de l'application.

Chaque route met en cache ses propres reponses sous une cle prefixee par le
fournisseur (ex: "anilist:trending", "kitsu:detail:1"). La duree de vie est la
meme pour toutes les cles (1 heure par defaut).
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les appels API.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Attributes:
        DEFAULT_TTL: Duree de vie par defaut des reponses (1h)

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set("anilist:trending", media)
        data = await cache.get("anilist:trending")
    """

    DEFAULT_TTL = 60 * 60  # 1 heure en secondes (3600)

    def __init__(self, cache_dir: str = ".cache/api", ttl: int = DEFAULT_TTL) -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
            ttl: Duree de vie des entrees en secondes (0 desactive le cache)
        """
        self._cache = Cache(str(cache_dir))
        self._ttl = ttl

    @property
    def enabled(self) -> bool:
        """Le cache est desactive quand le TTL vaut 0."""
        return self._ttl > 0

    async def get(self, key: str) -> Optional[Any]:
        """
        Recupere une valeur du cache.

        Args:
            key: Cle unique identifiant la donnee

        Returns:
            La valeur stockee ou None si absente, expiree ou cache desactive
        """
        if not self.enabled:
            return None
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """
        Stocke une valeur dans le cache.

        Args:
            key: Cle unique identifiant la donnee
            value: Valeur a stocker (doit etre serializable)
            ttl: Duree de vie en secondes (defaut: TTL du cache)
        """
        if not self.enabled:
            return
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl or self._ttl)
        )

    async def clear(self) -> int:
        """Supprime toutes les entrees du cache et retourne leur nombre."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
