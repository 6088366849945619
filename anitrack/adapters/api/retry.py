"""
Mecanismes de retry pour les API externes.

Deux politiques coexistent :
- 429 (rate limiting) : relance avec backoff exponentiel et jitter, pour tous
  les fournisseurs
- erreurs transitoires (reseau, 5xx) : relance avec un delai fixe, utilisee
  pour Kitsu (fournisseur de repli)

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=5, max_wait=60)
    async def my_api_call():
        ...

    # Avec les fonctions helper
    response = await request_with_retry(client, "GET", url)
    response = await request_with_fixed_retry(client, "GET", url, delay=1.0)
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (depuis le header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        """
        Initialise l'erreur avec la valeur Retry-After optionnelle.

        Args:
            retry_after: Secondes a attendre avant de relancer (optionnel)
        """
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Delai Retry-After en secondes ; None si absent ou au format date HTTP."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def is_transient_error(exc: BaseException) -> bool:
    """Erreur reseau ou reponse 5xx : la meme requete peut reussir plus tard."""
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur pour relancer sur RateLimitError avec backoff exponentiel.

    Utilise wait_random_exponential pour ajouter du jitter et eviter
    le "thundering herd" quand plusieurs clients relancent en meme temps.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


def with_fixed_retry(max_attempts: int = 2, delay: float = 1.0):
    """
    Decorateur pour relancer sur erreur transitoire avec un delai fixe.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 2)
        delay: Delai entre deux tentatives en secondes (defaut: 1)

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception(is_transient_error),
        wait=wait_fixed(delay),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429.

    Convertit les reponses 429 en RateLimitError et relance avec
    backoff exponentiel. Les autres erreurs HTTP (4xx, 5xx) sont
    propagees immediatement sans retry.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _do_request()


async def request_with_fixed_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 2,
    delay: float = 1.0,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP relancee a delai fixe sur erreur transitoire.

    Les 429 restent geres par request_with_retry (une seule tentative de
    backoff ici, le delai fixe s'applique ensuite).

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives (defaut: 2)
        delay: Delai fixe entre les tentatives en secondes (defaut: 1)
        **kwargs: Arguments supplementaires passes a client.request()

    Raises:
        httpx.TransportError: Erreur reseau persistante
        httpx.HTTPStatusError: Reponse non-2xx (immediate pour les 4xx)
        RateLimitError: 429 persistant
    """

    @with_fixed_retry(max_attempts=max_attempts, delay=delay)
    async def _do_request() -> httpx.Response:
        return await request_with_retry(client, method, url, max_attempts=1, **kwargs)

    return await _do_request()
