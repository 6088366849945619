"""
Exceptions du domaine.

Chaque exception porte le message renvoye a l'appelant dans le corps JSON
`{"error": ...}`. La couche web associe a chacune un statut HTTP.
"""

from typing import Optional


class AniTrackError(Exception):
    """Exception de base de l'application."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BadRequestError(AniTrackError):
    """Parametre manquant ou invalide."""

    status_code = 400


class NotFoundError(AniTrackError):
    """Ressource absente (anime, episode, entree de watchlist...)."""

    status_code = 404


class ConflictError(AniTrackError):
    """Violation d'unicite (utilisateur, paire utilisateur/anime...)."""

    status_code = 409


class ProviderError(AniTrackError):
    """
    Echec d'un fournisseur amont (AniList ou Kitsu).

    Attributes:
        source: Identifiant du fournisseur ("anilist" ou "kitsu")
        upstream_status: Statut HTTP amont, ou None pour une erreur reseau
    """

    def __init__(
        self,
        source: str,
        message: str,
        upstream_status: Optional[int] = None,
    ) -> None:
        self.source = source
        self.upstream_status = upstream_status
        super().__init__(message)

    @property
    def status_code(self) -> int:  # type: ignore[override]
        """Statut HTTP amont s'il s'agit d'une erreur, 502 sinon."""
        if self.upstream_status is not None and self.upstream_status >= 400:
            return self.upstream_status
        return 502


class ProviderUnavailableError(AniTrackError):
    """Fournisseur principal indisponible et repli desactive."""

    status_code = 503


class AggregateProviderError(AniTrackError):
    """
    Echec des deux fournisseurs.

    Attributes:
        errors: Cause de l'echec par fournisseur ({"anilist": ..., "kitsu": ...})
    """

    def __init__(self, message: str, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__(message)
