"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe ANITRACK_,
et peut optionnellement être fournie via un fichier .env.

Les URL des fournisseurs (AniList, Kitsu) ont des valeurs par défaut publiques et peuvent
être redirigées vers un miroir ou un serveur de test.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de anitrack/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe ANITRACK_.
    Exemple : ANITRACK_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="ANITRACK_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Base de données
    database_url: str = Field(default="sqlite:///data/anitrack.db")

    # Fournisseurs de metadonnees
    anilist_api_url: str = Field(default="https://graphql.anilist.co")
    kitsu_api_url: str = Field(default="https://kitsu.io/api/edge")
    http_timeout: float = Field(default=15.0, gt=0)

    # Retry Kitsu : delai fixe entre deux tentatives
    kitsu_max_attempts: int = Field(default=2, ge=1, le=10)
    kitsu_retry_delay: float = Field(default=1.0, ge=0)

    # Cache des reponses amont (duree fixe, par route)
    cache_dir: Path = Field(default=Path(".cache/api"))
    cache_ttl: int = Field(default=3600, ge=0)

    # Utilisateur de demonstration (pas d'authentification)
    demo_user_id: str = Field(default="demo-user")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/anitrack.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("anilist_api_url", "kitsu_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Supprime le slash final pour construire les chemins relatifs."""
        return v.rstrip("/")
