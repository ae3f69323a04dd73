"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CINECACHE_,
et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est optionnelle : elle indique seulement si les URL d'images
peuvent être obtenues auprès du client de métadonnées.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cinecache import __version__
from cinecache.utils.constants import (
    CONNECT_TIMEOUT,
    DEFAULT_ALLOWED_HOSTS,
    DEFAULT_ALLOWED_SCHEMES,
    MAX_IMAGE_BYTES,
    MAX_REDIRECTS,
    PUBLIC_PREFIX,
    REQUEST_TIMEOUT,
    TMDB_IMAGE_BASE_URL,
)

# Trouver le fichier .env à la racine du projet (parent de cinecache/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CINECACHE_.
    Exemple : CINECACHE_UPLOAD_ROOT=/srv/movies/public/uploads

    Les listes (hôtes, schémas) s'écrivent en JSON :
    CINECACHE_ALLOWED_HOSTS='["image.tmdb.org"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="CINECACHE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Arborescence d'upload (avec expansion ~)
    upload_root: Path = Field(default=Path("public/uploads"))
    public_prefix: str = Field(default=PUBLIC_PREFIX)
    temp_dir: Optional[Path] = Field(default=None)

    # Téléchargement
    allowed_hosts: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_HOSTS))
    allowed_schemes: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_SCHEMES))
    max_image_bytes: int = Field(default=MAX_IMAGE_BYTES, ge=1)
    connect_timeout: float = Field(default=CONNECT_TIMEOUT, gt=0)
    request_timeout: float = Field(default=REQUEST_TIMEOUT, gt=0)
    max_redirects: int = Field(default=MAX_REDIRECTS, ge=0)
    user_agent: str = Field(default=f"CineCache/{__version__}")

    # TMDB (OPTIONNEL)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_image_base_url: str = Field(default=TMDB_IMAGE_BASE_URL)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cinecache.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("upload_root", "temp_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        """Étend ~ vers le répertoire home dans les chemins."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator("allowed_hosts", "allowed_schemes")
    @classmethod
    def lowercase_entries(cls, v: list[str]) -> list[str]:
        """Normalise les hôtes et schémas en minuscules."""
        return [entry.strip().lower() for entry in v if entry.strip()]

    @field_validator("public_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Garantit un préfixe de la forme /segment (sans / final)."""
        return "/" + v.strip("/")

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)
