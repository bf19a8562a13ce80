"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe CINEMATCH_,
et peut optionnellement etre fournie via un fichier .env.

La cle API TMDB est optionnelle au chargement : seule la commande `match` l'exige.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cinematch.utils.constants import DEFAULT_MEDIA_EXTENSIONS, DEFAULT_STOP_WORDS

# Trouver le fichier .env a la racine du projet (parent de cinematch/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe CINEMATCH_.
    Exemple : CINEMATCH_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="CINEMATCH_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Cle API TMDB (v3 en parametre de requete, v4 en header Bearer)
    tmdb_api_key: Optional[str] = Field(default=None)

    # Chemins (avec expansion ~)
    in_dir: Path = Field(default=Path("."))
    out_dir: Path = Field(default=Path("."))
    movie_out_dir: Optional[Path] = Field(default=None)
    tv_out_dir: Optional[Path] = Field(default=None)

    # Construction des requetes
    stop_words: list[str] = Field(default_factory=lambda: list(DEFAULT_STOP_WORDS))
    extra_stop_words: list[str] = Field(default_factory=list)
    media_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MEDIA_EXTENSIONS)
    )

    # Cache des reponses du catalogue (memoire de courte duree)
    cache_retention_seconds: float = Field(default=60.0, gt=0)
    cache_dir: Optional[Path] = Field(default=None)

    # Transport HTTP
    http_timeout: float = Field(default=5.0, gt=0)
    max_retry_attempts: int = Field(default=5, ge=1)

    # Affichage (None = largeur du terminal)
    line_width: Optional[int] = Field(default=None, ge=20)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="WARNING")
    log_file: Path = Field(default=Path("logs/cinematch.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator(
        "in_dir", "out_dir", "movie_out_dir", "tv_out_dir", "cache_dir", "log_file",
        mode="before",
    )
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        """Etend ~ vers le repertoire home dans les chemins."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator("stop_words", "extra_stop_words", mode="after")
    @classmethod
    def normalize_words(cls, v: list[str]) -> list[str]:
        """Met les mots vides en minuscules et retire les entrees vides."""
        return [word.strip().lower() for word in v if word.strip()]

    @property
    def tmdb_enabled(self) -> bool:
        """Verifie si l'API TMDB est configuree."""
        return bool(self.tmdb_api_key)

    @property
    def effective_stop_words(self) -> list[str]:
        """Mots vides par defaut + mots ajoutes, tries et dedoublonnes."""
        return sorted(set(self.stop_words) | set(self.extra_stop_words))

    @property
    def effective_movie_out_dir(self) -> Path:
        """Repertoire de sortie des films (repli sur out_dir)."""
        return self.movie_out_dir or self.out_dir

    @property
    def effective_tv_out_dir(self) -> Path:
        """Repertoire de sortie des episodes (repli sur out_dir)."""
        return self.tv_out_dir or self.out_dir
