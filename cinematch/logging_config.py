"""
Configuration du logging de l'application via loguru.

Fournit un logging structure avec :
- Sortie console : lisible par l'humain, coloree, limitee aux avertissements
  par defaut pour ne pas se meler a l'invite interactive
- Sortie fichier : serialisee en JSON, avec rotation, pour l'analyse historique
"""

import sys
from pathlib import Path

from loguru import logger


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path = Path("logs/cinematch.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB", "1 GB")
        retention_count : Nombre de fichiers rotatifs a conserver
    """
    logger.remove()

    # Handler console - lisible par l'humain
    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    # Handler fichier - JSON pour l'analyse
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",  # Capture tous les niveaux (appels catalogue en DEBUG)
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), rotation=rotation_size)


def verbosity_to_level(verbose: int, default: str = "WARNING") -> str:
    """Traduit le nombre de -v en niveau console (-v: INFO, -vv: DEBUG)."""
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return default
