"""
Adaptateur pour les operations sur le systeme de fichiers.

Decouverte des fichiers video du repertoire d'entree et operations de
placement (lien physique ou copie, deplacement) vers le repertoire de sortie.
"""

import os
import shutil
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from cinematch.utils.constants import DEFAULT_MEDIA_EXTENSIONS


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Normalise une liste d'extensions en ".ext" minuscule."""
    normalized = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(normalized)


class FileSystemAdapter:
    """
    Operations sur le systeme de fichiers reel.

    Les erreurs d'entree/sortie des operations de placement sont propagees
    (OSError) : c'est a l'appelant de decider d'interrompre le lot.
    """

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        return path.exists()

    def get_size(self, path: Path) -> int:
        """
        Recupere la taille du fichier en octets.

        Retourne 0 si le fichier n'existe pas.
        """
        try:
            return path.stat().st_size
        except OSError:
            return 0

    def get_mtime(self, path: Path) -> Optional[float]:
        """Date de modification (timestamp), None si illisible."""
        try:
            return path.stat().st_mtime
        except OSError:
            return None

    def is_same_file(self, first: Path, second: Path) -> bool:
        """Verifie si deux chemins designent le meme inode."""
        try:
            return os.path.samefile(first, second)
        except OSError:
            return False

    def link_or_copy(self, source: Path, destination: Path) -> None:
        """
        Place source a destination par lien physique, ou par copie si le
        lien est impossible (autre systeme de fichiers, etc.).

        Cree les repertoires parents si necessaire.

        Raises:
            OSError: Si ni le lien ni la copie ne reussissent.
        """
        if not source.is_file():
            raise OSError(f"Fichier source non regulier: {source}")
        if destination.exists() and self.is_same_file(source, destination):
            return

        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            os.link(source, destination)
            return
        except OSError as e:
            logger.debug(f"Lien physique impossible ({e}), copie de {source.name}")
        shutil.copy2(source, destination)

    def delete(self, path: Path) -> None:
        """Supprime un fichier (OSError propagee)."""
        path.unlink()

    def list_media_files(
        self,
        directory: Path,
        extensions: Iterable[str] = DEFAULT_MEDIA_EXTENSIONS,
    ) -> list[Path]:
        """
        Liste les fichiers video d'un repertoire (recursif).

        Filtre:
        - Par extension, insensible a la casse
        - Exclut les symlinks et les repertoires

        Args:
            directory: Repertoire a scanner
            extensions: Extensions retenues (".mkv" ou "mkv")

        Returns:
            Chemins absolus des fichiers, tries.
        """
        directory = Path(directory).expanduser().absolute()
        if not directory.is_dir():
            return []

        allowed = normalize_extensions(extensions)
        files = []
        for path in directory.rglob("*"):
            if path.is_symlink() or path.is_dir():
                continue
            if path.suffix.lower() not in allowed:
                continue
            files.append(path)

        return sorted(files)
