"""
Service de placement des fichiers resolus dans le repertoire de sortie.

Ce module fournit:
- La construction du chemin de destination a partir de l'enregistrement choisi
- La detection des conflits via hash (doublons vs collisions de noms)
- Le placement par lien physique ou copie, avec suppression de la source en
  mode deplacement
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from loguru import logger

from cinematch.adapters.file_system import FileSystemAdapter
from cinematch.adapters.hash_service import compute_file_hash, compute_full_hash
from cinematch.core.entities.media import MediaRecord


class ConflictType(Enum):
    """
    Type de conflit detecte avant le placement.

    SAME_PATH: Source et destination sont le meme chemin
    DUPLICATE: Meme contenu - fichier identique existe deja
    NAME_COLLISION: Meme nom mais contenu different
    """

    SAME_PATH = "same_path"
    DUPLICATE = "duplicate"
    NAME_COLLISION = "name_collision"


@dataclass
class ConflictInfo:
    """
    Information sur un conflit de fichier.

    Attributs:
        conflict_type: Type de conflit
        existing_path: Chemin du fichier existant en conflit
        existing_hash: Hash du fichier existant ("" pour SAME_PATH)
        new_hash: Hash du fichier source ("" pour SAME_PATH)
    """

    conflict_type: ConflictType
    existing_path: Path
    existing_hash: str = ""
    new_hash: str = ""


@dataclass
class PlacementResult:
    """
    Resultat d'une operation de placement.

    Attributs:
        success: True si le placement a reussi
        final_path: Chemin final du fichier
        error: Message d'erreur (si echec)
    """

    success: bool
    final_path: Optional[Path] = None
    error: Optional[str] = None


def build_out_file(source: Path, out_dir: Path, record: MediaRecord) -> Path:
    """
    Construit le chemin de destination d'un fichier.

    Exemple: Movie "Heat" (1995-12-15), source "heat.MKV" ->
    out_dir / "Heat (1995)/Heat (1995).mkv"

    Args:
        source: Fichier source (pour l'extension)
        out_dir: Repertoire de sortie (films ou series)
        record: Enregistrement choisi

    Returns:
        Chemin complet de destination.
    """
    return Path(out_dir) / f"{record.destination_path()}{Path(source).suffix.lower()}"


class PlacementService:
    """
    Service de placement des fichiers.

    Utilisation:
        placement = PlacementService(FileSystemAdapter())
        conflict = placement.check_conflict(source, destination)
        if conflict is None:
            result = placement.place(source, destination, move=False)
    """

    def __init__(self, file_system: FileSystemAdapter) -> None:
        self._fs = file_system

    def check_conflict(self, source: Path, destination: Path) -> Optional[ConflictInfo]:
        """
        Verifie s'il y a un conflit avec un fichier existant.

        Compare les hash pour distinguer:
        - DUPLICATE: meme fichier (meme inode ou meme contenu complet)
        - NAME_COLLISION: fichiers differents

        Le hash par echantillons sert de filtre rapide, une egalite est
        confirmee par le hash du contenu complet.

        Returns:
            ConflictInfo si conflit, None sinon.

        Raises:
            OSError: Si l'un des fichiers ne peut etre lu.
        """
        source = Path(source)
        destination = Path(destination)

        if source.absolute() == destination.absolute():
            return ConflictInfo(ConflictType.SAME_PATH, destination)

        if not self._fs.exists(destination):
            return None

        if self._fs.is_same_file(source, destination):
            return ConflictInfo(ConflictType.DUPLICATE, destination)

        source_hash = compute_file_hash(source)
        dest_hash = compute_file_hash(destination)

        if source_hash == dest_hash:
            # Echantillons egaux, le milieu peut encore differer
            source_hash = compute_full_hash(source)
            dest_hash = compute_full_hash(destination)

        if source_hash == dest_hash:
            conflict_type = ConflictType.DUPLICATE
        else:
            conflict_type = ConflictType.NAME_COLLISION

        return ConflictInfo(
            conflict_type=conflict_type,
            existing_path=destination,
            existing_hash=dest_hash,
            new_hash=source_hash,
        )

    def place(self, source: Path, destination: Path, move: bool = False) -> PlacementResult:
        """
        Place un fichier a sa destination.

        Operations effectuees:
        1. Creation des repertoires parents
        2. Lien physique, ou copie si le lien est impossible
        3. Suppression de la source si move

        Args:
            source: Fichier source
            destination: Chemin de destination
            move: Si True, supprime la source apres placement

        Returns:
            PlacementResult avec le resultat de l'operation.
        """
        source = Path(source)
        destination = Path(destination)

        try:
            self._fs.link_or_copy(source, destination)
        except OSError as e:
            logger.error(f"Placement echoue {source} -> {destination}: {e}")
            return PlacementResult(success=False, error=f"Erreur de copie: {e}")

        if move:
            try:
                self._fs.delete(source)
            except OSError as e:
                logger.error(f"Suppression de la source echouee {source}: {e}")
                return PlacementResult(
                    success=False,
                    final_path=destination,
                    error=f"Erreur de deplacement: {e}",
                )

        logger.info(f"Fichier place: {source} -> {destination}", moved=move)
        return PlacementResult(success=True, final_path=destination)
