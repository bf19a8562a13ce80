"""
Interfaces ports pour l'interaction avec l'utilisateur.

Le moteur de selection lit une ligne a la fois et ecrit des lignes
formatees ; les implementations concretes s'appuient sur Rich.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from cinematch.core.entities.media import MediaRecord


class ILineReader(ABC):
    """Source de lignes saisies par l'utilisateur."""

    @abstractmethod
    def read_line(self) -> Optional[str]:
        """
        Lit une ligne.

        Retourne :
            Le texte saisi (sans le saut de ligne), ou None en fin d'entree.
        """
        ...


class IDisplay(ABC):
    """
    Sortie d'affichage.

    Les messages utilisent le balisage Rich ([red]...[/red]) qui se degrade
    en texte brut quand la couleur est desactivee.
    """

    @abstractmethod
    def show(self, markup: str = "") -> None:
        """Affiche une ligne."""
        ...

    @abstractmethod
    def show_prompt(self, markup: str) -> None:
        """Affiche une invite sans retour a la ligne."""
        ...

    @abstractmethod
    def show_candidates(self, records: Sequence[MediaRecord]) -> None:
        """Affiche la liste numerotee des candidats, une ligne par candidat."""
        ...
