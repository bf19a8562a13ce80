"""
Affichage et saisie en console avec Rich.

Fournit l'implementation Rich des ports IDisplay et ILineReader, le rendu
d'une ligne de candidat bornee en largeur et quelques utilitaires de
presentation.
"""

from typing import Optional, Sequence, TextIO

from rich.console import Console
from rich.text import Text

from cinematch.core.entities.media import MediaRecord
from cinematch.core.ports.console import IDisplay, ILineReader

# Largeur utilisee si le terminal ne la fournit pas
DEFAULT_LINE_WIDTH = 120


class CandidateLine:
    """
    Ligne composee de fragments separes par des espaces, bornee en largeur.

    Un fragment n'est ajoute que si la ligne reste strictement plus courte
    que la largeur maximale ; un fragment trop long est ignore.

    Attributs:
        max_length: Largeur maximale de la ligne (en caracteres)
    """

    def __init__(self, max_length: int) -> None:
        self.max_length = max_length
        self._fragments: list[Text] = []
        self._current_length = 0

    def __len__(self) -> int:
        return max(self._current_length + len(self._fragments) - 1, 0)

    def add(self, fragment: str, style: Optional[str] = None) -> bool:
        """
        Ajoute un fragment s'il tient dans la ligne.

        Returns:
            True si le fragment a ete ajoute.
        """
        if not fragment:
            return False
        if len(self) + len(fragment) >= self.max_length:
            return False
        self._fragments.append(Text(fragment, style=style or ""))
        self._current_length += len(fragment)
        return True

    def add_words(self, text: str, style: Optional[str] = None) -> int:
        """
        Ajoute les mots d'un texte un par un jusqu'au premier qui ne tient pas.

        Returns:
            Nombre de mots ajoutes.
        """
        added = 0
        for word in text.split():
            if not self.add(word, style):
                break
            added += 1
        return added

    def render(self) -> Text:
        """Assemble les fragments en un Text Rich."""
        return Text(" ").join(self._fragments)

    @property
    def plain(self) -> str:
        """La ligne sans style."""
        return self.render().plain


def render_candidate_line(index: int, record: MediaRecord, width: int) -> CandidateLine:
    """
    Construit la ligne d'un candidat : numero, nom, date, puis autant du
    synopsis que la largeur le permet.
    """
    line = CandidateLine(width)
    line.add(f"{index:2d}", "yellow")
    line.add(record.name, "white")
    if record.date:
        line.add(f"({record.date})")
    overview = (record.overview or "").strip()
    if overview:
        line.add_words(overview)
    return line


class RichDisplay(IDisplay):
    """
    Implementation de IDisplay sur une Console Rich.

    La couleur se desactive via Console(no_color=True).
    """

    def __init__(self, console: Console, line_width: Optional[int] = None) -> None:
        """
        Args:
            console: Console Rich de sortie
            line_width: Largeur des lignes de candidats (defaut: largeur console)
        """
        self._console = console
        self._line_width = line_width

    @property
    def line_width(self) -> int:
        """Largeur effective des lignes de candidats."""
        return self._line_width or self._console.width or DEFAULT_LINE_WIDTH

    def show(self, markup: str = "") -> None:
        self._console.print(markup, highlight=False)

    def show_prompt(self, markup: str) -> None:
        self._console.print(markup, end="", highlight=False)

    def show_candidates(self, records: Sequence[MediaRecord]) -> None:
        width = self.line_width
        for index, record in enumerate(records, start=1):
            self._console.print(
                render_candidate_line(index, record, width).render(),
                highlight=False,
                overflow="ignore",
                crop=False,
            )


class ConsoleLineReader(ILineReader):
    """
    Lecture de lignes depuis l'entree standard (ou un flux fourni).

    Retourne None en fin d'entree.
    """

    def __init__(self, console: Console, stream: Optional[TextIO] = None) -> None:
        self._console = console
        self._stream = stream

    def read_line(self) -> Optional[str]:
        if self._stream is None:
            try:
                return self._console.input()
            except EOFError:
                return None
        line = self._stream.readline()
        if not line:
            return None
        return line.rstrip("\r\n")


def ask_confirmation(display: IDisplay, reader: ILineReader, message: str) -> bool:
    """
    Pose une question oui/non, non par defaut.

    Returns:
        True si la reponse commence par "y" (insensible a la casse).
    """
    display.show_prompt(message)
    response = reader.read_line()
    if not response or not response.strip():
        return False
    return response.strip().lower()[0] == "y"


def format_file_size(size_bytes: int) -> str:
    """Formate une taille en octets en format lisible."""
    if size_bytes >= 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f} Go"
    elif size_bytes >= 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.0f} Mo"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.0f} Ko"
    return f"{size_bytes} o"
