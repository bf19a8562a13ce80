"""
Workflow de traitement d'un lot de fichiers video.

Pour chaque fichier du repertoire d'entree :
1. Calcul des tokens partages avec les fichiers voisins
2. Resolution interactive via le SelectionEngine
3. Construction de la destination selon le type (film ou episode)
4. Detection des conflits puis placement (lien/copie ou deplacement)

Le lot s'arrete sur Quit ou sur une erreur de placement ; Skip passe au
fichier suivant.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence

from loguru import logger
from rich.markup import escape

from cinematch.adapters.cli.display import ask_confirmation, format_file_size
from cinematch.adapters.file_system import FileSystemAdapter
from cinematch.core.ports.console import IDisplay, ILineReader
from cinematch.services.placement import (
    ConflictType,
    PlacementService,
    build_out_file,
)
from cinematch.services.selector import Quit, Resolved, SelectionEngine, Skip
from cinematch.services.siblings import common_tokens


@dataclass
class RunSummary:
    """
    Bilan d'un lot.

    Attributs:
        placed: Destinations des fichiers places (ou prevus en dry-run)
        duplicates: Fichiers deja presents a destination avec le meme contenu
        skipped: Fichiers passes par l'utilisateur ou non confirmes
        failed: Fichiers dont le placement a echoue
        quit: True si l'utilisateur a abandonne le lot
    """

    placed: list[Path] = field(default_factory=list)
    duplicates: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)
    quit: bool = False


@dataclass
class WorkflowOptions:
    """Options d'un lot (repertoires et comportement du placement)."""

    in_dir: Path
    movie_out_dir: Path
    tv_out_dir: Path
    stop_words: Sequence[str] = ()
    dry_run: bool = False
    move: bool = False
    confirm: bool = False


def _format_mtime(timestamp: Optional[float]) -> str:
    if timestamp is None:
        return "?"
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


class MatchWorkflow:
    """
    Boucle externe sur les fichiers d'un lot.

    Utilisation:
        workflow = MatchWorkflow(engine, placement, file_system, display, reader, options)
        summary = workflow.run(files)
    """

    def __init__(
        self,
        engine: SelectionEngine,
        placement: PlacementService,
        file_system: FileSystemAdapter,
        display: IDisplay,
        reader: ILineReader,
        options: WorkflowOptions,
    ) -> None:
        self._engine = engine
        self._placement = placement
        self._fs = file_system
        self._display = display
        self._reader = reader
        self._options = options

    @property
    def verb(self) -> str:
        """Verbe affiche pour l'operation de placement."""
        return "Deplacer" if self._options.move else "Copier"

    def _relative(self, path: Path) -> str:
        try:
            return str(path.relative_to(self._options.in_dir.absolute()))
        except ValueError:
            return str(path)

    def _out_dir_for(self, media_type: str) -> Path:
        if media_type == "tv_episode":
            return self._options.tv_out_dir
        return self._options.movie_out_dir

    def run(self, files: Iterable[Path]) -> RunSummary:
        """
        Traite tous les fichiers du lot.

        Args:
            files: Fichiers video a traiter (chemins absolus)

        Returns:
            RunSummary du lot.
        """
        files = [Path(f) for f in files]
        total = len(files)
        summary = RunSummary()

        for i, media_path in enumerate(files, start=1):
            info = f"\n{i}/{total} [blue]{escape(self._relative(media_path))}[/blue]\n"
            common = common_tokens(media_path, files, self._options.stop_words)

            outcome = self._engine.resolve(media_path, common, info)
            if isinstance(outcome, Quit):
                logger.info("Lot abandonne par l'utilisateur")
                summary.quit = True
                break
            if isinstance(outcome, Skip):
                summary.skipped.append(media_path)
                continue
            if not isinstance(outcome, Resolved):
                continue

            if not self._handle_resolved(media_path, outcome, summary):
                break

        self._display.show("\nGoodbye!")
        return summary

    def _handle_resolved(self, media_path: Path, outcome: Resolved, summary: RunSummary) -> bool:
        """
        Place un fichier resolu.

        Returns:
            False si le lot doit s'arreter (erreur d'entree/sortie).
        """
        record = outcome.record
        out_file = build_out_file(media_path, self._out_dir_for(record.media_type), record)
        verb = self.verb

        try:
            conflict = self._placement.check_conflict(media_path, out_file)
        except OSError as e:
            logger.error(f"Comparaison impossible {media_path} / {out_file}: {e}")
            self._display.show(f"[red]Erreur lors de la comparaison des fichiers: {escape(str(e))}[/red]")
            summary.failed.append(media_path)
            return False

        do_place = True
        if conflict is not None:
            if conflict.conflict_type is ConflictType.SAME_PATH:
                self._display.show("Le fichier d'entree et le fichier de sortie sont le meme chemin")
                do_place = False
            elif conflict.conflict_type is ConflictType.DUPLICATE:
                self._display.show("Le fichier de sortie existe deja avec le meme contenu")
                summary.duplicates.append(out_file)
                return True
            else:
                self._show_collision(media_path, out_file)
                if not ask_confirmation(self._display, self._reader, f"{verb} ? \\[yN] ➜ "):
                    summary.skipped.append(media_path)
                    return True

        self._display.show(
            f"{verb} [red]{escape(str(media_path))}[/red] [white]➜[/white] "
            f"[green]{escape(str(out_file))}[/green]"
        )

        if self._options.dry_run or not do_place:
            summary.placed.append(out_file)
            return True

        if self._options.confirm:
            if not ask_confirmation(self._display, self._reader, f"{verb} ? \\[yN] ➜ "):
                summary.skipped.append(media_path)
                return True

        result = self._placement.place(media_path, out_file, move=self._options.move)
        if not result.success:
            self._display.show(f"[red]{escape(result.error or 'Erreur de placement')}[/red]")
            summary.failed.append(media_path)
            return False

        summary.placed.append(out_file)
        return True

    def _show_collision(self, media_path: Path, out_file: Path) -> None:
        self._display.show("[yellow]Le fichier de sortie existe avec un contenu different ![/yellow]")
        for label, path in (("Entree:", media_path), ("Sortie:", out_file)):
            self._display.show(f"{label} {escape(str(path))}")
            self._display.show(
                f"     Taille: {format_file_size(self._fs.get_size(path))}, "
                f"modifie: {_format_mtime(self._fs.get_mtime(path))}"
            )
