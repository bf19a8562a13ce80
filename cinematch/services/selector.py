"""
Moteur de selection interactive.

Resout un fichier video en un enregistrement du catalogue (film ou episode)
en guidant l'utilisateur a travers les resultats de recherche :

- Mode MOVIE : recherche de films (aucun indice saison/episode)
- Mode SHOW : recherche de series ; le choix d'une serie charge la saison
- Mode SHOW_EPISODE : choix parmi les episodes de la saison chargee

L'etat persiste d'un fichier a l'autre pendant tout le lot : une serie
choisie pour un episode est memorisee (requete -> identifiant) et reprise
directement pour les episodes suivants.

La boucle d'interaction est explicite : chaque etape produit une action
(Prompt, Requery, Page, EnterEpisodeMode, Done) interpretee par resolve_query,
sans recursion.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from loguru import logger
from rich.markup import escape

from cinematch.core.entities.media import MediaRecord, Season
from cinematch.core.ports.api_clients import CatalogError, ICatalogClient, SearchPage
from cinematch.core.ports.console import IDisplay, ILineReader
from cinematch.services.hints import SearchQuery, extract_hints
from cinematch.services.query_builder import derive_query


class SelectorMode(Enum):
    """
    Mode courant du moteur de selection.

    MOVIE: Recherche de films
    SHOW: Recherche de series
    SHOW_EPISODE: Choix d'un episode dans une saison chargee
    """

    MOVIE = "movie"
    SHOW = "show"
    SHOW_EPISODE = "show_episode"


MODE_LABELS = {
    SelectorMode.MOVIE: "Film",
    SelectorMode.SHOW: "Serie",
    SelectorMode.SHOW_EPISODE: "Episode",
}


# ============================================================================
# Issues d'une resolution
# ============================================================================


class Outcome:
    """Issue terminale de la resolution d'un fichier."""


@dataclass(frozen=True)
class Resolved(Outcome):
    """Le fichier correspond a record."""

    record: MediaRecord


@dataclass(frozen=True)
class Quit(Outcome):
    """L'utilisateur abandonne tout le lot."""


@dataclass(frozen=True)
class Skip(Outcome):
    """L'utilisateur passe au fichier suivant."""


# ============================================================================
# Actions de la boucle d'interaction
# ============================================================================


@dataclass(frozen=True)
class Prompt:
    """Redemander une saisie sans reafficher les resultats."""


@dataclass(frozen=True)
class Requery:
    """Relancer la resolution avec un texte saisi par l'utilisateur."""

    text: str


@dataclass(frozen=True)
class Page:
    """Afficher une autre page de resultats."""

    number: int


@dataclass(frozen=True)
class EnterEpisodeMode:
    """Charger la saison d'une serie choisie puis presenter ses episodes."""

    show_id: int
    season: int


@dataclass(frozen=True)
class Done:
    """Terminer la resolution du fichier."""

    outcome: Outcome


Action = Prompt | Requery | Page | EnterEpisodeMode | Done


# ============================================================================
# Etat
# ============================================================================


@dataclass
class SelectionState:
    """
    Etat du moteur, conserve pendant tout le lot.

    Attributs:
        mode: Mode courant
        show_id: Serie liee (mode SHOW_EPISODE uniquement)
        season_number: Saison liee (mode SHOW_EPISODE uniquement)
        season: Saison chargee, episodes compris (mode SHOW_EPISODE uniquement)
        query: Derniere requete ayant mene a cet etat
        remembered: Requete -> identifiant de serie, pour tout le lot
    """

    mode: SelectorMode = SelectorMode.MOVIE
    show_id: int = 0
    season_number: int = 0
    season: Optional[Season] = None
    query: str = ""
    remembered: dict[str, int] = field(default_factory=dict)

    def _unbind(self, mode: SelectorMode, query: str) -> None:
        self.mode = mode
        self.show_id = 0
        self.season_number = 0
        self.season = None
        self.query = query

    def set_movie_mode(self, query: str) -> None:
        self._unbind(SelectorMode.MOVIE, query)

    def set_show_mode(self, query: str) -> None:
        self._unbind(SelectorMode.SHOW, query)

    def set_episode_mode(
        self, show_id: int, season_number: int, season: Season, query: str
    ) -> None:
        """Lie une serie et une saison, et memorise la requete pour le lot."""
        self.mode = SelectorMode.SHOW_EPISODE
        self.show_id = show_id
        self.season_number = season_number
        self.season = season
        self.query = query
        self.remembered[query] = show_id


@dataclass
class _Presentation:
    """Page de resultats en cours de presentation."""

    hints: SearchQuery
    results: list[MediaRecord]
    total_pages: int
    page: int
    default: int


class SelectionEngine:
    """
    Moteur de selection interactive.

    Utilisation:
        engine = SelectionEngine(catalog, display, reader, in_dir, stop_words)
        for path in files:
            outcome = engine.resolve(path, common_tokens(path, files, stop_words))
            if isinstance(outcome, Quit):
                break
    """

    def __init__(
        self,
        catalog: ICatalogClient,
        display: IDisplay,
        reader: ILineReader,
        in_dir: Path,
        stop_words: Iterable[str] = (),
        remembered: Optional[dict[str, int]] = None,
        current_year: Optional[int] = None,
    ) -> None:
        """
        Initialise le moteur.

        Args:
            catalog: Client du catalogue
            display: Sortie d'affichage
            reader: Source des saisies utilisateur
            in_dir: Repertoire d'entree (pour les chemins relatifs)
            stop_words: Mots vides exclus des requetes
            remembered: Memoire requete -> serie partagee (nouvelle si None)
            current_year: Annee de reference pour l'extraction (defaut: annee courante)
        """
        self._catalog = catalog
        self._display = display
        self._reader = reader
        self._in_dir = Path(in_dir)
        self._stop_words = frozenset(stop_words)
        self._current_year = current_year
        self.state = SelectionState(remembered=remembered if remembered is not None else {})

    @property
    def remembered(self) -> dict[str, int]:
        """Memoire requete -> identifiant de serie du lot."""
        return self.state.remembered

    def resolve(
        self,
        media_path: Path,
        common: Sequence[str] = (),
        info: str = "",
    ) -> Outcome:
        """
        Resout un fichier video a partir de son nom.

        Args:
            media_path: Chemin du fichier
            common: Tokens partages avec les fichiers voisins
            info: Ligne d'en-tete affichee a chaque presentation

        Returns:
            Resolved, Quit ou Skip.
        """
        query = derive_query(Path(media_path), self._in_dir, self._stop_words)
        return self.resolve_query(query, common=common, info=info)

    def resolve_query(
        self,
        query: str,
        manual: bool = False,
        common: Sequence[str] = (),
        info: str = "",
    ) -> Outcome:
        """
        Resout une requete jusqu'a une issue terminale.

        Args:
            query: Requete brute (indices compris)
            manual: True si la requete a ete saisie par l'utilisateur
            common: Tokens partages avec les fichiers voisins
            info: Ligne d'en-tete affichee a chaque presentation
        """
        page = 1
        while True:
            action = self._step(query, manual, common, info, page)

            if isinstance(action, Done):
                return action.outcome
            elif isinstance(action, Requery):
                query, manual, page = action.text, True, 1
            elif isinstance(action, Page):
                page = action.number
            elif isinstance(action, EnterEpisodeMode):
                try:
                    self._bind(action.show_id, action.season, self.state.query)
                except CatalogError as e:
                    logger.warning(f"Chargement de la saison impossible: {e}")
                    self._display.show(f"[red]Selection de saison invalide: {escape(str(e))}[/red]")

    # ------------------------------------------------------------------
    # Etapes
    # ------------------------------------------------------------------

    def _step(
        self,
        query: str,
        manual: bool,
        common: Sequence[str],
        info: str,
        page: int,
    ) -> Action:
        """Presente une page de resultats puis lit les saisies jusqu'a une action."""
        if info:
            self._display.show(info)

        hints = extract_hints(query.strip(), self._current_year)
        my_query = self._transition(hints, manual, common)
        presentation = self._present(my_query, hints, page)

        while True:
            action = self._prompt(presentation)
            if not isinstance(action, Prompt):
                return action

    def _transition(self, hints: SearchQuery, manual: bool, common: Sequence[str]) -> str:
        """
        Applique les regles de changement de mode.

        Returns:
            La requete effective (eventuellement remplacee par les tokens communs).
        """
        state = self.state
        my_query = hints.query

        if hints.season == 0 and hints.episode == 0:
            state.set_movie_mode(my_query)
        elif state.mode is SelectorMode.MOVIE:
            state.set_show_mode(my_query)
        elif state.mode is SelectorMode.SHOW:
            state.query = my_query
        elif state.season_number != hints.season or state.query != my_query:
            if not manual and common:
                my_query = " ".join(common)
            state.set_show_mode(my_query)

        if state.mode is SelectorMode.SHOW and my_query in state.remembered:
            show_id = state.remembered[my_query]
            logger.debug(f"Serie memorisee pour '{my_query}': {show_id}")
            try:
                self._bind(show_id, hints.season, my_query)
            except CatalogError as e:
                logger.warning(f"Reprise de la serie memorisee impossible: {e}")
                self._display.show(
                    f"[red]Erreur de selection de la serie memorisee: {escape(str(e))}[/red]"
                )

        return my_query

    def _bind(self, show_id: int, season_number: int, query: str) -> None:
        show = self._catalog.get_show(show_id)
        season = self._catalog.get_season(show, season_number)
        self.state.set_episode_mode(show_id, season_number, season, query)
        logger.debug(f"Mode episode: serie {show_id}, saison {season_number}")

    def _search(
        self,
        search: Callable[[str, int, int], SearchPage],
        query: str,
        page: int,
        year: int,
        kind: str,
    ) -> SearchPage:
        try:
            return search(query, page, year)
        except CatalogError as e:
            logger.warning(f"Recherche de {kind} en echec pour '{query}': {e}")
            self._display.show(f"[red]Erreur lors de la recherche de {kind}: {escape(str(e))}[/red]")
            return SearchPage()

    def _present(self, my_query: str, hints: SearchQuery, page: int) -> _Presentation:
        """Lance la recherche du mode courant et affiche la page de resultats."""
        state = self.state
        suffix = hints.describe()

        if my_query and state.mode is SelectorMode.MOVIE:
            result = self._search(self._catalog.search_movies, my_query, page, hints.year, "films")
            display_query = f"{my_query}{suffix}"
        elif my_query and state.mode is SelectorMode.SHOW:
            result = self._search(self._catalog.search_shows, my_query, page, hints.year, "series")
            display_query = f"{my_query}{suffix}"
        elif state.mode is SelectorMode.SHOW_EPISODE and state.season is not None:
            result = SearchPage(results=list(state.season.episodes), total_pages=1)
            display_query = f"{state.season.show_name}{suffix}"
        else:
            result = SearchPage()
            display_query = f"{my_query}{suffix}"

        label = MODE_LABELS[state.mode]
        if result.total_pages > 1:
            self._display.show(
                f"Requete {label} (page {page}/{result.total_pages}): "
                f"[red]{escape(display_query)}[/red]"
            )
        else:
            self._display.show(f"Requete {label}: [red]{escape(display_query)}[/red]")

        count = len(result.results)
        if count == 0:
            self._display.show("[yellow]Aucun resultat ![/yellow]")

        if state.mode is SelectorMode.SHOW_EPISODE and 0 < hints.episode <= count:
            default = hints.episode
        else:
            default = 1

        self._display.show_candidates(result.results)
        return _Presentation(hints, result.results, result.total_pages, page, default)

    def _prompt(self, presentation: _Presentation) -> Action:
        """Lit une saisie et la traduit en action."""
        count = len(presentation.results)
        options = "qsh" + ("p" if presentation.total_pages > 1 else "")

        if count <= 0:
            self._display.show_prompt(f"\\[[red]{options}[/red]] ➜ ")
        elif count == 1:
            self._display.show_prompt(f"\\[[red]1{options}[/red]] (defaut: 1) ➜ ")
        else:
            self._display.show_prompt(
                f"\\[[red]1-{count}{options}[/red]] (defaut: {presentation.default}) ➜ "
            )

        line = self._reader.read_line()
        if line is None:
            logger.info("Fin de l'entree standard, abandon du lot")
            self._display.show("\n[yellow]Fin de l'entree, abandon.[/yellow]")
            return Done(Quit())

        return self._interpret(line.strip(), presentation)

    def _interpret(self, selection: str, presentation: _Presentation) -> Action:
        count = len(presentation.results)

        if selection == "q":
            return Done(Quit())
        if selection == "s":
            return Done(Skip())
        if selection == "p":
            if presentation.page < presentation.total_pages:
                return Page(presentation.page + 1)
            return Page(1)
        if selection == "h":
            self._show_help(count, presentation.default)
            return Prompt()

        if selection == "":
            index = presentation.default
        elif selection.isdecimal():
            index = int(selection)
        else:
            return Requery(selection)

        if not 1 <= index <= count:
            self._display.show("[yellow]Veuillez choisir une des options listees.[/yellow]")
            return Prompt()

        chosen = presentation.results[index - 1]
        if self.state.mode is SelectorMode.SHOW:
            if presentation.hints.season > 0:
                return EnterEpisodeMode(chosen.id, presentation.hints.season)
            self._display.show(
                "[yellow]Impossible d'extraire le numero de saison de la requete.[/yellow]"
            )
            return Prompt()

        return Done(Resolved(chosen))

    def _show_help(self, count: int, default: int) -> None:
        if count == 1:
            self._display.show("1 selectionner\ndefaut (saisie vide) : choix 1")
        elif count > 1:
            self._display.show(
                f"1-{count} selectionner\ndefaut (saisie vide) : choix {default}"
            )
        self._display.show(
            "q quitter\n"
            "s passer ce fichier\n"
            "h cette aide\n"
            "p page de resultats suivante (si disponible)\n"
            "tout autre texte : nouvelle requete\n"
        )
