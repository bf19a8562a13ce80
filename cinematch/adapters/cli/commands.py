"""
Commandes CLI du workflow (match, tokens).
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from dependency_injector import providers
from loguru import logger
from rich.console import Console

from cinematch.config import Settings
from cinematch.container import Container
from cinematch.services.hints import extract_hints
from cinematch.services.query_builder import derive_query, sort_uniq, split_sort_uniq
from cinematch.services.selector import SelectionEngine
from cinematch.services.workflow import MatchWorkflow, WorkflowOptions


def split_csv(value: Optional[str]) -> list[str]:
    """Decoupe une liste CSV en retirant les entrees vides."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def apply_overrides(
    settings: Settings,
    in_dir: Optional[Path] = None,
    out_dir: Optional[Path] = None,
    movie_out: Optional[Path] = None,
    tv_out: Optional[Path] = None,
    api_key: Optional[str] = None,
    set_stop_words: Optional[str] = None,
    add_stop_words: Optional[str] = None,
    movie_exts: Optional[str] = None,
) -> Settings:
    """
    Applique les options de la ligne de commande sur la configuration.

    Seules les options fournies remplacent les valeurs de Settings.
    """
    update: dict = {}
    if in_dir is not None:
        update["in_dir"] = in_dir.expanduser()
    if out_dir is not None:
        update["out_dir"] = out_dir.expanduser()
    if movie_out is not None:
        update["movie_out_dir"] = movie_out.expanduser()
    if tv_out is not None:
        update["tv_out_dir"] = tv_out.expanduser()
    if api_key:
        update["tmdb_api_key"] = api_key
    if set_stop_words is not None:
        update["stop_words"] = [w.lower() for w in split_csv(set_stop_words)]
    if add_stop_words is not None:
        update["extra_stop_words"] = [w.lower() for w in split_csv(add_stop_words)]
    if movie_exts is not None:
        update["media_extensions"] = split_csv(movie_exts)
    return settings.model_copy(update=update)


def _configure_container(container: Container, settings: Settings, no_color: bool) -> None:
    container.config.override(providers.Object(settings))
    if no_color:
        container.console.override(
            providers.Singleton(Console, highlight=False, no_color=True)
        )


def match(
    in_dir: Annotated[
        Optional[Path], typer.Option("--in", help="Repertoire source")
    ] = None,
    out_dir: Annotated[
        Optional[Path], typer.Option("--out", help="Repertoire de destination")
    ] = None,
    movie_out: Annotated[
        Optional[Path],
        typer.Option("--movie-out", help="Destination des films (defaut: --out)"),
    ] = None,
    tv_out: Annotated[
        Optional[Path],
        typer.Option("--tv-out", help="Destination des episodes (defaut: --out)"),
    ] = None,
    api_key: Annotated[
        Optional[str], typer.Option("--api-key", help="Cle API TMDB")
    ] = None,
    set_stop_words: Annotated[
        Optional[str],
        typer.Option("--set-stop-words", help="CSV des mots exclus des recherches"),
    ] = None,
    add_stop_words: Annotated[
        Optional[str],
        typer.Option("--add-stop-words", help="CSV de mots exclus en plus de la liste"),
    ] = None,
    movie_exts: Annotated[
        Optional[str],
        typer.Option("--movie-exts", help="CSV des extensions video"),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Desactive les couleurs")
    ] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Simule sans copier les fichiers")
    ] = False,
    move: Annotated[
        bool, typer.Option("--mv", help="Deplace les fichiers au lieu de les copier")
    ] = False,
    confirm: Annotated[
        bool, typer.Option("--confirm", help="Demande confirmation avant chaque placement")
    ] = False,
) -> None:
    """Associe interactivement les fichiers video au catalogue TMDB et les range."""
    container = Container()
    settings = apply_overrides(
        container.config(),
        in_dir=in_dir,
        out_dir=out_dir,
        movie_out=movie_out,
        tv_out=tv_out,
        api_key=api_key,
        set_stop_words=set_stop_words,
        add_stop_words=add_stop_words,
        movie_exts=movie_exts,
    )
    _configure_container(container, settings, no_color)
    console = container.console()

    if not settings.tmdb_enabled:
        console.print("[red]Cle API TMDB requise (--api-key ou CINEMATCH_TMDB_API_KEY)[/red]")
        raise typer.Exit(1)

    source_dir = settings.in_dir.absolute()
    if not source_dir.is_dir():
        console.print(f"[red]Repertoire source introuvable: {source_dir}[/red]")
        raise typer.Exit(1)

    stop_words = settings.effective_stop_words
    files = container.file_system().list_media_files(source_dir, settings.media_extensions)
    logger.info(f"{len(files)} fichier(s) video dans {source_dir}")

    engine = SelectionEngine(
        catalog=container.tmdb_client(),
        display=container.display(),
        reader=container.line_reader(),
        in_dir=source_dir,
        stop_words=stop_words,
    )
    workflow = MatchWorkflow(
        engine=engine,
        placement=container.placement_service(),
        file_system=container.file_system(),
        display=container.display(),
        reader=container.line_reader(),
        options=WorkflowOptions(
            in_dir=source_dir,
            movie_out_dir=settings.effective_movie_out_dir.absolute(),
            tv_out_dir=settings.effective_tv_out_dir.absolute(),
            stop_words=stop_words,
            dry_run=dry_run,
            move=move,
            confirm=confirm,
        ),
    )

    try:
        summary = workflow.run(files)
    finally:
        container.tmdb_client().close()
        container.catalog_cache().close()

    logger.info(
        "Lot termine",
        placed=len(summary.placed),
        duplicates=len(summary.duplicates),
        skipped=len(summary.skipped),
        failed=len(summary.failed),
        quit=summary.quit,
    )
    if summary.failed:
        raise typer.Exit(1)


def tokens(
    in_dir: Annotated[
        Optional[Path], typer.Option("--in", help="Repertoire source")
    ] = None,
    set_stop_words: Annotated[
        Optional[str],
        typer.Option("--set-stop-words", help="CSV des mots exclus des recherches"),
    ] = None,
    add_stop_words: Annotated[
        Optional[str],
        typer.Option("--add-stop-words", help="CSV de mots exclus en plus de la liste"),
    ] = None,
    movie_exts: Annotated[
        Optional[str],
        typer.Option("--movie-exts", help="CSV des extensions video"),
    ] = None,
) -> None:
    """Affiche tous les tokens de recherche derives du repertoire source."""
    container = Container()
    settings = apply_overrides(
        container.config(),
        in_dir=in_dir,
        set_stop_words=set_stop_words,
        add_stop_words=add_stop_words,
        movie_exts=movie_exts,
    )
    source_dir = settings.in_dir.absolute()
    stop_words = settings.effective_stop_words

    collected: list[str] = []
    for media_path in container.file_system().list_media_files(
        source_dir, settings.media_extensions
    ):
        query = " ".join(split_sort_uniq(derive_query(media_path, source_dir, stop_words)))
        collected.extend(extract_hints(query).query.split())

    for token in sort_uniq(collected):
        typer.echo(token)
