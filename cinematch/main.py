"""
Point d'entree CLI de CineMatch.

Configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import match, tokens
from .config import Settings
from .container import Container
from .logging_config import configure_logging, verbosity_to_level

app = typer.Typer(
    name="cinematch",
    help="Association interactive de fichiers video au catalogue TMDB",
)
container = Container()


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
) -> None:
    """CineMatch - Rangement de fichiers video par le catalogue TMDB."""
    if verbose:
        settings = get_config()
        configure_logging(
            log_level=verbosity_to_level(verbose, settings.log_level),
            log_file=settings.log_file,
            rotation_size=settings.log_rotation_size,
            retention_count=settings.log_retention_count,
        )


app.command()(match)
app.command()(tokens)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Source : {config.in_dir}")
    typer.echo(f"Films : {config.effective_movie_out_dir}")
    typer.echo(f"Series : {config.effective_tv_out_dir}")
    typer.echo(f"Extensions : {', '.join(config.media_extensions)}")
    typer.echo(f"Mots vides : {len(config.effective_stop_words)}")
    typer.echo(f"API TMDB : {'activee' if config.tmdb_enabled else 'desactivee'}")
    typer.echo(f"Retention du cache : {config.cache_retention_seconds:g} s")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CineMatch v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Demarrage de CineMatch", version=__version__)

    app()


if __name__ == "__main__":
    main()
