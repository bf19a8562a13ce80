"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : configuration,
cache et client du catalogue, systeme de fichiers, placement et console.
"""

from dependency_injector import containers, providers
from rich.console import Console

from .adapters.api.cache import CatalogCache
from .adapters.api.tmdb_client import TMDBClient
from .adapters.cli.display import ConsoleLineReader, RichDisplay
from .adapters.file_system import FileSystemAdapter
from .config import Settings
from .services.placement import PlacementService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.config.override(providers.Object(settings))  # options CLI
        client = container.tmdb_client()
        placement = container.placement_service()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Console Rich partagee (la couleur se regle a la creation)
    console = providers.Singleton(Console, highlight=False)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    display = providers.Singleton(
        RichDisplay,
        console=console,
        line_width=config.provided.line_width,
    )
    line_reader = providers.Singleton(ConsoleLineReader, console=console)

    # Cache du catalogue - Singleton partage pour tout le lot
    catalog_cache = providers.Singleton(
        CatalogCache,
        retention_seconds=config.provided.cache_retention_seconds,
        cache_dir=config.provided.cache_dir,
    )

    # Client du catalogue - Singleton avec api_key depuis config
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=catalog_cache,
        timeout=config.provided.http_timeout,
        max_attempts=config.provided.max_retry_attempts,
    )

    # Services
    placement_service = providers.Singleton(PlacementService, file_system=file_system)
