"""
Fixtures pytest partagees pour les tests CineMatch.

Ce module contient les fixtures communes utilisees dans les tests:
- Affichage enregistreur (RecordingDisplay)
- Mock du catalogue (ICatalogClient)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from cinematch.config import Settings
from cinematch.core.ports.api_clients import ICatalogClient, SearchPage
from tests.fixtures.console_doubles import RecordingDisplay


@pytest.fixture
def display() -> RecordingDisplay:
    """Affichage enregistreur."""
    return RecordingDisplay()


@pytest.fixture
def mock_catalog() -> MagicMock:
    """
    Mock de ICatalogClient pour les tests.

    Les recherches retournent une page vide par defaut.
    Configurer le mock dans chaque test pour des comportements specifiques.
    """
    mock = MagicMock(spec=ICatalogClient)
    mock.search_movies.return_value = SearchPage()
    mock.search_shows.return_value = SearchPage()
    return mock


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour creer une structure de repertoires
    isolee pour chaque test.
    """
    in_dir = tmp_path / "in"
    out_dir = tmp_path / "out"
    in_dir.mkdir()
    out_dir.mkdir()

    return Settings(
        tmdb_api_key="test_api_key",
        in_dir=in_dir,
        out_dir=out_dir,
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "logs" / "test.log",
    )
