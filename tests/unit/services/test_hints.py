"""
Tests unitaires pour l'extraction des indices saison/episode/annee.

Ces tests verifient:
- L'extraction des marqueurs sXX / eXX et des annees
- La regle "premier non nul gagne" par champ
- Le retrait des tokens porteurs d'indices de la requete residuelle
- Les bornes des annees valides
"""

from pathlib import Path

from cinematch.services.hints import SearchQuery, extract_hints
from cinematch.services.query_builder import derive_query
from cinematch.utils.constants import DEFAULT_STOP_WORDS


class TestExtractHints:
    """Tests pour extract_hints()."""

    def test_season_and_episode_in_one_token(self) -> None:
        """s02e05 renseigne saison et episode."""
        assert extract_hints("show name s02e05") == SearchQuery("show name", 2, 5, 0)

    def test_separate_tokens(self) -> None:
        assert extract_hints("show s3 e12") == SearchQuery("show", 3, 12, 0)

    def test_no_hints(self) -> None:
        """Une requete sans indice est inchangee."""
        assert extract_hints("heat") == SearchQuery("heat", 0, 0, 0)

    def test_empty_query(self) -> None:
        assert extract_hints("") == SearchQuery("", 0, 0, 0)

    def test_first_non_zero_wins(self) -> None:
        """La premiere valeur l'emporte, les tokens suivants sont quand meme retires."""
        assert extract_hints("show s01 s02") == SearchQuery("show", 1, 0, 0)

    def test_year_extracted_and_removed(self) -> None:
        assert extract_hints("movie title 2020", current_year=2024) == SearchQuery(
            "movie title", 0, 0, 2020
        )

    def test_second_year_also_removed(self) -> None:
        result = extract_hints("blade runner 1982 2049", current_year=2050)
        assert result == SearchQuery("blade runner", 0, 0, 1982)

    def test_year_bounds(self) -> None:
        """Une annee hors [1900, annee courante + 1] reste dans la requete."""
        assert extract_hints("film 1899", current_year=2024).year == 0
        assert extract_hints("film 1899", current_year=2024).query == "film 1899"
        assert extract_hints("film 2025", current_year=2024).year == 2025
        assert extract_hints("film 2026", current_year=2024).query == "film 2026"

    def test_zero_markers_stay_in_query(self) -> None:
        """s00 n'apporte aucune valeur non nulle et reste dans la requete."""
        assert extract_hints("show s00") == SearchQuery("show s00", 0, 0, 0)

    def test_describe(self) -> None:
        assert SearchQuery("x", 2, 5, 2020).describe() == " (annee: 2020, saison: 2, episode: 5)"
        assert SearchQuery("x").describe() == ""

    def test_end_to_end_from_file_name(self) -> None:
        """Movie.Title.2020.mkv donne la requete "movie title" et l'annee 2020."""
        query = derive_query(Path("/in/Movie.Title.2020.mkv"), Path("/in"), DEFAULT_STOP_WORDS)
        assert extract_hints(query, current_year=2024) == SearchQuery("movie title", 0, 0, 2020)
