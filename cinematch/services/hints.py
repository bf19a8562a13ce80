"""
Extraction des indices saison, episode et annee d'une requete.

Chaque token est confronte independamment a trois motifs :
- saison : "s" suivi de chiffres (s02, s2, s02e05)
- episode : "e" suivi de chiffres (e05, s02e05)
- annee : exactement 4 chiffres entre 1900 et l'annee courante + 1

Un token peut renseigner plusieurs champs a la fois. Pour chaque champ, le
premier token qui donne une valeur non nulle l'emporte. Tout token ayant
donne une valeur non nulle est retire de la requete residuelle, meme si le
champ etait deja renseigne.
"""

import re
from datetime import date
from typing import NamedTuple, Optional

SEASON_PATTERN = re.compile(r"s(\d+)")
EPISODE_PATTERN = re.compile(r"e(\d+)")
YEAR_PATTERN = re.compile(r"^\d{4}$")

MIN_YEAR = 1900


class SearchQuery(NamedTuple):
    """
    Requete residuelle et indices extraits (0 = absent).

    Se compare comme un tuple (query, season, episode, year).
    """

    query: str
    season: int = 0
    episode: int = 0
    year: int = 0

    def describe(self) -> str:
        """Suffixe d'affichage, ex: " (annee: 2020, saison: 2)"."""
        terms = []
        if self.year > 0:
            terms.append(f"annee: {self.year}")
        if self.season > 0:
            terms.append(f"saison: {self.season}")
        if self.episode > 0:
            terms.append(f"episode: {self.episode}")
        return f" ({', '.join(terms)})" if terms else ""


def _marker_value(pattern: re.Pattern, token: str) -> int:
    match = pattern.search(token)
    return int(match.group(1)) if match else 0


def _year_value(token: str, max_year: int) -> int:
    if not YEAR_PATTERN.match(token):
        return 0
    value = int(token)
    return value if MIN_YEAR <= value <= max_year else 0


def extract_hints(query: str, current_year: Optional[int] = None) -> SearchQuery:
    """
    Extrait saison, episode et annee d'une requete.

    Args:
        query: Requete tokenisee (tokens separes par des espaces)
        current_year: Annee de reference pour borner les annees valides
            (defaut: annee courante)

    Returns:
        SearchQuery(residuelle, saison, episode, annee).
    """
    max_year = (current_year or date.today().year) + 1
    season = episode = year = 0
    residual = []

    for token in query.split():
        token_season = _marker_value(SEASON_PATTERN, token)
        token_episode = _marker_value(EPISODE_PATTERN, token)
        token_year = _year_value(token, max_year)

        if token_season and not season:
            season = token_season
        if token_episode and not episode:
            episode = token_episode
        if token_year and not year:
            year = token_year

        if not (token_season or token_episode or token_year):
            residual.append(token)

    return SearchQuery(" ".join(residual), season, episode, year)
