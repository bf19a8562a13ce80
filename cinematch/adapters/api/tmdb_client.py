"""
Client TMDB pour la recherche de films, series et episodes.

Implemente l'interface ICatalogClient pour TMDB (The Movie Database).
Chaque appel passe par le CatalogCache (memoire de courte duree) puis par
le mecanisme de retry pour gerer le rate limiting.

Usage:
    cache = CatalogCache(retention_seconds=60)
    client = TMDBClient(api_key="your_key", cache=cache)
    page = client.search_movies("avatar", page=1, year=2009)
    show = client.get_show(1399)
    season = client.get_season(show, 1)
    client.close()
"""

import json
from typing import Any, Optional

import httpx
from loguru import logger

from cinematch.adapters.api.cache import CatalogCache
from cinematch.adapters.api.retry import RateLimitError, request_with_retry
from cinematch.core.entities.media import Episode, Movie, Season, Show
from cinematch.core.ports.api_clients import CatalogError, ICatalogClient, SearchPage
from cinematch.utils.constants import USER_AGENT


class TMDBClient(ICatalogClient):
    """
    Client API TMDB pour le moteur de selection.

    Implemente ICatalogClient avec:
    - Recherche paginee de films et de series (filtre annee optionnel)
    - Recuperation d'une serie et d'une saison complete
    - Cache de courte duree sur les reponses brutes
    - Retry automatique sur rate limiting (429)

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: str,
        cache: CatalogCache,
        timeout: float = 5.0,
        max_attempts: int = 5,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4)
            cache: Instance CatalogCache partagee
            timeout: Delai maximal d'une requete en secondes
            max_attempts: Tentatives maximales sur rate limiting
        """
        self._api_key = api_key
        self._cache = cache
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.Client] = None

    def _get_client(self) -> httpx.Client:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.Client(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> bytes:
        """Execute un GET et retourne le corps brut de la reponse."""
        logger.debug(f"TMDB GET {path}", params=params)
        response = request_with_retry(
            self._get_client(),
            "GET",
            path,
            max_attempts=self._max_attempts,
            params=params or {},
        )
        return response.content

    @staticmethod
    def _decode(body: bytes) -> dict[str, Any]:
        try:
            data = json.loads(body)
        except ValueError as e:
            raise CatalogError(f"Invalid API response: {e}") from e
        if not isinstance(data, dict):
            raise CatalogError("Invalid API response: expected a JSON object")
        return data

    def _fetch_json(
        self, key: str, path: str, params: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Recupere et decode une reponse JSON via le cache.

        Le corps est valide avant d'etre stocke : une reponse illisible
        n'entre jamais dans le cache.

        Raises:
            CatalogError: Erreur de transport, statut non-2xx, rate limiting
                persistant ou reponse illisible.
        """

        def produce() -> bytes:
            body = self._get(path, params)
            self._decode(body)
            return body

        try:
            body = self._cache.fetch(key, produce)
        except httpx.HTTPStatusError as e:
            raise CatalogError(
                f"API request error ({e.response.status_code} {e.response.reason_phrase})"
            ) from e
        except RateLimitError as e:
            raise CatalogError(str(e)) from e
        except httpx.HTTPError as e:
            raise CatalogError(f"API request failed: {e}") from e

        return self._decode(body)

    @staticmethod
    def _record_id(item: Any) -> int:
        try:
            return int(item["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Invalid API response: record without id ({e!r})") from e

    @staticmethod
    def _search_params(query: str, page: int, year: int, year_param: str) -> dict[str, Any]:
        params: dict[str, Any] = {"query": query}
        if page > 0:
            params["page"] = page
        if year > 0:
            params[year_param] = year
        return params

    def search_movies(self, query: str, page: int = 1, year: int = 0) -> SearchPage:
        """
        Recherche des films par titre.

        Args:
            query: Titre du film a rechercher
            page: Numero de page (1-based)
            year: Annee de sortie optionnelle (0 = pas de filtre)

        Returns:
            SearchPage de Movie (vide si aucun resultat)
        """
        data = self._fetch_json(
            f"search-movie-{query}-{page}-{year}",
            "/search/movie",
            self._search_params(query, page, year, "year"),
        )
        results = [
            Movie(
                id=self._record_id(item),
                name=item.get("title") or item.get("original_title") or "",
                date=item.get("release_date") or "",
                overview=item.get("overview") or "",
                original_title=item.get("original_title"),
            )
            for item in data.get("results", [])
        ]
        return SearchPage(results=results, total_pages=int(data.get("total_pages") or 0))

    def search_shows(self, query: str, page: int = 1, year: int = 0) -> SearchPage:
        """
        Recherche des series TV par titre.

        Args:
            query: Titre de la serie a rechercher
            page: Numero de page (1-based)
            year: Annee de premiere diffusion optionnelle (0 = pas de filtre)

        Returns:
            SearchPage de Show (vide si aucun resultat)
        """
        data = self._fetch_json(
            f"search-tv-{query}-{page}-{year}",
            "/search/tv",
            self._search_params(query, page, year, "first_air_date_year"),
        )
        results = [self._parse_show(item) for item in data.get("results", [])]
        return SearchPage(results=results, total_pages=int(data.get("total_pages") or 0))

    def get_show(self, show_id: int) -> Show:
        """Recupere une serie TV par son identifiant TMDB."""
        data = self._fetch_json(f"get-tv-{show_id}", f"/tv/{show_id}")
        return self._parse_show(data)

    def get_season(self, show: Show, season_number: int) -> Season:
        """
        Recupere une saison complete.

        Chaque episode recoit le nom et la date de premiere diffusion de la
        serie ainsi que le nom de la saison.

        Args:
            show: Serie parente
            season_number: Numero de saison

        Returns:
            Season avec ses episodes dans l'ordre du catalogue
        """
        data = self._fetch_json(
            f"get-tv-season-{show.id}-{season_number}",
            f"/tv/{show.id}/season/{season_number}",
        )
        season_name = data.get("name") or ""
        episodes = tuple(
            Episode(
                id=self._record_id(item),
                name=item.get("name") or "",
                date=item.get("air_date") or "",
                overview=item.get("overview") or "",
                season_number=int(item.get("season_number") or season_number),
                episode_number=int(item.get("episode_number") or 0),
                show_name=show.name,
                show_date=show.date,
                season_name=season_name,
            )
            for item in data.get("episodes", [])
        )
        return Season(
            id=int(data.get("id") or 0),
            name=season_name,
            date=data.get("air_date") or "",
            season_number=int(data.get("season_number") or season_number),
            show_id=show.id,
            show_name=show.name,
            episodes=episodes,
        )

    @staticmethod
    def _parse_show(item: dict[str, Any]) -> Show:
        return Show(
            id=TMDBClient._record_id(item),
            name=item.get("name") or item.get("original_name") or "",
            date=item.get("first_air_date") or "",
            overview=item.get("overview") or "",
            original_name=item.get("original_name"),
        )

    def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None
