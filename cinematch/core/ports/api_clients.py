"""
Interfaces ports pour le client du catalogue.

Interface abstraite (port) definissant le contrat du catalogue distant
dont depend le moteur de selection. L'implementation (adaptateur) concrete
est le client TMDB.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from cinematch.core.entities.media import MediaRecord, Season, Show


class CatalogError(Exception):
    """
    Echec d'un appel au catalogue.

    Regroupe les erreurs de transport, les statuts HTTP non-2xx, l'epuisement
    des tentatives sur rate limiting et les reponses illisibles.
    """


@dataclass
class SearchPage:
    """
    Une page de resultats de recherche.

    Attributs :
        results : Resultats de la page, dans l'ordre du catalogue
        total_pages : Nombre total de pages disponibles pour la requete
    """

    results: list[MediaRecord] = field(default_factory=list)
    total_pages: int = 0


class ICatalogClient(ABC):
    """
    Interface du catalogue de metadonnees.

    Les quatre operations dont depend le moteur de selection. Chacune leve
    CatalogError en cas d'echec.
    """

    @abstractmethod
    def search_movies(self, query: str, page: int = 1, year: int = 0) -> SearchPage:
        """
        Recherche des films par titre.

        Args :
            query : Texte de recherche
            page : Numero de page (1-based)
            year : Annee de sortie, 0 si inconnue

        Retourne :
            Page de resultats (Movie)
        """
        ...

    @abstractmethod
    def search_shows(self, query: str, page: int = 1, year: int = 0) -> SearchPage:
        """
        Recherche des series TV par titre.

        Args :
            query : Texte de recherche
            page : Numero de page (1-based)
            year : Annee de premiere diffusion, 0 si inconnue

        Retourne :
            Page de resultats (Show)
        """
        ...

    @abstractmethod
    def get_show(self, show_id: int) -> Show:
        """Recupere une serie par son identifiant."""
        ...

    @abstractmethod
    def get_season(self, show: Show, season_number: int) -> Season:
        """
        Recupere une saison et sa liste ordonnee d'episodes.

        Les episodes retournes portent le nom et la date de premiere
        diffusion de la serie.
        """
        ...
