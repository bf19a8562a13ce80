"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le domaine a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

Ports client API : Contrats pour le catalogue distant
- ICatalogClient : Les quatre operations du catalogue
- SearchPage : Une page de resultats
- CatalogError : Echec d'un appel au catalogue

Ports console : Contrats pour l'interaction utilisateur
- ILineReader : Lecture d'une ligne
- IDisplay : Affichage de lignes et de candidats
"""

from cinematch.core.ports.api_clients import CatalogError, ICatalogClient, SearchPage
from cinematch.core.ports.console import IDisplay, ILineReader

__all__ = [
    # Client API
    "ICatalogClient",
    "SearchPage",
    "CatalogError",
    # Console
    "ILineReader",
    "IDisplay",
]
