"""
Client du catalogue distant.

Ce module fournit l'adaptateur pour communiquer avec TMDB ainsi que
l'infrastructure partagee:
- CatalogCache: Memoire de courte duree des reponses brutes
- RateLimitError: Exception pour les erreurs 429
- with_retry / request_with_retry: Backoff exponentiel sur rate limiting

Le client implemente ICatalogClient defini dans core/ports/api_clients.py.
"""

from cinematch.adapters.api.cache import CatalogCache
from cinematch.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from cinematch.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "CatalogCache",
    "TMDBClient",
    "RateLimitError",
    "with_retry",
    "request_with_retry",
]
