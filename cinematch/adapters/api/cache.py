"""
Cache des reponses du catalogue avec fenetre de retention courte.

Le cache memorise les reponses brutes du catalogue pendant une courte duree
(60 secondes par defaut) pour eviter de relancer une recherche identique
lorsque l'utilisateur pagine, revient sur une requete ou traite plusieurs
episodes d'une meme serie.

Le stockage s'appuie sur diskcache (repertoire temporaire si aucun n'est
fourni, supprime a la fermeture). L'expiration n'utilise pas de tache de
fond : a chaque acces, les entrees plus vieilles que la fenetre de
retention sont purgees avant la recherche de la cle.
"""

import shutil
import time
from pathlib import Path
from typing import Callable, Optional

from diskcache import Cache
from loguru import logger


class CatalogCache:
    """
    Memoisation a duree de vie limitee devant les appels au catalogue.

    Chaque entree stocke le couple (date de creation, reponse brute).
    L'horloge est injectable pour rendre l'expiration testable.

    Attributes:
        retention_seconds: Age maximal d'une entree avant purge

    Example:
        cache = CatalogCache(retention_seconds=60)
        body = cache.fetch("get-tv-1399", lambda: http_get("/tv/1399"))
    """

    def __init__(
        self,
        retention_seconds: float,
        cache_dir: Optional[str | Path] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialise le cache.

        Args:
            retention_seconds: Fenetre de retention en secondes
            cache_dir: Repertoire de stockage (temporaire si None)
            clock: Source du temps courant en secondes
        """
        self.retention_seconds = retention_seconds
        self._clock = clock
        self._temporary = cache_dir is None
        self._cache = Cache(str(cache_dir) if cache_dir is not None else None)

    @property
    def directory(self) -> str:
        """Repertoire de stockage diskcache."""
        return self._cache.directory

    def sweep(self) -> int:
        """
        Purge les entrees expirees.

        Returns:
            Nombre d'entrees supprimees.
        """
        now = self._clock()
        evicted = 0
        for key in list(self._cache.iterkeys()):
            entry = self._cache.get(key)
            if entry is None:
                continue
            created_at, _ = entry
            if now - created_at > self.retention_seconds:
                self._cache.delete(key)
                evicted += 1
        if evicted:
            logger.debug(f"Cache: {evicted} entree(s) expiree(s) purgee(s)")
        return evicted

    def fetch(self, key: str, producer: Callable[[], bytes]) -> bytes:
        """
        Retourne la reponse associee a la cle, en appelant producer si absente.

        Les exceptions de producer sont propagees et rien n'est stocke.

        Args:
            key: Cle logique (operation + arguments significatifs)
            producer: Appel distant produisant la reponse brute

        Returns:
            La reponse brute (en cache ou fraichement produite).
        """
        self.sweep()

        entry = self._cache.get(key)
        if entry is not None:
            logger.debug(f"Cache hit: {key}")
            return entry[1]

        logger.debug(f"Cache miss: {key}")
        payload = producer()
        self._cache.set(key, (self._clock(), payload))
        return payload

    def __contains__(self, key: str) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        self._cache.clear()

    def close(self) -> None:
        """Ferme le cache (a appeler a la fin)."""
        self._cache.close()
        if self._temporary:
            shutil.rmtree(self._cache.directory, ignore_errors=True)
