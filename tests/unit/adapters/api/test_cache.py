"""
Tests unitaires pour CatalogCache.

Ces tests verifient:
- Un seul appel au producteur par cle dans la fenetre de retention
- L'expiration des entrees plus vieilles que la retention
- L'absence de mise en cache quand le producteur echoue
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from cinematch.adapters.api.cache import CatalogCache


class FakeClock:
    """Horloge manuelle pour les tests d'expiration."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(tmp_path: Path, clock: FakeClock) -> CatalogCache:
    """Cree un cache avec un repertoire temporaire et une horloge manuelle."""
    cache = CatalogCache(retention_seconds=60, cache_dir=tmp_path / "cache", clock=clock)
    yield cache
    cache.close()


class TestCatalogCache:
    """Tests pour la classe CatalogCache."""

    def test_producer_called_once_within_retention(self, cache, clock) -> None:
        producer = MagicMock(return_value=b'{"id": 1}')

        first = cache.fetch("get-tv-1", producer)
        clock.now += 30
        second = cache.fetch("get-tv-1", producer)

        assert first == second == b'{"id": 1}'
        producer.assert_called_once()

    def test_entry_expires_after_retention(self, cache, clock) -> None:
        producer = MagicMock(side_effect=[b"old", b"new"])

        cache.fetch("key", producer)
        clock.now += 61
        result = cache.fetch("key", producer)

        assert result == b"new"
        assert producer.call_count == 2

    def test_entry_at_exact_retention_is_kept(self, cache, clock) -> None:
        producer = MagicMock(return_value=b"body")

        cache.fetch("key", producer)
        clock.now += 60
        cache.fetch("key", producer)

        producer.assert_called_once()

    def test_distinct_keys(self, cache) -> None:
        assert cache.fetch("a", lambda: b"1") == b"1"
        assert cache.fetch("b", lambda: b"2") == b"2"
        assert len(cache) == 2

    def test_producer_error_propagates_and_is_not_cached(self, cache) -> None:
        def failing() -> bytes:
            raise RuntimeError("network down")

        with pytest.raises(RuntimeError):
            cache.fetch("key", failing)

        assert "key" not in cache
        assert cache.fetch("key", lambda: b"ok") == b"ok"

    def test_sweep_purges_only_expired(self, cache, clock) -> None:
        cache.fetch("old", lambda: b"1")
        clock.now += 40
        cache.fetch("recent", lambda: b"2")
        clock.now += 30

        assert cache.sweep() == 1
        assert "old" not in cache
        assert "recent" in cache

    def test_clear(self, cache) -> None:
        cache.fetch("a", lambda: b"1")
        cache.clear()
        assert len(cache) == 0

    def test_default_temporary_directory(self) -> None:
        cache = CatalogCache(retention_seconds=1)
        try:
            assert cache.fetch("a", lambda: b"1") == b"1"
        finally:
            cache.close()

    def test_close_removes_temporary_directory(self) -> None:
        cache = CatalogCache(retention_seconds=1)
        cache.fetch("a", lambda: b"1")
        directory = Path(cache.directory)
        assert directory.is_dir()

        cache.close()

        assert not directory.exists()

    def test_close_keeps_given_directory(self, tmp_path: Path) -> None:
        cache = CatalogCache(retention_seconds=1, cache_dir=tmp_path / "cache")
        cache.fetch("a", lambda: b"1")

        cache.close()

        assert (tmp_path / "cache").is_dir()
