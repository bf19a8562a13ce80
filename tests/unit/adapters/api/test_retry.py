"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- with_retry relance uniquement sur RateLimitError
- request_with_retry detecte les 429 et relance automatiquement
- Les autres erreurs HTTP remontent sans retry
"""

from unittest.mock import patch

import httpx
import pytest
import respx

from cinematch.adapters.api.retry import (
    RateLimitError,
    _parse_retry_after,
    request_with_retry,
    with_retry,
)

URL = "https://api.example.com/resource"


@pytest.fixture(autouse=True)
def no_sleep():
    """Supprime les attentes de tenacity."""
    with patch("tenacity.nap.time.sleep"):
        yield


class TestRateLimitError:
    def test_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=30)
        assert error.retry_after == 30
        assert "30" in str(error)

    def test_parse_retry_after(self) -> None:
        assert _parse_retry_after("12") == 12
        assert _parse_retry_after(None) is None
        assert _parse_retry_after("soon") is None


class TestWithRetry:
    def test_retries_until_success(self) -> None:
        attempts = []

        @with_retry(max_attempts=3)
        def flaky() -> str:
            attempts.append(1)
            if len(attempts) < 3:
                raise RateLimitError()
            return "ok"

        assert flaky() == "ok"
        assert len(attempts) == 3

    def test_other_errors_not_retried(self) -> None:
        attempts = []

        @with_retry(max_attempts=3)
        def broken() -> None:
            attempts.append(1)
            raise ValueError("nope")

        with pytest.raises(ValueError):
            broken()
        assert len(attempts) == 1


class TestRequestWithRetry:
    @respx.mock
    def test_429_then_success(self) -> None:
        route = respx.get(URL).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json={"ok": True}),
            ]
        )
        with httpx.Client() as client:
            response = request_with_retry(client, "GET", URL)

        assert response.json() == {"ok": True}
        assert route.call_count == 2

    @respx.mock
    def test_429_exhausted_raises_rate_limit_error(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(429))

        with httpx.Client() as client:
            with pytest.raises(RateLimitError):
                request_with_retry(client, "GET", URL, max_attempts=2)

    @respx.mock
    def test_404_raises_immediately(self) -> None:
        route = respx.get(URL).mock(return_value=httpx.Response(404))

        with httpx.Client() as client:
            with pytest.raises(httpx.HTTPStatusError):
                request_with_retry(client, "GET", URL)

        assert route.call_count == 1
