"""
Tests unitaires pour les mecanismes de retry.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- with_retry relance sur RateLimitError avec backoff exponentiel
- request_with_retry detecte les 429 et relance automatiquement
- request_with_fixed_retry relance les erreurs transitoires (reseau, 5xx)
  mais pas les 4xx
"""

import httpx
import pytest
import respx

from anitrack.adapters.api.retry import (
    RateLimitError,
    is_transient_error,
    parse_retry_after,
    request_with_fixed_retry,
    request_with_retry,
    with_fixed_retry,
    with_retry,
)


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.example.com/data")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_rate_limit_error_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_rate_limit_error_without_retry_after(self) -> None:
        assert RateLimitError(retry_after=None).retry_after is None


class TestParseRetryAfter:
    """Tests pour parse_retry_after()."""

    def test_seconds(self) -> None:
        assert parse_retry_after("30") == 30

    def test_missing_header(self) -> None:
        assert parse_retry_after(None) is None

    def test_http_date_is_ignored(self) -> None:
        assert parse_retry_after("Wed, 21 Oct 2026 07:28:00 GMT") is None


class TestIsTransientError:
    """Tests pour is_transient_error()."""

    def test_transport_error_is_transient(self) -> None:
        assert is_transient_error(httpx.ConnectError("refused"))

    def test_server_error_is_transient(self) -> None:
        assert is_transient_error(_status_error(503))

    def test_client_error_is_not_transient(self) -> None:
        assert not is_transient_error(_status_error(404))

    def test_other_exceptions_are_not_transient(self) -> None:
        assert not is_transient_error(ValueError("boom"))


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_with_retry_retries_on_rate_limit_error(self) -> None:
        """with_retry relance quand RateLimitError est levee."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def flaky_function() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RateLimitError(retry_after=1)
            return "success"

        assert await flaky_function() == "success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_with_retry_does_not_retry_other_exceptions(self) -> None:
        """with_retry ne relance pas les autres exceptions."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def raises_value_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("not a rate limit error")

        with pytest.raises(ValueError):
            await raises_value_error()
        assert call_count == 1


class TestWithFixedRetryDecorator:
    """Tests pour le decorateur with_fixed_retry."""

    @pytest.mark.asyncio
    async def test_stops_after_max_attempts(self) -> None:
        """with_fixed_retry abandonne apres max_attempts et releve l'erreur."""
        call_count = 0

        @with_fixed_retry(max_attempts=2, delay=0)
        async def always_down() -> str:
            nonlocal call_count
            call_count += 1
            raise httpx.ConnectError("refused")

        with pytest.raises(httpx.ConnectError):
            await always_down()
        assert call_count == 2


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_raises_on_429(self, respx_mock: respx.Router) -> None:
        """request_with_retry convertit 429 en RateLimitError apres epuisement."""
        route = respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(429, headers={"Retry-After": "30"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(
                    client, "GET", "https://api.example.com/data", max_attempts=2, max_wait=1
                )

        assert exc_info.value.retry_after == 30
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_accepts_http_date_retry_after(
        self, respx_mock: respx.Router
    ) -> None:
        """Un Retry-After au format date HTTP donne RateLimitError sans delai connu."""
        respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(
                429, headers={"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"}
            )
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(
                    client, "GET", "https://api.example.com/data", max_attempts=1
                )

        assert exc_info.value.retry_after is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_retries_then_succeeds(self, respx_mock: respx.Router) -> None:
        """request_with_retry reussit apres un 429 initial."""
        route = respx_mock.get("https://api.example.com/data").mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json={"status": "ok"}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(
                client, "GET", "https://api.example.com/data", max_attempts=3, max_wait=1
            )

        assert response.json() == {"status": "ok"}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_does_not_retry_server_errors(
        self, respx_mock: respx.Router
    ) -> None:
        """request_with_retry leve HTTPStatusError sur 500 sans relance."""
        route = respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "GET", "https://api.example.com/data")

        assert exc_info.value.response.status_code == 500
        assert route.call_count == 1


class TestRequestWithFixedRetry:
    """Tests pour request_with_fixed_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_server_error(self, respx_mock: respx.Router) -> None:
        """Un 5xx est relance apres le delai fixe."""
        route = respx_mock.get("https://api.example.com/data").mock(
            side_effect=[
                httpx.Response(502),
                httpx.Response(200, json={"ok": True}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_fixed_retry(
                client, "GET", "https://api.example.com/data", max_attempts=2, delay=0
            )

        assert response.json() == {"ok": True}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_does_not_retry_client_error(self, respx_mock: respx.Router) -> None:
        """Un 4xx remonte immediatement."""
        route = respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(404)
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError):
                await request_with_fixed_retry(
                    client, "GET", "https://api.example.com/data", max_attempts=3, delay=0
                )

        assert route.call_count == 1
