from __future__ import annotations

import httpx
import pytest

from spp_forecast.infrastructure.gateways.ercot_auth import (
    ErcotTokenProvider,
    TokenCache,
)
from spp_forecast.infrastructure.gateways.ercot_errors import (
    ErcotAuthenticationError,
    ErcotConfigurationError,
    ErcotTimeoutError,
)


class _StubResponse:
    def __init__(self, status_code: int, json_data=None, text: str = "error"):
        self.status_code = status_code
        self._json = json_data
        self.text = text

    def json(self):
        if self._json is None:
            raise ValueError("no json")
        return self._json


class _StubAsyncClient:
    def __init__(self, response=None, error: Exception | None = None):
        self._response = response
        self._error = error
        self.calls = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def post(self, url, data=None, headers=None):
        self.calls.append({"url": url, "data": data})
        if self._error is not None:
            raise self._error
        return self._response


class _Clock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _provider(cache: TokenCache | None = None, clock=None, **kwargs):
    return ErcotTokenProvider(
        username=kwargs.pop("username", "user@example.com"),
        password=kwargs.pop("password", "secret"),
        token_cache=cache or TokenCache(),
        clock=clock or _Clock(),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_get_token_posts_ropc_form_and_caches(monkeypatch) -> None:
    client = _StubAsyncClient(
        _StubResponse(200, {"id_token": "tok-1", "expires_in": "3600"})
    )
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    cache = TokenCache()
    provider = _provider(cache)

    assert await provider.get_token() == "tok-1"
    assert await provider.get_token() == "tok-1"

    assert len(client.calls) == 1
    form = client.calls[0]["data"]
    assert form["grant_type"] == "password"
    assert form["response_type"] == "id_token"
    assert form["username"] == "user@example.com"
    assert cache.expires_at == pytest.approx(1_000.0 + 3600)


@pytest.mark.asyncio
async def test_token_is_refreshed_before_expiry(monkeypatch) -> None:
    responses = iter(
        [
            _StubResponse(200, {"id_token": "old", "expires_in": 100}),
            _StubResponse(200, {"id_token": "new", "expires_in": 100}),
        ]
    )
    monkeypatch.setattr(
        "httpx.AsyncClient", lambda timeout: _StubAsyncClient(next(responses))
    )
    clock = _Clock()
    provider = _provider(clock=clock, refresh_skew_seconds=30)

    assert await provider.get_token() == "old"
    clock.now += 69
    assert await provider.get_token() == "old"
    clock.now += 2
    assert await provider.get_token() == "new"


@pytest.mark.asyncio
async def test_missing_expires_in_defaults_to_one_hour(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(_StubResponse(200, {"id_token": "tok"})),
    )
    cache = TokenCache()

    await _provider(cache).get_token()

    assert cache.expires_at == pytest.approx(1_000.0 + 3600)


@pytest.mark.asyncio
async def test_missing_credentials_fail_without_request(monkeypatch) -> None:
    def _unexpected(timeout):
        raise AssertionError("no request expected")

    monkeypatch.setattr("httpx.AsyncClient", _unexpected)
    provider = _provider(password=None)

    assert provider.is_configured is False
    with pytest.raises(ErcotConfigurationError, match="ERCOT_USERNAME"):
        await provider.get_token()


@pytest.mark.asyncio
async def test_rejected_token_request_raises_authentication_error(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(_StubResponse(400, text="x" * 2000)),
    )

    with pytest.raises(ErcotAuthenticationError) as exc_info:
        await _provider().get_token()

    message = str(exc_info.value)
    assert message.startswith("ERCOT token failed: 400")
    assert len(message) < 900


@pytest.mark.asyncio
async def test_response_without_id_token_is_rejected(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(_StubResponse(200, {"access_token": "a"})),
    )

    with pytest.raises(ErcotAuthenticationError, match="id_token"):
        await _provider().get_token()


@pytest.mark.asyncio
async def test_token_timeout_raises_timeout_error(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(error=httpx.ReadTimeout("slow")),
    )

    with pytest.raises(ErcotTimeoutError):
        await _provider().get_token()


def test_invalidate_clears_cached_token() -> None:
    cache = TokenCache()
    cache.store("tok", 3600, now=0.0)
    provider = _provider(cache)

    provider.invalidate()

    assert cache.token is None
    assert cache.is_valid(0.0, 30.0) is False
