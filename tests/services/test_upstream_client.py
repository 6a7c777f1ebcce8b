"""Tests for the upstream dashboard client."""
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from staffdesk.services import upstream_client
from staffdesk.services.upstream_client import fetch_snapshot

_RealAsyncClient = httpx.AsyncClient


def _client_factory(handler):
    def factory(**kwargs):
        return _RealAsyncClient(transport=httpx.MockTransport(handler), **kwargs)
    return factory


@pytest.mark.asyncio
async def test_fetch_unwraps_envelope_and_sends_time_range():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"success": True, "data": {"overview": {"totalItems": 4}}})

    with patch.object(upstream_client.httpx, "AsyncClient", side_effect=_client_factory(handler)):
        payload = await fetch_snapshot("stats", time_range=7)

    assert payload == {"overview": {"totalItems": 4}}
    assert seen["path"].endswith("/staff/dashboard/stats")
    assert seen["params"] == {"timeRange": "7"}


@pytest.mark.asyncio
async def test_fetch_activity_sends_limit():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"data": []})

    with patch.object(upstream_client.httpx, "AsyncClient", side_effect=_client_factory(handler)):
        payload = await fetch_snapshot("activity", activity_limit=15)

    assert payload == []
    assert seen["params"] == {"limit": "15"}


@pytest.mark.asyncio
async def test_fetch_retries_then_succeeds():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] < 3:
            return httpx.Response(502)
        return httpx.Response(200, json={"data": {"counts": {"expired": 1}}})

    with patch.object(upstream_client.httpx, "AsyncClient", side_effect=_client_factory(handler)), \
            patch.object(upstream_client.asyncio, "sleep", new=AsyncMock()):
        payload = await fetch_snapshot("attention", max_retries=3)

    assert calls["n"] == 3
    assert payload == {"counts": {"expired": 1}}


@pytest.mark.asyncio
async def test_fetch_raises_after_last_attempt():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    with patch.object(upstream_client.httpx, "AsyncClient", side_effect=_client_factory(handler)), \
            patch.object(upstream_client.asyncio, "sleep", new=AsyncMock()) as sleep:
        with pytest.raises(httpx.HTTPStatusError):
            await fetch_snapshot("analytics", max_retries=2)

    assert sleep.await_count == 1


@pytest.mark.asyncio
async def test_unknown_source_rejected():
    with pytest.raises(ValueError):
        await fetch_snapshot("weather")  # type: ignore[arg-type]


@pytest.mark.asyncio
@pytest.mark.parametrize("max_retries", [0, -2])
async def test_non_positive_retries_still_make_one_attempt(max_retries):
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        return httpx.Response(503)

    with patch.object(upstream_client.httpx, "AsyncClient", side_effect=_client_factory(handler)), \
            patch.object(upstream_client.asyncio, "sleep", new=AsyncMock()) as sleep:
        with pytest.raises(httpx.HTTPStatusError):
            await fetch_snapshot("stats", max_retries=max_retries)

    assert calls["n"] == 1
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_configured_zero_retries_is_honoured():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        return httpx.Response(500)

    with patch.object(upstream_client.settings, "UPSTREAM_MAX_RETRIES", 0), \
            patch.object(upstream_client.httpx, "AsyncClient", side_effect=_client_factory(handler)), \
            patch.object(upstream_client.asyncio, "sleep", new=AsyncMock()):
        with pytest.raises(httpx.HTTPStatusError):
            await fetch_snapshot("attention")

    assert calls["n"] == 1
