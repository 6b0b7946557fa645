"""Tests for configuration, the HTTP helper and bounded fan-out."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from parcelwise.core.concurrency import gather_bounded
from parcelwise.core.config import MapServiceConfig, Settings
from parcelwise.core.errors import TransportError
from parcelwise.core.http import fetch


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.cadastre.provider == "uldk"
        assert settings.cadastre.srid == 4326
        assert settings.maps.max_feature_pages == 6
        assert settings.maps.min_usable_length == 20
        assert settings.maps.zoning_fallback_layers == "plany,plany_granice"
        assert [a.version for a in settings.maps.zoning_ladder] == ["1.1.1", "1.1.1", "1.3.0"]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PARCELWISE_CADASTRE_PROVIDER", "memory")
        monkeypatch.setenv("PARCELWISE_MAPS_MAX_FEATURE_PAGES", "3")
        monkeypatch.setenv("PARCELWISE_LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.cadastre.provider == "memory"
        assert settings.maps.max_feature_pages == 3
        assert settings.log_level == "DEBUG"

    def test_ladders_are_independent(self):
        a, b = MapServiceConfig(), MapServiceConfig()
        a.zoning_ladder.pop()
        assert len(b.zoning_ladder) == 3


class TestFetch:
    @pytest.mark.asyncio
    async def test_returns_response_regardless_of_status(self, httpx_mock):
        httpx_mock.add_response(url="https://example.pl/x", status_code=503, text="busy")
        async with httpx.AsyncClient() as client:
            resp = await fetch(client, "https://example.pl/x", timeout=1.0, label="test")
        assert resp.status_code == 503

    @pytest.mark.asyncio
    async def test_connection_error(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("refused"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(TransportError, match="test: refused"):
                await fetch(client, "https://example.pl/x", timeout=1.0, label="test")

    @pytest.mark.asyncio
    async def test_malformed_url(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200))
        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(TransportError, match="test: invalid URL"):
                await fetch(client, "http://[::1/x", timeout=1.0, label="test")


class TestGatherBounded:
    @pytest.mark.asyncio
    async def test_keeps_order(self):
        async def value(n: int, delay: float) -> int:
            await asyncio.sleep(delay)
            return n

        factories = [lambda n=n: value(n, 0.01 * (5 - n)) for n in range(5)]
        assert await gather_bounded(factories, limit=2) == [0, 1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_respects_limit(self):
        in_flight = 0
        peak = 0

        async def task() -> None:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        await gather_bounded([task for _ in range(10)], limit=3)
        assert peak == 3

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await gather_bounded([], limit=6) == []

    @pytest.mark.asyncio
    async def test_invalid_limit(self):
        with pytest.raises(ValueError):
            await gather_bounded([], limit=0)
