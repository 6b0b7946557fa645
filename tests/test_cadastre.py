"""Tests for ULDK grammars, repositories and the repository factory."""

from __future__ import annotations

import re

import httpx
import pytest

from conftest import uldk_record
from parcelwise.cadastre import (
    CadastralRepository,
    InMemoryCadastralRepository,
    UldkRepository,
    create_cadastral_repository,
)
from parcelwise.cadastre.grammar import parse_count_response, parse_record, parse_status_response
from parcelwise.core.config import CadastreConfig
from parcelwise.core.errors import NotFoundError, TransportError, UpstreamError

ULDK_URL = re.compile(r"https://uldk\.gugik\.gov\.pl/.*")


# ---------------------------------------------------------------------------
# Grammars
# ---------------------------------------------------------------------------

class TestParseRecord:
    def test_seven_fields(self):
        candidate = parse_record(uldk_record())
        assert candidate.region_code == "141201_1.0001.6509"
        assert candidate.province == "mazowieckie"
        assert candidate.parcel_number == "6509"
        assert candidate.geometry_text.startswith("POLYGON")
        assert candidate.centroid is not None
        assert candidate.area_square_meters > 0

    def test_geometry_keeps_pipes_beyond_sixth(self):
        candidate = parse_record(uldk_record(geometry="POLYGON((1 2|3 4))"))
        assert candidate.geometry_text == "POLYGON((1 2|3 4))"

    def test_too_few_fields(self):
        assert parse_record("141201_1.0001.6509|mazowieckie|piaseczyński") is None

    def test_missing_identity(self):
        assert parse_record("|mazowieckie|piaseczyński|Piaseczno|Piaseczno||") is None

    def test_empty_geometry(self):
        candidate = parse_record(uldk_record(geometry=""))
        assert candidate.geometry_text is None
        assert candidate.centroid is None
        assert candidate.area_square_meters is None

    def test_label(self):
        assert parse_record(uldk_record()).label == "dz. 6509, obr. Piaseczno"


class TestStatusGrammar:
    def test_status_zero(self):
        candidate = parse_status_response(f"0\n{uldk_record()}\n")
        assert candidate.region_code == "141201_1.0001.6509"

    def test_record_without_status_line(self):
        assert parse_status_response(uldk_record()).parcel_number == "6509"

    def test_not_found(self):
        with pytest.raises(NotFoundError):
            parse_status_response("-1 brak wyników")

    def test_other_negative_status(self):
        with pytest.raises(UpstreamError) as exc_info:
            parse_status_response("-3 błędny identyfikator")
        assert exc_info.value.code.startswith("-3")

    @pytest.mark.parametrize("status", ["-10", "-10 nieznany błąd", "-1x"])
    def test_status_starting_with_minus_one_is_not_not_found(self, status):
        with pytest.raises(UpstreamError) as exc_info:
            parse_status_response(status)
        assert exc_info.value.code == status

    @pytest.mark.parametrize("text", ["", "   \n", "0", "0\nno pipes here", "hello"])
    def test_unparseable(self, text):
        with pytest.raises(TransportError):
            parse_status_response(text)


class TestCountGrammar:
    def test_count_and_records(self):
        second = uldk_record(region_code="141201_1.0001.6510")
        candidates = parse_count_response(f"2\n{uldk_record()}\n{second}")
        assert [c.region_code for c in candidates] == ["141201_1.0001.6509", "141201_1.0001.6510"]

    def test_count_zero(self):
        assert parse_count_response("0") == []

    def test_records_without_count_line(self):
        assert len(parse_count_response(f"{uldk_record()}\n{uldk_record()}")) == 2

    def test_skips_unparseable_records(self):
        candidates = parse_count_response(f"2\n{uldk_record()}\nbroken|record")
        assert len(candidates) == 1

    def test_not_found(self):
        with pytest.raises(NotFoundError):
            parse_count_response("-1")

    def test_minus_ten_is_upstream_error(self):
        with pytest.raises(UpstreamError):
            parse_count_response("-10")

    def test_other_negative_status(self):
        with pytest.raises(UpstreamError):
            parse_count_response("-2 przekroczono limit")

    def test_no_parsable_records(self):
        with pytest.raises(TransportError):
            parse_count_response("1\nbroken|record")

    def test_garbage_first_line(self):
        with pytest.raises(TransportError):
            parse_count_response("<html>Service Unavailable</html>")


# ---------------------------------------------------------------------------
# ULDK repository
# ---------------------------------------------------------------------------

class TestUldkRepository:
    @pytest.mark.asyncio
    async def test_lookup_by_id(self, httpx_mock):
        httpx_mock.add_response(url=ULDK_URL, text=f"0\n{uldk_record()}\n")
        repo = UldkRepository(CadastreConfig())
        try:
            candidates = await repo.lookup_by_id("141201_1.0001.6509")
        finally:
            await repo.close()

        assert len(candidates) == 1
        request = httpx_mock.get_requests()[0]
        assert request.url.params["request"] == "GetParcelById"
        assert request.url.params["id"] == "141201_1.0001.6509"
        assert request.url.params["srid"] == "4326"

    @pytest.mark.asyncio
    async def test_lookup_by_id_not_found(self, httpx_mock):
        httpx_mock.add_response(url=ULDK_URL, text="-1 brak wyników\n")
        repo = UldkRepository()
        try:
            assert await repo.lookup_by_id("141201_1.0001.9999") == []
        finally:
            await repo.close()

    @pytest.mark.asyncio
    async def test_upstream_error(self, httpx_mock):
        httpx_mock.add_response(url=ULDK_URL, text="-3 błędny identyfikator\n")
        repo = UldkRepository()
        try:
            with pytest.raises(UpstreamError):
                await repo.lookup_by_id("xx")
        finally:
            await repo.close()

    @pytest.mark.asyncio
    async def test_search(self, httpx_mock):
        second = uldk_record(region_code="141201_1.0002.6509")
        httpx_mock.add_response(url=ULDK_URL, text=f"2\n{uldk_record()}\n{second}\n")
        repo = UldkRepository()
        try:
            candidates = await repo.search("Piaseczno 6509")
        finally:
            await repo.close()

        assert len(candidates) == 2
        assert httpx_mock.get_requests()[0].url.params["request"] == "GetParcelByIdOrNr"

    @pytest.mark.asyncio
    async def test_search_not_found(self, httpx_mock):
        httpx_mock.add_response(url=ULDK_URL, text="-1\n")
        repo = UldkRepository()
        try:
            assert await repo.search("Nigdzie 1") == []
        finally:
            await repo.close()

    @pytest.mark.asyncio
    async def test_lookup_by_point(self, httpx_mock):
        httpx_mock.add_response(url=ULDK_URL, text=f"0\n{uldk_record()}\n")
        repo = UldkRepository()
        try:
            candidates = await repo.lookup_by_point(52.0003, 21.0003)
        finally:
            await repo.close()

        assert len(candidates) == 1
        params = httpx_mock.get_requests()[0].url.params
        assert params["request"] == "GetParcelByXY"
        assert params["xy"] == "21.0003,52.0003,4326"

    @pytest.mark.asyncio
    async def test_timeout(self, httpx_mock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))
        repo = UldkRepository()
        try:
            with pytest.raises(TransportError, match="timed out"):
                await repo.lookup_by_id("141201_1.0001.6509")
        finally:
            await repo.close()

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self, httpx_mock):
        httpx_mock.add_response(url=ULDK_URL, text="0\n")
        async with httpx.AsyncClient() as client:
            repo = UldkRepository(client=client)
            assert await repo.search("x1") == []
            await repo.close()
            assert not client.is_closed


# ---------------------------------------------------------------------------
# In-memory repository and factory
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_repo():
    return InMemoryCadastralRepository()


class TestInMemoryRepository:
    @pytest.mark.asyncio
    async def test_lookup_by_id(self, memory_repo):
        candidates = await memory_repo.lookup_by_id("141201_1.0001.6509")
        assert len(candidates) == 1
        assert candidates[0].commune == "Piaseczno (miasto)"

    @pytest.mark.asyncio
    async def test_lookup_by_id_not_found(self, memory_repo):
        assert await memory_repo.lookup_by_id("141201_1.0001.9999") == []

    @pytest.mark.asyncio
    async def test_search_by_district_and_number(self, memory_repo):
        candidates = await memory_repo.search("piaseczno 123/4")
        assert [c.parcel_number for c in candidates] == ["123/4"]

    @pytest.mark.asyncio
    async def test_search_by_region_code_prefix(self, memory_repo):
        candidates = await memory_repo.search("141201_1.0001")
        assert len(candidates) == 2

    @pytest.mark.asyncio
    async def test_lookup_by_point(self, memory_repo):
        candidates = await memory_repo.lookup_by_point(52.0813, 21.0127)
        assert [c.parcel_number for c in candidates] == ["6509"]

    @pytest.mark.asyncio
    async def test_lookup_by_point_outside(self, memory_repo):
        assert await memory_repo.lookup_by_point(54.0, 18.0) == []

    def test_custom_records(self):
        repo = InMemoryCadastralRepository(records=[uldk_record(), "not a record"])
        assert len(repo._parcels) == 1

    def test_satisfies_protocol(self, memory_repo):
        assert isinstance(memory_repo, CadastralRepository)


class TestFactory:
    def test_creates_memory_repository(self):
        repo = create_cadastral_repository(CadastreConfig(provider="memory"))
        assert isinstance(repo, InMemoryCadastralRepository)

    @pytest.mark.asyncio
    async def test_creates_uldk_repository(self):
        repo = create_cadastral_repository(CadastreConfig(provider="ULDK"))
        assert isinstance(repo, UldkRepository)
        await repo.close()

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown cadastre provider"):
            create_cadastral_repository(CadastreConfig(provider="nope"))
