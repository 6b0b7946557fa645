"""Tests for act document URL resolution."""

from __future__ import annotations

import httpx
import pytest

from parcelwise.core.config import DocumentConfig
from parcelwise.documents import DocumentResolver
from parcelwise.documents.resolver import absolutize

ACT_URL = "https://piaseczno.e-mapa.net/application/modules/pln/pln.php?request=getUchwala&p=88"


class TestAbsolutize:
    def test_protocol_relative(self):
        assert absolutize("//cdn.example.pl/a.pdf", ACT_URL) == "https://cdn.example.pl/a.pdf"

    def test_absolute(self):
        assert absolutize("http://example.pl/a.pdf", ACT_URL) == "http://example.pl/a.pdf"

    def test_root_relative(self):
        assert absolutize("/docs/a.pdf", ACT_URL) == "https://piaseczno.e-mapa.net/docs/a.pdf"

    def test_relative(self):
        assert absolutize("docs/a.pdf", ACT_URL) == "https://piaseczno.e-mapa.net/docs/a.pdf"


class TestDocumentResolver:
    @pytest.mark.asyncio
    async def test_direct_document(self, httpx_mock):
        resolver = DocumentResolver(DocumentConfig())
        try:
            httpx_mock.add_response(
                url=ACT_URL,
                content=b"%PDF-1.4",
                headers={"Content-Type": "application/pdf"},
            )
            assert await resolver.resolve(ACT_URL) == ACT_URL

            request = httpx_mock.get_requests()[0]
            assert request.headers["User-Agent"] == "parcelwise/0.1"
            assert "application/pdf" in request.headers["Accept"]
        finally:
            await resolver.close()

    @pytest.mark.asyncio
    async def test_link_in_landing_page(self, httpx_mock):
        resolver = DocumentResolver(DocumentConfig())
        try:
            httpx_mock.add_response(
                url=ACT_URL,
                html='<html><body><a href="/pliki/uchwala_XXV_200_2012.PDF?v=2">Pobierz</a></body></html>',
            )
            assert await resolver.resolve(ACT_URL) == (
                "https://piaseczno.e-mapa.net/pliki/uchwala_XXV_200_2012.PDF?v=2"
            )
        finally:
            await resolver.close()

    @pytest.mark.asyncio
    async def test_no_link(self, httpx_mock):
        resolver = DocumentResolver(DocumentConfig())
        try:
            httpx_mock.add_response(url=ACT_URL, html="<html><body>Brak dokumentu</body></html>")
            assert await resolver.resolve(ACT_URL) is None
        finally:
            await resolver.close()

    @pytest.mark.asyncio
    async def test_http_error(self, httpx_mock):
        resolver = DocumentResolver(DocumentConfig())
        try:
            httpx_mock.add_response(url=ACT_URL, status_code=404)
            assert await resolver.resolve(ACT_URL) is None
        finally:
            await resolver.close()

    @pytest.mark.asyncio
    async def test_timeout(self, httpx_mock):
        resolver = DocumentResolver(DocumentConfig())
        try:
            httpx_mock.add_exception(httpx.ReadTimeout("timed out"))
            assert await resolver.resolve(ACT_URL) is None
        finally:
            await resolver.close()

    def test_find_document_link_ignores_other_links(self):
        resolver = DocumentResolver(DocumentConfig())
        html = '<a href="/index.html">Start</a><a href="//docs.example.pl/plan.pdf">Plan</a>'
        assert resolver.find_document_link(html, ACT_URL) == "https://docs.example.pl/plan.pdf"

    @pytest.mark.asyncio
    async def test_malformed_url(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"%PDF-1.4"))
        async with httpx.AsyncClient(transport=transport) as client:
            resolver = DocumentResolver(client=client)
            assert await resolver.resolve("http://[::1/x") is None
