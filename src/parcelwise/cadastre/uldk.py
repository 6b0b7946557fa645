"""ULDK (national parcel location service) repository over HTTP."""

from __future__ import annotations

import logging

import httpx

from parcelwise.cadastre.grammar import parse_count_response, parse_status_response
from parcelwise.cadastre.models import ParcelCandidate
from parcelwise.core.config import CadastreConfig
from parcelwise.core.errors import NotFoundError
from parcelwise.core.http import fetch

logger = logging.getLogger(__name__)

GET_BY_ID = "GetParcelById"
GET_BY_XY = "GetParcelByXY"
GET_BY_ID_OR_NR = "GetParcelByIdOrNr"


class UldkRepository:
    """Talks to the ULDK plain-text API.

    ``lookup_by_id`` and ``lookup_by_point`` use the single-result grammar,
    ``search`` the multi-result one.
    """

    def __init__(
        self,
        config: CadastreConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or CadastreConfig()
        self._owns_client = client is None
        self._http = client or httpx.AsyncClient()

    # -- public API ----------------------------------------------------------

    async def lookup_by_id(self, parcel_id: str) -> list[ParcelCandidate]:
        text = await self._call(GET_BY_ID, {"id": parcel_id})
        return self._single(text)

    async def search(self, text: str) -> list[ParcelCandidate]:
        body = await self._call(GET_BY_ID_OR_NR, {"id": text})
        try:
            return parse_count_response(body)
        except NotFoundError:
            return []

    async def lookup_by_point(self, lat: float, lng: float) -> list[ParcelCandidate]:
        text = await self._call(GET_BY_XY, {"xy": f"{lng},{lat},{self.config.srid}"})
        return self._single(text)

    async def close(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # -- internal ------------------------------------------------------------

    @staticmethod
    def _single(text: str) -> list[ParcelCandidate]:
        try:
            return [parse_status_response(text)]
        except NotFoundError:
            return []

    async def _call(self, method: str, params: dict[str, str]) -> str:
        query = {
            "request": method,
            **params,
            "result": self.config.result_fields,
            "srid": str(self.config.srid),
        }
        resp = await fetch(
            self._http,
            self.config.base_url,
            params=query,
            timeout=self.config.timeout_seconds,
            label=f"ULDK {method}",
        )
        logger.info("[ULDK %s] %s", method, resp.text[:150].replace("\n", "\\n"))
        return resp.text
