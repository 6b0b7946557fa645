"""Parcel resolution orchestration.

Drives the cadastral repository for a query, feeds the chosen parcel's
centroid to the zoning prober and merges everything into one result. Holds
no state between calls.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from parcelwise.cadastre.models import ParcelCandidate
from parcelwise.cadastre.repository import CadastralRepository
from parcelwise.core.errors import TransportError, UpstreamError
from parcelwise.core.types import Point, QueryKind
from parcelwise.resolution.query import classify_query
from parcelwise.zoning.models import ParcelInfo
from parcelwise.zoning.prober import ZoningProber

logger = logging.getLogger(__name__)

_TRANSLITERATION = str.maketrans("ąćęłńóśźż", "acelnoszz")


class ResolutionResult(BaseModel):
    """Merged response of one resolution request."""

    query: str
    kind: QueryKind | None = None
    candidates: list[ParcelCandidate] = Field(default_factory=list)
    error: str | None = None
    parcel_info: ParcelInfo | None = None
    portal_url: str | None = None


def guess_portal_url(commune: str | None) -> str:
    """Best guess of the commune's public map portal address.

    ``Piaseczno (miasto)`` -> ``https://piaseczno.e-mapa.net/``
    """
    name = (commune or "").split("(")[0]
    slug = "-".join(name.lower().split()).translate(_TRANSLITERATION) or "unknown"
    return f"https://{slug}.e-mapa.net/"


class ResolutionService:
    """Resolves parcel queries and points against injected collaborators."""

    def __init__(self, repository: CadastralRepository, prober: ZoningProber) -> None:
        self._repository = repository
        self._prober = prober

    async def search(self, raw: str) -> ResolutionResult:
        """Look up candidate parcels for a query.

        Exact identifiers go to the single-result lookup first and fall back
        to the fuzzy search when it returns nothing.

        Raises:
            ValidationError: the query is too short.
        """
        query = classify_query(raw)
        result = ResolutionResult(query=query.raw, kind=query.kind)

        if query.kind == QueryKind.EXACT_ID:
            logger.info("Exact parcel id: %s", query.raw)
            candidates, error = await self._guarded(self._repository.lookup_by_id(query.raw))
            if candidates:
                result.candidates = candidates
                return result
            logger.info("Exact lookup empty (%s), falling back to fuzzy search", error or "not found")
        else:
            logger.info("Free-text parcel query: %s", query.raw)

        result.candidates, result.error = await self._guarded(self._repository.search(query.raw))
        return result

    async def resolve(self, raw: str, include_zoning: bool = True) -> ResolutionResult:
        """Search, then probe land use and zoning at the first located parcel."""
        result = await self.search(raw)
        if not include_zoning:
            return result

        located = next((c for c in result.candidates if c.centroid is not None), None)
        if located is None:
            return result

        result.parcel_info = await self._prober.probe(located.centroid)
        result.portal_url = guess_portal_url(located.commune)
        return result

    async def parcel_at(self, lat: float, lng: float) -> ResolutionResult:
        """Parcel containing a point."""
        result = ResolutionResult(query=f"{lat},{lng}")
        result.candidates, result.error = await self._guarded(
            self._repository.lookup_by_point(lat, lng)
        )
        return result

    async def parcel_info(self, lat: float, lng: float) -> ParcelInfo:
        """Land use and zoning at a point."""
        return await self._prober.probe(Point(lat=lat, lng=lng))

    @staticmethod
    async def _guarded(lookup) -> tuple[list[ParcelCandidate], str | None]:
        try:
            return await lookup, None
        except UpstreamError as exc:
            logger.warning("Cadastral service error %s", exc.code)
            return [], f"Cadastral service error: {exc.code}"
        except TransportError as exc:
            logger.warning("Cadastral service unreachable: %s", exc)
            return [], str(exc)
