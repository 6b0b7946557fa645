"""Cadastral repository protocol, in-memory implementation and factory.

The resolution service only talks to a ``CadastralRepository``; whether the
parcels come from the national ULDK service or from fixture records is
decided once, by configuration.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from parcelwise.cadastre.grammar import parse_record
from parcelwise.cadastre.models import ParcelCandidate
from parcelwise.core.config import CadastreConfig
from parcelwise.geometry import parse_ring


@runtime_checkable
class CadastralRepository(Protocol):
    """Protocol for parcel lookups.

    Not-found is an empty list. Service faults raise ``UpstreamError`` or
    ``TransportError``.
    """

    async def lookup_by_id(self, parcel_id: str) -> list[ParcelCandidate]: ...

    async def search(self, text: str) -> list[ParcelCandidate]: ...

    async def lookup_by_point(self, lat: float, lng: float) -> list[ParcelCandidate]: ...

    async def close(self) -> None: ...


_FIXTURE_RECORDS = [
    "141201_1.0001.6509|mazowieckie|piaseczyński|Piaseczno (miasto)|Piaseczno|6509|"
    "SRID=4326;POLYGON((21.0120 52.0810,21.0135 52.0810,21.0135 52.0819,21.0120 52.0819,"
    "21.0120 52.0810))",
    "141201_1.0001.123/4|mazowieckie|piaseczyński|Piaseczno (miasto)|Piaseczno|123/4|"
    "SRID=4326;POLYGON((21.0200 52.0850,21.0210 52.0850,21.0205 52.0858,21.0200 52.0850))",
    "126101_1.0001.112/2|małopolskie|Kraków|Kraków|Śródmieście|112/2|"
    "SRID=4326;POLYGON((19.9370 50.0610,19.9380 50.0610,19.9380 50.0616,19.9370 50.0616,"
    "19.9370 50.0610))",
    "146501_1.0001.1/1|mazowieckie|Warszawa|Warszawa|Śródmieście|1/1|",
]


def _point_in_ring(lat: float, lng: float, candidate: ParcelCandidate) -> bool:
    ring = parse_ring(candidate.geometry_text)
    if len(ring) < 3:
        return False
    inside = False
    j = len(ring) - 1
    for i, p in enumerate(ring):
        q = ring[j]
        if (p.lat > lat) != (q.lat > lat):
            cross = (q.lng - p.lng) * (lat - p.lat) / (q.lat - p.lat) + p.lng
            if lng < cross:
                inside = not inside
        j = i
    return inside


class InMemoryCadastralRepository:
    """Repository backed by fixture records in the ULDK record format."""

    def __init__(
        self,
        config: CadastreConfig | None = None,
        records: list[str] | None = None,
    ) -> None:
        self.config = config or CadastreConfig(provider="memory")
        self._parcels: list[ParcelCandidate] = []
        for line in records if records is not None else _FIXTURE_RECORDS:
            candidate = parse_record(line)
            if candidate is not None:
                self._parcels.append(candidate)

    async def lookup_by_id(self, parcel_id: str) -> list[ParcelCandidate]:
        return [p for p in self._parcels if p.region_code == parcel_id][:1]

    async def search(self, text: str) -> list[ParcelCandidate]:
        needle = text.strip().lower()
        results = []
        for parcel in self._parcels:
            haystacks = (
                parcel.region_code.lower(),
                f"{parcel.district} {parcel.parcel_number}".lower(),
                f"{parcel.commune} {parcel.parcel_number}".lower(),
            )
            if any(needle in h for h in haystacks):
                results.append(parcel)
        return results

    async def lookup_by_point(self, lat: float, lng: float) -> list[ParcelCandidate]:
        return [p for p in self._parcels if _point_in_ring(lat, lng, p)][:1]

    async def close(self) -> None:
        return None


def create_cadastral_repository(config: CadastreConfig) -> CadastralRepository:
    """Factory: select and instantiate a repository based on config.provider."""

    from parcelwise.cadastre.uldk import UldkRepository

    registry: dict[str, type] = {
        "uldk": UldkRepository,
        "memory": InMemoryCadastralRepository,
    }
    provider = config.provider.lower()
    if provider not in registry:
        available = ", ".join(sorted(registry))
        raise ValueError(
            f"Unknown cadastre provider {config.provider!r}. "
            f"Available: {available}"
        )
    return registry[provider](config)
