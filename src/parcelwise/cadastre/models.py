"""Cadastral data models."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from parcelwise.core.types import Point
from parcelwise.geometry import area_square_meters, centroid, strip_srid


class ParcelCandidate(BaseModel):
    """A cadastral parcel returned by a lookup."""

    region_code: str = ""
    province: str = ""
    county: str = ""
    commune: str = ""
    district: str = ""
    parcel_number: str = ""
    geometry_text: str | None = None
    centroid: Point | None = None
    area_square_meters: int | None = None

    @model_validator(mode="after")
    def _require_identity(self) -> ParcelCandidate:
        if not self.region_code and not self.parcel_number:
            raise ValueError("region_code or parcel_number must be non-empty")
        return self

    @classmethod
    def from_fields(
        cls,
        region_code: str,
        province: str,
        county: str,
        commune: str,
        district: str,
        parcel_number: str,
        geometry_text: str | None,
    ) -> ParcelCandidate:
        """Build a candidate and derive centroid and area from its geometry."""
        geometry = strip_srid(geometry_text) if geometry_text else None
        return cls(
            region_code=region_code,
            province=province,
            county=county,
            commune=commune,
            district=district,
            parcel_number=parcel_number,
            geometry_text=geometry or None,
            centroid=centroid(geometry),
            area_square_meters=area_square_meters(geometry),
        )

    @property
    def label(self) -> str:
        """Short human-readable label, e.g. ``dz. 6509, obr. Piaseczno``."""
        parts = [f"dz. {self.parcel_number or '?'}"]
        if self.district:
            parts.append(f"obr. {self.district}")
        return ", ".join(parts)
