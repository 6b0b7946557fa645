"""Core type definitions shared across parcelwise modules."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class QueryKind(StrEnum):
    """How a parcel query string is interpreted."""

    EXACT_ID = "exact_id"
    FREE_TEXT = "free_text"


class ZoningStatus(StrEnum):
    """Zoning plan coverage of a point."""

    COVERED = "covered"
    NOT_COVERED = "not_covered"
    UNKNOWN = "unknown"


class Point(BaseModel):
    """A WGS84 position in degrees."""

    lat: float
    lng: float
