"""Zoning and land-use result models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator

from parcelwise.core.types import Point, ZoningStatus


class LandUseCode(BaseModel):
    """Interpretation of one land-use designation such as ``RIVa``."""

    code: str
    use_code: str
    soil_class: str | None = None
    description: str | None = None
    category: str | None = None


class LandUseResult(BaseModel):
    """Normalized land-use (soil class) probe result."""

    available: bool = False
    codes: list[str] = Field(default_factory=list)
    details: list[LandUseCode] = Field(default_factory=list)
    raw_diagnostic: str = ""
    error: str | None = None


class ZoningResult(BaseModel):
    """Normalized zoning-plan probe result."""

    status: ZoningStatus = ZoningStatus.UNKNOWN
    plan_name: str | None = None
    symbol: str | None = None
    purpose_description: str | None = None
    act_url: str | None = None
    raw_diagnostic: str = ""
    dialect: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _clear_fields_when_unknown(self) -> ZoningResult:
        if self.status == ZoningStatus.UNKNOWN:
            self.plan_name = None
            self.symbol = None
            self.purpose_description = None
            self.act_url = None
        return self


class ParcelInfo(BaseModel):
    """Joined result of the land-use and zoning probes for one point."""

    point: Point
    land_use: LandUseResult
    zoning: ZoningResult


# --- Dialect outcomes (tagged variants) ---


class Covered(BaseModel):
    kind: Literal["covered"] = "covered"
    plan_name: str | None = None
    symbol: str | None = None
    purpose_description: str | None = None
    act_url: str | None = None


class NotCovered(BaseModel):
    kind: Literal["not_covered"] = "not_covered"


class Unknown(BaseModel):
    kind: Literal["unknown"] = "unknown"
    reason: str = ""


class FeatureRef(BaseModel):
    """A per-feature detail page referenced from a zoning response."""

    host: str
    feature_id: str


class FeatureIndirection(BaseModel):
    """The response only links to per-feature pages that must be fetched."""

    kind: Literal["feature_indirection"] = "feature_indirection"
    refs: list[FeatureRef]


DialectOutcome = Annotated[
    Union[Covered, NotCovered, Unknown, FeatureIndirection],
    Field(discriminator="kind"),
]


def outcome_to_result(
    outcome: Covered | NotCovered | Unknown,
    *,
    raw: str,
    dialect: str | None,
) -> ZoningResult:
    """Turn a terminal dialect outcome into the public result contract."""
    if isinstance(outcome, Covered):
        return ZoningResult(
            status=ZoningStatus.COVERED,
            plan_name=outcome.plan_name,
            symbol=outcome.symbol,
            purpose_description=outcome.purpose_description,
            act_url=outcome.act_url,
            raw_diagnostic=raw,
            dialect=dialect,
        )
    if isinstance(outcome, NotCovered):
        return ZoningResult(status=ZoningStatus.NOT_COVERED, raw_diagnostic=raw, dialect=dialect)
    return ZoningResult(status=ZoningStatus.UNKNOWN, raw_diagnostic=raw, dialect=dialect)
