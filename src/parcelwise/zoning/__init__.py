"""Land-use and zoning-plan probing for geographic points."""

from parcelwise.zoning.classifier import CASCADE, Classification, classify
from parcelwise.zoning.models import LandUseResult, ParcelInfo, ZoningResult
from parcelwise.zoning.prober import ZoningProber

__all__ = [
    "CASCADE",
    "Classification",
    "LandUseResult",
    "ParcelInfo",
    "ZoningProber",
    "ZoningResult",
    "classify",
]
