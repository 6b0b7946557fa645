"""Query normalization and resolution orchestration."""

from parcelwise.resolution.query import ParcelQuery, classify_query
from parcelwise.resolution.service import ResolutionResult, ResolutionService, guess_portal_url

__all__ = [
    "ParcelQuery",
    "ResolutionResult",
    "ResolutionService",
    "classify_query",
    "guess_portal_url",
]
