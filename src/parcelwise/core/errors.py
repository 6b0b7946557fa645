"""Error taxonomy for parcel and zoning resolution.

Only ``ValidationError`` is meant to reach API callers as an exception.
``NotFoundError`` is turned into an empty result, ``UpstreamError`` and
``TransportError`` into an ``error`` field next to an empty payload, and
``FormatError`` into an ``unknown`` zoning classification.
"""

from __future__ import annotations


class ParcelwiseError(Exception):
    """Base class for all resolution errors."""


class ValidationError(ParcelwiseError):
    """The caller's query is malformed or too short."""


class NotFoundError(ParcelwiseError):
    """A service answered with an explicit "nothing here"."""


class UpstreamError(ParcelwiseError):
    """A service answered with an explicit error status other than not-found."""

    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        super().__init__(message or f"Upstream service error: {code}")


class TransportError(ParcelwiseError):
    """Timeout, connection failure or an unparseable response."""


class FormatError(ParcelwiseError):
    """A response claimed a dialect but its structure could not be read."""
