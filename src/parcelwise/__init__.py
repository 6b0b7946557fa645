"""Parcel lookup with land-use and zoning-plan probing."""

__version__ = "0.1.0"
