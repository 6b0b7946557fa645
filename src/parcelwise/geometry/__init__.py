"""Polygon text processing: ring parsing, centroid and area."""

from parcelwise.geometry.polygon import area_square_meters, centroid, parse_ring, strip_srid

__all__ = ["area_square_meters", "centroid", "parse_ring", "strip_srid"]
