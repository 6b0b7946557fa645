"""Planar helpers for WKT-like POLYGON / MULTIPOLYGON text.

Only the outer ring of the first polygon is read; holes are ignored.
Coordinates are expected as ``lng lat`` pairs in degrees.
"""

from __future__ import annotations

import math
import re

from parcelwise.core.types import Point

METERS_PER_DEGREE = 111_320.0

_SRID_PREFIX_RE = re.compile(r"^\s*SRID=\d+;", re.IGNORECASE)
_OUTER_RING_RE = re.compile(r"\(\(+([^()]+)\)")


def strip_srid(text: str) -> str:
    """Remove an EWKT ``SRID=nnnn;`` prefix."""
    return _SRID_PREFIX_RE.sub("", text).strip()


def parse_ring(text: str | None) -> list[Point]:
    """Return the numeric vertices of the outer ring.

    Pairs that do not parse as two finite numbers are dropped.
    """
    if not text:
        return []
    match = _OUTER_RING_RE.search(text)
    if match is None:
        return []

    vertices: list[Point] = []
    for pair in match.group(1).split(","):
        parts = pair.split()
        if len(parts) < 2:
            continue
        try:
            lng, lat = float(parts[0]), float(parts[1])
        except ValueError:
            continue
        if not (math.isfinite(lng) and math.isfinite(lat)):
            continue
        vertices.append(Point(lat=lat, lng=lng))
    return vertices


def centroid(text: str | None) -> Point | None:
    """Vertex mean of the outer ring, or None below three vertices."""
    ring = parse_ring(text)
    if len(ring) < 3:
        return None
    return Point(
        lat=sum(p.lat for p in ring) / len(ring),
        lng=sum(p.lng for p in ring) / len(ring),
    )


def area_square_meters(text: str | None) -> int | None:
    """Approximate ring area in square meters, or None below three vertices.

    Vertices are projected to local meters with an equirectangular
    approximation anchored at the first vertex, then the shoelace formula
    is applied.
    """
    ring = parse_ring(text)
    if len(ring) < 3:
        return None

    origin = ring[0]
    m_lat = METERS_PER_DEGREE
    m_lng = METERS_PER_DEGREE * math.cos(math.radians(origin.lat))
    xy = [((p.lng - origin.lng) * m_lng, (p.lat - origin.lat) * m_lat) for p in ring]

    doubled = 0.0
    for i, (x1, y1) in enumerate(xy):
        x2, y2 = xy[(i + 1) % len(xy)]
        doubled += x1 * y2 - x2 * y1
    return round(abs(doubled) / 2)
