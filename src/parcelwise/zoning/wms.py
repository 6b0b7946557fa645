"""WMS GetFeatureInfo request construction.

WMS 1.1.1 and 1.3.0 disagree on the axis order of an EPSG:4326 bounding
box: 1.1.1 uses ``lng,lat`` while 1.3.0 follows the CRS definition and uses
``lat,lng``. They also name the pixel parameters differently.
"""

from __future__ import annotations

from typing import Any

from parcelwise.core.types import Point

WMS_111 = "1.1.1"
WMS_130 = "1.3.0"
SUPPORTED_VERSIONS = (WMS_111, WMS_130)


def bbox(point: Point, half_width_deg: float, version: str) -> str:
    """Bounding box string centred on ``point`` in the version's axis order."""
    min_lat, max_lat = point.lat - half_width_deg, point.lat + half_width_deg
    min_lng, max_lng = point.lng - half_width_deg, point.lng + half_width_deg
    if version == WMS_130:
        return f"{min_lat},{min_lng},{max_lat},{max_lng}"
    return f"{min_lng},{min_lat},{max_lng},{max_lat}"


def feature_info_params(
    point: Point,
    *,
    layers: str,
    info_format: str,
    version: str = WMS_111,
    size: int = 11,
    half_width_deg: float = 0.0005,
    feature_count: int = 20,
) -> dict[str, Any]:
    """Query parameters of a GetFeatureInfo request for the centre pixel."""
    if version not in SUPPORTED_VERSIONS:
        raise ValueError(
            f"Unsupported WMS version {version!r}. "
            f"Supported: {', '.join(SUPPORTED_VERSIONS)}"
        )

    centre = size // 2
    params: dict[str, Any] = {
        "SERVICE": "WMS",
        "VERSION": version,
        "REQUEST": "GetFeatureInfo",
        "LAYERS": layers,
        "QUERY_LAYERS": layers,
        "BBOX": bbox(point, half_width_deg, version),
        "WIDTH": size,
        "HEIGHT": size,
        "INFO_FORMAT": info_format,
        "FEATURE_COUNT": feature_count,
    }
    if version == WMS_130:
        params.update({"CRS": "EPSG:4326", "I": centre, "J": centre})
    else:
        params.update({"SRS": "EPSG:4326", "X": centre, "Y": centre})
    return params
