"""ESRI or GeoServer envelope that carries no table rows at all."""

from __future__ import annotations

import re

from parcelwise.zoning.dialects.base import DialectSignature
from parcelwise.zoning.dialects.esri import is_esri
from parcelwise.zoning.dialects.geoserver import is_geoserver
from parcelwise.zoning.models import NotCovered

_ROW_RE = re.compile(r"<tr[^>]*>", re.IGNORECASE)


def matches(text: str) -> bool:
    return (is_esri(text) or is_geoserver(text)) and not _ROW_RE.search(text)


SIGNATURE = DialectSignature(
    name="empty_feature_table",
    matches=matches,
    extract=lambda text: NotCovered(),
)
