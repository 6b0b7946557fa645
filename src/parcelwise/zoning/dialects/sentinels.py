"""Plain-text sentinels and the raster-only marker of the national proxy."""

from __future__ import annotations

import re

from parcelwise.zoning.dialects.base import DialectSignature
from parcelwise.zoning.models import NotCovered, Unknown

_NO_RESULT_RE = re.compile(r"brak wyniku dla wskazanego obszaru", re.IGNORECASE)
_NO_SERVICE_RE = re.compile(r"brak serwisu dla wskazanego obszaru", re.IGNORECASE)
_RASTER_TITLE_RE = re.compile(r"<title>\s*RysunekAktuPlanowania\s*</title>", re.IGNORECASE)


NO_RESULT = DialectSignature(
    name="no_result_sentinel",
    matches=lambda text: bool(_NO_RESULT_RE.search(text)),
    extract=lambda text: NotCovered(),
)

NO_SERVICE = DialectSignature(
    name="no_service_sentinel",
    matches=lambda text: bool(_NO_SERVICE_RE.search(text)),
    extract=lambda text: Unknown(reason="no map service registered for this area"),
)

RASTER_ONLY = DialectSignature(
    name="raster_only",
    matches=lambda text: bool(_RASTER_TITLE_RE.search(text)),
    extract=lambda text: Unknown(reason="plan published as raster only"),
)
