"""MapProxy's minimal ``Information`` page (Legnica)."""

from __future__ import annotations

import re

from parcelwise.zoning.dialects.base import DialectSignature, header_value_pairs, resolution_name
from parcelwise.zoning.models import Covered, DialectOutcome, NotCovered

_SIGNATURE_RE = re.compile(r"<title>\s*Information\s*</title>", re.IGNORECASE)

# Placeholder used by this server for "no purpose recorded".
NO_PURPOSE = "N"


def extract(text: str) -> DialectOutcome:
    data = header_value_pairs(text)
    symbol = data.get("symbol")
    number = data.get("numer")
    if not symbol and not number:
        return NotCovered()

    purpose = data.get("przeznaczenie")
    return Covered(
        plan_name=resolution_name(number),
        symbol=symbol,
        purpose_description=purpose if purpose != NO_PURPOSE else None,
    )


SIGNATURE = DialectSignature(
    name="mapproxy_pairs",
    matches=lambda text: bool(_SIGNATURE_RE.search(text)),
    extract=extract,
)
