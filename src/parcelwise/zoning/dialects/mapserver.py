"""MapServer default GetFeatureInfo HTML (Sopot, Gorzów, Zamość, Rzeszów).

Key/value rows without any grouping into features::

    <TR><TH>Layer</TH><TD>mpzp_meta</TD></TR>
    <TR><TH>nazwa</TH><TD>plan name</TD></TR>
    <TR><TH>numer_uchwaly</TH><TD>XI/162/2007</TD></TR>
    <TR><TH>status</TH><TD>obowiazujacy</TD></TR>
"""

from __future__ import annotations

import re

from parcelwise.zoning.dialects.base import (
    DialectSignature,
    first_of,
    header_value_pairs,
    resolution_name,
)
from parcelwise.zoning.models import Covered, DialectOutcome, NotCovered, Unknown

_SIGNATURE_RE = re.compile(r"GetFeatureInfo results", re.IGNORECASE)
_ACTIVE_RE = re.compile(r"obowiazujacy|obowiązujący|aktywny", re.IGNORECASE)

BOOKKEEPING_KEYS = {"layer", "feature"}


def extract(text: str) -> DialectOutcome:
    data = header_value_pairs(text)
    if not set(data) - BOOKKEEPING_KEYS:
        return NotCovered()

    status = data.get("status", "")
    if status and not _ACTIVE_RE.search(status):
        return NotCovered()

    name = first_of(data, "nazwa", "name")
    number = first_of(data, "numer_uchwaly", "nr_uchwaly")
    if not name and not number:
        return Unknown(reason="MapServer feature without plan name or resolution")

    return Covered(plan_name=resolution_name(number, data.get("data")) or name)


SIGNATURE = DialectSignature(
    name="mapserver_pairs",
    matches=lambda text: bool(_SIGNATURE_RE.search(text)),
    extract=extract,
)
