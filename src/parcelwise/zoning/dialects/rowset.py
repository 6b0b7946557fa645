"""Oracle-style XML record sets (Warszawa).

::

    <GetFeatureInfo_Result><ROWSET name="MPZP_PRZEZNACZENIE_TERENU"><ROW>
      <FUN_SYMB>1.KDZ</FUN_SYMB><FUN_NAZWA>droga zbiorcza</FUN_NAZWA>
      <NAZWA_PLAN>otoczenie PKiN</NAZWA_PLAN>
    </ROW></ROWSET></GetFeatureInfo_Result>
"""

from __future__ import annotations

import re

from parcelwise.zoning.dialects.base import DialectSignature, clean, first_of, soup_of
from parcelwise.zoning.models import Covered, DialectOutcome, NotCovered

_SIGNATURE_RE = re.compile(r"<GetFeatureInfo_Result>", re.IGNORECASE)


def rows(text: str) -> list[dict[str, str]]:
    """Field maps of every non-empty ``<ROW>``, keys lower-cased."""
    records = []
    for row in soup_of(text).find_all("row"):
        record = {}
        for field in row.find_all(recursive=False):
            value = clean(field.get_text(" "))
            if value:
                record[field.name.lower()] = value
        if record:
            records.append(record)
    return records


def extract(text: str) -> DialectOutcome:
    records = rows(text)
    if not records:
        return NotCovered()

    first = records[0]
    return Covered(
        symbol=first_of(first, "fun_symb", "symbol"),
        purpose_description=first_of(first, "fun_nazwa", "przeznaczenie"),
        plan_name=first_of(first, "nazwa_plan", "nazwa"),
    )


SIGNATURE = DialectSignature(
    name="record_set",
    matches=lambda text: bool(_SIGNATURE_RE.search(text)),
    extract=extract,
)
