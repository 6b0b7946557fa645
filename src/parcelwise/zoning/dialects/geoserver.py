"""GeoServer ``featureInfo`` HTML tables.

Two schemas are common: the INSPIRE-style
``app.AktPlanowaniaPrzestrzennego.MPZP`` layer (``tytul``,
``dokumentuchwalajacy``, ``obowiazujeod``) and local ones such as
Szczecin's ``mpzp_obo_gra_02`` (``nazwa_plan``, ``nr_uch_uch``) or Elbląg's
``app.RysunkiAktuPlanowania.MPZP`` with zone level columns. Unlike ESRI, a
GeoServer header with no data rows means there is no plan at the point.
"""

from __future__ import annotations

import re

from parcelwise.zoning.dialects.base import (
    DialectSignature,
    first_of,
    first_table_row,
    resolution_name,
    soup_of,
)
from parcelwise.zoning.models import Covered, DialectOutcome, NotCovered, Unknown

_SIGNATURE_RE = re.compile(r"Geoserver GetFeatureInfo output", re.IGNORECASE)

DOCUMENT_TITLE_CHARS = 120


def is_geoserver(text: str) -> bool:
    return bool(_SIGNATURE_RE.search(text))


def extract(text: str) -> DialectOutcome:
    for table in soup_of(text).find_all("table", class_="featureInfo"):
        headers, data = first_table_row(table)
        if not headers:
            continue
        if data is None:
            return NotCovered()

        title = first_of(data, "tytul", "name")
        document = data.get("dokumentuchwalajacy")
        short_number = data.get("nr_uch_uch")
        short_date = first_of(data, "obowiazujeod", "data_obow", "data_uch_u")
        local_name = data.get("nazwa_plan")
        zone_plan_name = data.get("nazwa_planu")
        zone_number = data.get("numer_uchwaly")
        zone_date = data.get("data_uchwalenia")

        if document:
            plan_name = document[:DOCUMENT_TITLE_CHARS]
        elif zone_number:
            plan_name = resolution_name(zone_number, zone_date)
        elif short_number:
            plan_name = resolution_name(short_number, short_date)
        else:
            plan_name = zone_plan_name or local_name or title

        if plan_name or title or local_name or zone_plan_name:
            return Covered(
                plan_name=plan_name,
                symbol=data.get("symbol_w_planie"),
                purpose_description=first_of(
                    data, "przeznaczenie", "funkcja_podstawowa_opis", "funkcja_podstawowa"
                ),
            )

    return Unknown(reason="GeoServer table without plan columns")


SIGNATURE = DialectSignature(name="geoserver_table", matches=is_geoserver, extract=extract)
