"""ESRI ArcGIS Server HTML tables.

Seen in Kraków, Wrocław, Opole, Katowice and Poznań::

    <html xmlns:esri_wms="...">
    <h5>FeatureInfoCollection - layer name: '...'</h5>
    <table><tr><th>Uchwalenie</th><th>Oznaczenie</th><th>Nazwa MPZP</th></tr>
    <tr><td>XII/131/11</td><td>KP.1</td><td>STARE MIASTO</td></tr></table>

Every commune names its columns differently, so each logical field has a
list of synonyms, fuller names first. A header without data rows is left
as unknown: these servers also emit a metadata header for layers that have
nothing to do with the point.
"""

from __future__ import annotations

import re

from parcelwise.core.errors import FormatError
from parcelwise.zoning.dialects.base import (
    DialectSignature,
    first_of,
    first_table_row,
    resolution_name,
    soup_of,
)
from parcelwise.zoning.models import Covered, DialectOutcome, Unknown

_SIGNATURE_RE = re.compile(r"esri_wms|FeatureInfoCollection", re.IGNORECASE)

SYMBOL_KEYS = ("oznaczenie", "nr planu", "fun_symb")
PLAN_NAME_KEYS = ("nazwa mpzp", "nazwa planu", "tytul", "plan")
RESOLUTION_KEYS = ("uchwalenie", "nr uchwały", "pla_nr")
DATE_KEYS = ("data uchwalenia", "data_uchwalenia", "obowiazujeod")
PURPOSE_KEYS = ("opis_oznac", "rodzaj oznaczenia", "przeznaczenie")


def is_esri(text: str) -> bool:
    return bool(_SIGNATURE_RE.search(text))


def extract(text: str) -> DialectOutcome:
    tables = soup_of(text).find_all("table")
    if not tables:
        raise FormatError("ESRI response without a feature table")

    for table in tables:
        _, data = first_table_row(table)
        if not data:
            continue

        symbol = first_of(data, *SYMBOL_KEYS)
        plan_name = first_of(data, *PLAN_NAME_KEYS)
        resolution = first_of(data, *RESOLUTION_KEYS)
        if not (plan_name or symbol or resolution):
            continue

        date = first_of(data, *DATE_KEYS)
        return Covered(
            plan_name=resolution_name(resolution, date) or plan_name,
            symbol=symbol,
            purpose_description=first_of(data, *PURPOSE_KEYS),
        )

    return Unknown(reason="ESRI table without data rows")


SIGNATURE = DialectSignature(name="esri_table", matches=is_esri, extract=extract)
