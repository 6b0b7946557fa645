"""Parcel query classification."""

from __future__ import annotations

import re

from pydantic import BaseModel

from parcelwise.core.errors import ValidationError
from parcelwise.core.types import QueryKind

MIN_QUERY_LENGTH = 2

# TERYT parcel identifier: 141201_1.0001.6509, 141201_1.0001.AR_2.6509,
# 141201_1.0001.123/4
EXACT_ID_RE = re.compile(r"^\d{6}_\d\.\d{4}\..+$")


class ParcelQuery(BaseModel):
    """A caller's parcel query and how it will be looked up."""

    raw: str
    kind: QueryKind


def classify_query(raw: str | None) -> ParcelQuery:
    """Validate and classify a query string.

    Raises:
        ValidationError: the stripped query is shorter than two characters.
    """
    text = (raw or "").strip()
    if len(text) < MIN_QUERY_LENGTH:
        raise ValidationError(f"Query must be at least {MIN_QUERY_LENGTH} characters")
    kind = QueryKind.EXACT_ID if EXACT_ID_RE.match(text) else QueryKind.FREE_TEXT
    return ParcelQuery(raw=text, kind=kind)
