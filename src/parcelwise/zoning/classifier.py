"""Format classifier: picks exactly one dialect for a zoning response.

Signatures are tried in order and the first match wins, so more specific
signatures come before looser ones. The cascade ends with a catch-all that
always matches and yields unknown.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from parcelwise.core.errors import FormatError
from parcelwise.zoning.dialects import (
    empty_table,
    emphasis,
    esri,
    feature_pages,
    geoserver,
    mapproxy,
    mapserver,
    rowset,
    sentinels,
)
from parcelwise.zoning.dialects.base import DialectSignature
from parcelwise.zoning.models import DialectOutcome, Unknown

logger = logging.getLogger(__name__)

UNRECOGNIZED = DialectSignature(
    name="unrecognized",
    matches=lambda text: True,
    extract=lambda text: Unknown(reason="no dialect matched"),
)

CASCADE: tuple[DialectSignature, ...] = (
    sentinels.NO_RESULT,
    sentinels.NO_SERVICE,
    sentinels.RASTER_ONLY,
    empty_table.SIGNATURE,
    feature_pages.SIGNATURE,
    rowset.SIGNATURE,
    geoserver.SIGNATURE,
    esri.SIGNATURE,
    mapserver.SIGNATURE,
    mapproxy.SIGNATURE,
    emphasis.SIGNATURE,
    UNRECOGNIZED,
)


class Classification(BaseModel):
    """The dialect chosen for a response and what its extractor returned."""

    dialect: str
    outcome: DialectOutcome


def classify(
    text: str,
    cascade: tuple[DialectSignature, ...] = CASCADE,
) -> Classification:
    """Run the cascade over ``text``.

    Never raises for malformed input: a ``FormatError`` from the chosen
    extractor downgrades the result to unknown.
    """
    for signature in cascade:
        if not signature.matches(text):
            continue
        try:
            outcome = signature.extract(text)
        except FormatError as exc:
            logger.warning("Dialect %s could not read response: %s", signature.name, exc)
            outcome = Unknown(reason=str(exc))
        logger.info("Zoning response classified as %s -> %s", signature.name, outcome.kind)
        return Classification(dialect=signature.name, outcome=outcome)

    return Classification(dialect=UNRECOGNIZED.name, outcome=Unknown(reason="no dialect matched"))
