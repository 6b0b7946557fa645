"""Parsers for the two plain-text grammars of the ULDK parcel service.

Grammar A (``GetParcelById``, ``GetParcelByXY``)::

    0
    141201_1.0001.6509|mazowieckie|piaseczyński|Piaseczno|Piaseczno|6509|SRID=4326;POLYGON((...))

Grammar B (``GetParcelByIdOrNr``)::

    2
    <record>
    <record>

A record has seven pipe-delimited fields; the seventh is geometry text and
is taken verbatim from the sixth pipe onwards.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError as ModelValidationError

from parcelwise.cadastre.models import ParcelCandidate
from parcelwise.core.errors import NotFoundError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

FIELD_COUNT = 7
NOT_FOUND_STATUS = "-1"


def _nth_pipe(line: str, n: int) -> int:
    """Index of the n-th ``|`` in ``line``, or -1."""
    index = -1
    for _ in range(n):
        index = line.find("|", index + 1)
        if index == -1:
            return -1
    return index


def parse_record(line: str) -> ParcelCandidate | None:
    """Parse one seven-field record, or return None if it is unusable."""
    boundary = _nth_pipe(line, FIELD_COUNT - 1)
    if boundary == -1:
        return None

    meta = [field.strip() for field in line[:boundary].split("|")]
    geometry = line[boundary + 1 :].strip()
    region_code, province, county, commune, district, parcel_number = meta

    try:
        return ParcelCandidate.from_fields(
            region_code=region_code,
            province=province,
            county=county,
            commune=commune,
            district=district,
            parcel_number=parcel_number,
            geometry_text=geometry or None,
        )
    except ModelValidationError:
        return None


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.strip().splitlines() if line.strip()]


def _check_negative(first: str) -> None:
    if first.split()[0] == NOT_FOUND_STATUS:
        raise NotFoundError("Parcel not found")
    if first.startswith("-"):
        raise UpstreamError(first)


def parse_status_response(text: str) -> ParcelCandidate:
    """Parse a Grammar A response into exactly one candidate.

    Raises:
        NotFoundError: status ``-1``.
        UpstreamError: any other negative status.
        TransportError: empty or unparseable body.
    """
    lines = _lines(text)
    if not lines:
        raise TransportError("Empty response from cadastral service")

    status = lines[0]
    _check_negative(status)

    if status == "0" and len(lines) >= 2 and "|" in lines[1]:
        record_line = lines[1]
    elif "|" in status:
        # Some responses omit the status line.
        record_line = status
    else:
        raise TransportError(f"Unexpected cadastral response: {status[:80]}")

    candidate = parse_record(record_line)
    if candidate is None:
        raise TransportError("Could not parse cadastral record")
    return candidate


def parse_count_response(text: str) -> list[ParcelCandidate]:
    """Parse a Grammar B response into zero or more candidates.

    Raises:
        NotFoundError: status ``-1``.
        UpstreamError: any other negative status.
        TransportError: empty or unparseable body.
    """
    lines = _lines(text)
    if not lines:
        raise TransportError("Empty response from cadastral service")

    first = lines[0]
    _check_negative(first)

    if "|" not in first:
        try:
            count = int(first)
        except ValueError:
            raise TransportError(f"Unexpected cadastral response: {first[:80]}") from None
        if count == 0:
            return []
        record_lines = [line for line in lines[1:] if "|" in line]
    else:
        # Records without a leading count line.
        record_lines = [line for line in lines if "|" in line]

    candidates = [c for c in (parse_record(line) for line in record_lines) if c is not None]
    if not candidates:
        raise TransportError("No parsable records in cadastral response")
    if len(candidates) < len(record_lines):
        logger.debug("Skipped %d unparsable record(s)", len(record_lines) - len(candidates))
    return candidates
