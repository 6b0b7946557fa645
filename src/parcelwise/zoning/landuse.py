"""Land-use designation extraction from land-use service responses.

The national land-use service forwards to county servers that answer in
HTML, XML or plain text. Three strategies are tried in order, the first
that finds anything wins:

1. explicit ``OZNACZENIE`` (designation) field markers;
2. the designation taxonomy anywhere in the text (use code followed by a
   Roman-numeral soil class, e.g. ``RIVa``, ``PsV``);
3. a comma-separated list inside a pipe-delimited fragment.
"""

from __future__ import annotations

import re

from parcelwise.zoning.landuse_dict import describe_code
from parcelwise.zoning.models import LandUseResult

MAX_MARKER_VALUE_CHARS = 20

_MARKER_RE = re.compile(r"OZNACZENIE[^>]*>\s*([^<\n|]+)", re.IGNORECASE)
_TAXONOMY_RE = re.compile(
    r"\b(?:R|Ps|Ł|S|Br|Bi|Ba|Bz|B|Bp|Ls|Lz|N|W|dr|Tk|Ti|Tp)(?:I{1,3}|IV[ab]?|V|VI(?:z)?)\b"
)
_PIPE_FRAGMENT_RE = re.compile(
    r"\|\s*((?:[A-ZŁ][a-z]?(?:I{1,3}|IV[ab]?|V|VI)?(?:,\s*)?)+)\s*\|"
)


def _from_markers(text: str) -> list[str]:
    codes = []
    for match in _MARKER_RE.finditer(text):
        value = match.group(1).strip()
        if value and len(value) < MAX_MARKER_VALUE_CHARS and "oznaczenie" not in value.lower():
            codes.append(value)
    return codes


def _from_taxonomy(text: str) -> list[str]:
    return [match.group(0) for match in _TAXONOMY_RE.finditer(text)]


def _from_pipe_fragment(text: str) -> list[str]:
    match = _PIPE_FRAGMENT_RE.search(text)
    if match is None:
        return []
    return [
        part.strip()
        for part in match.group(1).split(",")
        if part.strip() and part.strip()[0].isupper()
    ]


def extract_codes(text: str) -> list[str]:
    """Designations found in ``text``, unique, in first-seen order."""
    for strategy in (_from_markers, _from_taxonomy, _from_pipe_fragment):
        codes = strategy(text)
        if codes:
            return list(dict.fromkeys(codes))
    return []


def parse_land_use(text: str, *, diagnostic_chars: int = 800) -> LandUseResult:
    """Normalize one land-use response."""
    codes = extract_codes(text)
    return LandUseResult(
        available=bool(codes),
        codes=codes,
        details=[describe_code(code) for code in codes],
        raw_diagnostic=text[:diagnostic_chars],
    )
