"""Land-use (EGiB) designations and soil quality classes."""

from __future__ import annotations

import re

from parcelwise.zoning.models import LandUseCode

# code -> (description, category)
LAND_USE_TYPES: dict[str, tuple[str, str]] = {
    "R": ("arable land", "agricultural"),
    "Ł": ("permanent meadow", "agricultural"),
    "Ps": ("permanent pasture", "agricultural"),
    "S": ("orchard", "agricultural"),
    "Br": ("built-up agricultural land", "agricultural"),
    "Wsr": ("land under fish ponds", "agricultural"),
    "W": ("ditches", "agricultural"),
    "Lzr": ("wooded land on agricultural use", "agricultural"),
    "Ls": ("forest", "forest"),
    "Lz": ("wooded and shrub land", "forest"),
    "ZL": ("land designated for afforestation", "forest"),
    "B": ("residential land", "built-up"),
    "Ba": ("industrial land", "built-up"),
    "Bi": ("other built-up land", "built-up"),
    "Bp": ("urbanised undeveloped land", "urbanised"),
    "Bz": ("recreational land", "urbanised"),
    "dr": ("roads", "transport"),
    "Tk": ("railway land", "transport"),
    "Ti": ("other transport land", "transport"),
    "Ws": ("standing surface water", "water"),
    "Wp": ("flowing surface water", "water"),
    "Wm": ("internal sea waters", "water"),
    "K": ("mining land", "special"),
    "Tb": ("miscellaneous land", "special"),
    "Tr": ("reclaimed land", "special"),
    "Tp": ("technical infrastructure land", "special"),
    "N": ("wasteland", "other"),
}

SOIL_CLASSES: dict[str, str] = {
    "I": "best quality soil",
    "II": "very good soil",
    "IIIa": "good soil",
    "IIIb": "good soil",
    "IVa": "average soil",
    "IVb": "average soil",
    "V": "poor soil",
    "VI": "poorest soil",
    "VIz": "poorest soil, suitable for afforestation",
}

# Optional functional prefix (OFU), use code (OZU), optional soil class (OZK):
# RIVa, PsV, B-RIIIa, Ls
_DESIGNATION_RE = re.compile(
    r"^([A-ZŁa-z]{1,3}?)(?:-([A-ZŁa-z]{1,3}?))?(I{1,3}[ab]?|IV[ab]?|VIz|VI|V)?$"
)


def describe_code(raw: str) -> LandUseCode:
    """Interpret one designation; unknown codes keep only ``code``."""
    code = raw.strip()
    match = _DESIGNATION_RE.match(code)
    if match is None:
        return LandUseCode(code=code, use_code=code)

    prefix, use, soil_class = match.groups()
    use_code = use or prefix
    known = LAND_USE_TYPES.get(use_code) or LAND_USE_TYPES.get(prefix)

    description = known[0] if known else None
    if description and soil_class in SOIL_CLASSES:
        description = f"{description}, class {soil_class} ({SOIL_CLASSES[soil_class]})"

    return LandUseCode(
        code=code,
        use_code=use_code,
        soil_class=soil_class,
        description=description,
        category=known[1] if known else None,
    )
