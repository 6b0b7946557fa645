"""Nested per-feature pages (e-mapa.net).

The zoning response only embeds iframes pointing at one detail page per
feature::

    <iframe src="//piaseczno.e-mapa.net/application/modules/pln/pln_gfi.php?id=1234">

Each detail page is a loose list of ``key: value`` lines, possibly with a
link to the adopting resolution. Detection and page parsing are pure; the
prober fetches the pages and hands them back to ``merge_features``.
"""

from __future__ import annotations

import re

from parcelwise.zoning.dialects.base import DialectSignature, first_of, resolution_name, soup_of
from parcelwise.zoning.models import Covered, DialectOutcome, FeatureIndirection, FeatureRef, Unknown

_IFRAME_RE = re.compile(
    r"""src=["']?//([^/"']+e-mapa\.net[^/"']*)/[^?"']*pln_gfi\.php\?id=(\d+)""",
    re.IGNORECASE,
)
_REDIRECT_HREF_RE = re.compile(r"getUchwala", re.IGNORECASE)
_DOCUMENT_HREF_RE = re.compile(r"\.pdf$", re.IGNORECASE)
_PLAN_ID_RE = re.compile(r"[?&]p=(\d+)")

DETAIL_PATH = "/application/modules/pln/pln_gfi.php"

# Zone boundary features carry the zone symbol; area features are a fallback.
PREFERRED_FEATURE_TYPES = ("str", "pow")

ACT_URL_KEY = "_act_url"
PLAN_ID_KEY = "_plan_id"

_EMPTY_VALUES = {"", "null", "-"}


def find_refs(text: str) -> list[FeatureRef]:
    """Distinct feature references in order of appearance."""
    refs: list[FeatureRef] = []
    seen: set[str] = set()
    for host, feature_id in _IFRAME_RE.findall(text):
        if feature_id in seen:
            continue
        seen.add(feature_id)
        refs.append(FeatureRef(host=host, feature_id=feature_id))
    return refs


def detail_url(ref: FeatureRef) -> str:
    return f"https://{ref.host}{DETAIL_PATH}?id={ref.feature_id}"


def absolute_url(href: str, host: str) -> str:
    """Resolve protocol-relative and host-relative links against ``host``."""
    if href.startswith("//"):
        return f"https:{href}"
    if not href.startswith("http"):
        return f"https://{host}{'' if href.startswith('/') else '/'}{href}"
    return href


def parse_feature_page(html: str, host: str) -> dict[str, str]:
    """Key/value fields of one detail page plus the resolution link, if any.

    Keys are lower-cased with whitespace runs replaced by ``_``. The link is
    stored under ``_act_url``; a redirect-style ``getUchwala`` link wins over a
    direct document link.
    """
    soup = soup_of(html)
    fields: dict[str, str] = {}

    for line in soup.get_text(" ").splitlines():
        key, sep, value = line.partition(":")
        key = "_".join(key.split()).lower()
        value = " ".join(value.split())
        if not sep or not key or value.lower() in _EMPTY_VALUES:
            continue
        fields[key] = value

    link = soup.find("a", href=_REDIRECT_HREF_RE)
    if link is not None:
        url = absolute_url(link["href"], host)
        fields[ACT_URL_KEY] = url
        plan_id = _PLAN_ID_RE.search(url)
        if plan_id:
            fields[PLAN_ID_KEY] = plan_id.group(1)
    else:
        link = soup.find("a", href=_DOCUMENT_HREF_RE)
        if link is not None:
            fields[ACT_URL_KEY] = absolute_url(link["href"], host)

    return fields


def merge_features(features: list[dict[str, str] | None]) -> Covered | Unknown:
    """Combine parsed detail pages into one outcome.

    Symbol and purpose come from the first feature of the most preferred
    type; plan name and act URL from the first feature that has them.
    """
    valid = [f for f in features if f]
    if not valid:
        return Unknown(reason="no feature page yielded data")

    best = valid[0]
    for feature_type in PREFERRED_FEATURE_TYPES:
        typed = [f for f in valid if f.get("typ") == feature_type]
        if typed:
            best = typed[0]
            break

    plan_name = None
    with_resolution = next((f for f in valid if f.get("uchwala")), None)
    if with_resolution is not None:
        plan_name = resolution_name(with_resolution["uchwala"], with_resolution.get("data_uchwaly"))

    with_link = next((f for f in valid if f.get(ACT_URL_KEY)), None)

    return Covered(
        plan_name=plan_name,
        symbol=first_of(best, "strefa_oznaczenie", "oznaczenie", "symbol"),
        purpose_description=first_of(best, "opis", "przeznaczenie", "funkcja"),
        act_url=with_link[ACT_URL_KEY] if with_link else None,
    )


def extract(text: str) -> DialectOutcome:
    return FeatureIndirection(refs=find_refs(text))


SIGNATURE = DialectSignature(
    name="feature_pages",
    matches=lambda text: bool(_IFRAME_RE.search(text)),
    extract=extract,
)
