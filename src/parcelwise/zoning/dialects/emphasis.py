"""Free-form pages that mark content with emphasis tags (igeomap.pl)::

    <b>Miejscowy plan zagospodarowania przestrzennego ...</b>
    <i>Uchwała XX/YY/ZZ z dnia 2010-05-12</i>
    <a href="https://mpzp.igeomap.pl/doc/.../123.pdf">Pokaż treść uchwały</a>

The last occurrence of each marker wins.
"""

from __future__ import annotations

import re

from parcelwise.zoning.dialects.base import RESOLUTION_WORD, DialectSignature, clean, soup_of
from parcelwise.zoning.models import Covered, DialectOutcome, Unknown

MIN_TITLE_CHARS = 5
CALL_TO_ACTION_RE = re.compile(r"^\s*Pokaż treść uchwały", re.IGNORECASE)
_DOCUMENT_HREF_RE = re.compile(r"\.pdf$", re.IGNORECASE)


def find_parts(text: str) -> tuple[str | None, str | None, str | None]:
    """(title, resolution citation, document URL), each the last one found."""
    soup = soup_of(text)

    titles = [
        title
        for b in soup.find_all("b")
        if (title := clean(b.get_text())) and len(title) >= MIN_TITLE_CHARS
    ]
    citations = [
        citation
        for i in soup.find_all("i")
        if (citation := clean(i.get_text())) and citation.startswith(RESOLUTION_WORD)
    ]
    links = [
        a["href"]
        for a in soup.find_all("a", href=_DOCUMENT_HREF_RE)
        if CALL_TO_ACTION_RE.match(a.get_text())
    ]

    return (
        titles[-1] if titles else None,
        citations[-1] if citations else None,
        links[-1] if links else None,
    )


def matches(text: str) -> bool:
    title, citation, _ = find_parts(text)
    return bool(title or citation)


def extract(text: str) -> DialectOutcome:
    title, citation, document_url = find_parts(text)
    if not (title or citation):
        return Unknown(reason="no emphasised plan title or citation")
    return Covered(plan_name=citation or title, act_url=document_url)


SIGNATURE = DialectSignature(name="emphasis_tags", matches=matches, extract=extract)
