"""Dialect signature type and markup helpers shared by the extractors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from bs4 import BeautifulSoup

from parcelwise.zoning.models import DialectOutcome

RESOLUTION_WORD = "Uchwała"

_EMPTY_VALUES = {"", "null"}


@dataclass(frozen=True)
class DialectSignature:
    """A named (predicate, extractor) pair in the classification cascade."""

    name: str
    matches: Callable[[str], bool]
    extract: Callable[[str], DialectOutcome]


def soup_of(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def clean(value: str | None) -> str | None:
    """Collapse whitespace; map empty and ``null`` placeholders to None."""
    if value is None:
        return None
    text = " ".join(value.split())
    if text.lower() in _EMPTY_VALUES:
        return None
    return text


def first_of(data: dict[str, str], *keys: str) -> str | None:
    """First non-empty value among ``keys``; earlier keys win."""
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return None


def resolution_name(number: str | None, date: str | None = None) -> str | None:
    """``Uchwała <number> z dnia <date>``, or None without a number."""
    if not number:
        return None
    if date:
        return f"{RESOLUTION_WORD} {number} z dnia {date}"
    return f"{RESOLUTION_WORD} {number}"


def header_value_pairs(markup: str) -> dict[str, str]:
    """Map ``<th>key</th><td>value</td>`` sibling pairs (lower-cased keys).

    Header cells that are not immediately followed by a data cell, as in a
    column header row, are ignored.
    """
    data: dict[str, str] = {}
    for th in soup_of(markup).find_all("th"):
        cell = th.find_next_sibling()
        if cell is None or cell.name != "td":
            continue
        key = clean(th.get_text(" "))
        value = clean(cell.get_text(" "))
        if key and value:
            data[key.lower()] = value
    return data


def first_table_row(table) -> tuple[list[str], dict[str, str] | None]:
    """Column headers of ``table`` and its first data row keyed by header.

    The row is None when no row carries ``<td>`` cells, and ``{}`` when the
    first such row holds only empty or ``null`` values. Returns
    ``([], None)`` when the table has no header row.
    """
    rows = table.find_all("tr")
    if not rows:
        return [], None
    headers = [(clean(th.get_text(" ")) or "").lower() for th in rows[0].find_all("th")]
    if not headers:
        return [], None

    for row in rows[1:]:
        cells = row.find_all("td")
        if not cells:
            continue
        data: dict[str, str] = {}
        for header, cell in zip(headers, cells):
            value = clean(cell.get_text(" "))
            if header and value:
                data[header] = value
        return headers, data
    return headers, None
