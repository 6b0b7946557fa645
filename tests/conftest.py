"""Shared test fixtures and helpers."""

from __future__ import annotations

from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(*parts: str) -> str:
    """Read a text fixture relative to ``tests/fixtures``."""
    return FIXTURES_DIR.joinpath(*parts).read_text(encoding="utf-8")


def uldk_record(
    region_code: str = "141201_1.0001.6509",
    geometry: str = "SRID=4326;POLYGON((21.0 52.0,21.001 52.0,21.0 52.001,21.0 52.0))",
) -> str:
    """A seven-field ULDK record line."""
    return f"{region_code}|mazowieckie|piaseczyński|Piaseczno|Piaseczno|6509|{geometry}"
