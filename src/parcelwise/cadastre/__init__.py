"""Cadastral parcel lookup: grammars, repositories and models."""

from parcelwise.cadastre.models import ParcelCandidate
from parcelwise.cadastre.repository import (
    CadastralRepository,
    InMemoryCadastralRepository,
    create_cadastral_repository,
)
from parcelwise.cadastre.uldk import UldkRepository

__all__ = [
    "CadastralRepository",
    "InMemoryCadastralRepository",
    "ParcelCandidate",
    "UldkRepository",
    "create_cadastral_repository",
]
