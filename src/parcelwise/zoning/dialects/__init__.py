"""Zoning-plan response dialects.

Each module recognises one vendor's GetFeatureInfo output and exposes a
``DialectSignature``. The classification order lives in
``parcelwise.zoning.classifier``.
"""

from parcelwise.zoning.dialects.base import DialectSignature

__all__ = ["DialectSignature"]
