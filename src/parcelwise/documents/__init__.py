"""Act document URL resolution."""

from parcelwise.documents.resolver import DocumentResolver

__all__ = ["DocumentResolver"]
