"""Resolve a zoning act reference to a directly downloadable document URL.

Act links found during zoning probing often point at a landing page or a
redirect script rather than the document itself. Downloading and storing
the bytes is left to the storage layer.
"""

from __future__ import annotations

import logging
import re

import httpx
from bs4 import BeautifulSoup

from parcelwise.core.config import DocumentConfig
from parcelwise.core.errors import TransportError
from parcelwise.core.http import fetch

logger = logging.getLogger(__name__)


class DocumentResolver:
    """Turns an act reference into a URL of the act document, or None."""

    def __init__(
        self,
        config: DocumentConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or DocumentConfig()
        self._owns_client = client is None
        self._http = client or httpx.AsyncClient(follow_redirects=True)
        self._link_re = re.compile(
            rf"{re.escape(self.config.extension)}(?:\?.*)?$",
            re.IGNORECASE,
        )

    async def resolve(self, url: str) -> str | None:
        """Return ``url`` if it already serves the document, else the first
        document link on the page it serves, else None."""
        try:
            resp = await fetch(
                self._http,
                url,
                timeout=self.config.timeout_seconds,
                label="document",
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": "application/pdf,*/*",
                },
            )
        except TransportError:
            return None

        if not resp.is_success:
            logger.info("[document] HTTP %d for %s", resp.status_code, url)
            return None

        content_type = resp.headers.get("content-type", "")
        if self.config.content_type_marker in content_type.lower():
            logger.info("[document] direct document at %s", url)
            return url

        link = self.find_document_link(resp.text, url)
        if link is None:
            logger.info("[document] no downloadable link found at %s", url)
        return link

    def find_document_link(self, html: str, base_url: str) -> str | None:
        """First link in ``html`` whose target has the document extension."""
        tag = BeautifulSoup(html, "html.parser").find(href=self._link_re)
        if tag is None:
            return None
        return absolutize(tag["href"].strip(), base_url)

    async def close(self) -> None:
        if self._owns_client:
            await self._http.aclose()


def absolutize(href: str, base_url: str) -> str:
    """Resolve protocol-relative and relative links against the base origin."""
    if href.startswith("//"):
        return f"https:{href}"
    if href.startswith(("http://", "https://")):
        return href
    base = httpx.URL(base_url)
    origin = f"{base.scheme}://{base.netloc.decode('ascii')}"
    return f"{origin}{'' if href.startswith('/') else '/'}{href}"
