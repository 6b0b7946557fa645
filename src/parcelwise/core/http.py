"""Shared HTTP helper that maps httpx failures onto TransportError."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from parcelwise.core.errors import TransportError

logger = logging.getLogger(__name__)


async def fetch(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float,
    label: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """GET ``url`` with its own timeout.

    Timeouts, transport failures and malformed URLs are raised as
    ``TransportError`` scoped to this single call. The status code is not
    checked here.
    """
    try:
        resp = await client.get(
            url,
            params=params,
            headers=headers,
            timeout=httpx.Timeout(timeout),
        )
    except httpx.TimeoutException as exc:
        logger.warning("[%s] timed out after %.1fs", label, timeout)
        raise TransportError(f"{label}: request timed out") from exc
    except httpx.HTTPError as exc:
        logger.warning("[%s] transport error: %s", label, exc)
        raise TransportError(f"{label}: {exc}") from exc
    except httpx.InvalidURL as exc:
        logger.warning("[%s] invalid URL %r: %s", label, url, exc)
        raise TransportError(f"{label}: invalid URL: {exc}") from exc

    logger.debug("[%s] %s -> %d, %d chars", label, resp.url, resp.status_code, len(resp.text))
    return resp
