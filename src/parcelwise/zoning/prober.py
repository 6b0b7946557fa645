"""Land-use and zoning-plan probes for a single point.

Both probes go through a fixed retry ladder of GetFeatureInfo requests and
run concurrently; neither can fail the other. Only transport-level failure
on every rung is reported as an error; anything else ends in a best-effort
classification.
"""

from __future__ import annotations

import asyncio
import logging
import re

import httpx
from pydantic import BaseModel, Field

from parcelwise.core.concurrency import gather_bounded
from parcelwise.core.config import MapServiceConfig, ProbeAttempt
from parcelwise.core.errors import TransportError
from parcelwise.core.http import fetch
from parcelwise.core.types import Point
from parcelwise.zoning.classifier import classify
from parcelwise.zoning.dialects.feature_pages import detail_url, merge_features, parse_feature_page
from parcelwise.zoning.landuse import parse_land_use
from parcelwise.zoning.models import (
    FeatureIndirection,
    FeatureRef,
    LandUseResult,
    ParcelInfo,
    ZoningResult,
    outcome_to_result,
)
from parcelwise.zoning.wms import feature_info_params

logger = logging.getLogger(__name__)

_SERVICE_EXCEPTION_RE = re.compile(r"<ServiceException", re.IGNORECASE)


class LadderResult(BaseModel):
    """Outcome of walking a retry ladder."""

    text: str = ""
    errors: list[str] = Field(default_factory=list)
    attempts: int = 0

    @property
    def transport_failed(self) -> bool:
        """True when nothing usable came back and every attempt failed to connect."""
        return not self.text and self.attempts > 0 and len(self.errors) == self.attempts


class ZoningProber:
    """Queries the land-use and zoning-plan map services."""

    def __init__(
        self,
        config: MapServiceConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or MapServiceConfig()
        self._owns_client = client is None
        self._http = client or httpx.AsyncClient()

    # -- public API ----------------------------------------------------------

    async def probe(self, point: Point) -> ParcelInfo:
        """Run both probes concurrently and join their results."""
        land_use, zoning = await asyncio.gather(
            self.probe_land_use(point),
            self.probe_zoning(point),
        )
        return ParcelInfo(point=point, land_use=land_use, zoning=zoning)

    async def probe_land_use(self, point: Point) -> LandUseResult:
        cfg = self.config
        ladder = await self._walk_ladder(
            point,
            url=cfg.land_use_url,
            layers=cfg.land_use_layers,
            size=cfg.land_use_image_size,
            ladder=cfg.land_use_ladder,
            label="land-use",
        )
        if not ladder.text:
            return LandUseResult(error=self._ladder_error(ladder))
        return parse_land_use(ladder.text, diagnostic_chars=cfg.land_use_diagnostic_chars)

    async def probe_zoning(self, point: Point) -> ZoningResult:
        cfg = self.config
        ladder = await self._walk_ladder(
            point,
            url=cfg.zoning_url,
            layers=cfg.zoning_layers,
            size=cfg.zoning_image_size,
            ladder=cfg.zoning_ladder,
            label="zoning",
            fallback_layers=cfg.zoning_fallback_layers,
        )
        if not ladder.text:
            return ZoningResult(error=self._ladder_error(ladder))

        raw = ladder.text[: cfg.zoning_diagnostic_chars]
        classification = classify(ladder.text)
        outcome = classification.outcome
        if isinstance(outcome, FeatureIndirection):
            outcome = merge_features(await self._fetch_features(outcome.refs))
        return outcome_to_result(outcome, raw=raw, dialect=classification.dialect)

    async def close(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # -- internal ------------------------------------------------------------

    @staticmethod
    def _ladder_error(ladder: LadderResult) -> str | None:
        if not ladder.transport_failed:
            return None
        return f"Map service unreachable: {ladder.errors[-1]}"

    def _usable(self, text: str) -> bool:
        return len(text) >= self.config.min_usable_length

    async def _get(self, url: str, params: dict, label: str) -> str:
        resp = await fetch(
            self._http,
            url,
            params=params,
            timeout=self.config.timeout_seconds,
            label=label,
        )
        return resp.text

    async def _walk_ladder(
        self,
        point: Point,
        *,
        url: str,
        layers: str,
        size: int,
        ladder: list[ProbeAttempt],
        label: str,
        fallback_layers: str | None = None,
    ) -> LadderResult:
        result = LadderResult()
        for rung, attempt in enumerate(ladder, start=1):
            rung_label = f"{label} #{rung} {attempt.info_format} {attempt.version}"
            params = feature_info_params(
                point,
                layers=layers,
                info_format=attempt.info_format,
                version=attempt.version,
                size=size,
                half_width_deg=self.config.bbox_half_width_deg,
                feature_count=self.config.feature_count,
            )
            result.attempts += 1
            try:
                text = await self._get(url, params, rung_label)
                if fallback_layers and _SERVICE_EXCEPTION_RE.search(text):
                    logger.info("[%s] ServiceException, retrying with layers %s", rung_label, fallback_layers)
                    params.update({"LAYERS": fallback_layers, "QUERY_LAYERS": fallback_layers})
                    text = await self._get(url, params, f"{rung_label} fallback")
            except TransportError as exc:
                result.errors.append(str(exc))
                continue

            if self._usable(text):
                result.text = text
                return result
            logger.info("[%s] no usable content (%d chars)", rung_label, len(text))

        logger.info("[%s] retry ladder exhausted", label)
        return result

    async def _fetch_feature(self, ref: FeatureRef) -> dict[str, str] | None:
        url = detail_url(ref)
        try:
            resp = await fetch(
                self._http,
                url,
                timeout=self.config.feature_page_timeout_seconds,
                label=f"feature {ref.feature_id}",
            )
        except TransportError:
            return None
        if not resp.is_success:
            logger.info("[feature %s] HTTP %d", ref.feature_id, resp.status_code)
            return None
        return parse_feature_page(resp.text, ref.host)

    async def _fetch_features(self, refs: list[FeatureRef]) -> list[dict[str, str] | None]:
        limit = self.config.max_feature_pages
        selected = refs[:limit]
        logger.info("Fetching %d of %d feature page(s)", len(selected), len(refs))
        return await gather_bounded(
            [lambda ref=ref: self._fetch_feature(ref) for ref in selected],
            limit=limit,
        )
