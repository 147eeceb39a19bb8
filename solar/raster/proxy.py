from __future__ import annotations

import logging
import time
from typing import Final

import httpx

from solar.exceptions import (
    ConfigurationError,
    InternalError,
    InvalidRequest,
    UpstreamError,
)
from solar.metrics import (
    solar_flux_upstream_latency_seconds,
    solar_flux_upstream_requests_total,
)

from .base import GEOTIFF_CONTENT_TYPE, RasterPayload, RasterSource

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL: Final[str] = "https://solar.googleapis.com/v1"
MAX_ERROR_SNIPPET_CHARS = 1600


class RasterProxy(RasterSource):
    """Relay GeoTIFF bytes from the Solar API `geoTiff:get` endpoint.

    The API key is supplied at construction and only ever travels to the
    upstream service. Every call re-fetches; nothing is cached or retried.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = (api_key or "").strip() or None
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.geotiff_url = f"{self.base_url}/geoTiff:get"
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    async def fetch_raster(self, raster_id: str) -> RasterPayload:
        if self._api_key is None:
            raise ConfigurationError("Solar API key is not configured")
        if not raster_id or not raster_id.strip():
            raise InvalidRequest("Missing raster id")

        response = await self._get(raster_id)
        if not response.is_success:
            snippet = self._response_snippet(response)
            solar_flux_upstream_requests_total.labels(outcome="error").inc()
            logger.warning(
                "Solar API geotiff upstream error status=%s body=%s",
                response.status_code,
                snippet or "<empty>",
            )
            raise UpstreamError(response.status_code, snippet)

        solar_flux_upstream_requests_total.labels(outcome="success").inc()
        return RasterPayload(
            content=response.content,
            content_type=GEOTIFF_CONTENT_TYPE,
        )

    async def _get(self, raster_id: str) -> httpx.Response:
        started = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                return await client.get(
                    self.geotiff_url,
                    params={"id": raster_id, "key": self._api_key},
                    headers={"Accept": GEOTIFF_CONTENT_TYPE},
                )
        except httpx.HTTPError as exc:
            solar_flux_upstream_requests_total.labels(outcome="network").inc()
            logger.warning(
                "Solar API geotiff request failed error=%s",
                exc.__class__.__name__,
            )
            raise InternalError("Solar API geotiff request failed") from exc
        except Exception as exc:
            solar_flux_upstream_requests_total.labels(outcome="error").inc()
            logger.exception("Unexpected error fetching geotiff")
            raise InternalError("Unexpected error fetching geotiff") from exc
        finally:
            solar_flux_upstream_latency_seconds.observe(
                time.monotonic() - started
            )

    def _response_snippet(self, response: httpx.Response) -> str | None:
        try:
            text = response.text.strip()
        except Exception:
            return None
        if not text:
            return None
        normalized = " ".join(text.splitlines())
        if len(normalized) > MAX_ERROR_SNIPPET_CHARS:
            normalized = f"{normalized[:MAX_ERROR_SNIPPET_CHARS]}..."
        return normalized

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return (
            "RasterProxy("
            f"base_url={self.base_url}, configured={self.is_configured}, "
            f"timeout={self.timeout_seconds}"
            ")"
        )
