"""Flux heat map rendering pipeline.

extract id -> acquire bytes -> decode band 1 -> range -> colorize -> surface.
Each stage fails fast; a failed render never yields a partial surface.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

from solar.exceptions import (
    AcquisitionFailed,
    DecodeError,
    FluxError,
    InvalidRequest,
    RenderCancelled,
    RenderSuperseded,
)
from solar.metrics import solar_flux_renders_total

from .base import NormalizationRange, PixelSurface, RasterPayload, RasterSource
from .colorize import colorize, compute_range
from .decode import decode_geotiff

logger = logging.getLogger(__name__)

RASTER_ID_PARAM = "id"


def extract_raster_id(source_url: str) -> str:
    """Return the `id` query parameter of a data-layer URL."""

    if not source_url or not source_url.strip():
        raise InvalidRequest("Source URL is empty")
    try:
        query = urlsplit(source_url.strip()).query
    except ValueError as exc:
        raise InvalidRequest(f"Malformed source URL: {exc}") from exc
    values = parse_qs(query).get(RASTER_ID_PARAM) or []
    raster_id = values[0].strip() if values else ""
    if not raster_id:
        raise InvalidRequest("Could not extract id from source URL")
    return raster_id


@dataclass(frozen=True)
class FluxRender:
    raster_id: str
    surface: PixelSurface
    value_range: NormalizationRange

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height


class FluxRenderer:
    """Turn a data-layer URL into a false-color RGBA surface."""

    def __init__(self, source: RasterSource) -> None:
        self._source = source

    async def render(
        self,
        source_url: str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> FluxRender:
        try:
            result = await self._render(source_url, cancel)
        except FluxError as exc:
            solar_flux_renders_total.labels(outcome=exc.code).inc()
            raise
        solar_flux_renders_total.labels(outcome="success").inc()
        return result

    async def _render(
        self, source_url: str, cancel: asyncio.Event | None
    ) -> FluxRender:
        raster_id = extract_raster_id(source_url)
        payload = await self._acquire(raster_id, cancel)

        image = decode_geotiff(payload.content)
        value_range = compute_range(image.samples)
        if value_range.is_empty:
            raise DecodeError("Raster has no positive samples")

        surface = colorize(image, value_range)
        logger.debug(
            "flux.rendered id=%s width=%s height=%s min=%s max=%s",
            raster_id,
            surface.width,
            surface.height,
            value_range.min,
            value_range.max,
        )
        return FluxRender(
            raster_id=raster_id, surface=surface, value_range=value_range
        )

    async def _acquire(
        self, raster_id: str, cancel: asyncio.Event | None
    ) -> RasterPayload:
        if cancel is None:
            return await self._fetch(raster_id)
        if cancel.is_set():
            raise RenderCancelled("Render cancelled before acquisition")

        fetch = asyncio.ensure_future(self._fetch(raster_id))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait(
                {fetch, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            waiter.cancel()
            if not fetch.done():
                fetch.cancel()
                await asyncio.gather(fetch, return_exceptions=True)

        if fetch.cancelled():
            raise RenderCancelled("Render cancelled during acquisition")
        return fetch.result()

    async def _fetch(self, raster_id: str) -> RasterPayload:
        try:
            return await self._source.fetch_raster(raster_id)
        except Exception as exc:
            raise AcquisitionFailed(exc) from exc


class RenderSequencer:
    """Discard results of renders overtaken by a newer one.

    Each call takes the next generation number; when it finishes, any
    outcome from a generation older than the latest raises
    `RenderSuperseded` so a stale surface never replaces a newer one.
    """

    def __init__(self, renderer: FluxRenderer) -> None:
        self._renderer = renderer
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def render(
        self,
        source_url: str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> FluxRender:
        self._generation += 1
        generation = self._generation
        try:
            result = await self._renderer.render(source_url, cancel=cancel)
        except FluxError as exc:
            if generation != self._generation:
                raise RenderSuperseded(
                    f"Render {generation} superseded by {self._generation}"
                ) from exc
            raise
        if generation != self._generation:
            raise RenderSuperseded(
                f"Render {generation} superseded by {self._generation}"
            )
        return result
