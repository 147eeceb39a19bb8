from __future__ import annotations

import base64
import hashlib
from typing import Any
from urllib.parse import urlencode

from django.urls import reverse

from .metadata import FluxMapMetadata, legend
from .raster.registry import get_flux_renderer
from .raster.renderer import FluxRender


def _hash_png(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


async def render_flux(source_url: str) -> FluxRender:
    """Render the annual flux layer behind `source_url`."""

    return await get_flux_renderer().render(source_url)


async def render_flux_png(source_url: str) -> tuple[bytes, str]:
    """Render a flux heat map PNG and return content + hash."""

    result = await render_flux(source_url)
    content = result.surface.to_png()
    return content, _hash_png(content)


def flux_download_url(raster_id: str) -> str:
    return f"{reverse('solar-flux-data')}?{urlencode({'id': raster_id})}"


async def build_flux_map(
    source_url: str, metadata: FluxMapMetadata
) -> dict[str, Any]:
    """Render the heat map and bundle it with legend and display metadata."""

    result = await render_flux(source_url)
    encoded = base64.b64encode(result.surface.to_png()).decode("ascii")
    return {
        "raster_id": result.raster_id,
        "width": result.width,
        "height": result.height,
        "range": {
            "min": result.value_range.min,
            "max": result.value_range.max,
        },
        "legend": legend(),
        "metadata": metadata.display(),
        "image": f"data:image/png;base64,{encoded}",
        "download_url": flux_download_url(result.raster_id),
    }
