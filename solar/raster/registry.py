from __future__ import annotations

from functools import lru_cache

from django.conf import settings

from .proxy import DEFAULT_BASE_URL, RasterProxy
from .renderer import FluxRenderer


@lru_cache(maxsize=1)
def get_raster_proxy() -> RasterProxy:
    """Return the proxy built from the configured credential and base URL."""

    timeout = getattr(settings, "SOLAR_REQUEST_TIMEOUT_SECONDS", None)
    return RasterProxy(
        api_key=getattr(settings, "SOLAR_API_KEY", None),
        base_url=getattr(settings, "SOLAR_API_BASE_URL", DEFAULT_BASE_URL),
        timeout_seconds=float(timeout) if timeout else None,
    )


def get_flux_renderer() -> FluxRenderer:
    return FluxRenderer(get_raster_proxy())
