"""Project-level non-DRF views.

This module contains the root landing endpoint used for quick service checks
and links to the interactive API documentation endpoints.
"""

from __future__ import annotations

from django.http import HttpRequest, JsonResponse

from solar.raster.registry import get_raster_proxy


def home(request: HttpRequest) -> JsonResponse:
    """Return basic service metadata and documentation links."""
    return JsonResponse(
        {
            "ok": True,
            "service": "solar-flux",
            "solar_api_configured": get_raster_proxy().is_configured,
            "docs": "/api/docs/",
            "redoc": "/api/redoc/",
        }
    )
