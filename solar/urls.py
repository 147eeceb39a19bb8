from __future__ import annotations

from django.urls import path

from .views import FluxDataProxyView, FluxMapPngView, FluxMapView

urlpatterns = [
    path(
        "api/getFluxData",
        FluxDataProxyView.as_view(),
        name="solar-flux-data",
    ),
    path(
        "api/v1/solar/flux.png",
        FluxMapPngView.as_view(),
        name="solar-flux-png",
    ),
    path(
        "api/v1/solar/flux-map/",
        FluxMapView.as_view(),
        name="solar-flux-map",
    ),
]
