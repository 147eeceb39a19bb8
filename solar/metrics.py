from __future__ import annotations

from prometheus_client import Counter, Histogram

solar_flux_upstream_requests_total = Counter(
    "solar_flux_upstream_requests_total",
    "Count of upstream GeoTIFF requests",
    labelnames=["outcome"],
)

solar_flux_upstream_latency_seconds = Histogram(
    "solar_flux_upstream_latency_seconds",
    "Latency of upstream GeoTIFF requests",
    buckets=(0.1, 0.3, 0.5, 1, 2, 5, 10, 20, 30),
)

solar_flux_renders_total = Counter(
    "solar_flux_renders_total",
    "Flux heat map renders by outcome",
    labelnames=["outcome"],
)
