from __future__ import annotations

import asyncio

import numpy as np
import numpy.typing as npt
from rasterio.io import MemoryFile
from rasterio.transform import from_origin

from solar.raster.base import RasterPayload, RasterSource

FLUX_URL = (
    "https://solar.googleapis.com/v1/geoTiff:get"
    "?id=abc123&key=upstream-key"
)


def geotiff_bytes(values: npt.ArrayLike, dtype: str = "float32") -> bytes:
    """Build a single-band GeoTIFF in memory; 1-D input becomes one row."""

    data = np.asarray(values, dtype=dtype)
    if data.ndim == 1:
        data = data.reshape(1, -1)
    height, width = data.shape
    with MemoryFile() as memfile:
        with memfile.open(
            driver="GTiff",
            height=height,
            width=width,
            count=1,
            dtype=dtype,
            crs="EPSG:4326",
            transform=from_origin(-122.0, 37.0, 0.0001, 0.0001),
        ) as dst:
            dst.write(data, 1)
        return memfile.read()


class FakeRasterSource(RasterSource):
    """Returns fixed bytes and records requested ids."""

    def __init__(self, content: bytes) -> None:
        self.content = content
        self.requested: list[str] = []

    async def fetch_raster(self, raster_id: str) -> RasterPayload:
        self.requested.append(raster_id)
        return RasterPayload(content=self.content)


class FailingRasterSource(RasterSource):
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def fetch_raster(self, raster_id: str) -> RasterPayload:
        raise self.error


class BlockingRasterSource(RasterSource):
    """Never answers; records whether the fetch was cancelled."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.cancelled = False

    async def fetch_raster(self, raster_id: str) -> RasterPayload:
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        raise AssertionError("unreachable")


class GatedRasterSource(RasterSource):
    """Holds fetches for ids that have a gate until the gate is opened."""

    def __init__(self, content: bytes) -> None:
        self.content = content
        self.gates: dict[str, asyncio.Event] = {}

    async def fetch_raster(self, raster_id: str) -> RasterPayload:
        gate = self.gates.get(raster_id)
        if gate is not None:
            await gate.wait()
        return RasterPayload(content=self.content)
