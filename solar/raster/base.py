from __future__ import annotations

import io
import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np
import numpy.typing as npt
from PIL import Image

from solar.exceptions import DecodeError

GEOTIFF_CONTENT_TYPE = "image/tiff"
GEOTIFF_FILENAME = "solar-flux-data.tiff"


@dataclass(frozen=True)
class RasterPayload:
    """Raw GeoTIFF bytes relayed from the upstream service."""

    content: bytes
    content_type: str = GEOTIFF_CONTENT_TYPE
    filename: str = GEOTIFF_FILENAME

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


class RasterSource(Protocol):
    """Anything able to fetch raster bytes for an opaque identifier."""

    async def fetch_raster(self, raster_id: str) -> RasterPayload:
        """Return the raster bytes for `raster_id`."""


@dataclass(frozen=True)
class RasterImage:
    """Single-band raster decoded to row-major float64 samples."""

    width: int
    height: int
    samples: npt.NDArray[np.float64]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise DecodeError(
                "Raster dimensions must be positive: "
                f"{self.width}x{self.height}"
            )
        expected = self.width * self.height
        if self.samples.ndim != 1 or self.samples.size != expected:
            raise DecodeError(
                "Raster sample count does not match dimensions "
                f"({self.samples.size} != {self.width}*{self.height})"
            )

    @classmethod
    def from_band(cls, band: npt.ArrayLike) -> RasterImage:
        grid = np.asarray(band)
        if grid.ndim != 2:
            raise DecodeError(
                f"Expected a 2-D band, got {grid.ndim} dimensions"
            )
        height, width = grid.shape
        return cls(
            width=int(width),
            height=int(height),
            samples=np.ascontiguousarray(grid, dtype=np.float64).ravel(),
        )


@dataclass(frozen=True)
class NormalizationRange:
    """Min/max over positive samples; sentinels when none exist."""

    min: float = math.inf
    max: float = -math.inf

    @property
    def is_empty(self) -> bool:
        return self.min > self.max

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class PixelSurface:
    """RGBA pixels shaped (height, width, 4), one per raster sample."""

    width: int
    height: int
    pixels: npt.NDArray[np.uint8]

    def __post_init__(self) -> None:
        if self.pixels.shape != (self.height, self.width, 4):
            raise ValueError(
                f"Surface shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height}"
            )

    def pixel(self, index: int) -> tuple[int, int, int, int]:
        """Return the RGBA quadruple for row-major sample `index`."""

        row, col = divmod(index, self.width)
        r, g, b, a = (int(v) for v in self.pixels[row, col])
        return r, g, b, a

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        Image.fromarray(self.pixels).save(buffer, format="PNG")
        return buffer.getvalue()
