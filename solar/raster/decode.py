"""GeoTIFF decoding into a single float64 band."""

from __future__ import annotations

import logging

from rasterio.errors import RasterioError
from rasterio.io import MemoryFile

from solar.exceptions import DecodeError

from .base import RasterImage

logger = logging.getLogger(__name__)


def decode_geotiff(content: bytes) -> RasterImage:
    """Decode GeoTIFF bytes and return band 1 as a `RasterImage`.

    Whatever sample type the container stores (float32, int16, uint8, ...)
    is widened to float64 here.
    """

    if not content:
        raise DecodeError("Raster payload is empty")

    try:
        with MemoryFile(content) as memfile:
            with memfile.open() as dataset:
                if dataset.count < 1:
                    raise DecodeError("GeoTIFF contains no readable band")
                band = dataset.read(1)
    except DecodeError:
        raise
    except (RasterioError, OSError, ValueError) as exc:
        logger.info(
            "geotiff.decode_failed bytes=%s error=%s", len(content), exc
        )
        raise DecodeError(f"Invalid GeoTIFF payload: {exc}") from exc

    image = RasterImage.from_band(band)
    logger.debug(
        "geotiff.decoded width=%s height=%s dtype=%s",
        image.width,
        image.height,
        band.dtype,
    )
    return image
