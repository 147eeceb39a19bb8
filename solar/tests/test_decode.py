from __future__ import annotations

# ruff: noqa: S101
import numpy as np
import pytest

from solar.exceptions import DecodeError
from solar.raster.decode import decode_geotiff
from solar.tests.fakes import geotiff_bytes


def test_decode_float32_band_row_major() -> None:
    content = geotiff_bytes([[1.5, 2.5, 3.5], [4.5, 5.5, 6.5]])
    image = decode_geotiff(content)
    assert (image.width, image.height) == (3, 2)
    assert image.samples.dtype == np.float64
    assert image.samples.tolist() == [1.5, 2.5, 3.5, 4.5, 5.5, 6.5]


@pytest.mark.parametrize("dtype", ["int16", "uint8", "float64"])
def test_decode_widens_native_sample_types(dtype: str) -> None:
    content = geotiff_bytes([[0, 7], [12, 3]], dtype=dtype)
    image = decode_geotiff(content)
    assert image.samples.dtype == np.float64
    assert image.samples.tolist() == [0.0, 7.0, 12.0, 3.0]


def test_decode_rejects_empty_payload() -> None:
    with pytest.raises(DecodeError, match="empty"):
        decode_geotiff(b"")


def test_decode_rejects_non_tiff_bytes() -> None:
    with pytest.raises(DecodeError, match="Invalid GeoTIFF"):
        decode_geotiff(b"<html>quota exceeded</html>")


def test_decode_rejects_truncated_tiff() -> None:
    content = geotiff_bytes([[1.0, 2.0], [3.0, 4.0]])
    with pytest.raises(DecodeError):
        decode_geotiff(content[:16])
