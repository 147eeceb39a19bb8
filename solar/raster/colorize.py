"""False-color mapping of flux samples onto an RGBA surface.

Samples <= 0, NaN and infinities are no-data: they are skipped when
computing the range and painted fully transparent. Positive samples are
normalized against the positive min/max and mapped through a two-segment ramp:

    0.0 -> (0, 0, 255)   blue
    0.5 -> (255, 255, 0) yellow
    1.0 -> (255, 0, 0)   red
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from solar.exceptions import DecodeError

from .base import NormalizationRange, PixelSurface, RasterImage

OPAQUE = 255
TRANSPARENT = 0


def valid_samples(samples: npt.NDArray[np.float64]) -> npt.NDArray[np.bool_]:
    return np.isfinite(samples) & (samples > 0)


def compute_range(samples: npt.NDArray[np.float64]) -> NormalizationRange:
    """Return min/max over positive samples in a single vectorized pass."""

    valid = valid_samples(samples)
    low = float(np.min(samples, where=valid, initial=math.inf))
    high = float(np.max(samples, where=valid, initial=-math.inf))
    return NormalizationRange(min=low, max=high)


def _round_half_up(values: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    # Matches JavaScript Math.round for non-negative inputs.
    return np.floor(values + 0.5)


def normalize(
    samples: npt.NDArray[np.float64], value_range: NormalizationRange
) -> npt.NDArray[np.float64]:
    """Scale samples into [0, 1]; a zero span maps every sample to 0."""

    if value_range.is_empty:
        raise DecodeError("Raster has no positive samples to normalize")
    if value_range.span == 0:
        return np.zeros_like(samples, dtype=np.float64)
    return (samples - value_range.min) / value_range.span


def ramp(normalized: npt.NDArray[np.float64]) -> npt.NDArray[np.uint8]:
    """Map normalized values to an (N, 3) array of RGB channels."""

    lower = normalized < 0.5
    t_low = normalized * 2
    t_high = (normalized - 0.5) * 2

    rising = _round_half_up(255 * t_low)
    red = np.where(lower, rising, 255.0)
    green = np.where(lower, rising, _round_half_up(255 * (1 - t_high)))
    blue = np.where(lower, _round_half_up(255 * (1 - t_low)), 0.0)

    rgb = np.stack([red, green, blue], axis=-1)
    return np.clip(rgb, 0, 255).astype(np.uint8)


def colorize(
    image: RasterImage, value_range: NormalizationRange
) -> PixelSurface:
    """Paint `image` into a surface of exactly width x height pixels."""

    samples = image.samples
    valid = valid_samples(samples)

    rgba = np.zeros((samples.size, 4), dtype=np.uint8)
    if valid.any():
        rgba[valid, :3] = ramp(normalize(samples[valid], value_range))
        rgba[valid, 3] = OPAQUE

    return PixelSurface(
        width=image.width,
        height=image.height,
        pixels=rgba.reshape(image.height, image.width, 4),
    )
