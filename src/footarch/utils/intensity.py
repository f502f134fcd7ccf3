"""Intensity transforms on RGBA pixel buffers"""
import numpy as np

from ..constants import (
    LUMA_WEIGHT_RED,
    LUMA_WEIGHT_GREEN,
    LUMA_WEIGHT_BLUE,
    MAX_INTENSITY,
    MIN_CONTRAST_RANGE,
)
from ..models import PixelBuffer


def to_uint8(values: np.ndarray) -> np.ndarray:
    """
    Store real-valued samples as 8-bit values.

    Rounds to nearest (ties to even) and clamps to [0, 255], the same
    conversion an 8-bit clamped canvas buffer applies on write.

    Args:
        values: Array of real-valued samples

    Returns:
        uint8 array of the same shape
    """
    return np.clip(np.rint(values), 0, MAX_INTENSITY).astype(np.uint8)


def compute_luminance(rgb: np.ndarray) -> np.ndarray:
    """
    Compute BT.601 luma from an (..., 3+) channel array.

    Args:
        rgb: Array whose last axis holds at least R, G, B

    Returns:
        float64 luminance array with the channel axis removed
    """
    r = rgb[..., 0].astype(np.float64)
    g = rgb[..., 1].astype(np.float64)
    b = rgb[..., 2].astype(np.float64)
    return r * LUMA_WEIGHT_RED + g * LUMA_WEIGHT_GREEN + b * LUMA_WEIGHT_BLUE


def to_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """
    Replace R, G and B with the pixel luminance, in place.

    Alpha is left unchanged. Applying this twice gives the same buffer as
    applying it once.

    Args:
        buffer: RGBA buffer, mutated in place

    Returns:
        The same buffer
    """
    gray = to_uint8(compute_luminance(buffer.data))
    buffer.data[..., :3] = gray[..., np.newaxis]
    return buffer


def stretch_contrast(buffer: PixelBuffer) -> PixelBuffer:
    """
    Rescale the gray channel to the full [0, 255] range, in place.

    The range floor of 1 handles uniform images, which all map to 0.

    Args:
        buffer: Grayscale RGBA buffer, mutated in place

    Returns:
        The same buffer
    """
    gray = buffer.data[..., 0].astype(np.float64)
    if gray.size == 0:
        return buffer

    min_val = gray.min()
    max_val = gray.max()
    value_range = (max_val - min_val) or MIN_CONTRAST_RANGE

    stretched = to_uint8((gray - min_val) / value_range * MAX_INTENSITY)
    buffer.data[..., :3] = stretched[..., np.newaxis]
    return buffer
