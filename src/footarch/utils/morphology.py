"""Binarization and morphological operations on footprint masks"""
import numpy as np
from scipy import ndimage

from ..constants import (
    ADAPTIVE_BLOCK_SIZE_DEFAULT,
    ADAPTIVE_BIAS_DEFAULT,
    MORPH_KERNEL_SIZE_DEFAULT,
)
from .validation import validate_kernel_size


def compute_integral_image(values: np.ndarray) -> np.ndarray:
    """
    Compute a zero-padded summed-area table.

    Args:
        values: 2D integer array of shape (H, W)

    Returns:
        int64 array of shape (H+1, W+1) where [y, x] is the sum of values[:y, :x]
    """
    height, width = values.shape
    integral = np.zeros((height + 1, width + 1), dtype=np.int64)
    integral[1:, 1:] = values.astype(np.int64).cumsum(axis=0).cumsum(axis=1)
    return integral


def compute_local_mean(gray: np.ndarray, half_window: int) -> np.ndarray:
    """
    Mean over the square window centered on each pixel, clipped to the image.

    Edge windows shrink to their in-bounds part (no padding, no reflection),
    so border pixels average over fewer samples.

    Args:
        gray: 2D intensity array of shape (H, W)
        half_window: Half-width of the window

    Returns:
        float64 array of local means, shape (H, W)
    """
    height, width = gray.shape
    integral = compute_integral_image(gray)

    rows = np.arange(height)
    cols = np.arange(width)
    top = np.maximum(rows - half_window, 0)
    bottom = np.minimum(rows + half_window + 1, height)
    left = np.maximum(cols - half_window, 0)
    right = np.minimum(cols + half_window + 1, width)

    window_sum = (
        integral[np.ix_(bottom, right)]
        - integral[np.ix_(top, right)]
        - integral[np.ix_(bottom, left)]
        + integral[np.ix_(top, left)]
    )
    count = np.outer(bottom - top, right - left)

    return window_sum / count


def adaptive_threshold(gray: np.ndarray,
                       block_size: int = ADAPTIVE_BLOCK_SIZE_DEFAULT,
                       bias: float = ADAPTIVE_BIAS_DEFAULT) -> np.ndarray:
    """
    Local mean thresholding: dark pixels become footprint.

    A pixel is True when its intensity is strictly below the local mean
    minus ``bias``. Uses an integral image, so the cost does not grow with
    the block size.

    Args:
        gray: 2D intensity array of shape (H, W)
        block_size: Side of the local window (half-width = block_size // 2)
        bias: Constant subtracted from the local mean

    Returns:
        New boolean mask of shape (H, W)
    """
    half_window = validate_kernel_size(block_size, 'block_size')
    mean = compute_local_mean(gray, half_window)
    return gray.astype(np.float64) < (mean - bias)


def _structuring_size(kernel_size: int) -> int:
    return 2 * validate_kernel_size(kernel_size, 'kernel_size') + 1


def dilate(mask: np.ndarray, kernel_size: int = MORPH_KERNEL_SIZE_DEFAULT) -> np.ndarray:
    """
    Binary dilation with a square element and replicate-edge borders.

    Args:
        mask: Boolean mask
        kernel_size: Side of the square structuring element

    Returns:
        New boolean mask, True where any neighbor in the window is True
    """
    size = _structuring_size(kernel_size)
    dilated = ndimage.maximum_filter(mask.astype(np.uint8), size=size, mode='nearest')
    return dilated > 0


def erode(mask: np.ndarray, kernel_size: int = MORPH_KERNEL_SIZE_DEFAULT) -> np.ndarray:
    """
    Binary erosion with a square element and replicate-edge borders.

    Out-of-grid neighbors take the value of the nearest edge pixel, so a
    footprint touching the border is not eaten away from outside.

    Args:
        mask: Boolean mask
        kernel_size: Side of the square structuring element

    Returns:
        New boolean mask, True only where every neighbor in the window is True
    """
    size = _structuring_size(kernel_size)
    eroded = ndimage.minimum_filter(mask.astype(np.uint8), size=size, mode='nearest')
    return eroded > 0


def morphological_close(mask: np.ndarray, kernel_size: int = MORPH_KERNEL_SIZE_DEFAULT) -> np.ndarray:
    """
    Closing (dilation then erosion): fills small holes and gaps.

    Args:
        mask: Boolean mask
        kernel_size: Side of the square structuring element

    Returns:
        New boolean mask
    """
    return erode(dilate(mask, kernel_size), kernel_size)
