"""Validation utilities for pipeline invariants"""
import numpy as np
import logging
from typing import Tuple

from ..exceptions import MaskShapeError, EmptyImageError
from ..models import PixelBuffer

logger = logging.getLogger(__name__)


def validate_mask_shape(mask: np.ndarray, expected_shape: Tuple[int, int], stage: str) -> bool:
    """
    Validate that a mask still matches the source image dimensions.

    Args:
        mask: Boolean mask
        expected_shape: (height, width) of the source buffer
        stage: Name of the stage that produced the mask

    Returns:
        True if valid

    Raises:
        MaskShapeError: If the mask is not a (height, width) bool array
    """
    if mask.shape != tuple(expected_shape) or mask.dtype != np.bool_:
        raise MaskShapeError(tuple(expected_shape), tuple(mask.shape), stage)
    return True


def validate_image_dimensions(buffer: PixelBuffer, source: str = None) -> bool:
    """
    Validate that a decoded image has a non-empty pixel grid.

    Args:
        buffer: Decoded pixel buffer
        source: Optional description of where the buffer came from

    Returns:
        True if valid

    Raises:
        EmptyImageError: If width or height is zero
    """
    if buffer.width <= 0 or buffer.height <= 0:
        raise EmptyImageError(buffer.width, buffer.height, source)
    return True


def validate_kernel_size(size: int, name: str) -> int:
    """
    Convert a window size to its half-width.

    Even sizes behave like the next odd size (half-width = floor(size / 2)).

    Args:
        size: Window side length
        name: Parameter name for log messages

    Returns:
        Half-width of the window
    """
    if size < 1:
        raise ValueError(f"{name} must be >= 1, got {size}")
    if size % 2 == 0:
        logger.debug(f"{name}={size} is even; effective window is {2 * (size // 2) + 1}")
    return size // 2
