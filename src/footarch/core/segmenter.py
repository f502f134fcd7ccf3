"""Footprint segmentation: normalization, binarization and mask cleanup"""
import numpy as np
import logging
from typing import Tuple

from ..utils.intensity import to_grayscale, stretch_contrast
from ..utils.morphology import adaptive_threshold, morphological_close
from ..utils.mask_geometry import select_largest_component, remove_toe_region
from ..models import PixelBuffer, ComponentLabeling
from ..constants import (
    ADAPTIVE_BLOCK_SIZE_DEFAULT,
    ADAPTIVE_BIAS_DEFAULT,
    MORPH_KERNEL_SIZE_DEFAULT,
    TOE_REMOVAL_FRACTION_DEFAULT,
)

logger = logging.getLogger(__name__)


class FootprintSegmenter:
    """Turn a photographed footprint into a single-component silhouette mask"""

    def __init__(self,
                 block_size: int = ADAPTIVE_BLOCK_SIZE_DEFAULT,
                 bias: float = ADAPTIVE_BIAS_DEFAULT,
                 kernel_size: int = MORPH_KERNEL_SIZE_DEFAULT,
                 toe_fraction: float = TOE_REMOVAL_FRACTION_DEFAULT):
        """
        Initialize segmenter.

        Args:
            block_size: Local mean window side for adaptive thresholding
            bias: Constant subtracted from the local mean
            kernel_size: Structuring element side for closing
            toe_fraction: Top fraction of the footprint height treated as toes
        """
        self.block_size = block_size
        self.bias = bias
        self.kernel_size = kernel_size
        self.toe_fraction = toe_fraction

    def to_grayscale(self, buffer: PixelBuffer) -> PixelBuffer:
        """Convert to luminance in place."""
        return to_grayscale(buffer)

    def enhance_contrast(self, buffer: PixelBuffer) -> PixelBuffer:
        """Stretch the gray channel to [0, 255] in place."""
        return stretch_contrast(buffer)

    def binarize(self, buffer: PixelBuffer) -> np.ndarray:
        """
        Create the raw footprint mask from a normalized buffer.

        Args:
            buffer: Grayscale, contrast-stretched buffer

        Returns:
            New mask, True where the pixel is darker than its surroundings
        """
        mask = adaptive_threshold(buffer.data[..., 0], self.block_size, self.bias)
        logger.debug(f"Binarization marked {int(mask.sum())} of {mask.size} pixels")
        return mask

    def clean(self, mask: np.ndarray) -> np.ndarray:
        """Close small gaps in the mask."""
        closed = morphological_close(mask, self.kernel_size)
        logger.debug(f"Closing changed mask size {int(mask.sum())} -> {int(closed.sum())}")
        return closed

    def select_main_component(self, mask: np.ndarray) -> Tuple[np.ndarray, ComponentLabeling]:
        """
        Keep the largest 4-connected component.

        Returns:
            Tuple of (new mask, component labeling)
        """
        selected, labeling = select_largest_component(mask)
        if labeling.n_components == 0:
            logger.warning("No footprint pixels found; mask is empty")
        else:
            logger.debug(
                f"Found {labeling.n_components} components, "
                f"kept label {labeling.largest_label()} ({int(selected.sum())} px)"
            )
        return selected, labeling

    def trim_toes(self, mask: np.ndarray) -> Tuple[np.ndarray, int]:
        """
        Remove the toe region from the top of the mask.

        Returns:
            Tuple of (new mask, toe removal line)
        """
        trimmed, line = remove_toe_region(mask, self.toe_fraction)
        logger.debug(f"Toe removal line at y={line}")
        return trimmed, line

    def segment(self, buffer: PixelBuffer) -> np.ndarray:
        """
        Run every segmentation step and return the final measurement mask.

        The buffer is converted to grayscale and stretched in place.

        Args:
            buffer: RGBA buffer

        Returns:
            Toe-trimmed single-component mask
        """
        self.enhance_contrast(self.to_grayscale(buffer))
        mask = self.clean(self.binarize(buffer))
        mask, _ = self.select_main_component(mask)
        mask, _ = self.trim_toes(mask)
        return mask
