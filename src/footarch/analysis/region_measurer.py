"""Mask-based area measurement over three equal-height footprint regions"""
import numpy as np
import logging

from ..models import AreaResult, RegionBoundaries
from ..constants import REGION_COUNT

logger = logging.getLogger(__name__)


class RegionMeasurer:
    """Count footprint pixels in the forefoot, midfoot and rearfoot bands.

    Bands are cut by the mask's own vertical extent, not the image height,
    and only True mask pixels are counted. A rectangle around the footprint
    would overstate the narrow midfoot.
    """

    def compute_boundaries(self, min_y: int, footprint_length: int) -> RegionBoundaries:
        """
        Split [min_y, min_y + footprint_length] into equal thirds.

        Args:
            min_y: Topmost mask row
            footprint_length: max_y - min_y

        Returns:
            RegionBoundaries with y1 (forefoot/midfoot) and y2 (midfoot/rearfoot)
        """
        section_height = footprint_length / REGION_COUNT
        return RegionBoundaries(
            y1=min_y + section_height,
            y2=min_y + 2 * section_height
        )

    def measure(self, mask: np.ndarray) -> AreaResult:
        """
        Measure region areas of a toe-trimmed mask.

        Args:
            mask: Boolean mask of shape (H, W)

        Returns:
            AreaResult; all zeros when the mask is empty or a single row tall
        """
        rows_with_pixels = np.flatnonzero(mask.any(axis=1))
        if rows_with_pixels.size == 0:
            logger.warning("Empty mask: returning zero areas")
            return AreaResult()

        actual_min_y = int(rows_with_pixels[0])
        actual_max_y = int(rows_with_pixels[-1])
        footprint_length = actual_max_y - actual_min_y

        if footprint_length <= 0:
            logger.warning("Footprint spans a single row: returning zero areas")
            return AreaResult()

        boundaries = self.compute_boundaries(actual_min_y, footprint_length)

        row_counts = mask.sum(axis=1)
        rows = np.arange(mask.shape[0])

        rearfoot = rows >= boundaries.y2
        midfoot = (rows >= boundaries.y1) & (rows < boundaries.y2)
        forefoot = (rows >= actual_min_y) & (rows < boundaries.y1)

        area_a = int(row_counts[rearfoot].sum())
        area_b = int(row_counts[midfoot].sum())
        area_c = int(row_counts[forefoot].sum())

        result = AreaResult(
            area_a=area_a,
            area_b=area_b,
            area_c=area_c,
            total_area=area_a + area_b + area_c,
            footprint_length=footprint_length,
            boundaries=boundaries,
            actual_min_y=actual_min_y,
            actual_max_y=actual_max_y
        )

        logger.debug(
            f"Regions y1={boundaries.y1:.2f} y2={boundaries.y2:.2f}: "
            f"A={area_a} B={area_b} C={area_c}"
        )
        return result
