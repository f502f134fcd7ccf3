"""Canonical visualization buffers synthesized from the final mask"""
import math
import numpy as np

from ..utils.intensity import compute_luminance, to_uint8
from ..utils.mask_geometry import compute_row_extent
from ..models import PixelBuffer, RegionBoundaries
from ..constants import (
    COLOR_REARFOOT,
    COLOR_MIDFOOT,
    COLOR_FOREFOOT,
    COLOR_BACKGROUND,
    COLOR_DIVIDER,
    PROCESSED_FOOTPRINT_GRAY_MAX,
    PROCESSED_FOOTPRINT_GRAY_SCALE,
    DIVIDER_LINE_THICKNESS,
    DIVIDER_SEARCH_ROWS,
)


def render_processed_view(original: PixelBuffer, mask: np.ndarray) -> PixelBuffer:
    """
    Dark silhouette on a green background.

    Footprint pixels get half the original luminance, capped at 80.

    Args:
        original: Unmodified source buffer (before grayscale conversion)
        mask: Final footprint mask

    Returns:
        New opaque RGBA buffer
    """
    result = PixelBuffer.filled(original.width, original.height, COLOR_BACKGROUND)

    luminance = compute_luminance(original.data)
    gray = to_uint8(np.minimum(PROCESSED_FOOTPRINT_GRAY_MAX,
                               luminance * PROCESSED_FOOTPRINT_GRAY_SCALE))
    result.data[mask, :3] = gray[mask][:, np.newaxis]
    return result


def _divider_row_offsets(thickness: float = DIVIDER_LINE_THICKNESS) -> list:
    half = thickness / 2
    return [math.floor(-half + step) for step in range(int(thickness) + 1)]


def draw_divider_line(data: np.ndarray, mask: np.ndarray, target_y: float) -> None:
    """
    Draw a white boundary line across the footprint at target_y, in place.

    The line spans the leftmost to rightmost mask column found within
    DIVIDER_SEARCH_ROWS of the line and only paints columns where the mask
    is set on the line row or a row directly above/below it.

    Args:
        data: RGBA array of shape (H, W, 4) to draw on
        mask: Footprint mask of shape (H, W)
        target_y: Boundary row (floored)
    """
    height = mask.shape[0]
    y = int(math.floor(target_y))
    if y < 0 or y >= height:
        return

    extent = compute_row_extent(mask, y, DIVIDER_SEARCH_ROWS)
    if extent is None:
        return
    left, right = extent
    if left >= right:
        return

    span = slice(left, right + 1)
    for offset in _divider_row_offsets():
        row = y + offset
        if row < 0 or row >= height:
            continue

        paint = mask[row, span] | mask[max(0, row - 1), span]
        if row < height - 1:
            paint = paint | mask[row + 1, span]

        segment = data[row, span]
        segment[paint, :3] = COLOR_DIVIDER


def render_segmented_view(mask: np.ndarray, boundaries: RegionBoundaries) -> PixelBuffer:
    """
    Color footprint pixels by region, following the silhouette contour.

    Rows at or below y2 are rearfoot, rows from y1 to y2 midfoot, the rest
    forefoot. Background stays green. White dividers mark y1 and y2.

    Args:
        mask: Final footprint mask of shape (H, W)
        boundaries: Region cut lines from the measurement step

    Returns:
        New opaque RGBA buffer
    """
    height, width = mask.shape
    result = PixelBuffer.filled(width, height, COLOR_BACKGROUND)

    rows = np.arange(height)[:, np.newaxis]
    rearfoot = mask & (rows >= boundaries.y2)
    midfoot = mask & (rows >= boundaries.y1) & (rows < boundaries.y2)
    forefoot = mask & (rows < boundaries.y1) & (rows < boundaries.y2)

    result.data[rearfoot, :3] = COLOR_REARFOOT
    result.data[midfoot, :3] = COLOR_MIDFOOT
    result.data[forefoot, :3] = COLOR_FOREFOOT

    draw_divider_line(result.data, mask, boundaries.y1)
    draw_divider_line(result.data, mask, boundaries.y2)

    return result
