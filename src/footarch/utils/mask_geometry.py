"""Geometric queries and edits on footprint masks"""
import math
import numpy as np
from scipy import ndimage
from typing import Tuple, Optional

from ..constants import TOE_REMOVAL_FRACTION_DEFAULT
from ..models import MaskBounds, ComponentLabeling

# Edge-sharing neighbors only
FOUR_CONNECTIVITY = ndimage.generate_binary_structure(2, 1)


def compute_mask_bounds(mask: np.ndarray) -> MaskBounds:
    """
    Compute the bounding box of the True pixels.

    Args:
        mask: Boolean mask of shape (H, W)

    Returns:
        MaskBounds; for an empty mask min_x=W, max_x=0, min_y=H, max_y=0
    """
    height, width = mask.shape
    rows = np.flatnonzero(mask.any(axis=1))
    cols = np.flatnonzero(mask.any(axis=0))

    if rows.size == 0:
        return MaskBounds(min_x=width, max_x=0, min_y=height, max_y=0)

    return MaskBounds(
        min_x=int(cols[0]),
        max_x=int(cols[-1]),
        min_y=int(rows[0]),
        max_y=int(rows[-1])
    )


def compute_row_extent(mask: np.ndarray, center_y: int, search_rows: int) -> Optional[Tuple[int, int]]:
    """
    Leftmost and rightmost mask columns within rows center_y +/- search_rows.

    Args:
        mask: Boolean mask of shape (H, W)
        center_y: Row to search around
        search_rows: Rows above and below center_y to include (clipped to the grid)

    Returns:
        (left_x, right_x), or None if no mask pixel lies in the band
    """
    height = mask.shape[0]
    start = max(center_y - search_rows, 0)
    stop = min(center_y + search_rows + 1, height)
    if start >= stop:
        return None

    cols = np.flatnonzero(mask[start:stop].any(axis=0))
    if cols.size == 0:
        return None
    return int(cols[0]), int(cols[-1])


def label_components(mask: np.ndarray) -> ComponentLabeling:
    """
    Label 4-connected components of a mask.

    Labels are renumbered so that label 1 is the component containing the
    first True pixel in top-to-bottom, left-to-right scan order, label 2
    the next newly met component, and so on.

    Args:
        mask: Boolean mask of shape (H, W)

    Returns:
        ComponentLabeling with int32 labels and per-label pixel counts
    """
    raw_labels, n_components = ndimage.label(mask, structure=FOUR_CONNECTIVITY)

    if n_components == 0:
        return ComponentLabeling(labels=np.zeros(mask.shape, dtype=np.int32), sizes={})

    flat = raw_labels.ravel()
    foreground = np.flatnonzero(flat)
    raw_ids, first_seen = np.unique(flat[foreground], return_index=True)

    # foreground is sorted, so first_seen orders components by scan position
    discovery_order = np.argsort(first_seen, kind='stable')
    relabel = np.zeros(n_components + 1, dtype=np.int32)
    relabel[raw_ids[discovery_order]] = np.arange(1, len(raw_ids) + 1, dtype=np.int32)

    labels = relabel[raw_labels]
    counts = np.bincount(labels.ravel(), minlength=n_components + 1)
    sizes = {label: int(counts[label]) for label in range(1, n_components + 1)}

    return ComponentLabeling(labels=labels, sizes=sizes)


def select_largest_component(mask: np.ndarray) -> Tuple[np.ndarray, ComponentLabeling]:
    """
    Keep only the largest 4-connected component.

    Ties go to the component discovered first in scan order. An all-False
    mask gives an all-False result.

    Args:
        mask: Boolean mask of shape (H, W)

    Returns:
        Tuple of (new mask, labeling used for the selection)
    """
    labeling = label_components(mask)
    largest = labeling.largest_label()

    if largest == 0:
        return np.zeros(mask.shape, dtype=bool), labeling

    return labeling.labels == largest, labeling


def compute_toe_removal_line(bounds: MaskBounds,
                             toe_fraction: float = TOE_REMOVAL_FRACTION_DEFAULT) -> int:
    """
    Row above which the toe region is discarded.

    Args:
        bounds: Bounding box of the mask
        toe_fraction: Fraction of the footprint height to remove

    Returns:
        min_y + floor((max_y - min_y) * toe_fraction), or min_y when the
        footprint has no height
    """
    footprint_height = bounds.max_y - bounds.min_y
    if footprint_height <= 0:
        return bounds.min_y
    return bounds.min_y + int(math.floor(footprint_height * toe_fraction))


def remove_toe_region(mask: np.ndarray,
                      toe_fraction: float = TOE_REMOVAL_FRACTION_DEFAULT) -> Tuple[np.ndarray, int]:
    """
    Clear every row above the toe removal line.

    Args:
        mask: Boolean mask of shape (H, W)
        toe_fraction: Fraction of the footprint height to remove

    Returns:
        Tuple of (new mask, toe removal line)
    """
    line = compute_toe_removal_line(compute_mask_bounds(mask), toe_fraction)
    trimmed = mask.copy()
    trimmed[:max(line, 0)] = False
    return trimmed, line
