"""Data containers passed between pipeline stages.

Grids are numpy arrays in row-major order: a PixelBuffer holds a
``(height, width, 4)`` uint8 RGBA array and a mask is a ``(height, width)``
bool array with ``True`` marking footprint pixels.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
import numpy as np

from .constants import RGBA_CHANNELS, OPAQUE_ALPHA, CLASSIFICATION_NORMAL
from .exceptions import PixelBufferShapeError


@dataclass
class PixelBuffer:
    """RGBA 8-bit pixel grid with explicit dimensions.

    Attributes:
        width: Number of columns
        height: Number of rows
        data: uint8 array of shape (height, width, 4)
    """

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        expected = (self.height, self.width, RGBA_CHANNELS)
        if self.data.shape != expected or self.data.dtype != np.uint8:
            raise PixelBufferShapeError((self.width, self.height), tuple(self.data.shape))

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'PixelBuffer':
        """Wrap an RGB or RGBA uint8 array, adding an opaque alpha channel if needed."""
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, RGBA_CHANNELS):
            raise PixelBufferShapeError((0, 0), tuple(array.shape))

        height, width = array.shape[:2]
        if array.shape[2] == 3:
            rgba = np.empty((height, width, RGBA_CHANNELS), dtype=np.uint8)
            rgba[..., :3] = array
            rgba[..., 3] = OPAQUE_ALPHA
        else:
            rgba = np.array(array, dtype=np.uint8, copy=True)

        return cls(width=width, height=height, data=rgba)

    @classmethod
    def filled(cls, width: int, height: int, rgb: tuple) -> 'PixelBuffer':
        """Create an opaque buffer of a single color."""
        data = np.empty((height, width, RGBA_CHANNELS), dtype=np.uint8)
        data[..., :3] = rgb
        data[..., 3] = OPAQUE_ALPHA
        return cls(width=width, height=height, data=data)

    @property
    def shape(self) -> tuple:
        """Grid shape as (height, width), the shape every mask must have."""
        return (self.height, self.width)

    def copy(self) -> 'PixelBuffer':
        return PixelBuffer(width=self.width, height=self.height, data=self.data.copy())


@dataclass
class MaskBounds:
    """Bounding box of the True pixels of a mask.

    An empty mask yields min_x=width, max_x=0, min_y=height, max_y=0.
    """

    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @property
    def is_empty(self) -> bool:
        return self.min_y > self.max_y


@dataclass
class ComponentLabeling:
    """4-connected component labels of a mask.

    Label 0 is background; labels start at 1 in raster-scan discovery order.
    """

    labels: np.ndarray
    sizes: Dict[int, int] = field(default_factory=dict)

    @property
    def n_components(self) -> int:
        return len(self.sizes)

    def largest_label(self) -> int:
        """Label with the most pixels; first discovered wins ties, 0 if none."""
        largest_label = 0
        largest_size = 0
        for label in sorted(self.sizes):
            if self.sizes[label] > largest_size:
                largest_size = self.sizes[label]
                largest_label = label
        return largest_label


@dataclass
class RegionBoundaries:
    """Cut lines between forefoot/midfoot (y1) and midfoot/rearfoot (y2)."""

    y1: float = 0.0
    y2: float = 0.0


@dataclass
class AreaResult:
    """Mask pixel counts per longitudinal region.

    Attributes:
        area_a: Rearfoot (bottom third) pixel count
        area_b: Midfoot (middle third) pixel count
        area_c: Forefoot (top third) pixel count
        total_area: area_a + area_b + area_c
        footprint_length: Vertical span of mask pixels (max_y - min_y)
        boundaries: Region cut lines
        actual_min_y: Topmost mask row
        actual_max_y: Bottommost mask row
    """

    area_a: int = 0
    area_b: int = 0
    area_c: int = 0
    total_area: int = 0
    footprint_length: int = 0
    boundaries: RegionBoundaries = field(default_factory=RegionBoundaries)
    actual_min_y: int = 0
    actual_max_y: int = 0

    @property
    def is_degenerate(self) -> bool:
        return self.footprint_length <= 0


@dataclass
class ClassificationResult:
    """Arch Index and its clinical label ('flat' or 'normal')."""

    arch_index: float = 0.0
    classification: str = CLASSIFICATION_NORMAL
    threshold: float = 0.0


@dataclass
class ProcessingResult:
    """Everything the pipeline produces for one footprint image."""

    original: PixelBuffer
    processed_image: PixelBuffer
    segmented_image: PixelBuffer
    mask: np.ndarray
    areas: AreaResult
    classification: ClassificationResult
    processing_steps: List[str] = field(default_factory=list)
    source: Optional[str] = None

    @property
    def footprint_length(self) -> int:
        return self.areas.footprint_length

    @property
    def area_a(self) -> int:
        return self.areas.area_a

    @property
    def area_b(self) -> int:
        return self.areas.area_b

    @property
    def area_c(self) -> int:
        return self.areas.area_c

    @property
    def total_area(self) -> int:
        return self.areas.total_area

    @property
    def arch_index(self) -> float:
        return self.classification.arch_index

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible summary; pixel buffers and the mask are left out."""
        return {
            'source': self.source,
            'width': self.original.width,
            'height': self.original.height,
            'footprint_length': int(self.areas.footprint_length),
            'area_a': int(self.areas.area_a),
            'area_b': int(self.areas.area_b),
            'area_c': int(self.areas.area_c),
            'total_area': int(self.areas.total_area),
            'region_boundaries': {
                'y1': float(self.areas.boundaries.y1),
                'y2': float(self.areas.boundaries.y2),
            },
            'actual_bounds': {
                'min_y': int(self.areas.actual_min_y),
                'max_y': int(self.areas.actual_max_y),
            },
            'arch_index': float(self.classification.arch_index),
            'classification': self.classification.classification,
            'processing_steps': list(self.processing_steps),
        }
