"""
Unit tests for pipeline data containers.
"""

import pytest
import numpy as np

from footarch.models import (
    PixelBuffer,
    ComponentLabeling,
    AreaResult,
    RegionBoundaries,
    ClassificationResult,
)
from footarch.exceptions import PixelBufferShapeError


class TestPixelBuffer:
    """Test pixel buffer construction"""

    def test_from_rgb_adds_alpha(self):
        """RGB arrays gain an opaque alpha channel"""
        rgb = np.zeros((3, 5, 3), dtype=np.uint8)
        buffer = PixelBuffer.from_array(rgb)

        assert (buffer.width, buffer.height) == (5, 3)
        assert buffer.data.shape == (3, 5, 4)
        assert np.all(buffer.data[..., 3] == 255)

    def test_from_rgba_copies(self):
        """RGBA input is copied, not shared"""
        rgba = np.zeros((2, 2, 4), dtype=np.uint8)
        buffer = PixelBuffer.from_array(rgba)
        buffer.data[0, 0, 0] = 9
        assert rgba[0, 0, 0] == 0

    def test_shape_mismatch_rejected(self):
        """Declared size must match the grid"""
        with pytest.raises(PixelBufferShapeError):
            PixelBuffer(width=4, height=4, data=np.zeros((4, 5, 4), dtype=np.uint8))

    def test_wrong_dtype_rejected(self):
        """Samples must be 8-bit"""
        with pytest.raises(PixelBufferShapeError):
            PixelBuffer(width=2, height=2, data=np.zeros((2, 2, 4), dtype=np.float32))

    def test_grayscale_array_rejected(self):
        """2D arrays are not pixel buffers"""
        with pytest.raises(PixelBufferShapeError):
            PixelBuffer.from_array(np.zeros((4, 4), dtype=np.uint8))

    def test_filled(self):
        """Filled buffer has one color"""
        buffer = PixelBuffer.filled(3, 2, (1, 2, 3))
        assert buffer.shape == (2, 3)
        assert np.all(buffer.data[..., :3] == (1, 2, 3))

    def test_copy_independent(self):
        """Copies do not share data"""
        buffer = PixelBuffer.filled(2, 2, (0, 0, 0))
        clone = buffer.copy()
        clone.data[...] = 255
        assert np.all(buffer.data[..., :3] == 0)


class TestComponentLabeling:
    """Test largest-label lookup"""

    def test_largest(self):
        labeling = ComponentLabeling(labels=np.zeros((1, 1), dtype=np.int32), sizes={1: 3, 2: 9, 3: 4})
        assert labeling.largest_label() == 2

    def test_tie_lowest_label(self):
        """Equal sizes resolve to the earlier label"""
        labeling = ComponentLabeling(labels=np.zeros((1, 1), dtype=np.int32), sizes={2: 5, 1: 5})
        assert labeling.largest_label() == 1


class TestResults:
    """Test result defaults"""

    def test_area_result_defaults(self):
        """Default areas are the degenerate all-zero result"""
        areas = AreaResult()
        assert areas.total_area == 0
        assert areas.boundaries == RegionBoundaries(0.0, 0.0)
        assert areas.is_degenerate

    def test_classification_defaults(self):
        result = ClassificationResult()
        assert result.arch_index == 0.0
        assert result.classification == "normal"
