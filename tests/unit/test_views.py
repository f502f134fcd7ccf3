"""
Unit tests for processed and segmented view rendering.
"""

import pytest
import numpy as np

from footarch.models import PixelBuffer, RegionBoundaries
from footarch.analysis.region_measurer import RegionMeasurer
from footarch.core.views import (
    render_processed_view,
    render_segmented_view,
    draw_divider_line,
    _divider_row_offsets
)
from footarch.constants import (
    COLOR_REARFOOT,
    COLOR_MIDFOOT,
    COLOR_FOREFOOT,
    COLOR_BACKGROUND,
    COLOR_DIVIDER,
)

from tests.conftest import assert_rgb


@pytest.fixture
def trimmed_solid_mask(solid_mask):
    mask = solid_mask.copy()
    mask[:97] = False
    return mask


@pytest.fixture
def trimmed_arched_mask():
    mask = np.zeros((300, 100), dtype=bool)
    mask[97:150, 40:60] = True
    mask[150:211, 40:46] = True
    mask[211:270, 40:60] = True
    return mask


class TestProcessedView:
    """Test silhouette rendering"""

    def test_footprint_and_background(self, flat_footprint_buffer, solid_mask):
        """Footprint pixels are dark gray, the rest green"""
        view = render_processed_view(flat_footprint_buffer, solid_mask)

        assert_rgb(view, 100, 50, (15, 15, 15))  # ink 30 * 0.5
        assert_rgb(view, 100, 10, COLOR_BACKGROUND)

    def test_gray_capped(self):
        """Bright original pixels inside the mask are capped at 80"""
        buffer = PixelBuffer.filled(4, 4, (220, 220, 220))
        mask = np.ones((4, 4), dtype=bool)

        view = render_processed_view(buffer, mask)

        assert np.all(view.data[..., :3] == 80)

    def test_opaque_and_same_size(self, flat_footprint_buffer, solid_mask):
        """View matches the source size and is fully opaque"""
        view = render_processed_view(flat_footprint_buffer, solid_mask)

        assert (view.width, view.height) == (100, 300)
        assert np.all(view.data[..., 3] == 255)

    def test_source_not_modified(self, flat_footprint_buffer, solid_mask):
        """Rendering does not touch the original"""
        before = flat_footprint_buffer.data.copy()
        render_processed_view(flat_footprint_buffer, solid_mask)
        assert np.array_equal(flat_footprint_buffer.data, before)


class TestSegmentedView:
    """Test region coloring"""

    def test_region_colors(self, trimmed_solid_mask):
        """Each region gets its color; outside the mask stays green"""
        boundaries = RegionMeasurer().measure(trimmed_solid_mask).boundaries
        view = render_segmented_view(trimmed_solid_mask, boundaries)

        assert_rgb(view, 100, 50, COLOR_FOREFOOT)
        assert_rgb(view, 180, 50, COLOR_MIDFOOT)
        assert_rgb(view, 240, 50, COLOR_REARFOOT)
        assert_rgb(view, 240, 10, COLOR_BACKGROUND)
        assert_rgb(view, 50, 50, COLOR_BACKGROUND)  # removed toe rows

    def test_divider_lines(self, trimmed_solid_mask):
        """Dividers cover floor(y) and one row either side"""
        boundaries = RegionMeasurer().measure(trimmed_solid_mask).boundaries
        view = render_segmented_view(trimmed_solid_mask, boundaries)

        for row in (153, 154, 155, 210, 211, 212):
            assert_rgb(view, row, 50, COLOR_DIVIDER)
        assert_rgb(view, 156, 50, COLOR_MIDFOOT)
        assert_rgb(view, 213, 50, COLOR_REARFOOT)

    def test_divider_follows_silhouette(self, trimmed_arched_mask):
        """Divider in the narrow midfoot spans only the narrow columns"""
        boundaries = RegionMeasurer().measure(trimmed_arched_mask).boundaries
        view = render_segmented_view(trimmed_arched_mask, boundaries)

        assert_rgb(view, 154, 42, COLOR_DIVIDER)
        assert_rgb(view, 154, 50, COLOR_BACKGROUND)

    def test_divider_paints_pixels_touching_mask(self, trimmed_arched_mask):
        """A pixel directly above a mask row is painted"""
        boundaries = RegionMeasurer().measure(trimmed_arched_mask).boundaries
        view = render_segmented_view(trimmed_arched_mask, boundaries)

        # row 210 col 50 is outside the mask but row 211 below it is set
        assert not trimmed_arched_mask[210, 50]
        assert_rgb(view, 210, 50, COLOR_DIVIDER)

    def test_empty_mask_all_background(self):
        """Empty mask renders only background"""
        view = render_segmented_view(np.zeros((20, 30), dtype=bool), RegionBoundaries())

        assert np.all(view.data[..., :3] == COLOR_BACKGROUND)
        assert np.all(view.data[..., 3] == 255)


class TestDividerLine:
    """Test divider drawing"""

    def test_row_offsets(self):
        """Thickness 2 covers three rows"""
        assert _divider_row_offsets(2) == [-1, 0, 1]

    def test_out_of_range_row_ignored(self):
        """A line outside the grid draws nothing"""
        mask = np.ones((10, 10), dtype=bool)
        data = np.zeros((10, 10, 4), dtype=np.uint8)

        draw_divider_line(data, mask, 25.0)

        assert not data.any()

    def test_single_column_extent_not_drawn(self):
        """A one-column extent (left == right) draws nothing"""
        mask = np.zeros((10, 10), dtype=bool)
        mask[:, 4] = True
        data = np.zeros((10, 10, 4), dtype=np.uint8)

        draw_divider_line(data, mask, 5.0)

        assert not data.any()
