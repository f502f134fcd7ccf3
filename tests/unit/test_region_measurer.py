"""
Unit tests for mask-based region measurement.

Tests region boundaries, per-region pixel counts and degenerate masks.
"""

import pytest
import numpy as np

from footarch.analysis.region_measurer import RegionMeasurer


@pytest.fixture
def trimmed_solid_mask(solid_mask):
    """Solid footprint after toe removal (rows 97-269)"""
    mask = solid_mask.copy()
    mask[:97] = False
    return mask


@pytest.fixture
def trimmed_arched_mask():
    """Footprint with a 6 px wide midfoot, after toe removal"""
    mask = np.zeros((300, 100), dtype=bool)
    mask[97:150, 40:60] = True
    mask[150:211, 40:46] = True
    mask[211:270, 40:60] = True
    return mask


class TestBoundaries:
    """Test region boundary placement"""

    def test_equal_thirds(self):
        """Boundaries split the footprint length into thirds"""
        boundaries = RegionMeasurer().compute_boundaries(min_y=10, footprint_length=90)
        assert boundaries.y1 == pytest.approx(40.0)
        assert boundaries.y2 == pytest.approx(70.0)

    def test_fractional_boundaries(self):
        """Boundaries are not rounded"""
        boundaries = RegionMeasurer().compute_boundaries(min_y=97, footprint_length=172)
        assert boundaries.y1 == pytest.approx(97 + 172 / 3)
        assert boundaries.y2 == pytest.approx(97 + 2 * 172 / 3)


class TestMeasure:
    """Test region area measurement"""

    def test_solid_footprint(self, trimmed_solid_mask):
        """Uniform-width footprint gives nearly equal thirds"""
        areas = RegionMeasurer().measure(trimmed_solid_mask)

        assert areas.actual_min_y == 97
        assert areas.actual_max_y == 269
        assert areas.footprint_length == 172
        assert areas.area_c == 58 * 20
        assert areas.area_b == 57 * 20
        assert areas.area_a == 58 * 20
        assert areas.total_area == 3460

    def test_arched_footprint(self, trimmed_arched_mask):
        """Narrow midfoot yields a small area B"""
        areas = RegionMeasurer().measure(trimmed_arched_mask)

        assert areas.area_c == 1090
        assert areas.area_b == 356
        assert areas.area_a == 1160
        assert areas.total_area == 2606

    def test_only_mask_pixels_counted(self):
        """Holes inside the footprint do not count"""
        mask = np.zeros((40, 40), dtype=bool)
        mask[5:35, 10:30] = True
        full = RegionMeasurer().measure(mask).total_area

        mask[15:20, 15:20] = False
        holed = RegionMeasurer().measure(mask).total_area

        assert full - holed == 25

    def test_area_conservation(self):
        """A + B + C equals the number of mask pixels"""
        rng = np.random.default_rng(7)
        mask = rng.random((60, 45)) > 0.6

        areas = RegionMeasurer().measure(mask)

        assert areas.area_a + areas.area_b + areas.area_c == areas.total_area
        assert areas.total_area == int(mask.sum())

    def test_rows_on_boundary_go_to_lower_region(self):
        """A row equal to y1 is midfoot and a row equal to y2 is rearfoot"""
        mask = np.zeros((20, 5), dtype=bool)
        mask[0:10, 0] = True  # rows 0-9, length 9: y1 = 3, y2 = 6

        areas = RegionMeasurer().measure(mask)

        assert areas.area_c == 3  # rows 0-2
        assert areas.area_b == 3  # rows 3-5
        assert areas.area_a == 4  # rows 6-9

    def test_empty_mask_zero_result(self):
        """Empty mask gives an all-zero result"""
        areas = RegionMeasurer().measure(np.zeros((10, 10), dtype=bool))

        assert areas.total_area == 0
        assert areas.footprint_length == 0
        assert areas.boundaries.y1 == 0.0
        assert areas.boundaries.y2 == 0.0
        assert areas.is_degenerate

    def test_single_row_zero_result(self):
        """A one-row footprint has no length and no areas"""
        mask = np.zeros((10, 10), dtype=bool)
        mask[4, 2:8] = True

        areas = RegionMeasurer().measure(mask)

        assert areas.total_area == 0
        assert areas.area_a == areas.area_b == areas.area_c == 0
        assert areas.actual_min_y == 0
        assert areas.actual_max_y == 0
