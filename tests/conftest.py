"""
Pytest configuration and shared fixtures for footprint Arch Index tests.

Provides synthetic footprint images, masks, and configuration fixtures used
across unit and integration tests.
"""

import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np
import yaml
from PIL import Image

from footarch.models import PixelBuffer


BACKGROUND_RGB = (220, 220, 220)
INK_RGB = (30, 30, 30)


# ============================================================================
# Synthetic Footprint Fixtures
# ============================================================================

def make_footprint_buffer(width=100, height=300, regions=()):
    """Light paper with dark ink rectangles given as (row0, row1, col0, col1), inclusive"""
    buffer = PixelBuffer.filled(width, height, BACKGROUND_RGB)
    for row0, row1, col0, col1 in regions:
        buffer.data[row0:row1 + 1, col0:col1 + 1, :3] = INK_RGB
    return buffer


@pytest.fixture
def flat_footprint_buffer():
    """Solid 20 px wide print (rows 60-269): midfoot as wide as the rest"""
    return make_footprint_buffer(regions=[(60, 269, 40, 59)])


@pytest.fixture
def arched_footprint_buffer():
    """Print whose midfoot (rows 150-210) narrows to 6 px"""
    return make_footprint_buffer(regions=[
        (60, 149, 40, 59),
        (150, 210, 40, 45),
        (211, 269, 40, 59),
    ])


@pytest.fixture
def blank_buffer():
    """Uniform paper with no footprint"""
    return make_footprint_buffer()


@pytest.fixture
def solid_mask():
    """Mask equal to the flat footprint after segmentation (before toe trim)"""
    mask = np.zeros((300, 100), dtype=bool)
    mask[60:270, 40:60] = True
    return mask


@pytest.fixture
def footprint_png(tmp_path, flat_footprint_buffer):
    """Flat footprint written to disk as RGB PNG"""
    path = tmp_path / "footprint.png"
    Image.fromarray(flat_footprint_buffer.data[..., :3]).save(path)
    return path


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def config_dict():
    """Reference configuration with exports trimmed for speed"""
    return {
        "general": {
            "output_dir": "results",
            "log_level": "INFO"
        },
        "binarization": {
            "block_size": 25,
            "bias": 10
        },
        "morphology": {
            "kernel_size": 5
        },
        "toe_trim": {
            "toe_fraction": 0.18
        },
        "classification": {
            "flat_threshold": 0.28
        },
        "visualization": {
            "generate_plots": False,
            "save_images": True,
            "plot_dpi": 100,
            "plot_format": "png"
        },
        "export": {
            "export_xlsx": False,
            "export_json": True
        }
    }


@pytest.fixture
def temp_yaml_config(tmp_path, config_dict):
    """Create temporary YAML config file"""
    config_file = tmp_path / "test_config.yaml"
    with open(config_file, 'w') as f:
        yaml.dump(config_dict, f)
    return config_file


# ============================================================================
# Utility Functions
# ============================================================================

def assert_rgb(buffer, row, col, expected):
    """Assert the RGB channels of one pixel"""
    actual = tuple(int(v) for v in buffer.data[row, col, :3])
    assert actual == tuple(expected), (
        f"Pixel ({row}, {col}) is {actual}, expected {tuple(expected)}"
    )
