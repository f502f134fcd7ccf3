"""
Footprint Arch Index Test Suite

Test Organization:
- tests/unit/: Isolated component tests on synthetic masks and buffers
- tests/integration/: Full pipeline, CLI and batch tests

Critical paths: segmentation, region measurement, classification
"""

__version__ = "1.0.0"
