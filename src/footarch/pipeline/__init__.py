"""Pipeline architecture for footprint Arch Index analysis.

This package contains the pipeline stages that take a decoded footprint
image to its Arch Index. Each stage has a single responsibility and clear
input/output contracts.
"""

from .executor import PipelineExecutor, analyze_footprint
from .stages import (
    ConfigurationStage,
    GrayscaleStage,
    ContrastStage,
    BinarizationStage,
    MorphologyStage,
    ComponentSelectionStage,
    ToeTrimStage,
    RegionMeasurementStage,
    ClassificationStage,
    VisualizationStage
)

__all__ = [
    'PipelineExecutor',
    'analyze_footprint',
    'ConfigurationStage',
    'GrayscaleStage',
    'ContrastStage',
    'BinarizationStage',
    'MorphologyStage',
    'ComponentSelectionStage',
    'ToeTrimStage',
    'RegionMeasurementStage',
    'ClassificationStage',
    'VisualizationStage'
]
