"""Arch Index computation and flat-foot classification"""
import logging

from ..models import AreaResult, ClassificationResult
from ..constants import (
    FLAT_FOOT_ARCH_INDEX_THRESHOLD,
    CLASSIFICATION_FLAT,
    CLASSIFICATION_NORMAL,
    ARCH_INDEX_DISPLAY_PRECISION,
)

logger = logging.getLogger(__name__)


def compute_arch_index(areas: AreaResult) -> float:
    """
    Arch Index = midfoot area / total footprint area.

    Args:
        areas: Measured region areas

    Returns:
        Ratio in [0, 1]; 0 when the footprint has no area
    """
    if areas.total_area <= 0:
        return 0.0
    return areas.area_b / areas.total_area


class ArchClassifier:
    """Classify a footprint as flat or normal from its Arch Index"""

    def __init__(self, threshold: float = FLAT_FOOT_ARCH_INDEX_THRESHOLD):
        """
        Args:
            threshold: Arch Index strictly above this value is 'flat'
        """
        self.threshold = threshold

    def classify_index(self, arch_index: float) -> str:
        if arch_index > self.threshold:
            return CLASSIFICATION_FLAT
        return CLASSIFICATION_NORMAL

    def classify(self, areas: AreaResult) -> ClassificationResult:
        """
        Compute and classify the Arch Index.

        Args:
            areas: Measured region areas

        Returns:
            ClassificationResult with the index, label and threshold used
        """
        arch_index = compute_arch_index(areas)
        label = self.classify_index(arch_index)
        logger.debug(f"Arch Index {arch_index:.{ARCH_INDEX_DISPLAY_PRECISION}f} -> {label}")
        return ClassificationResult(
            arch_index=arch_index,
            classification=label,
            threshold=self.threshold
        )

    def describe(self, result: ClassificationResult) -> str:
        """Human-readable classification line for the processing log."""
        threshold = f"{result.threshold:.{ARCH_INDEX_DISPLAY_PRECISION}f}"
        if result.classification == CLASSIFICATION_FLAT:
            return f"Tendency toward flat foot (AI > {threshold})"
        return f"Normal foot arch (AI ≤ {threshold})"
