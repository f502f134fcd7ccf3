"""Pipeline context for state flow between stages.

This module defines the PipelineContext dataclass that carries the pixel
buffers, intermediate masks and measurements through the pipeline stages.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
import numpy as np

from ..config_schema import FootArchConfig
from ..exceptions import PipelineStateError
from ..models import (
    PixelBuffer,
    ComponentLabeling,
    AreaResult,
    ClassificationResult,
    ProcessingResult,
)


@dataclass
class PipelineContext:
    """Immutable state container for pipeline execution.

    Each stage receives a context and returns a new context with updates.
    Masks are never modified after they are stored; each mask-producing
    stage adds a new one, so every intermediate stays inspectable.

    Attributes:
        original: Source buffer, never modified
        config: Validated configuration
        logger: Logger instance
        source: Optional description of the image origin (e.g. file path)

        # Stage outputs (populated during execution)
        working: Copy of the source that is grayscaled and stretched in place
        raw_mask: Adaptive threshold output
        closed_mask: Mask after morphological closing
        component_mask: Largest 4-connected component
        trimmed_mask: Component mask with the toe region removed
        labeling: Component labels used for the selection
        toe_removal_line: Row above which pixels were cleared
        areas: Region areas of the trimmed mask
        classification: Arch Index and label
        processed_image: Silhouette visualization
        segmented_image: Region visualization
        processing_steps: Ordered human-readable step log
        metadata: Pipeline metadata
    """

    # Input parameters
    original: PixelBuffer
    config: FootArchConfig
    logger: logging.Logger
    source: Optional[str] = None

    # Stage outputs
    working: Optional[PixelBuffer] = None
    raw_mask: Optional[np.ndarray] = None
    closed_mask: Optional[np.ndarray] = None
    component_mask: Optional[np.ndarray] = None
    trimmed_mask: Optional[np.ndarray] = None
    labeling: Optional[ComponentLabeling] = None
    toe_removal_line: int = 0
    areas: Optional[AreaResult] = None
    classification: Optional[ClassificationResult] = None
    processed_image: Optional[PixelBuffer] = None
    segmented_image: Optional[PixelBuffer] = None
    processing_steps: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def masks(self) -> Dict[str, np.ndarray]:
        """Intermediate masks produced so far, in pipeline order."""
        candidates = {
            'raw_mask': self.raw_mask,
            'closed_mask': self.closed_mask,
            'component_mask': self.component_mask,
            'trimmed_mask': self.trimmed_mask,
        }
        return {name: mask for name, mask in candidates.items() if mask is not None}

    def update(self, **kwargs) -> 'PipelineContext':
        """Create new context with updated fields.

        This maintains immutability by returning a new instance rather
        than modifying in place.

        Args:
            **kwargs: Fields to update

        Returns:
            New PipelineContext with updated fields
        """
        new_ctx = copy.copy(self)
        for key, value in kwargs.items():
            if hasattr(new_ctx, key):
                setattr(new_ctx, key, value)
            else:
                raise AttributeError(f"PipelineContext has no attribute '{key}'")
        return new_ctx

    def add_steps(self, *messages: str) -> 'PipelineContext':
        """Log step descriptions and return a context with them appended."""
        for message in messages:
            self.logger.info(message)
        return self.update(processing_steps=self.processing_steps + list(messages))

    def require(self, stage: str, *fields: str) -> None:
        """Raise PipelineStateError if any of the named outputs is missing."""
        missing = [name for name in fields if getattr(self, name) is None]
        if missing:
            raise PipelineStateError(missing, stage)

    def to_result(self) -> ProcessingResult:
        """Assemble the final result payload."""
        self.require(
            'result', 'trimmed_mask', 'areas', 'classification',
            'processed_image', 'segmented_image'
        )
        return ProcessingResult(
            original=self.original,
            processed_image=self.processed_image,
            segmented_image=self.segmented_image,
            mask=self.trimmed_mask,
            areas=self.areas,
            classification=self.classification,
            processing_steps=list(self.processing_steps),
            source=self.source
        )
