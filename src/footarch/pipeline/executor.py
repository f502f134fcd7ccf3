"""Pipeline executor orchestrates stage execution.

This module contains the PipelineExecutor class that runs the footprint
stages in order on a decoded pixel buffer.
"""

import logging
from typing import Optional

from ..config_schema import FootArchConfig
from ..exceptions import FootArchError, PipelineStageError
from ..models import PixelBuffer, ProcessingResult
from ..utils.validation import validate_mask_shape, validate_image_dimensions
from .context import PipelineContext
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

logger = logging.getLogger(__name__)


class PipelineExecutor:
    """Orchestrates pipeline stage execution.

    The executor maintains a list of stages and executes them sequentially,
    passing context between stages. After every stage the mask dimensions
    are checked against the source buffer; a mismatch is a programming
    error and aborts the run.

    Attributes:
        config: Validated configuration shared by all stages
        stages: Ordered list of pipeline stages to execute
    """

    def __init__(self, config: Optional[FootArchConfig] = None):
        """Initialize executor with default stages."""
        self.config = config or FootArchConfig()
        self.stages = [
            ConfigurationStage(),
            GrayscaleStage(),
            ContrastStage(),
            BinarizationStage(),
            MorphologyStage(),
            ComponentSelectionStage(),
            ToeTrimStage(),
            RegionMeasurementStage(),
            ClassificationStage(),
            VisualizationStage()
        ]

    def run(self,
            buffer: PixelBuffer,
            source: Optional[str] = None,
            run_logger: Optional[logging.Logger] = None) -> PipelineContext:
        """
        Execute all stages and return the final context.

        Intermediate masks stay available on the returned context.

        Args:
            buffer: Decoded RGBA image; left unmodified
            source: Optional description of the image origin
            run_logger: Logger for step messages (module logger by default)

        Returns:
            Final PipelineContext

        Raises:
            EmptyImageError: If the buffer has zero width or height
            InvariantViolationError: If a stage breaks the mask shape invariant
            PipelineStageError: If a stage fails unexpectedly
        """
        validate_image_dimensions(buffer, source)

        ctx = PipelineContext(
            original=buffer,
            config=self.config,
            logger=run_logger or logger,
            source=source
        )

        for stage in self.stages:
            stage_name = stage.__class__.__name__
            ctx.logger.debug(f"Executing {stage_name}")
            try:
                ctx = stage.execute(ctx)
            except FootArchError:
                raise
            except Exception as e:
                raise PipelineStageError(stage_name, e) from e

            for mask in ctx.masks().values():
                validate_mask_shape(mask, buffer.shape, stage_name)

        return ctx

    def execute(self,
                buffer: PixelBuffer,
                source: Optional[str] = None,
                run_logger: Optional[logging.Logger] = None) -> ProcessingResult:
        """
        Analyze one footprint image.

        Args:
            buffer: Decoded RGBA image; left unmodified
            source: Optional description of the image origin
            run_logger: Logger for step messages

        Returns:
            ProcessingResult with views, areas, Arch Index and step log
        """
        return self.run(buffer, source=source, run_logger=run_logger).to_result()


def analyze_footprint(buffer: PixelBuffer, config: Optional[FootArchConfig] = None) -> ProcessingResult:
    """Run the full pipeline on a pixel buffer with the given (or default) config."""
    return PipelineExecutor(config).execute(buffer)
