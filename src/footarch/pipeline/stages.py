"""Pipeline stages for footprint Arch Index analysis.

Each stage is a focused, cohesive unit with a single responsibility.
Stages follow the pattern: receive context -> process -> return updated context.
"""

from ..config_schema import FootArchConfig
from ..core.segmenter import FootprintSegmenter
from ..core.views import render_processed_view, render_segmented_view
from ..analysis.region_measurer import RegionMeasurer
from ..analysis.classifier import ArchClassifier
from ..constants import ARCH_INDEX_DISPLAY_PRECISION

from .context import PipelineContext


def build_segmenter(config: FootArchConfig) -> FootprintSegmenter:
    """Create a segmenter from the measurement settings of a config."""
    return FootprintSegmenter(
        block_size=config.binarization.block_size,
        bias=config.binarization.bias,
        kernel_size=config.morphology.kernel_size,
        toe_fraction=config.toe_trim.toe_fraction
    )


class ConfigurationStage:
    """Log pipeline settings and record image metadata.

    Responsibility: announce the run, flag non-reference parameters
    (their Arch Index is not comparable with the clinical cut-off).
    """

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        cfg = ctx.config

        ctx.logger.info("=" * 80)
        ctx.logger.info("Footprint Arch Index Pipeline - Starting")
        ctx.logger.info("=" * 80)

        ctx.logger.info("Pipeline Configuration:")
        ctx.logger.info(f"  - Adaptive threshold: block_size={cfg.binarization.block_size}, "
                        f"bias={cfg.binarization.bias}")
        ctx.logger.info(f"  - Closing kernel: {cfg.morphology.kernel_size}")
        ctx.logger.info(f"  - Toe removal fraction: {cfg.toe_trim.toe_fraction}")
        ctx.logger.info(f"  - Flat foot threshold: AI > {cfg.classification.flat_threshold}")

        modified = cfg.get_modified_parameters()
        if modified:
            ctx.logger.warning(
                f"Non-reference parameters in use ({', '.join(modified)}); "
                f"results are not comparable with reference measurements"
            )

        metadata = dict(ctx.metadata)
        metadata.update({
            'source': ctx.source,
            'width': ctx.original.width,
            'height': ctx.original.height,
            'reference_configuration': not modified,
        })

        ctx = ctx.update(metadata=metadata)
        return ctx.add_steps(f"Image loaded: {ctx.original.width} × {ctx.original.height} pixels")


class GrayscaleStage:
    """Convert a working copy of the source to luminance.

    Responsibility: keep the original intact for the processed view.
    """

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        ctx = ctx.add_steps("Converting to grayscale...")
        working = ctx.original.copy()
        build_segmenter(ctx.config).to_grayscale(working)
        return ctx.update(working=working)


class ContrastStage:
    """Stretch the working buffer to the full intensity range."""

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        ctx.require('ContrastStage', 'working')
        ctx = ctx.add_steps("Enhancing contrast...")
        build_segmenter(ctx.config).enhance_contrast(ctx.working)
        return ctx


class BinarizationStage:
    """Create the raw footprint mask by adaptive thresholding."""

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        ctx.require('BinarizationStage', 'working')
        ctx = ctx.add_steps("Creating binary footprint mask...")
        raw_mask = build_segmenter(ctx.config).binarize(ctx.working)
        return ctx.update(raw_mask=raw_mask)


class MorphologyStage:
    """Close small holes and gaps in the raw mask."""

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        ctx.require('MorphologyStage', 'raw_mask')
        ctx = ctx.add_steps("Applying morphological cleanup...")
        closed_mask = build_segmenter(ctx.config).clean(ctx.raw_mask)
        return ctx.update(closed_mask=closed_mask)


class ComponentSelectionStage:
    """Keep only the largest connected region (the footprint body)."""

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        ctx.require('ComponentSelectionStage', 'closed_mask')
        ctx = ctx.add_steps("Extracting largest connected component...")
        component_mask, labeling = build_segmenter(ctx.config).select_main_component(ctx.closed_mask)

        metadata = dict(ctx.metadata)
        metadata['n_components'] = labeling.n_components
        return ctx.update(component_mask=component_mask, labeling=labeling, metadata=metadata)


class ToeTrimStage:
    """Remove the toe impressions from the top of the footprint."""

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        ctx.require('ToeTrimStage', 'component_mask')
        ctx = ctx.add_steps("Removing toe region from mask...")
        trimmed_mask, line = build_segmenter(ctx.config).trim_toes(ctx.component_mask)

        metadata = dict(ctx.metadata)
        metadata['toe_removal_line'] = line
        return ctx.update(trimmed_mask=trimmed_mask, toe_removal_line=line, metadata=metadata)


class RegionMeasurementStage:
    """Count footprint pixels in the three longitudinal regions."""

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        ctx.require('RegionMeasurementStage', 'trimmed_mask')
        ctx = ctx.add_steps("Calculating mask-based region areas...")
        areas = RegionMeasurer().measure(ctx.trimmed_mask)

        ctx = ctx.add_steps(
            f"Footprint length (from mask): {areas.footprint_length} px",
            f"Area A (rearfoot mask pixels): {areas.area_a:,} px",
            f"Area B (midfoot mask pixels): {areas.area_b:,} px",
            f"Area C (forefoot mask pixels): {areas.area_c:,} px",
            f"Total footprint pixels: {areas.total_area:,} px",
        )
        return ctx.update(areas=areas)


class ClassificationStage:
    """Compute the Arch Index and classify the arch."""

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        ctx.require('ClassificationStage', 'areas')
        classifier = ArchClassifier(threshold=ctx.config.classification.flat_threshold)
        result = classifier.classify(ctx.areas)

        ctx = ctx.add_steps(
            f"Arch Index = B / (A + B + C) = {result.arch_index:.{ARCH_INDEX_DISPLAY_PRECISION}f}",
            f"Classification: {classifier.describe(result)}",
        )
        return ctx.update(classification=result)


class VisualizationStage:
    """Synthesize the processed and segmented views from the final mask."""

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        ctx.require('VisualizationStage', 'trimmed_mask', 'areas')
        processed = render_processed_view(ctx.original, ctx.trimmed_mask)
        segmented = render_segmented_view(ctx.trimmed_mask, ctx.areas.boundaries)
        ctx.logger.debug("Rendered processed and segmented views")
        return ctx.update(processed_image=processed, segmented_image=segmented)
