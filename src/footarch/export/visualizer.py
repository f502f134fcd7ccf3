"""Visualization dashboard generation"""
import matplotlib.pyplot as plt
import numpy as np
import logging
from pathlib import Path
from typing import List

from ..models import ProcessingResult
from ..exceptions import PlotGenerationError
from ..constants import (
    PLOT_DPI,
    PLOT_FIGSIZE_WIDTH,
    PLOT_FIGSIZE_HEIGHT,
    COLOR_REARFOOT,
    COLOR_MIDFOOT,
    COLOR_FOREFOOT,
    FLAT_FOOT_ARCH_INDEX_THRESHOLD,
    ARCH_INDEX_DISPLAY_PRECISION,
    CLASSIFICATION_FLAT,
)

logger = logging.getLogger(__name__)


def _rgb(color: tuple) -> tuple:
    return tuple(channel / 255.0 for channel in color)


REGION_COLORS = {
    'A (rearfoot)': _rgb(COLOR_REARFOOT),
    'B (midfoot)': _rgb(COLOR_MIDFOOT),
    'C (forefoot)': _rgb(COLOR_FOREFOOT),
}


class DashboardVisualizer:
    """Generate footprint analysis dashboards"""

    def __init__(self, output_dir: Path, dpi: int = PLOT_DPI, plot_format: str = 'png'):
        """
        Initialize visualizer.

        Args:
            output_dir: Output directory for plots
            dpi: Resolution for raster formats
            plot_format: File format (png, pdf, svg)
        """
        self.output_dir = Path(output_dir)
        self.dpi = dpi
        self.plot_format = plot_format
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def plot_result_dashboard(self, result: ProcessingResult) -> Path:
        """
        Plot original, processed and segmented views with the region areas.

        Args:
            result: Pipeline result

        Returns:
            Path to saved plot
        """
        try:
            fig, axes = plt.subplots(
                1, 4,
                figsize=(PLOT_FIGSIZE_WIDTH, PLOT_FIGSIZE_HEIGHT),
                gridspec_kw={'width_ratios': [1, 1, 1, 1.2]}
            )
            ai = result.arch_index
            fig.suptitle(
                f"Arch Index {ai:.{ARCH_INDEX_DISPLAY_PRECISION}f} - "
                f"{self._classification_label(result)}",
                fontsize=16, fontweight='bold'
            )

            self._plot_view(axes[0], result.original.data, 'Original')
            self._plot_view(axes[1], result.processed_image.data, 'Footprint Mask')
            self._plot_view(axes[2], result.segmented_image.data, 'Regions')
            self._plot_region_areas(axes[3], result)

            plt.tight_layout()

            output_path = self.output_dir / f'arch_index_dashboard.{self.plot_format}'
            plt.savefig(output_path, dpi=self.dpi, bbox_inches='tight')
        except (OSError, ValueError) as e:
            raise PlotGenerationError('result_dashboard', str(e)) from e
        finally:
            plt.close('all')

        logger.info(f"Saved result dashboard: {output_path}")
        return output_path

    def plot_batch_distribution(self, arch_indices: List[float], threshold: float = FLAT_FOOT_ARCH_INDEX_THRESHOLD) -> Path:
        """
        Histogram of Arch Index values across a batch with the flat-foot cut-off.

        Args:
            arch_indices: Arch Index per successfully processed image
            threshold: Classification threshold to mark

        Returns:
            Path to saved plot
        """
        values = np.asarray(arch_indices, dtype=float)

        try:
            fig, ax = plt.subplots(figsize=(PLOT_FIGSIZE_WIDTH * 0.6, PLOT_FIGSIZE_HEIGHT * 0.8))
            fig.suptitle('Arch Index Distribution', fontsize=16, fontweight='bold')

            if values.size > 0:
                flat = values[values > threshold]
                normal = values[values <= threshold]
                bins = np.linspace(0.0, max(0.5, float(values.max())), 26)
                groups = [
                    (normal, REGION_COLORS['C (forefoot)'], f'normal (n={normal.size})'),
                    (flat, REGION_COLORS['A (rearfoot)'], f'flat (n={flat.size})'),
                ]
                for group, color, label in groups:
                    if group.size > 0:
                        ax.hist(group, bins=bins, color=color, label=label,
                                edgecolor='black', alpha=0.8)

            ax.axvline(threshold, color='black', linestyle='--', linewidth=1.5,
                       label=f'threshold {threshold:.2f}')
            ax.set_xlabel('Arch Index (B / total)', fontweight='bold')
            ax.set_ylabel('Images', fontweight='bold')
            ax.legend()
            ax.grid(axis='y', alpha=0.3)

            plt.tight_layout()

            output_path = self.output_dir / f'arch_index_distribution.{self.plot_format}'
            plt.savefig(output_path, dpi=self.dpi, bbox_inches='tight')
        except (OSError, ValueError) as e:
            raise PlotGenerationError('batch_distribution', str(e)) from e
        finally:
            plt.close('all')

        logger.info(f"Saved batch distribution: {output_path}")
        return output_path

    def _classification_label(self, result: ProcessingResult) -> str:
        if result.classification.classification == CLASSIFICATION_FLAT:
            return 'tendency toward flat foot'
        return 'normal arch'

    def _plot_view(self, ax, data: np.ndarray, title: str):
        """Show an RGBA buffer without axes"""
        ax.imshow(data)
        ax.set_title(title)
        ax.axis('off')

    def _plot_region_areas(self, ax, result: ProcessingResult):
        """Plot region pixel counts as colored bars"""
        areas = [result.area_a, result.area_b, result.area_c]
        labels = list(REGION_COLORS.keys())

        bars = ax.bar(range(len(areas)), areas, color=list(REGION_COLORS.values()),
                      edgecolor='black', alpha=0.9)

        total = result.total_area
        for bar, area in zip(bars, areas):
            share = area / total if total > 0 else 0.0
            ax.annotate(f'{area:,}\n({share:.1%})',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        ha='center', va='bottom', fontsize=9)

        ax.set_xticks(range(len(areas)))
        ax.set_xticklabels(labels)
        ax.set_ylabel('Footprint pixels', fontweight='bold')
        ax.set_title(f'Region Areas (total {total:,} px)')
        ax.grid(axis='y', alpha=0.3)
