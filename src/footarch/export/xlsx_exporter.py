"""Excel export functionality for analysis results"""
import pandas as pd
import logging
from pathlib import Path
from typing import Dict, List, Any

from ..models import ProcessingResult
from ..exceptions import ExcelExportError
from ..constants import EXCEL_FLOAT_PRECISION

logger = logging.getLogger(__name__)


class XLSXExporter:
    """Export analysis results to Excel workbook"""

    def __init__(self, output_path: Path):
        """
        Initialize XLSX exporter.

        Args:
            output_path: Path for output XLSX file
        """
        self.output_path = Path(output_path)

    def create_summary_sheet(self, result: ProcessingResult) -> pd.DataFrame:
        """
        Create summary sheet DataFrame.

        Args:
            result: Pipeline result

        Returns:
            Single-row summary DataFrame
        """
        return pd.DataFrame([{
            'source': result.source,
            'footprint_length_px': result.footprint_length,
            'area_a_rearfoot_px': result.area_a,
            'area_b_midfoot_px': result.area_b,
            'area_c_forefoot_px': result.area_c,
            'total_area_px': result.total_area,
            'arch_index': round(result.arch_index, EXCEL_FLOAT_PRECISION),
            'classification': result.classification.classification,
            'threshold': result.classification.threshold,
        }])

    def create_regions_sheet(self, result: ProcessingResult) -> pd.DataFrame:
        """
        Create per-region sheet.

        Args:
            result: Pipeline result

        Returns:
            DataFrame with one row per region (area, share, row range)
        """
        areas = result.areas
        b = areas.boundaries
        total = areas.total_area
        regions = [
            ('C', 'forefoot', areas.area_c, areas.actual_min_y, b.y1),
            ('B', 'midfoot', areas.area_b, b.y1, b.y2),
            ('A', 'rearfoot', areas.area_a, b.y2, areas.actual_max_y),
        ]

        rows = []
        for region, name, area, start_y, end_y in regions:
            rows.append({
                'region': region,
                'name': name,
                'area_px': area,
                'share': round(area / total, EXCEL_FLOAT_PRECISION) if total > 0 else 0.0,
                'start_y': round(float(start_y), 2),
                'end_y': round(float(end_y), 2),
            })

        return pd.DataFrame(rows)

    def create_steps_sheet(self, processing_steps: List[str]) -> pd.DataFrame:
        """
        Create processing steps sheet.

        Args:
            processing_steps: Ordered step log

        Returns:
            Steps DataFrame
        """
        return pd.DataFrame({
            'step_number': range(1, len(processing_steps) + 1),
            'description': processing_steps,
        })

    def export(self, result: ProcessingResult, metadata: Dict[str, Any] = None) -> Path:
        """
        Export a single result to an Excel workbook.

        Args:
            result: Pipeline result
            metadata: Optional metadata dictionary

        Returns:
            Path of the written workbook
        """
        logger.info(f"Exporting results to {self.output_path}")

        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with pd.ExcelWriter(self.output_path, engine='openpyxl') as writer:
                self.create_summary_sheet(result).to_excel(writer, sheet_name='Summary', index=False)
                self.create_regions_sheet(result).to_excel(writer, sheet_name='Regions', index=False)
                self.create_steps_sheet(result.processing_steps).to_excel(
                    writer, sheet_name='Processing Steps', index=False
                )
                self._write_metadata(writer, metadata)
        except (OSError, ValueError) as e:
            raise ExcelExportError(str(self.output_path), str(e)) from e

        logger.info(f"Export complete: {self.output_path}")
        return self.output_path

    def export_batch(self,
                     results_table: pd.DataFrame,
                     summary: Dict[str, Any],
                     metadata: Dict[str, Any] = None) -> Path:
        """
        Export a batch of results to an Excel workbook.

        Args:
            results_table: One row per processed image
            summary: Aggregated batch statistics
            metadata: Optional metadata dictionary

        Returns:
            Path of the written workbook
        """
        logger.info(f"Exporting batch results to {self.output_path}")

        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with pd.ExcelWriter(self.output_path, engine='openpyxl') as writer:
                summary_rows = [{'statistic': k, 'value': v} for k, v in summary.items()]
                pd.DataFrame(summary_rows).to_excel(writer, sheet_name='Summary', index=False)
                results_table.to_excel(writer, sheet_name='Results', index=False)
                self._write_metadata(writer, metadata)
        except (OSError, ValueError) as e:
            raise ExcelExportError(str(self.output_path), str(e)) from e

        logger.info(f"Export complete: {self.output_path}")
        return self.output_path

    def _write_metadata(self, writer, metadata: Dict[str, Any] = None):
        if metadata:
            meta_rows = [{'key': k, 'value': str(v)} for k, v in metadata.items()]
            pd.DataFrame(meta_rows).to_excel(writer, sheet_name='Metadata', index=False)
