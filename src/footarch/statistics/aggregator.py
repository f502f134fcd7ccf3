"""Statistical aggregation of Arch Index results across images"""
import numpy as np
import pandas as pd
import logging
from typing import Dict, Any, List

from ..constants import CLASSIFICATION_FLAT, CLASSIFICATION_NORMAL

logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    'image', 'status', 'footprint_length', 'area_a', 'area_b', 'area_c',
    'total_area', 'arch_index', 'classification', 'error'
]


class BatchAggregator:
    """Aggregate per-image pipeline results"""

    @staticmethod
    def compute_summary_stats(values: np.ndarray) -> Dict[str, float]:
        """
        Compute summary statistics for an array of values.

        Args:
            values: Array of numeric values

        Returns:
            Dictionary with median, std, mean, min, max, count
        """
        values = np.asarray(values, dtype=float)
        valid_values = values[~np.isnan(values)]

        if len(valid_values) == 0:
            return {
                'median': np.nan,
                'std': np.nan,
                'mean': np.nan,
                'min': np.nan,
                'max': np.nan,
                'count': 0
            }

        return {
            'median': float(np.median(valid_values)),
            'std': float(np.std(valid_values)),
            'mean': float(np.mean(valid_values)),
            'min': float(np.min(valid_values)),
            'max': float(np.max(valid_values)),
            'count': len(valid_values)
        }

    def create_results_table(self, results: List[Dict[str, Any]]) -> pd.DataFrame:
        """
        Flatten run_pipeline outputs into a table.

        Args:
            results: run_pipeline status dicts, optionally with an 'image' key

        Returns:
            DataFrame with one row per image and RESULT_COLUMNS columns
        """
        rows = []
        for result in results:
            measurements = result.get('results', {})
            rows.append({
                'image': result.get('image'),
                'status': result.get('status'),
                'footprint_length': measurements.get('footprint_length'),
                'area_a': measurements.get('area_a'),
                'area_b': measurements.get('area_b'),
                'area_c': measurements.get('area_c'),
                'total_area': measurements.get('total_area'),
                'arch_index': measurements.get('arch_index'),
                'classification': measurements.get('classification'),
                'error': result.get('error'),
            })
        return pd.DataFrame(rows, columns=RESULT_COLUMNS)

    def aggregate(self, results: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Summarize a batch of run_pipeline outputs.

        Args:
            results: run_pipeline status dicts

        Returns:
            Counts per status/classification and Arch Index statistics
        """
        table = self.create_results_table(results)
        succeeded = table[table['status'] == 'success']
        classifications = succeeded['classification']

        summary = {
            'n_images': len(table),
            'n_success': len(succeeded),
            'n_failed': len(table) - len(succeeded),
            'n_flat': int((classifications == CLASSIFICATION_FLAT).sum()),
            'n_normal': int((classifications == CLASSIFICATION_NORMAL).sum()),
        }

        stats = self.compute_summary_stats(succeeded['arch_index'].to_numpy(dtype=float))
        for key, value in stats.items():
            summary[f'arch_index_{key}'] = value

        logger.info(
            f"Aggregated {summary['n_images']} images: {summary['n_flat']} flat, "
            f"{summary['n_normal']} normal, {summary['n_failed']} failed"
        )
        return summary
