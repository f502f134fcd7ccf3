"""
Unit tests for batch result aggregation.
"""

import pytest
import numpy as np

from footarch.statistics.aggregator import BatchAggregator, RESULT_COLUMNS


def _success(name, arch_index, classification):
    return {
        'image': name,
        'status': 'success',
        'results': {
            'footprint_length': 172,
            'area_a': 100,
            'area_b': 50,
            'area_c': 100,
            'total_area': 250,
            'arch_index': arch_index,
            'classification': classification,
        }
    }


@pytest.fixture
def batch_results():
    return [
        _success('a.png', 0.20, 'normal'),
        _success('b.png', 0.30, 'flat'),
        _success('c.png', 0.25, 'normal'),
        {'image': 'd.png', 'status': 'error', 'error': 'Image file not found: d.png'},
    ]


class TestSummaryStats:
    """Test summary statistics"""

    def test_basic_stats(self):
        stats = BatchAggregator.compute_summary_stats(np.array([1.0, 2.0, 3.0]))
        assert stats['median'] == 2.0
        assert stats['mean'] == 2.0
        assert stats['min'] == 1.0
        assert stats['max'] == 3.0
        assert stats['count'] == 3

    def test_nan_ignored(self):
        """NaN values are dropped"""
        stats = BatchAggregator.compute_summary_stats(np.array([1.0, np.nan, 3.0]))
        assert stats['count'] == 2
        assert stats['median'] == 2.0

    def test_empty(self):
        """No values gives NaN statistics and count 0"""
        stats = BatchAggregator.compute_summary_stats(np.array([]))
        assert stats['count'] == 0
        assert np.isnan(stats['median'])


class TestAggregation:
    """Test batch aggregation"""

    def test_results_table(self, batch_results):
        """One row per image with fixed columns"""
        table = BatchAggregator().create_results_table(batch_results)

        assert list(table.columns) == RESULT_COLUMNS
        assert len(table) == 4
        assert table.loc[3, 'error'] == 'Image file not found: d.png'

    def test_counts(self, batch_results):
        """Successes, failures and classes are counted"""
        summary = BatchAggregator().aggregate(batch_results)

        assert summary['n_images'] == 4
        assert summary['n_success'] == 3
        assert summary['n_failed'] == 1
        assert summary['n_flat'] == 1
        assert summary['n_normal'] == 2

    def test_arch_index_stats_use_successes_only(self, batch_results):
        summary = BatchAggregator().aggregate(batch_results)

        assert summary['arch_index_count'] == 3
        assert summary['arch_index_median'] == pytest.approx(0.25)
        assert summary['arch_index_max'] == pytest.approx(0.30)

    def test_all_failed(self):
        """A batch with no successes still aggregates"""
        summary = BatchAggregator().aggregate([
            {'image': 'x.png', 'status': 'error', 'error': 'bad'}
        ])
        assert summary['n_success'] == 0
        assert summary['arch_index_count'] == 0
