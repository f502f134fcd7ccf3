#!/usr/bin/env python3
"""
Footprint Arch Index - Batch Processing Script
Processes a directory of footprint images and summarizes the Arch Index distribution
Version: 1.0.0
"""

import yaml
import argparse
import logging
from pathlib import Path
from datetime import datetime
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Dict, List, Optional
import sys
import time
from tqdm import tqdm

from footarch.cli import run_pipeline
from footarch.config_schema import FootArchConfig
from footarch.constants import SUPPORTED_IMAGE_EXTENSIONS
from footarch.export.visualizer import DashboardVisualizer
from footarch.export.xlsx_exporter import XLSXExporter
from footarch.statistics.aggregator import BatchAggregator


# ═══════════════════════════════════════════════════════════════════════════
# CONFIGURATION MANAGEMENT
# ═══════════════════════════════════════════════════════════════════════════

def load_config(config_path: Path) -> Dict:
    """
    Load batch configuration from YAML file with validation.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary; the 'pipeline' section is validated
        against FootArchConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If required fields are missing or invalid
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    required_fields = ['input_dir', 'output_dir']
    missing = [field for field in required_fields if field not in config]
    if missing:
        raise ValueError(f"Missing required config fields: {missing}")

    config.setdefault('file_patterns', [f'*{ext}' for ext in SUPPORTED_IMAGE_EXTENSIONS])
    config.setdefault('batch_processing', {})
    config['pipeline'] = FootArchConfig.from_dict(config.get('pipeline') or {}).to_dict()

    return config


# ═══════════════════════════════════════════════════════════════════════════
# FILE DISCOVERY
# ═══════════════════════════════════════════════════════════════════════════

def find_images(input_dir: Path, patterns: List[str]) -> List[Path]:
    """
    Find footprint images matching any of the glob patterns.

    Args:
        input_dir: Directory to search (non-recursive)
        patterns: Glob patterns such as '*.png'

    Returns:
        Sorted, de-duplicated list of image paths

    Raises:
        FileNotFoundError: If the input directory doesn't exist
    """
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")

    images = set()
    for pattern in patterns:
        images.update(p for p in input_dir.glob(pattern) if p.is_file())

    return sorted(images)


# ═══════════════════════════════════════════════════════════════════════════
# IMAGE PROCESSING
# ═══════════════════════════════════════════════════════════════════════════

def image_output_dir(output_root, image_path: Path) -> Path:
    """Per-image output folder keyed on the full file name (foot.png -> foot_png)"""
    return Path(output_root) / image_path.name.replace('.', '_')


def process_image(image_path: Path, config: Dict, verbose: bool = False) -> Dict:
    """
    Process a single footprint image into its own output folder.

    Args:
        image_path: Footprint image
        config: Batch configuration dictionary
        verbose: Enable verbose logging

    Returns:
        run_pipeline result enriched with image name and timing
    """
    start_time = time.time()
    output_dir = image_output_dir(config['output_dir'], image_path)

    logger = logging.getLogger(f"batch.{image_path.stem}")
    logger.info(f"Processing image: {image_path.name}")

    result = run_pipeline(
        image_path=image_path,
        output_dir=output_dir,
        verbose=verbose,
        config=config['pipeline']
    )

    processing_time = time.time() - start_time
    result['image'] = image_path.name
    result['processing_time_sec'] = round(processing_time, 2)

    if result['status'] == 'success':
        logger.info(f"✓ {image_path.name} completed in {processing_time:.1f}s")
    else:
        logger.error(f"✗ {image_path.name} failed: {result.get('error', 'Unknown error')}")

    return result


# ═══════════════════════════════════════════════════════════════════════════
# SUMMARY REPORTING
# ═══════════════════════════════════════════════════════════════════════════

def generate_summary_report(results: List[Dict], config: Dict, output_path: Path) -> Optional[Path]:
    """
    Write the batch workbook and Arch Index distribution plot.

    Args:
        results: Per-image results
        config: Batch configuration dictionary
        output_path: Batch output directory

    Returns:
        Path of the summary workbook, or None if there were no results
    """
    logger = logging.getLogger("batch.summary")

    if not results:
        logger.warning("No results to summarize")
        return None

    aggregator = BatchAggregator()
    table = aggregator.create_results_table(results)
    summary = aggregator.aggregate(results)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    metadata = {
        'analysis_date': datetime.now().isoformat(),
        'input_dir': config['input_dir'],
        'file_patterns': ', '.join(config['file_patterns']),
    }
    xlsx_path = XLSXExporter(output_path / f"Batch_Summary_{timestamp}.xlsx").export_batch(
        table, summary, metadata
    )

    pipeline_cfg = FootArchConfig.from_dict(config['pipeline'])
    if pipeline_cfg.visualization.generate_plots:
        succeeded = table[table['status'] == 'success']
        DashboardVisualizer(
            output_path,
            dpi=pipeline_cfg.visualization.plot_dpi,
            plot_format=pipeline_cfg.visualization.plot_format
        ).plot_batch_distribution(
            succeeded['arch_index'].tolist(),
            threshold=pipeline_cfg.classification.flat_threshold
        )

    print_summary_console(summary, results)
    return xlsx_path


def print_summary_console(summary: Dict, results: List[Dict]):
    """Print formatted summary to console"""
    total_time = sum(r.get('processing_time_sec', 0) for r in results)
    n_images = summary['n_images']

    print("\n" + "="*80)
    print("BATCH PROCESSING SUMMARY")
    print("="*80)
    print(f"\nTotal images processed: {n_images}")
    print(f"Successful: {summary['n_success']} ({summary['n_success']/n_images*100:.1f}%)")
    print(f"Failed: {summary['n_failed']} ({summary['n_failed']/n_images*100:.1f}%)")
    print(f"Total processing time: {total_time:.1f}s")

    if summary['n_success'] > 0:
        print(f"\nFlat: {summary['n_flat']}  Normal: {summary['n_normal']}")
        print(f"Arch Index median: {summary['arch_index_median']:.4f} "
              f"(range {summary['arch_index_min']:.4f}-{summary['arch_index_max']:.4f})")

    failed = [r for r in results if r.get('status') != 'success']
    if failed:
        print(f"\n⚠️  Failed Images:")
        for r in failed:
            print(f"  - {r.get('image')}: {r.get('error')}")

    print("="*80 + "\n")


# ═══════════════════════════════════════════════════════════════════════════
# MAIN EXECUTION
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Batch processing entry point with progress tracking"""
    parser = argparse.ArgumentParser(
        description='Footprint Arch Index - Batch Processing',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process every image in the configured input directory
  python batch_process.py --config batch_config.yaml

  # Process in parallel
  python batch_process.py --config batch_config.yaml --parallel 4

  # Dry run to check configuration
  python batch_process.py --config batch_config.yaml --dry-run
        """
    )

    parser.add_argument('--config', type=Path, default='batch_config.yaml',
                        help='Path to configuration YAML file (default: batch_config.yaml)')
    parser.add_argument('--parallel', type=int, default=None,
                        help='Number of parallel jobs (overrides config)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Show what would be processed without actually processing')
    parser.add_argument('--continue-on-error', action='store_true',
                        help='Exit with status 0 even if images fail')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose output')

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        images = find_images(Path(config['input_dir']), config['file_patterns'])
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}")
        sys.exit(1)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger("batch")

    if not images:
        logger.error(f"No images found in {config['input_dir']}")
        sys.exit(1)

    if args.dry_run:
        print(f"\n📋 DRY RUN: Would process {len(images)} images:\n")
        for image in images:
            print(f"  - {image.name}")
        print("\nRun without --dry-run to start processing.\n")
        sys.exit(0)

    logger.info(f"Processing {len(images)} images")

    parallel_jobs = (args.parallel
                     or config.get('max_workers')
                     or config['batch_processing'].get('parallel_jobs', 1))
    results = []

    if parallel_jobs > 1:
        logger.info(f"Using {parallel_jobs} parallel workers")

        with ProcessPoolExecutor(max_workers=parallel_jobs) as executor:
            futures = {
                executor.submit(process_image, image, config, args.verbose): image
                for image in images
            }

            with tqdm(total=len(images), desc="Processing images", unit="image") as pbar:
                for future in as_completed(futures):
                    image = futures[future]
                    try:
                        result = future.result()
                    except Exception as e:
                        logger.error(f"Image {image.name} raised exception: {e}")
                        result = {
                            'image': image.name,
                            'status': 'error',
                            'error': str(e)
                        }
                    results.append(result)

                    status_icon = "✓" if result['status'] == 'success' else "✗"
                    pbar.set_postfix_str(f"{status_icon} {image.name}")
                    pbar.update(1)
    else:
        logger.info("Sequential processing (parallel=1)")

        with tqdm(images, desc="Processing images", unit="image") as pbar:
            for image in pbar:
                pbar.set_postfix_str(f"Current: {image.name}")
                result = process_image(image, config, args.verbose)
                results.append(result)

                status_icon = "✓" if result['status'] == 'success' else "✗"
                pbar.set_postfix_str(f"{status_icon} {image.name}")

    if config['batch_processing'].get('generate_summary_report', True):
        generate_summary_report(results, config, Path(config['output_dir']))

    failed = sum(1 for r in results if r['status'] != 'success')

    if failed > 0 and not args.continue_on_error:
        logger.error(f"{failed} image(s) failed. Use --continue-on-error to ignore failures.")
        sys.exit(1)

    logger.info(f"Batch processing complete. {len(results)-failed}/{len(results)} successful.")
    sys.exit(0)


if __name__ == '__main__':
    main()
