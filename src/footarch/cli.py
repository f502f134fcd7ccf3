"""Command-line interface for the footprint Arch Index analyzer"""
import argparse
import logging
import json
import sys
from pathlib import Path
from datetime import datetime
from typing import Dict, Union

from .config_schema import FootArchConfig, load_config
from .core.image_source import load_image
from .pipeline import PipelineExecutor
from .export.image_exporter import ImageExporter
from .export.visualizer import DashboardVisualizer
from .export.xlsx_exporter import XLSXExporter
from .exceptions import ConfigurationError, OutputDirectoryError, format_error_chain


def setup_logging(output_dir: Path, verbose: bool = False, log_level: str = 'INFO'):
    """Setup logging configuration"""
    log_dir = output_dir / 'logs'
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f'analysis_log_{datetime.now().strftime("%Y%m%d_%H%M%S")}.txt'

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )

    return logging.getLogger(__name__)


def _resolve_config(config: Union[FootArchConfig, Dict, None]) -> FootArchConfig:
    if config is None:
        return FootArchConfig()
    if isinstance(config, FootArchConfig):
        return config
    return FootArchConfig.from_dict(config)


def run_pipeline(image_path: Path,
                 output_dir: Path,
                 verbose: bool = False,
                 config: Union[FootArchConfig, Dict, None] = None) -> Dict:
    """
    Run the complete footprint analysis and write its artifacts.

    Args:
        image_path: Path to the footprint image
        output_dir: Output directory
        verbose: Enable verbose logging
        config: Optional FootArchConfig or configuration dictionary

    Returns:
        Dictionary with status, measurements, metadata and output files.
        Failures are logged and reported as {'status': 'error', 'error': ...}.
    """
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        error = OutputDirectoryError(str(output_dir), str(e))
        logging.getLogger(__name__).error(str(error))
        return {'status': 'error', 'error': str(error)}

    try:
        cfg = _resolve_config(config)
    except ValueError as e:
        logging.getLogger(__name__).error(f"Invalid configuration: {e}")
        return {'status': 'error', 'error': str(e)}

    logger = setup_logging(output_dir, verbose, cfg.general.log_level)

    try:
        buffer = load_image(image_path)

        executor = PipelineExecutor(cfg)
        result = executor.execute(buffer, source=str(image_path), run_logger=logger)

        metadata = {
            'analysis_date': datetime.now().isoformat(),
            'image': str(image_path),
            'width': buffer.width,
            'height': buffer.height,
            'block_size': cfg.binarization.block_size,
            'bias': cfg.binarization.bias,
            'kernel_size': cfg.morphology.kernel_size,
            'toe_fraction': cfg.toe_trim.toe_fraction,
            'flat_threshold': cfg.classification.flat_threshold,
            'reference_configuration': cfg.is_reference_configuration(),
        }

        output_files = {}

        if cfg.visualization.save_images:
            output_files['images'] = ImageExporter(output_dir).export(result)

        if cfg.visualization.generate_plots:
            visualizer = DashboardVisualizer(
                output_dir,
                dpi=cfg.visualization.plot_dpi,
                plot_format=cfg.visualization.plot_format
            )
            output_files['dashboard'] = str(visualizer.plot_result_dashboard(result))

        if cfg.export.export_xlsx:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            xlsx_path = output_dir / f"Arch_Index_{timestamp}.xlsx"
            output_files['xlsx'] = str(XLSXExporter(xlsx_path).export(result, metadata))

        results = result.to_dict()

        if cfg.export.export_json:
            json_path = output_dir / 'result.json'
            with open(json_path, 'w') as f:
                json.dump({'metadata': metadata, 'results': results}, f, indent=2)
            output_files['json'] = str(json_path)

        logger.info("=" * 80)
        logger.info("Analysis complete!")
        logger.info(f"Arch Index: {result.arch_index:.4f} ({result.classification.classification})")
        logger.info(f"Results saved to: {output_dir}")
        logger.info("=" * 80)

        return {
            'status': 'success',
            'metadata': metadata,
            'results': results,
            'output_files': output_files
        }

    except Exception as e:
        logger.error(f"Pipeline failed: {str(e)}", exc_info=True)
        logger.debug(format_error_chain(e))
        return {
            'status': 'error',
            'error': str(e)
        }


def main():
    """Main entry point for CLI"""
    parser = argparse.ArgumentParser(
        description='Footprint Arch Index Analyzer - silhouette segmentation and arch classification',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('--image', type=Path, required=True,
                        help='Path to footprint image')
    parser.add_argument('--output', type=Path, default=None,
                        help='Output directory for results (default: general.output_dir from the config)')
    parser.add_argument('--config', type=Path, default=None,
                        help='Optional YAML configuration file')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging')

    args = parser.parse_args()

    if not args.image.exists():
        print(f"Error: File not found: {args.image}", file=sys.stderr)
        sys.exit(1)

    try:
        config = load_config(str(args.config)) if args.config else None
    except (ConfigurationError, ValueError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    output_dir = args.output or Path((config or FootArchConfig()).general.output_dir)

    result = run_pipeline(
        args.image,
        output_dir,
        args.verbose,
        config
    )

    print(json.dumps(result, indent=2, default=str))

    sys.exit(0 if result['status'] == 'success' else 2)


if __name__ == '__main__':
    main()
