"""PNG export of pixel buffers"""
import logging
from pathlib import Path
from typing import Dict

from PIL import Image

from ..exceptions import ImageExportError
from ..models import PixelBuffer, ProcessingResult

logger = logging.getLogger(__name__)


def save_buffer(buffer: PixelBuffer, output_path: Path) -> Path:
    """
    Encode an RGBA buffer to an image file (format from the suffix).

    Args:
        buffer: Buffer to write
        output_path: Destination path

    Returns:
        The path written

    Raises:
        ImageExportError: If the file cannot be written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        Image.fromarray(buffer.data).save(output_path)
    except (OSError, ValueError) as e:
        raise ImageExportError(str(output_path), str(e)) from e

    logger.debug(f"Saved image: {output_path}")
    return output_path


class ImageExporter:
    """Write the original, processed and segmented views of a result"""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def export(self, result: ProcessingResult) -> Dict[str, str]:
        """
        Save all three views as PNG files.

        Returns:
            Mapping of view name to written path
        """
        views = {
            'original': result.original,
            'processed': result.processed_image,
            'segmented': result.segmented_image,
        }

        paths = {}
        for name, buffer in views.items():
            paths[name] = str(save_buffer(buffer, self.output_dir / f'{name}.png'))

        logger.info(f"Saved {len(paths)} images to {self.output_dir}")
        return paths
