"""Image decoding into RGBA pixel buffers"""
import numpy as np
import logging
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from ..exceptions import ImageNotFoundError, UnsupportedImageError, EmptyImageError
from ..models import PixelBuffer
from ..utils.validation import validate_image_dimensions

logger = logging.getLogger(__name__)


class ImageSource:
    """Decode footprint images from disk"""

    def __init__(self, file_path: Union[str, Path]):
        """
        Initialize image source.

        Args:
            file_path: Path to an image file in any format Pillow can read
        """
        self.file_path = Path(file_path)

    def load(self) -> PixelBuffer:
        """
        Decode the image to an RGBA pixel buffer.

        Returns:
            PixelBuffer whose width/height match the decoded grid

        Raises:
            ImageNotFoundError: If the path is missing or not a file
            UnsupportedImageError: If the file is not a decodable image
            EmptyImageError: If the image has zero width or height
        """
        path = self.file_path
        if not path.exists() or not path.is_file():
            raise ImageNotFoundError(str(path))

        logger.info(f"Loading image from {path}")

        try:
            with Image.open(path) as image:
                width, height = image.size
                if width == 0 or height == 0:
                    raise EmptyImageError(width, height, str(path))
                data = np.array(image.convert("RGBA"), dtype=np.uint8)
        except UnidentifiedImageError as e:
            raise UnsupportedImageError(str(path), "not a recognized image format") from e
        except OSError as e:
            raise UnsupportedImageError(str(path), str(e)) from e

        buffer = PixelBuffer.from_array(data)
        validate_image_dimensions(buffer, str(path))

        logger.info(f"Loaded image: {buffer.width} x {buffer.height} pixels")
        return buffer


def load_image(file_path: Union[str, Path]) -> PixelBuffer:
    """Convenience wrapper around ImageSource(file_path).load()"""
    return ImageSource(file_path).load()
