"""
PixelSource - Raster Input Capability
=====================================
Anything that can be composited onto the frame canvas.

The compositor and rotator only need three things from an image: its
bounds and a per-pixel colour lookup. Any object with ``width``,
``height`` and ``color_at(x, y)`` qualifies; ``ImageSource`` adapts a
Pillow image to that shape.
"""
import logging
from typing import Protocol, runtime_checkable

from PIL import Image, UnidentifiedImageError

from ..errors import ImageLoadError

logger = logging.getLogger(__name__)


@runtime_checkable
class PixelSource(Protocol):
    """Bounds plus per-pixel colour lookup."""

    width: int
    height: int

    def color_at(self, x: int, y: int):
        """Colour at (x, y): grey int, RGB or RGBA tuple."""
        ...


class ImageSource:
    """
    PixelSource backed by a Pillow image.

    The image is converted to RGBA once so that chroma-key comparisons
    see the image's own white level, not a pre-quantized one.

    Args:
        image: Any Pillow image
    """

    def __init__(self, image: Image.Image):
        self._image = image if image.mode == "RGBA" else image.convert("RGBA")
        self._pixels = self._image.load()
        self.width, self.height = self._image.size

    @property
    def image(self) -> Image.Image:
        return self._image

    def color_at(self, x: int, y: int) -> tuple:
        return self._pixels[x, y]

    def __repr__(self) -> str:
        return f"ImageSource({self.width}x{self.height})"


def load_image(path) -> ImageSource:
    """
    Open an image file as a PixelSource.

    Raises:
        ImageLoadError: If the file is missing or not a decodable image
    """
    try:
        with Image.open(path) as img:
            source = ImageSource(img.convert("RGBA"))
    except (OSError, UnidentifiedImageError) as err:
        raise ImageLoadError(f"Cannot load image {path}: {err}") from err
    logger.debug("Loaded image %s (%dx%d)", path, source.width, source.height)
    return source
