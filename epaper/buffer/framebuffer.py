"""
FrameCanvas - Panel-Sized Monochrome Raster
===========================================
The single destination every layer is composited into before packing.

One byte per pixel holding BLACK (0) or WHITE (1). Packing into the
panel's 1-bit wire format is a separate step (see packer.py) so that
composition never has to reason about bit positions or row padding.

The canvas is itself a PixelSource, so it can be rotated, exported or
layered onto another canvas.
"""
from PIL import Image

from .palette import BLACK, WHITE, rgba_of

# =============================================================================
# Fill Constants
# =============================================================================

_FILL_WHITE = b'\x01'
_FILL_BLACK = b'\x00'

# Pillow mode "1" uses 0 for black, 255 for white
_IMAGE_LEVELS = (0, 255)


class FrameCanvas:
    """
    Monochrome pixel canvas sized to the panel.

    Args:
        width: Panel width in pixels
        height: Panel height in pixels
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._size = width * height
        self._pixels = bytearray(_FILL_WHITE * self._size)

    # =========================================================================
    # Pixel Ops
    # =========================================================================

    def pixel(self, x: int, y: int, color: int = BLACK) -> None:
        """Set a pixel; coordinates outside the canvas are ignored."""
        if not (0 <= x < self.width and 0 <= y < self.height): return
        self._pixels[y * self.width + x] = WHITE if color else BLACK

    def get_pixel(self, x: int, y: int) -> int:
        """Palette index at (x, y); outside the canvas reads as WHITE."""
        if not (0 <= x < self.width and 0 <= y < self.height): return WHITE
        return self._pixels[y * self.width + x]

    def color_at(self, x: int, y: int) -> tuple:
        return rgba_of(self._pixels[y * self.width + x])

    def row(self, y: int) -> memoryview:
        """Read-only view of one row of palette indices."""
        start = y * self.width
        return memoryview(self._pixels)[start:start + self.width].toreadonly()

    # =========================================================================
    # Buffer Ops
    # =========================================================================

    def clear(self, color: int = WHITE) -> None:
        """Fill the whole canvas with one colour."""
        self._pixels[:] = (_FILL_WHITE if color else _FILL_BLACK) * self._size

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int = BLACK) -> None:
        x0, x1 = max(x, 0), min(x + w, self.width)
        if x0 >= x1: return
        fill = (_FILL_WHITE if color else _FILL_BLACK) * (x1 - x0)
        for yy in range(max(y, 0), min(y + h, self.height)):
            start = yy * self.width
            self._pixels[start + x0:start + x1] = fill

    def to_image(self) -> Image.Image:
        """Export as a Pillow mode "1" image (for previews and debugging)."""
        data = bytes(_IMAGE_LEVELS[p] for p in self._pixels)
        return Image.frombytes("L", (self.width, self.height), data).convert("1")

    def __repr__(self) -> str:
        return f"FrameCanvas({self.width}x{self.height})"
