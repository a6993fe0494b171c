"""
Raster - Owned In-Memory PixelSource
====================================
A plain width x height grid of RGBA tuples. Produced by the rotator and
handy for building layers in code or tests.
"""
from .palette import WHITE_RGBA, to_rgba


class Raster:
    """
    Mutable RGBA raster implementing the PixelSource capability.

    Args:
        width: Width in pixels
        height: Height in pixels
        fill: Initial colour for every pixel (default: pure white)
    """

    def __init__(self, width: int, height: int, fill=WHITE_RGBA):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid raster size {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = [to_rgba(fill)] * (width * height)

    @classmethod
    def from_source(cls, source) -> "Raster":
        """Copy any PixelSource into a new Raster."""
        r = cls(source.width, source.height)
        for y in range(source.height):
            for x in range(source.width):
                r._pixels[y * r.width + x] = to_rgba(source.color_at(x, y))
        return r

    def color_at(self, x: int, y: int) -> tuple:
        return self._pixels[y * self.width + x]

    def set(self, x: int, y: int, color) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._pixels[y * self.width + x] = to_rgba(color)

    def fill_rect(self, x: int, y: int, w: int, h: int, color) -> None:
        rgba = to_rgba(color)
        for yy in range(max(y, 0), min(y + h, self.height)):
            row = yy * self.width
            for xx in range(max(x, 0), min(x + w, self.width)):
                self._pixels[row + xx] = rgba

    def __eq__(self, other) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (self.width, self.height, self._pixels) == (other.width, other.height, other._pixels)

    def __repr__(self) -> str:
        return f"Raster({self.width}x{self.height})"
