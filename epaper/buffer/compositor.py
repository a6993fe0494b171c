"""
Compositor - Layering PixelSources onto the Frame Canvas
========================================================
Places a source raster onto the canvas at an offset.

Two modes:
  - opaque: every covered pixel takes the source's palette colour
  - transparent: pure white source pixels are skipped (chroma-key),
    everything else is painted as in opaque mode

The layer is clipped to the intersection of the canvas and the
shifted source bounds. A layer that misses the canvas entirely is a
no-op; the canvas is never left half-written by a clipping decision.
"""
from .palette import is_pure_white, quantize


class Layer:
    """
    One compositing step: a source placed at (x, y).

    Args:
        source: PixelSource to paint
        x: Canvas column of the source's left edge (may be negative)
        y: Canvas row of the source's top edge (may be negative)
        transparent: Treat pure white source pixels as see-through
    """

    __slots__ = ("source", "x", "y", "transparent")

    def __init__(self, source, x: int = 0, y: int = 0, transparent: bool = False):
        self.source = source
        self.x = x
        self.y = y
        self.transparent = transparent

    def apply(self, canvas) -> None:
        add_layer(canvas, self.source, self.x, self.y, self.transparent)

    def __repr__(self) -> str:
        return (
            f"Layer({self.source!r}, x={self.x}, y={self.y}, "
            f"transparent={self.transparent})"
        )


def clip(canvas, source, x: int, y: int) -> tuple | None:
    """
    Canvas-space rectangle covered by source placed at (x, y).

    Returns:
        (x0, y0, x1, y1) with x1/y1 exclusive, or None if nothing overlaps
    """
    x0 = max(x, 0)
    y0 = max(y, 0)
    x1 = min(x + source.width, canvas.width)
    y1 = min(y + source.height, canvas.height)
    if x0 >= x1 or y0 >= y1:
        return None
    return x0, y0, x1, y1


def add_layer(canvas, source, x: int = 0, y: int = 0, transparent: bool = False) -> None:
    """
    Composite source onto canvas at (x, y).

    Alpha plays no part in the see-through test: only opaque white is
    skipped, so flatten alpha images onto white before layering them.
    """
    box = clip(canvas, source, x, y)
    if box is None:
        return
    x0, y0, x1, y1 = box

    color_at = source.color_at
    pixel = canvas.pixel
    for cy in range(y0, y1):
        sy = cy - y
        for cx in range(x0, x1):
            c = color_at(cx - x, sy)
            if transparent and is_pure_white(c):
                continue
            pixel(cx, cy, quantize(c))


def compose(canvas, layers) -> None:
    """Apply layers in order; later layers paint over earlier ones."""
    for layer in layers:
        layer.apply(canvas)
