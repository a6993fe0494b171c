"""
Rotator - Quarter-Turn Rotation of PixelSources
===============================================
Produces a new raster rotated clockwise about the origin corner, with
the bounds resized to fit (a 90/270 degree turn swaps width and height).

Compositing never rotates, so rotate a source first and then layer the
result.
"""
from .palette import to_rgba
from .raster import Raster

# Destination (dx, dy) -> source (sx, sy), given source width w and height h.
# Clockwise: 90 maps source (sx, sy) to (h - 1 - sy, sx).
_INVERSE = {
    0: lambda dx, dy, w, h: (dx, dy),
    90: lambda dx, dy, w, h: (dy, h - 1 - dx),
    180: lambda dx, dy, w, h: (w - 1 - dx, h - 1 - dy),
    270: lambda dx, dy, w, h: (w - 1 - dy, dx),
}


def rotate(source, angle: int = 90) -> Raster:
    """
    Rotate a PixelSource clockwise by a multiple of 90 degrees.

    Args:
        source: PixelSource to rotate
        angle: 0, 90, 180 or 270 (negative and >360 values are normalized)

    Returns:
        New Raster; (h, w) bounds for 90/270, (w, h) otherwise

    Raises:
        ValueError: If angle is not a multiple of 90
    """
    angle %= 360
    if angle not in _INVERSE:
        raise ValueError(f"angle must be a multiple of 90, got {angle}")

    w, h = source.width, source.height
    swapped = angle in (90, 270)
    out = Raster(h, w) if swapped else Raster(w, h)
    inverse = _INVERSE[angle]

    for dy in range(out.height):
        for dx in range(out.width):
            sx, sy = inverse(dx, dy, w, h)
            out.set(dx, dy, to_rgba(source.color_at(sx, sy)))
    return out
