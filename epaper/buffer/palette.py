"""
Palette - Monochrome Colour Model
=================================
Maps arbitrary pixel values onto the panel's 2-entry {black, white} palette.

Accepted pixel values:
- int: 8-bit grey level (Pillow "L" and "1" modes)
- (r, g, b): opaque RGB
- (r, g, b, a): straight (non-premultiplied) RGBA

Quantization picks the nearest palette entry by squared distance over
alpha-premultiplied RGBA, ties going to black. "Pure white" for chroma-key
purposes means exactly (255, 255, 255, 255).
"""

# =============================================================================
# Colour Constants
# =============================================================================

BLACK = 0
WHITE = 1

BLACK_RGBA = (0, 0, 0, 255)
WHITE_RGBA = (255, 255, 255, 255)

_CHANNEL_MAX = 255

_PALETTE = (
    (BLACK, BLACK_RGBA),
    (WHITE, WHITE_RGBA),
)


def to_rgba(value) -> tuple:
    """Normalize a pixel value to an (r, g, b, a) tuple."""
    if isinstance(value, int):
        return (value, value, value, _CHANNEL_MAX)
    n = len(value)
    if n == 4:
        return tuple(value)
    if n == 3:
        return (value[0], value[1], value[2], _CHANNEL_MAX)
    if n == 2:
        # Pillow "LA"
        return (value[0], value[0], value[0], value[1])
    if n == 1:
        return (value[0], value[0], value[0], _CHANNEL_MAX)
    raise ValueError(f"Unsupported pixel value: {value!r}")


def _premultiply(rgba: tuple) -> tuple:
    r, g, b, a = rgba
    if a == _CHANNEL_MAX:
        return rgba
    return (r * a // _CHANNEL_MAX, g * a // _CHANNEL_MAX, b * a // _CHANNEL_MAX, a)


def quantize(value) -> int:
    """Return BLACK or WHITE, whichever palette entry is nearest to value."""
    rgba = _premultiply(to_rgba(value))
    best, best_dist = BLACK, None
    for index, entry in _PALETTE:
        dist = 0
        for c, p in zip(rgba, entry):
            dist += (c - p) * (c - p)
        if best_dist is None or dist < best_dist:
            best, best_dist = index, dist
    return best


def is_pure_white(value) -> bool:
    """True only for fully opaque, fully saturated white."""
    return to_rgba(value) == WHITE_RGBA


def rgba_of(color: int) -> tuple:
    """RGBA tuple for a palette index."""
    return WHITE_RGBA if color else BLACK_RGBA
