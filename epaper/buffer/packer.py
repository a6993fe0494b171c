"""
BitPacker - Canvas to Panel Wire Format
=======================================
Flattens a FrameCanvas into the controller's 1-bit-per-pixel buffer.

Format:
  - row-major, ``line_width = ceil(width / 8)`` bytes per row
  - first pixel of each 8-pixel group in the MSB
  - bit set = white, bit clear = black
  - output starts as 0xFF, so row padding reads as white

The packer reads only the canvas: whatever was composited (or left
white) is what gets sent.
"""
from .palette import WHITE

_FILL_WHITE = 0xFF
_BYTE_MASK = 0xFF
_BITS_PER_BYTE = 8


def line_width(width: int) -> int:
    """Bytes needed for one row of width pixels."""
    return (width + _BITS_PER_BYTE - 1) // _BITS_PER_BYTE


def pack(canvas) -> bytes:
    """
    Pack a canvas into the panel's byte layout.

    Each row is scanned left to right into an 8-bit accumulator which is
    stored after every eighth pixel. A trailing group of fewer than eight
    pixels is not stored, leaving that byte at the white fill value.

    Args:
        canvas: FrameCanvas (or anything with width, height, get_pixel)

    Returns:
        bytes of length line_width(canvas.width) * canvas.height
    """
    width, height = canvas.width, canvas.height
    stride = line_width(width)
    out = bytearray(bytes((_FILL_WHITE,)) * (stride * height))
    get_pixel = canvas.get_pixel

    for y in range(height):
        row = y * stride
        acc = 0
        for x in range(width):
            acc = (acc << 1) & _BYTE_MASK
            if get_pixel(x, y) == WHITE:
                acc |= 0x01
            if (x + 1) % _BITS_PER_BYTE == 0:
                out[row + x // _BITS_PER_BYTE] = acc
                acc = 0

    return bytes(out)
