"""
Buffer subsystem - frame canvas, pixel sources and the composition pipeline.

Modules:
    palette: 2-entry {black, white} colour model
    framebuffer: Panel-sized monochrome canvas
    raster: Owned RGBA raster (PixelSource)
    sources: PixelSource capability and Pillow adapter
    compositor: Layering with optional chroma-key transparency
    rotate: Quarter-turn rotation
    packer: 1-bit row packing for the controller
"""
from .palette import BLACK, WHITE, quantize, is_pure_white
from .framebuffer import FrameCanvas
from .raster import Raster
from .sources import PixelSource, ImageSource, load_image
from .compositor import Layer, add_layer, compose
from .rotate import rotate
from .packer import pack, line_width

__all__ = [
    "FrameCanvas",
    "Raster",
    "PixelSource",
    "ImageSource",
    "load_image",
    "Layer",
    "add_layer",
    "compose",
    "rotate",
    "pack",
    "line_width",
    "quantize",
    "is_pure_white",
    "BLACK",
    "WHITE",
]
