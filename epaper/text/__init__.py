"""
Text rendering subsystem.

Modules:
    renderer: Pillow-based text rasterizer producing PixelSources
"""
from .renderer import TextRenderer, load_font

__all__ = ["TextRenderer", "load_font"]
