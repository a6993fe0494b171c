"""
TextRenderer - Text to PixelSource
==================================
Renders strings into white-background, black-text rasters that can be
layered onto the frame canvas.

Features:
- TrueType fonts through Pillow, or Pillow's built-in bitmap font
- Word wrapping to a fixed width; words wider than a line are split
  by character
- Explicit FontLoadError instead of aborting on a bad font path

Usage:
    from epaper.text import TextRenderer

    text = TextRenderer("fonts/DejaVuSans.ttf", 16)
    source = text.render("Hello World!", width=176)
    canvas.add_layer(source, 0, 0, transparent=True)
"""
import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from ..buffer.sources import ImageSource
from ..errors import FontLoadError

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 16
_BG = 255
_FG = 0


class TextRenderer:
    """
    Word-wrapping text rasterizer.

    Args:
        font_path: TrueType/OpenType font file; None for Pillow's default
        font_size: Size in points
        line_spacing: Extra pixels between lines

    Raises:
        FontLoadError: If font_path cannot be read or parsed
    """

    def __init__(
        self,
        font_path: str | None = None,
        font_size: int = DEFAULT_FONT_SIZE,
        line_spacing: int = 0,
    ):
        self._font_path = font_path
        self._font_size = font_size
        self._line_spacing = max(line_spacing, 0)
        self._font = load_font(font_path, font_size)

    @property
    def font(self) -> ImageFont.ImageFont:
        return self._font

    # =========================================================================
    # Measurement
    # =========================================================================

    def measure_width(self, text: str) -> int:
        if not text:
            return 0
        if hasattr(self._font, "getlength"):
            return int(self._font.getlength(text))
        bbox = self._font.getbbox(text)
        return bbox[2] - bbox[0]

    def line_height(self) -> int:
        try:
            ascent, descent = self._font.getmetrics()
            return ascent + descent
        except AttributeError:
            bbox = self._font.getbbox("Ay")
            return bbox[3] - bbox[1]

    # =========================================================================
    # Wrapping
    # =========================================================================

    def _break_word(self, word: str, max_width: int) -> list[str]:
        segments: list[str] = []
        current = ""
        for char in word:
            candidate = current + char
            if not current or self.measure_width(candidate) <= max_width:
                current = candidate
            else:
                segments.append(current)
                current = char
        if current:
            segments.append(current)
        return segments or [word]

    def wrap(self, text: str, max_width: int) -> list[str]:
        """Split text into lines no wider than max_width (where possible)."""
        if max_width <= 0:
            return [text]
        lines: list[str] = []
        for paragraph in text.split("\n"):
            words = paragraph.split()
            if not words:
                lines.append("")
                continue
            current = ""
            for word in words:
                segments = [word]
                if self.measure_width(word) > max_width:
                    segments = self._break_word(word, max_width)
                for segment in segments:
                    if not current:
                        current = segment
                        continue
                    candidate = f"{current} {segment}"
                    if self.measure_width(candidate) <= max_width:
                        current = candidate
                    else:
                        lines.append(current)
                        current = segment
            if current:
                lines.append(current)
        return lines or [""]

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_image(self, text: str, width: int) -> Image.Image:
        """Render to a Pillow "L" image exactly width pixels wide."""
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        lines = self.wrap(text, width)
        lh = self.line_height()
        step = lh + self._line_spacing
        height = max(step * len(lines) - self._line_spacing, 1)

        img = Image.new("L", (width, height), _BG)
        draw = ImageDraw.Draw(img)
        y = 0
        for line in lines:
            if line:
                draw.text((0, y), line, font=self._font, fill=_FG)
            y += step
        return img

    def render(self, text: str, width: int) -> ImageSource:
        """Render text as a PixelSource width pixels wide."""
        return ImageSource(self.render_image(text, width))


def load_font(font_path: str | None, font_size: int = DEFAULT_FONT_SIZE):
    """
    Load a TrueType font, or Pillow's default font when font_path is None.

    Raises:
        FontLoadError: If the font file is missing or unreadable
    """
    if font_path is None:
        return ImageFont.load_default(font_size)

    path = Path(font_path).expanduser()
    try:
        font = ImageFont.truetype(str(path), font_size)
    except OSError as err:
        raise FontLoadError(f"Cannot load font {path}: {err}") from err
    logger.debug("Loaded font %s at %dpt", path, font_size)
    return font
