"""
Canvas - High-Level E-Paper Session
===================================
Unified interface combining the display driver and the frame canvas.

This is the primary entry point for most users. It provides:
- Layer composition (images, text, rotated sources)
- Packing and display of the composed frame
- Screen clearing and power management
- Dependency injection for testing and customization

Usage:
    # Simple (auto-creates driver from board pins)
    from epaper import Canvas

    with Canvas.create() as canvas:
        canvas.init()
        canvas.add_layer(canvas.write("Hello!", 16), 0, 0)
        canvas.print_display()

    # With dependency injection
    from epaper.hardware import SPIDevice
    from epaper.drivers import EPaper, EPD_2IN7

    driver = EPaper(SPIDevice.from_board(), EPD_2IN7)
    canvas = Canvas(driver)

The canvas is single-threaded: callers must serialize all calls into
one session.
"""
import logging
from typing import TYPE_CHECKING

from .buffer import FrameCanvas, Layer, add_layer, compose, load_image, pack, rotate
from .buffer import BLACK, WHITE

if TYPE_CHECKING:
    from .drivers.base import DisplayDriver
    from .drivers.panels import PanelModel
    from .settings import DeviceSettings
    from .text import TextRenderer

__all__ = ["Canvas", "BLACK", "WHITE"]

logger = logging.getLogger(__name__)


class Canvas:
    """
    Display session: one driver plus the frame canvas it displays.

    Args:
        driver: Display driver instance (owns panel model and transport)
        owns_driver: If True, close() also deinitializes the driver
    """

    def __init__(self, driver: "DisplayDriver", owns_driver: bool = False):
        self._driver = driver
        self._owns_driver = owns_driver
        panel = driver.panel
        self._frame = FrameCanvas(panel.width, panel.height)
        self._text_cache: dict = {}
        self._closed = False

    @classmethod
    def create(cls, panel: "PanelModel | None" = None, **board_pins) -> "Canvas":
        """
        Build a session on board hardware.

        Args:
            panel: Panel model (default: EPD_2IN7)
            **board_pins: Passed to SPIDevice.from_board()
        """
        from .drivers import EPD_2IN7, EPaper
        driver = EPaper.create(panel or EPD_2IN7, **board_pins)
        return cls(driver, owns_driver=True)

    @classmethod
    def from_settings(cls, settings: "DeviceSettings | None" = None, cancel=None) -> "Canvas":
        """
        Build a session from DeviceSettings (environment by default).

        Raises:
            ConfigurationError: Unknown panel or hardware setup failure
        """
        from .drivers import EPaper, get_panel
        from .hardware import SPIDevice
        from .settings import DeviceSettings

        settings = settings or DeviceSettings.from_env()
        panel = get_panel(settings.panel)
        spi = SPIDevice.from_board(
            dc_pin=settings.dc_pin,
            cs_pin=settings.cs_pin,
            rst_pin=settings.rst_pin,
            busy_pin=settings.busy_pin,
            baudrate=settings.baudrate,
            reset_delay_ms=settings.reset_delay_ms,
            poll_interval_ms=settings.poll_interval_ms,
        )
        driver = EPaper(spi, panel, busy_timeout=settings.busy_timeout, cancel=cancel)
        return cls(driver, owns_driver=True)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False

    def close(self):
        """Release hardware resources if this session owns the driver."""
        if not self._closed:
            if self._owns_driver:
                self._driver.deinit()
            self._closed = True

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def width(self) -> int:
        return self._frame.width

    @property
    def height(self) -> int:
        return self._frame.height

    @property
    def frame(self) -> FrameCanvas:
        """The in-memory frame that print_display() sends."""
        return self._frame

    @property
    def driver(self) -> "DisplayDriver":
        """Access underlying display driver."""
        return self._driver

    @property
    def panel(self) -> "PanelModel":
        return self._driver.panel

    # =========================================================================
    # Composition
    # =========================================================================

    def add_layer(self, source, x: int = 0, y: int = 0, transparent: bool = False):
        """Composite source onto the frame at (x, y)."""
        add_layer(self._frame, source, x, y, transparent)

    def add_layers(self, layers):
        """Composite a sequence of Layer objects in order."""
        compose(self._frame, layers)

    def add_image(self, path, x: int = 0, y: int = 0, transparent: bool = False):
        """
        Load an image file and composite it.

        Raises:
            ImageLoadError: If the file cannot be decoded
        """
        Layer(load_image(path), x, y, transparent).apply(self._frame)

    @staticmethod
    def rotate(source, angle: int = 90):
        """Rotate a source clockwise; use before add_layer()."""
        return rotate(source, angle)

    def write(
        self,
        text: str,
        font_size: int = 16,
        font_path: str | None = None,
        rotate: bool = False,
    ):
        """
        Render text as a panel-wide PixelSource.

        Args:
            text: String to render (wrapped to the panel width)
            font_size: Size in points
            font_path: TrueType font file; None for Pillow's default
            rotate: Wrap to the panel height instead, for a source that
                will be rotated before layering

        Raises:
            FontLoadError: If the font cannot be loaded
        """
        renderer = self._renderer(font_path, font_size)
        width = self.height if rotate else self.width
        return renderer.render(text, width)

    def _renderer(self, font_path, font_size) -> "TextRenderer":
        key = (font_path, font_size)
        renderer = self._text_cache.get(key)
        if renderer is None:
            from .text import TextRenderer
            renderer = TextRenderer(font_path, font_size)
            self._text_cache[key] = renderer
        return renderer

    def clear(self, color: int = WHITE):
        """Reset the in-memory frame only."""
        self._frame.clear(color)

    # =========================================================================
    # Display Updates
    # =========================================================================

    def init(self, clear: bool = False):
        """Initialize display hardware; optionally clear the panel."""
        self._driver.init()
        if clear:
            self.clear_screen()

    def packed(self) -> bytes:
        """The frame in the panel's wire format."""
        return pack(self._frame)

    def print_display(self) -> float:
        """
        Pack the frame and send it to the panel.

        Returns:
            Refresh wait time in seconds
        """
        return self._driver.display(self.packed())

    def clear_screen(self, reset_canvas: bool = True):
        """
        Clear the physical panel to white.

        Args:
            reset_canvas: Also reset the in-memory frame to white, dropping
                every layer added so far
        """
        self._driver.clear()
        if reset_canvas:
            self._frame.clear(WHITE)

    def sleep(self):
        """Put the panel into deep sleep (init() wakes it)."""
        self._driver.sleep()
