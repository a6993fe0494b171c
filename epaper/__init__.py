"""
E-Paper Driver Library
======================
Driver and frame-composition pipeline for monochrome LUT-loading
e-paper panels (Waveshare 2.7" B/W and relatives) on Linux SBCs.

Architecture
------------
The library is organized into layers:

    Canvas          Session: composition + display management
       │
       ├── FrameCanvas   Panel-sized monochrome raster
       │      │
       │      ├── Compositor    Layers with chroma-key transparency
       │      ├── Rotator       Quarter-turn rotation of sources
       │      └── BitPacker     1-bit row packing
       │
       ├── TextRenderer  Text to PixelSource (Pillow)
       │
       └── EPaper        Protocol driver (reset/init/clear/display/sleep)
              │
              ├── PanelModel    Geometry + command tables
              └── SPIDevice     SPI + GPIO transport (Blinka)

Quick Start
-----------
    from epaper import Canvas

    with Canvas.create() as canvas:
        canvas.init()
        canvas.clear_screen()
        canvas.add_layer(canvas.write("Hello!", 16))
        canvas.print_display()

Advanced Usage
--------------
    # Dependency injection for testing or custom setup
    from epaper.hardware import SPIDevice
    from epaper.drivers import EPaper, EPD_2IN7
    from epaper import Canvas

    spi = SPIDevice.from_board(dc_pin="D25", busy_pin="D24")
    canvas = Canvas(EPaper(spi, EPD_2IN7, busy_timeout=20.0))

Module Structure
----------------
    epaper/
    ├── canvas.py            High-level session
    ├── errors.py            Exception hierarchy
    ├── settings.py          Environment configuration
    ├── logging_setup.py     Console logging
    ├── buffer/
    │   ├── palette.py       Black/white colour model
    │   ├── framebuffer.py   FrameCanvas
    │   ├── raster.py        In-memory PixelSource
    │   ├── sources.py       PixelSource protocol, Pillow adapter
    │   ├── compositor.py    Layering
    │   ├── rotate.py        Rotation
    │   └── packer.py        Bit packing
    ├── text/
    │   └── renderer.py      Text rendering
    ├── drivers/
    │   ├── base.py          DisplayDriver protocol
    │   ├── epd.py           Protocol driver
    │   ├── panels.py        Panel models and registry
    │   ├── commands.py      Command constants
    │   ├── sequences.py     Timing and payload constants
    │   ├── state.py         Driver state machine
    │   └── lut.py           Waveform look-up tables
    └── hardware/
        └── spi.py           SPI communication layer
"""

# Buffer layer
from .buffer import (
    FrameCanvas,
    Raster,
    PixelSource,
    ImageSource,
    Layer,
    add_layer,
    compose,
    rotate,
    pack,
    load_image,
    BLACK,
    WHITE,
)

# Driver layer
from .drivers import EPaper, PanelModel, EPD_2IN7, DisplayState, DriverState, get_panel

# Errors
from .errors import (
    EPaperError,
    ConfigurationError,
    TransportError,
    DeviceUnresponsiveError,
    WaitCancelled,
    StateError,
    FontLoadError,
    ImageLoadError,
)

# High-level interface
from .canvas import Canvas

__all__ = [
    # High-level
    "Canvas",
    # Buffer
    "FrameCanvas",
    "Raster",
    "PixelSource",
    "ImageSource",
    "Layer",
    "add_layer",
    "compose",
    "rotate",
    "pack",
    "load_image",
    # Drivers
    "EPaper",
    "PanelModel",
    "EPD_2IN7",
    "DisplayState",
    "DriverState",
    "get_panel",
    # Errors
    "EPaperError",
    "ConfigurationError",
    "TransportError",
    "DeviceUnresponsiveError",
    "WaitCancelled",
    "StateError",
    "FontLoadError",
    "ImageLoadError",
    # Colors
    "BLACK",
    "WHITE",
]

__version__ = "1.0.0"
