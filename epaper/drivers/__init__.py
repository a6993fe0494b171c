"""
Display driver layer.
"""
from .state import DisplayState, DriverState
from .base import DisplayDriver
from .panels import PanelModel, EPD_2IN7, PANELS, get_panel
from .epd import EPaper

__all__ = [
    "DisplayState",
    "DriverState",
    "DisplayDriver",
    "PanelModel",
    "EPD_2IN7",
    "PANELS",
    "get_panel",
    "EPaper",
]
