"""
DisplayDriver - Abstract Base for EPD Drivers
==============================================
The protocol surface Canvas relies on. A driver owns one panel
model and one transport; Canvas only sees this interface.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .panels import PanelModel
    from .state import DriverState


class DisplayDriver:
    """
    Interface for e-paper protocol drivers; every method must be overridden.

    Properties:
        panel: PanelModel being driven
        state: Current DriverState
    """

    def reset(self):
        """Hardware reset; also wakes the controller from deep sleep."""
        raise NotImplementedError

    def init(self):
        """
        Initialize the display for use.

        Must be called after construction and after every sleep().
        """
        raise NotImplementedError

    def clear(self):
        """Clear the physical panel to white."""
        raise NotImplementedError

    def display(self, data: bytes) -> float:
        """
        Display a packed frame.

        Args:
            data: Packed buffer (panel.buffer_size bytes, 1 bit per pixel)

        Returns:
            Time spent waiting for the refresh in seconds
        """
        raise NotImplementedError

    def sleep(self):
        """Enter deep sleep mode."""
        raise NotImplementedError

    def deinit(self):
        """Release hardware resources."""
        raise NotImplementedError

    @property
    def panel(self) -> "PanelModel":
        raise NotImplementedError

    @property
    def state(self) -> "DriverState":
        raise NotImplementedError

    @property
    def is_sleeping(self) -> bool:
        raise NotImplementedError
