"""
EPaper - Table-Driven E-Paper Protocol Driver
=============================================
Drives LUT-loading e-paper controllers (Waveshare 2.7" and relatives)
through the reset -> init -> clear/display -> sleep protocol.

Architecture
------------
This driver uses a layered architecture:
  - SPIDevice: Low-level SPI communication and BUSY polling
  - PanelModel: Geometry and per-step command tables
  - DriverState: State management
  - EPaper: Protocol ordering and synchronization

The driver owns the ordering rules; the panel model owns the bytes.
Ordering guarantees:
  - init sends power-on and waits for BUSY idle before any LUT
  - every data load is followed by refresh, settle delay, BUSY wait
  - sleep sends power-off, waits, then deep sleep with its check code
"""
import logging
import time
from typing import TYPE_CHECKING

from ..errors import StateError
from .base import DisplayDriver
from .panels import EPD_2IN7, PanelModel
from .state import DisplayState, DriverState
from . import sequences as SEQ

if TYPE_CHECKING:
    from ..hardware.spi import SPIDevice

logger = logging.getLogger(__name__)


class EPaper(DisplayDriver):
    """
    E-Paper protocol driver.

    Example:
        from epaper.hardware import SPIDevice
        from epaper.drivers import EPaper, EPD_2IN7

        with EPaper(SPIDevice.from_board(), EPD_2IN7) as epd:
            epd.init()
            epd.clear()
            epd.display(buffer)
            epd.sleep()

    Args:
        spi: Configured SPIDevice instance
        panel: Panel model with geometry and command tables
        busy_timeout: Override for every busy wait, in seconds. None uses
            the per-operation defaults; float("inf") waits forever.
        cancel: Optional event-like object checked while waiting on BUSY
        refresh_settle_ms: Delay between refresh command and BUSY polling
    """

    def __init__(
        self,
        spi: "SPIDevice",
        panel: PanelModel = EPD_2IN7,
        busy_timeout: float | None = None,
        cancel=None,
        refresh_settle_ms: float = SEQ.REFRESH_SETTLE_MS,
    ):
        self._spi = spi
        self._panel = panel
        self._state = DriverState()
        self._busy_timeout = busy_timeout
        self._cancel = cancel
        self._refresh_settle_ms = refresh_settle_ms

    @classmethod
    def create(cls, panel: PanelModel = EPD_2IN7, **board_pins) -> "EPaper":
        """
        Factory method that creates the driver with board-configured SPI.

        Args:
            panel: Panel model to drive
            **board_pins: Passed to SPIDevice.from_board()

        Raises:
            ConfigurationError: If the hardware cannot be configured
        """
        from ..hardware.spi import SPIDevice
        return cls(SPIDevice.from_board(**board_pins), panel)

    def deinit(self):
        """Put the panel to sleep (if initialized) and release hardware."""
        try:
            if self._state.is_ready:
                self.sleep()
        finally:
            self._spi.deinit()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.deinit()
        return False

    # =========================================================================
    # Internals
    # =========================================================================

    def _send_step(self, step: str):
        """Send every (opcode, payload) entry of one sequence step."""
        for opcode, payload in self._panel.sequence[step]:
            self._spi.send(opcode, payload or None)

    def _wait(self, operation: str, default_timeout: float) -> float:
        timeout = self._busy_timeout if self._busy_timeout is not None else default_timeout
        return self._spi.wait_ready(
            timeout=timeout,
            operation=operation,
            cancel=self._cancel,
        )

    def _require_ready(self, operation: str):
        if not self._state.is_ready:
            raise StateError(
                f"Cannot {operation}: display is {DisplayState.name(self._state.state)}, "
                f"call init() first"
            )

    def _turn_on_display(self) -> float:
        """Refresh the panel from the loaded frame and wait for completion."""
        self._send_step("refresh")
        time.sleep(self._refresh_settle_ms / 1000)
        t = self._wait("display refresh", SEQ.TIMEOUT_REFRESH)
        self._state.on_refresh_complete()
        return t

    # =========================================================================
    # Public API
    # =========================================================================

    def reset(self):
        """Hardware reset. Leaves the controller uninitialized."""
        self._spi.hardware_reset()
        self._state.on_reset()

    def init(self):
        """
        Reset and initialize the controller.

        Safe from any state; this is also how the panel is woken from
        deep sleep.
        """
        logger.info("Initializing %s panel (%dx%d)",
                    self._panel.name, self._panel.width, self._panel.height)
        self.reset()
        self._send_step("power_setup")
        self._send_step("power_on")
        self._wait("power on", SEQ.TIMEOUT_POWER)
        self._send_step("panel_setup")
        self._send_step("luts")
        self._state.on_init_complete()

    def clear(self):
        """
        Clear the physical panel to white.

        Only the panel is cleared; any in-memory canvas is left as is.

        Raises:
            StateError: If the display is not initialized
        """
        self._require_ready("clear")
        logger.info("Clearing display")
        self._spi.send(
            self._panel.start_transmission,
            bytes((SEQ.FILL_WHITE,)) * self._panel.buffer_size,
        )
        self._turn_on_display()

    def display(self, data: bytes) -> float:
        """
        Transmit a packed frame and refresh.

        Args:
            data: Packed buffer (panel.buffer_size bytes, 1 bit per pixel)

        Returns:
            Refresh wait time in seconds

        Raises:
            ValueError: If buffer size is incorrect
            StateError: If the display is not initialized
        """
        if len(data) != self._panel.buffer_size:
            raise ValueError(
                f"Buffer must be {self._panel.buffer_size} bytes, got {len(data)}"
            )
        self._require_ready("display")
        logger.info("Displaying frame (%d bytes)", len(data))
        self._spi.send(self._panel.start_transmission, data)
        return self._turn_on_display()

    def sleep(self):
        """
        Enter deep sleep mode.

        A sleeping panel needs init() before it accepts frames again.

        Raises:
            StateError: If the display was never initialized
        """
        if self._state.is_sleeping:
            return
        if not self._state.is_initialized:
            raise StateError("Cannot sleep: display is UNINITIALIZED")

        logger.info("Entering deep sleep")
        self._send_step("power_off")
        self._wait("power off", SEQ.TIMEOUT_POWER)
        self._send_step("deep_sleep")
        self._state.on_sleep()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def panel(self) -> PanelModel:
        return self._panel

    @property
    def spi(self) -> "SPIDevice":
        """Access underlying transport."""
        return self._spi

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def is_sleeping(self) -> bool:
        return self._state.is_sleeping

    @property
    def width(self) -> int:
        return self._panel.width

    @property
    def height(self) -> int:
        return self._panel.height
