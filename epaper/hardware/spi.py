"""
SPIDevice - Byte Transport for UC81xx Panels
============================================
The only module that touches pins and the SPI bus.

Covers:
- bus setup (mode 0, 8-bit) and per-byte command/data framing
- DC / CS / RST / BUSY pin ownership
- the RST toggle that resets and wakes the controller
- BUSY polling bounded by timeout and cancel event

Wire framing: every byte, command or data, is sent inside its own
chip-select bracket:

    command:  DC low,  CS low, 1 byte, CS high
    data:     DC high, CS low, 1 byte, CS high

Hardware access goes through the Blinka/CircuitPython ``board``,
``busio`` and ``digitalio`` modules, imported lazily in from_board()
so the rest of the library (and its tests) run without hardware.
"""
import logging
import time
from typing import TYPE_CHECKING

from ..errors import (
    ConfigurationError,
    DeviceUnresponsiveError,
    TransportError,
    WaitCancelled,
)

if TYPE_CHECKING:
    from busio import SPI
    from digitalio import DigitalInOut

logger = logging.getLogger(__name__)


class SPIDevice:
    """
    Command/data transport over one SPI bus and four control pins.

    Owns the bus and pins it is given; deinit() releases all of them.

    Attributes:
        DEFAULT_BAUDRATE: SPI clock (5MHz)
        DEFAULT_RESET_DELAY_MS: Duration of each reset half-cycle
        DEFAULT_POLL_INTERVAL_MS: BUSY polling interval
        LOCK_TIMEOUT: Max seconds to wait for the busio bus lock
    """
    DEFAULT_BAUDRATE = 5_000_000
    DEFAULT_RESET_DELAY_MS = 200
    DEFAULT_POLL_INTERVAL_MS = 100
    LOCK_TIMEOUT = 1.0

    def __init__(
        self,
        spi: "SPI",
        cs: "DigitalInOut",
        dc: "DigitalInOut",
        rst: "DigitalInOut",
        busy: "DigitalInOut",
        busy_idle: bool = True,
        reset_delay_ms: float = DEFAULT_RESET_DELAY_MS,
        poll_interval_ms: float = DEFAULT_POLL_INTERVAL_MS,
    ):
        """
        Wrap already-configured bus and pin objects.

        Args:
            spi: Configured SPI bus instance
            cs: Chip Select pin (active low)
            dc: Data/Command pin (low=command, high=data)
            rst: Reset pin (active low)
            busy: Busy status pin
            busy_idle: Level BUSY reads when the controller is idle
            reset_delay_ms: Duration of each reset half-cycle
            poll_interval_ms: Default interval between BUSY polls
        """
        self.spi = spi
        self.cs = cs
        self.dc = dc
        self.rst = rst
        self.busy = busy
        self._busy_idle = busy_idle
        self._reset_delay_ms = reset_delay_ms
        self._poll_interval_ms = poll_interval_ms

        # Pre-allocated single-byte buffer, one per transfer
        self._byte_buf = bytearray(1)

    @classmethod
    def from_board(
        cls,
        dc_pin="D25",
        cs_pin="D8",
        rst_pin="D17",
        busy_pin="D24",
        sck_pin="SCK",
        mosi_pin="MOSI",
        baudrate: int = DEFAULT_BAUDRATE,
        **kwargs,
    ) -> "SPIDevice":
        """
        Create SPIDevice using board pin definitions.

        Pins may be given as board attribute names ("D25"), bare BCM
        numbers ("25") or already-resolved pin objects. Defaults match
        the Waveshare e-Paper HAT wiring.

        Configures DC, CS and RST as outputs driven low, BUSY as an
        input with pull-down, and the bus as mode 0, 8-bit words.

        Args:
            dc_pin: Data/command pin
            cs_pin: Chip select pin
            rst_pin: Reset pin
            busy_pin: Busy pin
            sck_pin: SPI clock pin
            mosi_pin: SPI MOSI pin
            baudrate: SPI clock speed in Hz
            **kwargs: Passed through to SPIDevice()

        Returns:
            Configured SPIDevice instance

        Raises:
            ConfigurationError: If a pin cannot be resolved or configured,
                or the bus cannot be opened/configured
        """
        try:
            import board
            import busio
            import digitalio
        except (ImportError, NotImplementedError, RuntimeError) as err:
            raise ConfigurationError(f"Cannot load Blinka board support: {err}") from err

        opened = []
        try:
            dc = _open_output(digitalio, _resolve_pin(board, dc_pin, "DC"), "DC", opened)
            cs = _open_output(digitalio, _resolve_pin(board, cs_pin, "CS"), "CS", opened)
            rst = _open_output(digitalio, _resolve_pin(board, rst_pin, "RST"), "RST", opened)
            busy = _open_input(digitalio, _resolve_pin(board, busy_pin, "BUSY"), "BUSY", opened)

            sck = _resolve_pin(board, sck_pin, "SCK")
            mosi = _resolve_pin(board, mosi_pin, "MOSI")
            try:
                spi = busio.SPI(sck, MOSI=mosi)
            except _PIN_ERRORS as err:
                raise ConfigurationError(f"Cannot open SPI bus: {err}") from err
            opened.append(spi)

            start = time.monotonic()
            while not spi.try_lock():
                if time.monotonic() - start > cls.LOCK_TIMEOUT:
                    raise ConfigurationError("SPI lock timeout during initialization")
            try:
                spi.configure(baudrate=baudrate, phase=0, polarity=0, bits=8)
            except (ValueError, RuntimeError, OSError) as err:
                raise ConfigurationError(f"Cannot configure SPI bus: {err}") from err
            finally:
                spi.unlock()
        except BaseException:
            for io in reversed(opened):
                io.deinit()
            raise

        logger.debug(
            "SPI configured: %d Hz, mode 0, DC=%s CS=%s RST=%s BUSY=%s",
            baudrate, dc_pin, cs_pin, rst_pin, busy_pin,
        )
        return cls(spi, cs, dc, rst, busy, **kwargs)

    def deinit(self):
        """Release all hardware resources."""
        self.spi.deinit()
        self.cs.deinit()
        self.dc.deinit()
        self.rst.deinit()
        self.busy.deinit()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.deinit()
        return False

    # =========================================================================
    # Transfers
    # =========================================================================

    def _lock(self):
        while not self.spi.try_lock():
            pass

    def _tx(self, value: int, is_data: bool, command: int | None):
        """One CS-bracketed byte. Caller holds the bus lock."""
        self.dc.value = is_data
        self.cs.value = False
        self._byte_buf[0] = value
        try:
            self.spi.write(self._byte_buf)
        except OSError as err:
            kind = "data" if is_data else "command"
            op = f"0x{command:02X}" if command is not None else "unknown command"
            raise TransportError(
                f"SPI write failed sending {kind} byte 0x{value:02X} for {op}: {err}",
                command=command,
            ) from err
        finally:
            self.cs.value = True

    def send_command(self, cmd: int):
        """Send a single command byte (D/C low)."""
        self._lock()
        try:
            self._tx(cmd, False, cmd)
        finally:
            self.spi.unlock()

    def send_data(self, data, command: int | None = None):
        """
        Send data bytes (D/C high), each in its own CS bracket.

        Args:
            data: int, or bytes/bytearray/iterable of ints
            command: Opcode the data belongs to (for error messages)
        """
        if isinstance(data, int):
            data = (data,)
        self._lock()
        try:
            for b in data:
                self._tx(b, True, command)
        finally:
            self.spi.unlock()

    def send(self, cmd: int, data=None):
        """
        Send a command and optional data to the display.

        Args:
            cmd: Command byte (0x00-0xFF)
            data: None, int, or bytes/bytearray/iterable of ints
        """
        if isinstance(data, int):
            data = (data,)
        self._lock()
        try:
            self._tx(cmd, False, cmd)
            if data is not None:
                for b in data:
                    self._tx(b, True, cmd)
        finally:
            self.spi.unlock()

    # =========================================================================
    # Reset & Busy
    # =========================================================================

    def hardware_reset(self, delay_ms: float | None = None):
        """
        Toggle RST high -> low -> high with a settle delay after each edge.

        This is also the only way to wake the controller from deep sleep.

        Args:
            delay_ms: Half-cycle duration (default: reset_delay_ms)
        """
        delay = (self._reset_delay_ms if delay_ms is None else delay_ms) / 1000
        level = True
        for _ in range(3):
            self.rst.value = level
            time.sleep(delay)
            level = not level

    def wait_ready(
        self,
        timeout: float | None = None,
        poll_interval_ms: float | None = None,
        operation: str | None = None,
        cancel=None,
    ) -> float:
        """
        Wait for the display to finish processing (BUSY reads idle).

        Args:
            timeout: Maximum wait in seconds, None to wait indefinitely
            poll_interval_ms: Milliseconds between polls (default: poll_interval_ms)
            operation: Optional operation name for error messages
            cancel: Optional event-like object; wait aborts once is_set()

        Returns:
            Time spent waiting in seconds

        Raises:
            DeviceUnresponsiveError: If timeout exceeded
            WaitCancelled: If cancel was set while waiting
        """
        interval = self._poll_interval_ms if poll_interval_ms is None else poll_interval_ms
        start = time.monotonic()
        while self.busy.value != self._busy_idle:
            if cancel is not None and cancel.is_set():
                op_str = f" during {operation}" if operation else ""
                raise WaitCancelled(f"Busy wait cancelled{op_str}")
            if timeout is not None and time.monotonic() - start > timeout:
                raise DeviceUnresponsiveError(operation, timeout)
            if interval > 0:
                time.sleep(interval / 1000)
        elapsed = time.monotonic() - start
        logger.debug("BUSY idle after %.3fs (%s)", elapsed, operation or "wait")
        return elapsed

    @property
    def is_busy(self) -> bool:
        """Check if display is currently busy."""
        return self.busy.value != self._busy_idle


# =============================================================================
# Pin helpers
# =============================================================================

_PIN_ERRORS = (ValueError, RuntimeError, OSError, TypeError, AttributeError)


def _resolve_pin(board, name, role: str):
    """Turn a pin name into a board pin object."""
    if name is None:
        raise ConfigurationError(f"{role} pin not specified")
    if not isinstance(name, str):
        return name
    attr = f"D{name}" if name.isdigit() else name
    pin = getattr(board, attr, None)
    if pin is None:
        raise ConfigurationError(f"{role} pin {name!r} not found on this board")
    return pin


def _open_output(digitalio, pin, role: str, opened: list):
    try:
        io = digitalio.DigitalInOut(pin)
    except _PIN_ERRORS as err:
        raise ConfigurationError(f"Cannot claim {role} pin {pin}: {err}") from err
    opened.append(io)
    try:
        io.direction = digitalio.Direction.OUTPUT
        io.value = False
    except _PIN_ERRORS as err:
        raise ConfigurationError(f"Cannot configure {role} pin {pin} as output: {err}") from err
    return io


def _open_input(digitalio, pin, role: str, opened: list):
    try:
        io = digitalio.DigitalInOut(pin)
    except _PIN_ERRORS as err:
        raise ConfigurationError(f"Cannot claim {role} pin {pin}: {err}") from err
    opened.append(io)
    try:
        io.direction = digitalio.Direction.INPUT
        io.pull = digitalio.Pull.DOWN
    except _PIN_ERRORS as err:
        raise ConfigurationError(f"Cannot configure {role} pin {pin} as input: {err}") from err
    return io
