"""
Shared fixtures: an in-memory SPI bus and GPIO pins.

The fake bus records everything the driver puts on the wire so tests can
assert exact byte streams and protocol ordering without hardware:

    ("cmd", byte)     byte written with D/C low
    ("data", byte)    byte written with D/C high
    ("busy", level)   one read of the BUSY line (i.e. one poll)
    ("rst", level)    reset line driven to level
"""
import sys
import types

import pytest

from epaper.drivers import EPD_2IN7, EPaper
from epaper.hardware import SPIDevice

# Same command tables as the 2.7" panel, small enough to read byte by byte:
# 2 bytes per row, 40 bytes per frame.
SIM_PANEL = EPD_2IN7.with_size(10, 20, "sim")


@pytest.fixture
def sim_panel():
    return SIM_PANEL


class FakePin:
    """digitalio.DigitalInOut stand-in that reports writes to the bus."""

    def __init__(self, bus, name: str, value: bool = True):
        self._bus = bus
        self.name = name
        self._value = value
        self.deinited = False

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, level):
        self._value = level
        self._bus.on_pin(self.name, level)

    def deinit(self):
        self.deinited = True


class FakeBusy:
    """
    BUSY input. Reads `idle` forever, after first returning any levels
    queued in `script`.
    """

    def __init__(self, bus, idle: bool = True):
        self._bus = bus
        self.idle = idle
        self.script = []
        self.deinited = False

    @property
    def value(self):
        level = self.script.pop(0) if self.script else self.idle
        self._bus.events.append(("busy", level))
        return level

    def deinit(self):
        self.deinited = True


class FakeSPI:
    """busio.SPI stand-in. Set fail_after to raise OSError after N bytes."""

    def __init__(self, bus):
        self._bus = bus
        self.locked = False
        self.configured = None
        self.deinited = False
        self.fail_after = None
        self.written = 0

    def try_lock(self):
        if self.locked:
            return False
        self.locked = True
        return True

    def unlock(self):
        self.locked = False

    def configure(self, **kwargs):
        self.configured = kwargs

    def write(self, buf):
        assert self.locked, "write without bus lock"
        assert self._bus.cs.value is False, "write outside CS bracket"
        if self.fail_after is not None and self.written >= self.fail_after:
            raise OSError(5, "Input/output error")
        kind = "data" if self._bus.dc.value else "cmd"
        for b in buf:
            self._bus.events.append((kind, b))
            self._bus.bracket_bytes += 1
            self.written += 1

    def deinit(self):
        self.deinited = True


class Bus:
    """The wire plus the pins attached to it."""

    def __init__(self):
        self.events = []
        self.brackets = []
        self.bracket_bytes = 0
        self.cs = FakePin(self, "cs", True)
        self.dc = FakePin(self, "dc", False)
        self.rst = FakePin(self, "rst", True)
        self.busy = FakeBusy(self)
        self.spi = FakeSPI(self)

    def on_pin(self, name, level):
        if name == "rst":
            self.events.append(("rst", level))
        elif name == "cs":
            if level is False:
                self.bracket_bytes = 0
            else:
                self.brackets.append(self.bracket_bytes)

    def wire(self) -> list:
        """(kind, byte) pairs actually transmitted."""
        return [e for e in self.events if e[0] in ("cmd", "data")]

    def stream(self) -> bytes:
        """Transmitted bytes regardless of D/C, in order."""
        return bytes(b for _, b in self.wire())

    def commands(self) -> list:
        return [b for kind, b in self.events if kind == "cmd"]

    def reset_log(self):
        self.events.clear()
        self.brackets.clear()


@pytest.fixture
def bus():
    return Bus()


@pytest.fixture
def spi(bus):
    return SPIDevice(
        bus.spi, bus.cs, bus.dc, bus.rst, bus.busy,
        reset_delay_ms=0,
        poll_interval_ms=0,
    )


@pytest.fixture
def epd(spi):
    return EPaper(spi, SIM_PANEL, refresh_settle_ms=0)


@pytest.fixture
def ready_epd(epd, bus):
    """Initialized driver with an empty wire log."""
    epd.init()
    bus.reset_log()
    return epd


# =============================================================================
# Blinka modules (board / busio / digitalio)
# =============================================================================

class BoardIO:
    """
    digitalio.DigitalInOut stand-in; the pin named "taken" is in use.

    Like Blinka, a bare int is not a pin object and fails on ``pin.id``.
    """

    def __init__(self, pin, opened):
        if not isinstance(pin, str):
            raise AttributeError(f"'{type(pin).__name__}' object has no attribute 'id'")
        if pin == "taken":
            raise ValueError("pin in use")
        self.pin = pin
        self.direction = None
        self.pull = None
        self.value = None
        self.deinited = False
        opened.append(self)

    def deinit(self):
        self.deinited = True


class BoardSPI:
    def __init__(self, clock, MOSI=None):
        self.clock = clock
        self.mosi = MOSI
        self.config = None
        self.locked = False
        self.deinited = False

    def try_lock(self):
        self.locked = True
        return True

    def unlock(self):
        self.locked = False

    def configure(self, **kwargs):
        self.config = kwargs

    def write(self, buf):
        pass

    def deinit(self):
        self.deinited = True


@pytest.fixture
def board_modules(monkeypatch):
    """
    Install fake board, busio and digitalio modules.

    Returns the list of DigitalInOut objects opened while the test runs.
    """
    opened = []

    board = types.ModuleType("board")
    for name in ("D5", "D8", "D17", "D22", "D24", "D25", "SCK", "MOSI"):
        setattr(board, name, f"pin:{name}")
    board.TAKEN = "taken"

    digitalio = types.ModuleType("digitalio")
    digitalio.DigitalInOut = lambda pin: BoardIO(pin, opened)
    digitalio.Direction = types.SimpleNamespace(INPUT="in", OUTPUT="out")
    digitalio.Pull = types.SimpleNamespace(UP="up", DOWN="down")

    busio = types.ModuleType("busio")
    busio.SPI = BoardSPI

    monkeypatch.setitem(sys.modules, "board", board)
    monkeypatch.setitem(sys.modules, "digitalio", digitalio)
    monkeypatch.setitem(sys.modules, "busio", busio)
    return opened
