"""
Panel Models
============
Geometry plus command tables for each supported panel.

A panel's protocol is described as an immutable mapping from logical
step name to a tuple of ``(opcode, payload)`` commands. The driver walks
these steps; it never hard-codes vendor bytes, so a new panel variant is
a new PanelModel rather than a new driver.

Steps:
    power_setup   sent after reset, before power-on
    power_on      followed by a busy wait
    panel_setup   sent once the booster is up
    luts          waveform tables, last part of init
    refresh       triggers the update after a data load
    power_off     followed by a busy wait
    deep_sleep    final command of sleep()
"""
from types import MappingProxyType

from ..errors import ConfigurationError
from . import commands as CMD
from . import lut as LUT
from . import sequences as SEQ

STEPS = (
    "power_setup",
    "power_on",
    "panel_setup",
    "luts",
    "refresh",
    "power_off",
    "deep_sleep",
)


def _commands(*entries) -> tuple:
    """Normalize (opcode, payload) entries to (int, bytes) tuples."""
    out = []
    for opcode, payload in entries:
        if not 0 <= opcode <= 0xFF:
            raise ValueError(f"Opcode out of range: {opcode!r}")
        out.append((opcode, bytes(payload)))
    return tuple(out)


class PanelModel:
    """
    Immutable panel descriptor.

    Args:
        name: Registry name, e.g. "2in7"
        width: Width in pixels (source direction)
        height: Height in pixels (gate direction)
        start_transmission: Opcode that starts a frame data load
        sequence: Mapping of step name to (opcode, payload) entries

    Raises:
        ValueError: If dimensions are not positive or a step is missing
    """

    __slots__ = ("_name", "_width", "_height", "_start_transmission", "_sequence")

    def __init__(
        self,
        name: str,
        width: int,
        height: int,
        start_transmission: int,
        sequence: dict,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Panel size must be positive, got {width}x{height}")
        missing = [s for s in STEPS if s not in sequence]
        if missing:
            raise ValueError(f"Panel {name!r} is missing steps: {', '.join(missing)}")

        self._name = name
        self._width = width
        self._height = height
        self._start_transmission = start_transmission
        self._sequence = MappingProxyType(
            {step: _commands(*sequence[step]) for step in STEPS}
        )

    @property
    def name(self) -> str: return self._name

    @property
    def width(self) -> int: return self._width

    @property
    def height(self) -> int: return self._height

    @property
    def start_transmission(self) -> int: return self._start_transmission

    @property
    def sequence(self) -> MappingProxyType: return self._sequence

    @property
    def line_width(self) -> int:
        """Bytes per packed row."""
        return (self._width + 7) // 8

    @property
    def buffer_size(self) -> int:
        """Bytes in one packed frame."""
        return self.line_width * self._height

    def with_size(self, width: int, height: int, name: str | None = None) -> "PanelModel":
        """Same command tables, different geometry (simulators, tests)."""
        return PanelModel(
            name or self._name,
            width,
            height,
            self._start_transmission,
            dict(self._sequence),
        )

    def __repr__(self) -> str:
        return f"PanelModel({self._name!r}, {self._width}x{self._height})"


# =============================================================================
# Waveshare 2.7" B/W (176x264)
# =============================================================================

EPD_2IN7 = PanelModel(
    "2in7",
    width=176,
    height=264,
    start_transmission=CMD.CMD_DATA_START_2,
    sequence={
        "power_setup": (
            (CMD.CMD_POWER_SETTING, (0x03, 0x00, 0x2B, 0x2B, 0x09)),
            (CMD.CMD_BOOSTER_SOFT_START, (0x07, 0x07, 0x17)),
            (CMD.CMD_POWER_OPTIMIZATION, (0x60, 0xA5)),
            (CMD.CMD_POWER_OPTIMIZATION, (0x89, 0xA5)),
            (CMD.CMD_POWER_OPTIMIZATION, (0x90, 0x00)),
            (CMD.CMD_POWER_OPTIMIZATION, (0x93, 0x2A)),
            (CMD.CMD_POWER_OPTIMIZATION, (0xA0, 0xA5)),
            (CMD.CMD_POWER_OPTIMIZATION, (0xA1, 0x00)),
            (CMD.CMD_POWER_OPTIMIZATION, (0x73, 0x41)),
            (CMD.CMD_PARTIAL_REFRESH, (SEQ.PARTIAL_REFRESH_OFF,)),
        ),
        "power_on": ((CMD.CMD_POWER_ON, ()),),
        "panel_setup": (
            (CMD.CMD_PANEL_SETTING, (0xAF,)),
            (CMD.CMD_PLL_CONTROL, (0x3A,)),      # 100Hz
            (CMD.CMD_VCM_DC_SETTING, (0x12,)),
        ),
        "luts": (
            (CMD.CMD_LUT_VCOM, LUT.LUT_2IN7_VCOM_DC),
            (CMD.CMD_LUT_WW, LUT.LUT_2IN7_WW),
            (CMD.CMD_LUT_BW, LUT.LUT_2IN7_BW),
            (CMD.CMD_LUT_WB, LUT.LUT_2IN7_WB),
            (CMD.CMD_LUT_BB, LUT.LUT_2IN7_BB),
        ),
        "refresh": ((CMD.CMD_DISPLAY_REFRESH, ()),),
        "power_off": ((CMD.CMD_POWER_OFF, ()),),
        "deep_sleep": ((CMD.CMD_DEEP_SLEEP, (SEQ.DEEP_SLEEP_CHECK,)),),
    },
)

PANELS = MappingProxyType({
    EPD_2IN7.name: EPD_2IN7,
})


def get_panel(name: str) -> PanelModel:
    """
    Look up a panel model by registry name.

    Raises:
        ConfigurationError: If the name is unknown
    """
    try:
        return PANELS[name]
    except KeyError:
        known = ", ".join(sorted(PANELS))
        raise ConfigurationError(f"Unknown panel {name!r} (known: {known})") from None
