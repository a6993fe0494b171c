import threading

import pytest

from epaper.drivers import DisplayState, EPaper
from epaper.drivers import commands as CMD
from epaper.drivers import lut as LUT
from epaper.errors import (
    DeviceUnresponsiveError,
    StateError,
    TransportError,
    WaitCancelled,
)


def frame(cmd, *data):
    return [("cmd", cmd)] + [("data", b) for b in data]


INIT_WIRE = (
    frame(0x01, 0x03, 0x00, 0x2B, 0x2B, 0x09)
    + frame(0x06, 0x07, 0x07, 0x17)
    + frame(0xF8, 0x60, 0xA5)
    + frame(0xF8, 0x89, 0xA5)
    + frame(0xF8, 0x90, 0x00)
    + frame(0xF8, 0x93, 0x2A)
    + frame(0xF8, 0xA0, 0xA5)
    + frame(0xF8, 0xA1, 0x00)
    + frame(0xF8, 0x73, 0x41)
    + frame(0x16, 0x00)
    + frame(0x04)
    + frame(0x00, 0xAF)
    + frame(0x30, 0x3A)
    + frame(0x82, 0x12)
    + frame(0x20, *LUT.LUT_2IN7_VCOM_DC)
    + frame(0x21, *LUT.LUT_2IN7_WW)
    + frame(0x22, *LUT.LUT_2IN7_BW)
    + frame(0x23, *LUT.LUT_2IN7_WB)
    + frame(0x24, *LUT.LUT_2IN7_BB)
)


# =============================================================================
# init
# =============================================================================

def test_init_wire_stream(epd, bus):
    epd.init()
    assert bus.wire() == INIT_WIRE
    assert epd.state.state == DisplayState.READY


def test_lut_sizes():
    assert len(LUT.LUT_2IN7_VCOM_DC) == LUT.LUT_VCOM_SIZE == 44
    for table in (LUT.LUT_2IN7_WW, LUT.LUT_2IN7_BW, LUT.LUT_2IN7_WB, LUT.LUT_2IN7_BB):
        assert len(table) == LUT.LUT_SIZE == 42


def test_init_resets_before_first_command(epd, bus):
    epd.init()
    rst = [level for kind, level in bus.events if kind == "rst"]
    assert rst == [True, False, True]
    first_cmd = next(i for i, e in enumerate(bus.events) if e[0] == "cmd")
    last_rst = max(i for i, e in enumerate(bus.events) if e[0] == "rst")
    assert last_rst < first_cmd


def test_init_waits_after_power_on_before_luts(epd, bus):
    epd.init()
    events = bus.events
    power_on = events.index(("cmd", CMD.CMD_POWER_ON))
    first_lut = events.index(("cmd", CMD.CMD_LUT_VCOM))
    waits = [i for i, e in enumerate(events) if e[0] == "busy"]
    assert waits == [power_on + 1]
    assert waits[0] < first_lut


def test_every_byte_has_its_own_chip_select(epd, bus):
    epd.init()
    assert bus.brackets
    assert set(bus.brackets) == {1}
    assert len(bus.brackets) == len(bus.wire())


def test_reset_leaves_controller_uninitialized(ready_epd, bus):
    ready_epd.reset()
    assert bus.events == [("rst", True), ("rst", False), ("rst", True)]
    assert ready_epd.state.state == DisplayState.UNINITIALIZED
    with pytest.raises(StateError):
        ready_epd.display(b"\xff" * 40)
    assert bus.wire() == []


def test_init_wakes_from_sleep(ready_epd, bus):
    ready_epd.sleep()
    assert ready_epd.is_sleeping
    ready_epd.init()
    assert ready_epd.state.is_ready


# =============================================================================
# clear / display
# =============================================================================

def test_clear_sends_white_frame_then_refresh(ready_epd, bus):
    ready_epd.clear()
    assert bus.wire() == frame(0x13, *([0xFF] * 40)) + frame(0x12)
    assert bus.events[-1][0] == "busy"


def test_clear_is_idempotent(ready_epd, bus):
    ready_epd.clear()
    first = bus.stream()
    bus.reset_log()
    ready_epd.clear()
    assert bus.stream() == first


def test_display_sends_buffer_then_refresh_then_waits(ready_epd, bus):
    data = bytes(range(40))
    ready_epd.display(data)
    assert bus.stream() == b"\x13" + data + b"\x12"
    assert bus.wire()[0] == ("cmd", 0x13)
    assert bus.wire()[-1] == ("cmd", 0x12)
    assert bus.events[-1] == ("busy", True)
    assert ready_epd.state.refresh_count == 1


def test_display_returns_wait_time(ready_epd):
    assert ready_epd.display(b"\xff" * 40) >= 0.0


def test_display_rejects_wrong_size(ready_epd, bus):
    with pytest.raises(ValueError):
        ready_epd.display(b"\xff" * 39)
    assert bus.wire() == []


@pytest.mark.parametrize("call", ["clear", "display"])
def test_frame_operations_require_init(epd, bus, call):
    with pytest.raises(StateError):
        if call == "clear":
            epd.clear()
        else:
            epd.display(b"\xff" * 40)
    assert bus.wire() == []


def test_display_after_sleep_requires_init(ready_epd):
    ready_epd.sleep()
    with pytest.raises(StateError):
        ready_epd.display(b"\xff" * 40)


# =============================================================================
# sleep
# =============================================================================

def test_sleep_sequence(ready_epd, bus):
    ready_epd.sleep()
    assert bus.events == [("cmd", 0x02), ("busy", True), ("cmd", 0x07), ("data", 0xA5)]
    assert ready_epd.state.state == DisplayState.SLEEPING


def test_sleep_twice_is_noop(ready_epd, bus):
    ready_epd.sleep()
    bus.reset_log()
    ready_epd.sleep()
    assert bus.events == []


def test_sleep_before_init(epd):
    with pytest.raises(StateError):
        epd.sleep()


# =============================================================================
# busy waits and failures
# =============================================================================

def test_busy_wait_polls_until_idle(ready_epd, bus):
    bus.busy.script = [False, False, False]
    ready_epd.display(b"\xff" * 40)
    polls = [e for e in bus.events if e[0] == "busy"]
    assert polls == [("busy", False)] * 3 + [("busy", True)]


def test_refresh_timeout(spi, bus, sim_panel):
    epd = EPaper(spi, sim_panel, busy_timeout=0.0, refresh_settle_ms=0)
    epd.init()
    bus.busy.idle = False
    with pytest.raises(DeviceUnresponsiveError) as exc:
        epd.display(b"\xff" * 40)
    assert exc.value.operation == "display refresh"
    assert isinstance(exc.value, TimeoutError)


def test_init_timeout_on_power_on(spi, bus, sim_panel):
    epd = EPaper(spi, sim_panel, busy_timeout=0.0, refresh_settle_ms=0)
    bus.busy.idle = False
    with pytest.raises(DeviceUnresponsiveError) as exc:
        epd.init()
    assert exc.value.operation == "power on"
    assert CMD.CMD_LUT_VCOM not in bus.commands()
    assert not epd.state.is_ready


def test_cancelled_wait(spi, bus, sim_panel):
    cancel = threading.Event()
    cancel.set()
    epd = EPaper(spi, sim_panel, cancel=cancel, refresh_settle_ms=0)
    bus.busy.idle = False
    with pytest.raises(WaitCancelled):
        epd.init()


def test_write_failure_names_command(ready_epd, bus):
    bus.spi.fail_after = bus.spi.written + 3
    with pytest.raises(TransportError) as exc:
        ready_epd.display(b"\x00" * 40)
    assert exc.value.command == 0x13
    assert bus.cs.value is True
    assert bus.spi.locked is False


def test_deinit_sleeps_and_releases(ready_epd, bus):
    ready_epd.deinit()
    assert ready_epd.is_sleeping
    assert bus.spi.deinited
    assert bus.busy.deinited and bus.rst.deinited


def test_context_manager_releases_uninitialized(epd, bus):
    with epd:
        pass
    assert bus.spi.deinited
    assert bus.commands() == []

