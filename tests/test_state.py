from epaper.drivers import DisplayState, DriverState


def test_lifecycle():
    s = DriverState()
    assert s.state == DisplayState.UNINITIALIZED
    assert not s.is_initialized

    s.on_init_complete()
    assert s.is_ready and s.is_initialized

    s.on_refresh_complete()
    s.on_refresh_complete()
    assert s.refresh_count == 2

    s.on_sleep()
    assert s.is_sleeping and not s.is_ready

    s.on_reset()
    assert s.state == DisplayState.UNINITIALIZED

    s.on_init_complete()
    assert s.refresh_count == 0


def test_names():
    assert DisplayState.name(DisplayState.SLEEPING) == "SLEEPING"
    assert DisplayState.name(42) == "UNKNOWN(42)"
    assert "READY" in repr(DriverState(DisplayState.READY))
