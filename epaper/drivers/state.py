"""
DisplayState - State Management for the EPD Driver
==================================================
Small state machine tracking what the controller is ready for.

State Diagram:
    UNINITIALIZED --> READY      (init)
    READY --> READY              (clear / display)
    READY --> SLEEPING           (sleep)
    any --> UNINITIALIZED        (hardware reset)
"""


class DisplayState:
    """Display driver state enumeration."""
    UNINITIALIZED = 0  # Power-on or just reset, needs init
    READY = 1          # Initialized and idle, accepts frame data
    SLEEPING = 2       # Deep sleep, needs reset + init

    _names = {
        0: "UNINITIALIZED",
        1: "READY",
        2: "SLEEPING",
    }

    @classmethod
    def name(cls, state: int) -> str:
        """Get human-readable state name."""
        return cls._names.get(state, f"UNKNOWN({state})")


class DriverState:
    """
    Driver state container.

    Attributes:
        state: Current DisplayState
        refresh_count: Refreshes since the last init
    """

    def __init__(self, state: int = DisplayState.UNINITIALIZED):
        self.state = state
        self.refresh_count = 0

    def on_reset(self):
        """Transition after hardware reset (also wakes from sleep)."""
        self.state = DisplayState.UNINITIALIZED

    def on_init_complete(self):
        self.state = DisplayState.READY
        self.refresh_count = 0

    def on_refresh_complete(self):
        self.state = DisplayState.READY
        self.refresh_count += 1

    def on_sleep(self):
        self.state = DisplayState.SLEEPING

    @property
    def is_sleeping(self) -> bool:
        return self.state == DisplayState.SLEEPING

    @property
    def is_ready(self) -> bool:
        return self.state == DisplayState.READY

    @property
    def is_initialized(self) -> bool:
        return self.state != DisplayState.UNINITIALIZED

    def __repr__(self) -> str:
        return (
            f"DriverState("
            f"state={DisplayState.name(self.state)}, "
            f"refreshes={self.refresh_count})"
        )
