"""
Timing & Payload Constants
==========================
Delays, busy-wait timeouts and fixed payload bytes shared by all
panel models.
"""

# =============================================================================
# Fill & Payload Bytes
# =============================================================================

FILL_WHITE = 0xFF             # One packed byte of eight white pixels
DEEP_SLEEP_CHECK = 0xA5       # Check code required by CMD_DEEP_SLEEP
PARTIAL_REFRESH_OFF = 0x00    # CMD_PARTIAL_REFRESH payload

# =============================================================================
# Delays (milliseconds)
# =============================================================================

REFRESH_SETTLE_MS = 100       # After CMD_DISPLAY_REFRESH, before polling BUSY

# =============================================================================
# Operation Timeouts (seconds)
# =============================================================================

TIMEOUT_POWER = 5.0           # Power on/off: ~100ms typical
TIMEOUT_REFRESH = 30.0        # Full refresh: ~6s typical, longer when cold
