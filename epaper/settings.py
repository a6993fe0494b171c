"""Configuration management for the e-paper driver."""
import os

from pydantic import BaseModel, ConfigDict, field_validator


def env(name: str, default=None, cast=str):
    """Helper to read and cast environment variables."""
    v = os.getenv(name)
    if v is None or v == "":
        return default
    if cast is bool:
        return v.lower() in ("1", "true", "yes", "on")
    return cast(v)


# field -> (environment variable, default, cast)
ENV_VARS = {
    # Panel registry name (see drivers.panels.PANELS)
    "panel": ("EPAPER_PANEL", "2in7", str),
    # Pins: board attribute names ("D25") or bare BCM numbers ("25")
    "dc_pin": ("EPAPER_DC_PIN", "D25", str),
    "cs_pin": ("EPAPER_CS_PIN", "D8", str),
    "rst_pin": ("EPAPER_RST_PIN", "D17", str),
    "busy_pin": ("EPAPER_BUSY_PIN", "D24", str),
    # SPI
    "baudrate": ("EPAPER_BAUDRATE", 5_000_000, int),
    # Timing; busy_timeout None means per-operation defaults
    "reset_delay_ms": ("EPAPER_RESET_DELAY_MS", 200, float),
    "poll_interval_ms": ("EPAPER_POLL_INTERVAL_MS", 100, float),
    "busy_timeout": ("EPAPER_BUSY_TIMEOUT", None, float),
    # Logging
    "log_level": ("EPAPER_LOG_LEVEL", "INFO", str),
}


def _from_env(field: str):
    return env(*ENV_VARS[field])


class DeviceSettings(BaseModel):
    """Wiring and timing for one panel session."""

    model_config = ConfigDict(validate_default=True)

    panel: str = _from_env("panel")
    dc_pin: str = _from_env("dc_pin")
    cs_pin: str = _from_env("cs_pin")
    rst_pin: str = _from_env("rst_pin")
    busy_pin: str = _from_env("busy_pin")
    baudrate: int = _from_env("baudrate")
    reset_delay_ms: float = _from_env("reset_delay_ms")
    poll_interval_ms: float = _from_env("poll_interval_ms")
    busy_timeout: float | None = _from_env("busy_timeout")
    log_level: str = _from_env("log_level")

    @field_validator("dc_pin", "cs_pin", "rst_pin", "busy_pin")
    @classmethod
    def _pin_name(cls, v: str) -> str:
        v = v.strip()
        return f"D{v}" if v.isdigit() else v

    @field_validator("baudrate")
    @classmethod
    def _positive_baudrate(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("baudrate must be positive")
        return v

    @classmethod
    def from_env(cls) -> "DeviceSettings":
        """Re-read the environment (class defaults are bound at import)."""
        return cls(**{field: _from_env(field) for field in ENV_VARS})
