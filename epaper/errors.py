"""
Exceptions raised by the e-paper library.

Hierarchy:
    EPaperError
    ├── ConfigurationError        bad pin / bus / panel configuration
    ├── TransportError            SPI write failed mid-command
    ├── DeviceUnresponsiveError   BUSY never went idle (also TimeoutError)
    ├── WaitCancelled             busy wait aborted by the caller
    ├── StateError                operation invalid in current DisplayState
    └── ResourceError             font/image could not be loaded (also OSError)
        ├── FontLoadError
        └── ImageLoadError
"""


class EPaperError(Exception):
    """Base class for all library errors."""


class ConfigurationError(EPaperError):
    """Hardware or panel configuration is invalid; raised at construction."""


class TransportError(EPaperError):
    """
    A byte exchange on the SPI bus failed.

    Attributes:
        command: Opcode that was being transmitted (or None)
    """

    def __init__(self, message: str, command: int | None = None):
        super().__init__(message)
        self.command = command


class DeviceUnresponsiveError(EPaperError, TimeoutError):
    """
    BUSY line did not report idle within the allowed time.

    Attributes:
        operation: Name of the operation that was waiting
        timeout: Timeout that was exceeded, in seconds
    """

    def __init__(self, operation: str | None, timeout: float):
        op_str = f" during {operation}" if operation else ""
        super().__init__(f"EPD unresponsive{op_str} (>{timeout}s)")
        self.operation = operation
        self.timeout = timeout


class WaitCancelled(EPaperError):
    """Busy wait was cancelled through its cancellation event."""


class StateError(EPaperError, RuntimeError):
    """Operation not allowed in the driver's current state."""


class ResourceError(EPaperError, OSError):
    """An external resource (font, image) could not be loaded."""


class FontLoadError(ResourceError):
    pass


class ImageLoadError(ResourceError):
    pass
