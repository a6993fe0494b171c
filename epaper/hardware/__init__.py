"""
Hardware abstraction layer.

Modules:
    spi: Low-level SPI communication for EPD controllers
"""
from .spi import SPIDevice

__all__ = ["SPIDevice"]
