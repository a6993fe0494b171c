"""
LUT - Waveform Look-Up Tables
=============================
Vendor waveform tables for the Waveshare 2.7" B/W panel.

Each table is 6-byte groups of (level select, 4 frame counts, repeat):
  - VCOM table: 44 bytes (2 leading VCOM DC bytes + 7 groups)
  - Pixel transition tables: 42 bytes (7 groups)

The values are opaque calibration data and are sent verbatim.
"""

# =============================================================================
# 2.7" B/W
# =============================================================================

LUT_2IN7_VCOM_DC = (
    b"\x00\x00"
    b"\x00\x08\x00\x00\x00\x02"
    b"\x60\x28\x28\x00\x00\x01"
    b"\x00\x14\x00\x00\x00\x01"
    b"\x00\x12\x12\x00\x00\x01"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
)

# White to white
LUT_2IN7_WW = (
    b"\x40\x08\x00\x00\x00\x02"
    b"\x90\x28\x28\x00\x00\x01"
    b"\x40\x14\x00\x00\x00\x01"
    b"\xa0\x12\x12\x00\x00\x01"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
)

# Black to white
LUT_2IN7_BW = (
    b"\x40\x08\x00\x00\x00\x02"
    b"\x90\x28\x28\x00\x00\x01"
    b"\x40\x14\x00\x00\x00\x01"
    b"\xa0\x12\x12\x00\x00\x01"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
)

# White to black
LUT_2IN7_WB = (
    b"\x80\x08\x00\x00\x00\x02"
    b"\x90\x28\x28\x00\x00\x01"
    b"\x80\x14\x00\x00\x00\x01"
    b"\x50\x12\x12\x00\x00\x01"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
)

# Black to black
LUT_2IN7_BB = (
    b"\x80\x08\x00\x00\x00\x02"
    b"\x90\x28\x28\x00\x00\x01"
    b"\x80\x14\x00\x00\x00\x01"
    b"\x50\x12\x12\x00\x00\x01"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x00\x00\x00\x00\x00\x00"
)

LUT_VCOM_SIZE = 44
LUT_SIZE = 42
