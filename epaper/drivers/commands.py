"""
UC81xx-Family Command Constants
===============================
Opcodes for the controller used by the Waveshare 2.7" B/W panel.

Organized by functional category for easier navigation.
Each opcode is followed by the data bytes listed in the panel's
command tables (see panels.py).
"""

# =============================================================================
# Panel Configuration
# =============================================================================

CMD_PANEL_SETTING = 0x00      # PSR - resolution, LUT source, scan direction
CMD_PLL_CONTROL = 0x30        # PLL - frame rate (0x3A = 100Hz)
CMD_TCON_SETTING = 0x60       # TCON - gate/source non-overlap period
CMD_TCON_RESOLUTION = 0x61    # TRES - panel resolution override

# =============================================================================
# Power Control
# =============================================================================

CMD_POWER_SETTING = 0x01      # PWR - VDS/VDG levels
CMD_POWER_OFF = 0x02          # POF - no data, BUSY low until done
CMD_POWER_ON = 0x04           # PON - no data, BUSY low until done
CMD_BOOSTER_SOFT_START = 0x06 # BTST - charge pump phases
CMD_DEEP_SLEEP = 0x07         # DSLP - needs check code 0xA5
CMD_POWER_OPTIMIZATION = 0xF8 # Undocumented vendor register write (addr, value)

# =============================================================================
# Display Update
# =============================================================================

CMD_DATA_START_1 = 0x10       # DTM1 - old/black data
CMD_DATA_STOP = 0x11          # DSP
CMD_DISPLAY_REFRESH = 0x12    # DRF - refresh using loaded LUTs
CMD_DATA_START_2 = 0x13       # DTM2 - new data
CMD_PARTIAL_REFRESH = 0x16    # PDRF - 0x00 disables partial refresh

# =============================================================================
# Waveform Look-Up Tables
# =============================================================================

CMD_LUT_VCOM = 0x20           # LUTC - VCOM
CMD_LUT_WW = 0x21             # LUTWW - white to white
CMD_LUT_BW = 0x22             # LUTBW/LUTR - black to white
CMD_LUT_WB = 0x23             # LUTWB/LUTW - white to black
CMD_LUT_BB = 0x24             # LUTBB/LUTB - black to black

# =============================================================================
# Voltage & Temperature
# =============================================================================

CMD_TEMP_CALIBRATION = 0x41   # TSE
CMD_VCOM_DATA_INTERVAL = 0x50 # CDI
CMD_VCM_DC_SETTING = 0x82     # VDCS - VCOM DC level

# =============================================================================
# Status
# =============================================================================

CMD_GET_STATUS = 0x71         # FLG - unused, BUSY pin is polled instead
