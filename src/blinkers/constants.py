"""Shared constants for blinkers.

USB identity and HID request values for the blink(1) mk2 firmware.
Command layouts from the firmware's command table (main.c).
"""

# =========================================================================
# USB identity
# =========================================================================

VENDOR_ID = 0x27B8
PRODUCT_ID = 0x01ED

# =========================================================================
# HID "Set Report" framing
# =========================================================================
# bmRequestType 0x21 = Host->Device | Class | Interface
# wValue = (report type << 8) | report id, feature report type is 3

HID_SET_REPORT = 0x09
HID_FEATURE = 0x03 << 8
HID_REQUEST_TYPE_OUT = 0x21

REPORT_ID = 0x01
REPORT_SIZE = 8

# Control transfer timeout (ms)
DEFAULT_TIMEOUT_MS = 1000

# Fade time unit on the wire is 10 ms
FADE_TICK_MS = 10

# =========================================================================
# Action bytes
# =========================================================================
#   Fade to RGB color        { 1, 'c', r,g,b,     th,tl, n }
#   Set RGB color now        { 1, 'n', r,g,b,       0,0, 0 }
#   Read current RGB color   { 1, 'r', n,0,0,       0,0, n }
#   Serverdown tickle/off    { 1, 'D', on,th,tl,   st,0, 0 }
#   PlayLoop                 { 1, 'p', on,sp,ep,c,    0, 0 }
#   Playstate readback       { 1, 'S', 0,0,0,       0,0, 0 }
#   Set color pattern line   { 1, 'P', r,g,b,     th,tl, p }
#   Save color patterns      { 1, 'W', 0,0,0,       0,0, 0 }
#   Read color pattern line  { 1, 'R', 0,0,0,       0,0, p }
#   Set ledn                 { 1, 'l', n,0,0,       0,0, 0 }
#   Read EEPROM location     { 1, 'e', ad,0,0,      0,0, 0 }
#   Write EEPROM location    { 1, 'E', ad,v,0,      0,0, 0 }
#   Get version              { 1, 'v', 0,0,0,       0,0, 0 }
#   Test command             { 1, '!', 0,0,0,       0,0, 0 }

FADE_ACTION = 0x63                    # 'c'
IMMEDIATE_ACTION = 0x6E               # 'n'
READ_RGB_ACTION = 0x72                # 'r'
SERVER_TICKLE_ACTION = 0x44           # 'D'
PLAY_LOOP_ACTION = 0x70               # 'p'
PLAY_STATE_READ_ACTION = 0x53         # 'S'
SET_COLOR_PATTERN_ACTION = 0x50       # 'P'
SAVE_COLOR_PATTERNS_ACTION = 0x57     # 'W'
READ_COLOR_PATTERN_ACTION = 0x52      # 'R'
SET_LED_N_ACTION = 0x6C               # 'l'
READ_EEPROM_ACTION = 0x65             # 'e'
WRITE_EEPROM_ACTION = 0x45            # 'E'
GET_VERSION_ACTION = 0x76             # 'v'
TEST_ACTION = 0x21                    # '!'
