"""
blinkers - blink(1) USB RGB LED control

Encodes blink(1) commands into 8-byte HID feature reports and sends them
over USB with pyusb.

Usage:
    # As a library
    from blinkers import Blinkers, Fade, Color
    Blinkers().send(Fade(Color.from_name("red"), 500))

    # Command line
    blinkers color red --fade 500
    blinkers off
"""

from blinkers.__version__ import __version__
from blinkers.color import NAMED_COLORS, Color
from blinkers.driver import Blinker, Blinkers
from blinkers.errors import BlinkError, NotFoundError, TransportError
from blinkers.message import (
    DEFAULT_MESSAGE,
    Fade,
    GetVersion,
    Immediate,
    Message,
    Off,
    PlayLoop,
    PlayStateRead,
    ReadColorPattern,
    ReadEEPROM,
    ReadRGB,
    SaveColorPatterns,
    ServerTickle,
    SetColorPattern,
    SetLedN,
    TestCommand,
    WriteEEPROM,
    buffer,
    message_from_name,
)

__all__ = [
    # Version
    "__version__",
    # Drivers
    "Blinker",
    "Blinkers",
    # Colors
    "Color",
    "NAMED_COLORS",
    # Messages
    "Message",
    "DEFAULT_MESSAGE",
    "Off",
    "Immediate",
    "Fade",
    "ReadRGB",
    "ServerTickle",
    "PlayLoop",
    "PlayStateRead",
    "SetColorPattern",
    "SaveColorPatterns",
    "ReadColorPattern",
    "SetLedN",
    "ReadEEPROM",
    "WriteEEPROM",
    "GetVersion",
    "TestCommand",
    "buffer",
    "message_from_name",
    # Errors
    "BlinkError",
    "NotFoundError",
    "TransportError",
]
