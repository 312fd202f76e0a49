"""
blink(1) command encoding.

Each command the firmware understands is a small frozen dataclass that
carries only its payload.  ``buffer()`` turns any of them into the
8-byte feature report written to the device::

    [0x01, action, b1, b2, b3, b4, b5, b6]

Byte 0 is the report id, byte 1 the action byte (an ASCII opcode), and
the rest is laid out per command (see ``constants`` for the table).

Usage:
    from blinkers.color import Color
    from blinkers.message import Fade, buffer

    buffer(Fade(Color.from_name("red"), 500))
    # b'\\x01c\\xff\\x00\\x00\\x002\\x00'
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import singledispatch
from typing import Optional, Union

from .color import Color
from .constants import (
    FADE_ACTION,
    FADE_TICK_MS,
    GET_VERSION_ACTION,
    IMMEDIATE_ACTION,
    PLAY_LOOP_ACTION,
    PLAY_STATE_READ_ACTION,
    READ_COLOR_PATTERN_ACTION,
    READ_EEPROM_ACTION,
    READ_RGB_ACTION,
    REPORT_ID,
    SAVE_COLOR_PATTERNS_ACTION,
    SERVER_TICKLE_ACTION,
    SET_COLOR_PATTERN_ACTION,
    SET_LED_N_ACTION,
    TEST_ACTION,
    WRITE_EEPROM_ACTION,
)


def _check_byte(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {value!r}")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} out of range 0-255: {value}")


def _check_color(value: Color) -> None:
    if not isinstance(value, Color):
        raise ValueError(f"color must be a Color, got {value!r}")


def _report(action: int, *payload: int) -> bytes:
    """Build the 8-byte report, zero-filling unused payload bytes."""
    return bytes((REPORT_ID, action) + payload + (0,) * (6 - len(payload)))


# =========================================================================
# Variants
# =========================================================================

@dataclass(frozen=True)
class Off:
    """Turn all LEDs off (immediate set to black)."""


@dataclass(frozen=True)
class Immediate:
    """Set a color now.

    The firmware has no indexed immediate set, so with an ``index`` this
    is sent as a zero-length fade to that LED.
    """
    color: Color
    index: Optional[int] = None

    def __post_init__(self) -> None:
        _check_color(self.color)
        if self.index is not None:
            _check_byte("index", self.index)


@dataclass(frozen=True)
class Fade:
    """Fade to ``color`` over ``duration_ms`` milliseconds."""
    color: Color
    duration_ms: int = 0
    index: Optional[int] = None

    def __post_init__(self) -> None:
        _check_color(self.color)
        if isinstance(self.duration_ms, bool) or not isinstance(self.duration_ms, int):
            raise ValueError(f"duration_ms must be an int, got {self.duration_ms!r}")
        if self.duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {self.duration_ms}")
        if self.index is not None:
            _check_byte("index", self.index)


@dataclass(frozen=True)
class ReadRGB:
    index: int

    def __post_init__(self) -> None:
        _check_byte("index", self.index)


@dataclass(frozen=True)
class ServerTickle:
    """Serverdown watchdog: play the stored pattern if not tickled in time."""
    enabled: bool
    time_high: int
    time_low: int
    state: int

    def __post_init__(self) -> None:
        _check_byte("time_high", self.time_high)
        _check_byte("time_low", self.time_low)
        _check_byte("state", self.state)


@dataclass(frozen=True)
class PlayLoop:
    enabled: bool
    start: int
    end: int
    count: int

    def __post_init__(self) -> None:
        _check_byte("start", self.start)
        _check_byte("end", self.end)
        _check_byte("count", self.count)


@dataclass(frozen=True)
class PlayStateRead:
    pass


@dataclass(frozen=True)
class SetColorPattern:
    """Write one line of the color pattern held in RAM."""
    color: Color
    time_high: int
    time_low: int
    position: int

    def __post_init__(self) -> None:
        _check_color(self.color)
        _check_byte("time_high", self.time_high)
        _check_byte("time_low", self.time_low)
        _check_byte("position", self.position)


@dataclass(frozen=True)
class SaveColorPatterns:
    """Persist the RAM color pattern to flash."""


@dataclass(frozen=True)
class ReadColorPattern:
    position: int

    def __post_init__(self) -> None:
        _check_byte("position", self.position)


@dataclass(frozen=True)
class SetLedN:
    index: int

    def __post_init__(self) -> None:
        _check_byte("index", self.index)


@dataclass(frozen=True)
class ReadEEPROM:
    address: int

    def __post_init__(self) -> None:
        _check_byte("address", self.address)


@dataclass(frozen=True)
class WriteEEPROM:
    address: int
    value: int

    def __post_init__(self) -> None:
        _check_byte("address", self.address)
        _check_byte("value", self.value)


@dataclass(frozen=True)
class GetVersion:
    pass


@dataclass(frozen=True)
class TestCommand:
    pass


Message = Union[
    Off, Immediate, Fade, ReadRGB, ServerTickle, PlayLoop, PlayStateRead,
    SetColorPattern, SaveColorPatterns, ReadColorPattern, SetLedN,
    ReadEEPROM, WriteEEPROM, GetVersion, TestCommand,
]

DEFAULT_MESSAGE: Message = Off()


def message_from_name(name: str) -> Immediate:
    """Immediate set to a palette color, e.g. ``message_from_name("red")``."""
    return Immediate(Color.from_name(name))


def fade_ticks(duration_ms: int) -> tuple[int, int]:
    """Split a fade duration into the (th, tl) bytes of a 16-bit tick count.

    One tick is 10 ms; the count wraps at 16 bits like the firmware's
    ``uint16_t``.  ``tl`` is the low byte (modulo 256).
    """
    ticks = (duration_ms // FADE_TICK_MS) & 0xFFFF
    return ticks >> 8, ticks % 0x100


# =========================================================================
# Encoding
# =========================================================================

@singledispatch
def buffer(message) -> bytes:
    """Return the 8-byte feature report for ``message``."""
    raise TypeError(f"Not a blink(1) message: {message!r}")


@buffer.register
def _(message: Off) -> bytes:
    return buffer(Immediate(Color.OFF))


@buffer.register
def _(message: Immediate) -> bytes:
    if message.index is not None:
        return buffer(Fade(message.color, 0, message.index))
    r, g, b = message.color.rgb()
    return _report(IMMEDIATE_ACTION, r, g, b, 0, 0, 0)


@buffer.register
def _(message: Fade) -> bytes:
    r, g, b = message.color.rgb()
    th, tl = fade_ticks(message.duration_ms)
    index = message.index if message.index is not None else 0
    return _report(FADE_ACTION, r, g, b, th, tl, index)


@buffer.register
def _(message: ReadRGB) -> bytes:
    return _report(READ_RGB_ACTION, message.index, 0, 0, 0, 0, message.index)


@buffer.register
def _(message: ServerTickle) -> bytes:
    return _report(SERVER_TICKLE_ACTION, int(bool(message.enabled)),
                   message.time_high, message.time_low, message.state)


@buffer.register
def _(message: PlayLoop) -> bytes:
    return _report(PLAY_LOOP_ACTION, int(bool(message.enabled)),
                   message.start, message.end, message.count)


@buffer.register
def _(message: PlayStateRead) -> bytes:
    return _report(PLAY_STATE_READ_ACTION)


@buffer.register
def _(message: SetColorPattern) -> bytes:
    r, g, b = message.color.rgb()
    return _report(SET_COLOR_PATTERN_ACTION, r, g, b,
                   message.time_high, message.time_low, message.position)


@buffer.register
def _(message: SaveColorPatterns) -> bytes:
    return _report(SAVE_COLOR_PATTERNS_ACTION)


@buffer.register
def _(message: ReadColorPattern) -> bytes:
    return _report(READ_COLOR_PATTERN_ACTION, 0, 0, 0, 0, 0, message.position)


@buffer.register
def _(message: SetLedN) -> bytes:
    return _report(SET_LED_N_ACTION, message.index)


@buffer.register
def _(message: ReadEEPROM) -> bytes:
    return _report(READ_EEPROM_ACTION, message.address)


@buffer.register
def _(message: WriteEEPROM) -> bytes:
    return _report(WRITE_EEPROM_ACTION, message.address, message.value)


@buffer.register
def _(message: GetVersion) -> bytes:
    return _report(GET_VERSION_ACTION)


@buffer.register
def _(message: TestCommand) -> bytes:
    return _report(TEST_ACTION)
