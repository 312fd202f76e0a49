"""RGB color values for the blink(1) LEDs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Tuple


def _check_channel(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {value!r}")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} out of range 0-255: {value}")


@dataclass(frozen=True)
class Color:
    """Immutable RGB triple, one byte per channel.

    Build from explicit channels, ``Color(255, 0, 0)``, or from the named
    palette, ``Color.from_name("red")``.  Names are case-insensitive and
    unknown names resolve to off (0, 0, 0).
    """
    r: int = 0
    g: int = 0
    b: int = 0

    OFF: ClassVar[Color]

    def __post_init__(self) -> None:
        _check_channel("r", self.r)
        _check_channel("g", self.g)
        _check_channel("b", self.b)

    @classmethod
    def from_name(cls, name: str) -> Color:
        r, g, b = NAMED_COLORS.get(name.strip().lower(), NAMED_COLORS["off"])
        return cls(r, g, b)

    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


NAMED_COLORS: Dict[str, Tuple[int, int, int]] = {
    "off":     (0x00, 0x00, 0x00),
    "black":   (0x00, 0x00, 0x00),
    "red":     (0xFF, 0x00, 0x00),
    "green":   (0x00, 0xFF, 0x00),
    "blue":    (0x00, 0x00, 0xFF),
    "white":   (0xFF, 0xFF, 0xFF),
    "yellow":  (0xFF, 0xFF, 0x00),
    "cyan":    (0x00, 0xFF, 0xFF),
    "magenta": (0xFF, 0x00, 0xFF),
    "orange":  (0xFF, 0xA5, 0x00),
    "purple":  (0x80, 0x00, 0x80),
}

Color.OFF = Color(0, 0, 0)
