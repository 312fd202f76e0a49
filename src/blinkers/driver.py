"""
High-level blink(1) drivers.

``Blinker`` talks to one device, picked when it is constructed.
``Blinkers`` re-scans on every send and writes the same message to every
attached blink(1), stopping at the first failure.

Usage:
    from blinkers import Blinker, Blinkers, Fade, Color

    Blinker().send("red")
    Blinkers().send(Fade(Color.from_name("blue"), 1000))
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from .conf import settings
from .device_usb import describe, find_blinkers, is_blinker, send_report
from .errors import NotFoundError
from .message import Message, buffer, message_from_name

log = logging.getLogger(__name__)


def _as_message(message: Union[Message, str]) -> Message:
    if isinstance(message, str):
        return message_from_name(message)
    return message


class Blinker:
    """Single-device driver.

    Binds the first blink(1) found at construction unless ``device`` is
    given.  Raises ``NotFoundError`` if there is none, or if ``device``
    is not a blink(1).
    """

    def __init__(self, device: Any = None, backend: Any = None,
                 timeout_ms: Optional[int] = None):
        if device is None:
            found = find_blinkers(backend)
            if not found:
                raise NotFoundError("No blink(1) device found")
            device = found[0]
        elif not is_blinker(device):
            raise NotFoundError(f"{describe(device)} is not a blink(1)")
        self.device = device
        self.timeout_ms = timeout_ms
        log.info("Using blink(1) at %s", describe(device))

    def send(self, message: Union[Message, str]) -> int:
        """Write ``message`` to the bound device. Returns bytes written."""
        timeout = self.timeout_ms if self.timeout_ms is not None else settings.timeout_ms
        return send_report(self.device, buffer(_as_message(message)), timeout_ms=timeout)


class Blinkers:
    """Broadcast driver over every attached blink(1)."""

    def __init__(self, backend: Any = None, timeout_ms: Optional[int] = None):
        self.backend = backend
        self.timeout_ms = timeout_ms

    def devices(self) -> List[Any]:
        return find_blinkers(self.backend)

    def device_count(self) -> int:
        return len(self.devices())

    def send(self, message: Union[Message, str]) -> int:
        """Write ``message`` to each device in enumeration order.

        Returns the total bytes written.  The first failing device raises
        and the remaining devices are skipped; devices already written
        keep their new state.
        """
        report = buffer(_as_message(message))
        timeout = self.timeout_ms if self.timeout_ms is not None else settings.timeout_ms

        total = 0
        for device in self.devices():
            total += send_report(device, report, timeout_ms=timeout)
        return total
