"""Exceptions raised by the blinkers device layer."""


class BlinkError(Exception):
    """Base class for all blinkers errors."""


class NotFoundError(BlinkError):
    """No matching blink(1) device, or the device exposes no interface."""


class TransportError(BlinkError):
    """A USB operation failed (open, claim, transfer, release, driver attach/detach).

    The underlying ``usb.core.USBError`` is chained as ``__cause__``.
    """
