#!/usr/bin/env python3
"""
USB discovery and HID feature-report transport for blink(1) devices.

blink(1) takes commands as an 8-byte HID feature report sent with a
class "Set Report" control transfer on its first interface.  Sessions
follow the usual libusb sequence::

    open device (read active configuration)
    detach kernel driver from the first interface (if usbhid holds it)
    claim interface
    control transfer  (0x21, SET_REPORT, 0x0300 | report id, intf, data)
    release interface
    reattach kernel driver (if it was detached)
    dispose resources

``HidSession`` is a context manager so release and reattach run on every
exit path, including a failed transfer.  Nothing is cached between
calls: every send opens and claims the device again.

Requires: ``pip install pyusb`` + ``apt install libusb-1.0-0``
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, List, Optional

import usb.backend.libusb0
import usb.backend.libusb1
import usb.backend.openusb
import usb.core
import usb.util

from .constants import (
    DEFAULT_TIMEOUT_MS,
    HID_FEATURE,
    HID_REQUEST_TYPE_OUT,
    HID_SET_REPORT,
    PRODUCT_ID,
    REPORT_SIZE,
    VENDOR_ID,
)
from .errors import NotFoundError, TransportError

log = logging.getLogger(__name__)


# =========================================================================
# Discovery
# =========================================================================

def is_blinker(device: Any) -> bool:
    """True if ``device`` is a blink(1).

    Devices whose descriptor can't be read are treated as non-matches.
    """
    try:
        return (
            device.bNumConfigurations > 0
            and device.idVendor == VENDOR_ID
            and device.idProduct == PRODUCT_ID
        )
    except (usb.core.USBError, ValueError, AttributeError) as e:
        log.debug("Skipping device with unreadable descriptor: %s", e)
        return False


def _get_backend() -> Any:
    # Same preference order as usb.core.find()
    for module in (usb.backend.libusb1, usb.backend.openusb, usb.backend.libusb0):
        backend = module.get_backend()
        if backend is not None:
            log.debug("Using USB backend %s", module.__name__)
            return backend
    raise TransportError("USB enumeration failed: No backend available")


def find_blinkers(backend: Any = None) -> List[Any]:
    """Enumerate USB devices and return the blink(1)s, in enumeration order.

    pyusb reads each device descriptor while building the ``Device``, so
    devices are constructed one at a time here.  A device whose
    descriptor read fails is skipped instead of ending the scan.
    """
    if backend is None:
        backend = _get_backend()
    try:
        handles = list(backend.enumerate_devices())
    except usb.core.USBError as e:
        raise TransportError(f"USB enumeration failed: {e}") from e

    matches = []
    for handle in handles:
        try:
            device = usb.core.Device(handle, backend)
        except usb.core.USBError as e:
            log.debug("Skipping device with unreadable descriptor: %s", e)
            continue
        if is_blinker(device):
            matches.append(device)
    log.debug("Enumerated %d USB devices, %d blink(1)", len(handles), len(matches))
    return matches


def device_count(backend: Any = None) -> int:
    """Number of blink(1) devices currently attached."""
    return len(find_blinkers(backend))


def describe(device: Any) -> str:
    """Short label for logs and listings, e.g. ``bus 1 address 4 [27b8:01ed]``."""
    try:
        return (f"bus {device.bus} address {device.address} "
                f"[{device.idVendor:04x}:{device.idProduct:04x}]")
    except (usb.core.USBError, ValueError, AttributeError, TypeError):
        return repr(device)


# =========================================================================
# Transport session
# =========================================================================

class SessionState(Enum):
    CLOSED = auto()
    OPENED = auto()
    CLAIMED = auto()
    RELEASED = auto()


class HidSession:
    """One open/claim/transfer/release cycle on a blink(1).

    Usage::

        with HidSession(device, timeout_ms=1000) as session:
            written = session.write_report(report)

    The kernel driver is reattached and the interface released when the
    block exits, whether or not the transfer succeeded.
    """

    def __init__(self, device: Any, timeout_ms: int = DEFAULT_TIMEOUT_MS):
        self.device = device
        self.timeout_ms = timeout_ms
        self.state = SessionState.CLOSED
        self.interface: Optional[int] = None
        self.detached = False
        self._handle = False

    # -- Setup -------------------------------------------------------------

    def open(self) -> None:
        """Open the device, detach the kernel driver and claim the first interface."""
        if self.state is not SessionState.CLOSED:
            raise TransportError(f"Session already {self.state.name.lower()}")
        try:
            self._open()
        except BaseException:
            self._teardown(raise_errors=False)
            raise

    def _open(self) -> None:
        # pyusb opens the handle lazily on the first request
        self._handle = True
        try:
            config = self.device.get_active_configuration()
        except usb.core.USBError as e:
            raise TransportError(f"Could not open {describe(self.device)}: {e}") from e
        self.state = SessionState.OPENED

        interface = next(iter(config.interfaces()), None) if config is not None else None
        if interface is None:
            raise NotFoundError(f"{describe(self.device)} exposes no USB interface")
        self.interface = interface.bInterfaceNumber

        # Query failure (e.g. backend without driver support) means "not active"
        try:
            active = self.device.is_kernel_driver_active(self.interface)
        except (usb.core.USBError, NotImplementedError) as e:
            log.debug("Kernel driver query on interface %d: %s", self.interface, e)
            active = False

        if active:
            try:
                self.device.detach_kernel_driver(self.interface)
            except usb.core.USBError as e:
                raise TransportError(
                    f"Could not detach kernel driver from interface {self.interface}: {e}"
                ) from e
            self.detached = True
            log.debug("Detached kernel driver from interface %d", self.interface)

        try:
            usb.util.claim_interface(self.device, self.interface)
        except usb.core.USBError as e:
            raise TransportError(
                f"Could not claim interface {self.interface}: {e}"
            ) from e
        self.state = SessionState.CLAIMED
        log.debug("Claimed interface %d on %s", self.interface, describe(self.device))

    # -- Transfer ----------------------------------------------------------

    def write_report(self, report: bytes) -> int:
        """Send one feature report.  Returns the number of bytes written."""
        if self.state is not SessionState.CLAIMED:
            raise TransportError("Interface not claimed")
        if len(report) != REPORT_SIZE:
            raise ValueError(f"Report must be {REPORT_SIZE} bytes, got {len(report)}")

        try:
            written = self.device.ctrl_transfer(
                HID_REQUEST_TYPE_OUT,
                HID_SET_REPORT,
                HID_FEATURE | report[0],
                self.interface,
                report,
                timeout=self.timeout_ms,
            )
        except usb.core.USBError as e:
            raise TransportError(f"Control transfer failed: {e}") from e

        log.debug("Set Report: %s (%d bytes)", report.hex(), written)
        return written

    # -- Teardown ----------------------------------------------------------

    def close(self) -> None:
        """Release the interface, reattach the kernel driver, free the handle."""
        self._teardown(raise_errors=True)

    def _teardown(self, raise_errors: bool) -> None:
        if not self._handle:
            return

        errors: List[str] = []
        cause: Optional[BaseException] = None

        if self.state is SessionState.CLAIMED:
            try:
                usb.util.release_interface(self.device, self.interface)
                log.debug("Released interface %d", self.interface)
            except usb.core.USBError as e:
                errors.append(f"release interface {self.interface}: {e}")
                cause = e
            self.state = SessionState.RELEASED

        if self.detached:
            try:
                self.device.attach_kernel_driver(self.interface)
                log.debug("Reattached kernel driver to interface %d", self.interface)
            except usb.core.USBError as e:
                errors.append(f"reattach kernel driver: {e}")
                cause = cause or e
            self.detached = False

        try:
            usb.util.dispose_resources(self.device)
        except usb.core.USBError as e:
            errors.append(f"dispose resources: {e}")
            cause = cause or e
        self.state = SessionState.CLOSED
        self._handle = False

        if errors:
            message = "Cleanup failed: " + "; ".join(errors)
            if raise_errors:
                raise TransportError(message) from cause
            log.warning("%s", message)

    def __enter__(self) -> HidSession:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # A cleanup failure must not mask the transfer error
        self._teardown(raise_errors=exc_type is None)


def send_report(device: Any, report: bytes, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> int:
    """Open ``device``, write one feature report, and release it again."""
    with HidSession(device, timeout_ms=timeout_ms) as session:
        return session.write_report(report)
