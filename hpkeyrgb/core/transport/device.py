"""Find and open the keyboard on the USB bus.

This is a one-shot scan: no retries and no hotplug waiting. Enumeration or
descriptor failures never raise; they just make the device "not found".
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Iterator, Optional

import usb.control
import usb.core
import usb.util

from ..protocol import PRODUCT_ID, VENDOR_ID
from ..utils.exceptions import describe_usb_error

logger = logging.getLogger(__name__)

_USB_ERRORS = (usb.core.USBError, usb.core.NoBackendError, OSError)


def usb_scan_disabled() -> bool:
    return os.environ.get("HPKEYRGB_DISABLE_USB_SCAN") == "1"


def _enumerate(finder: Callable[..., Any]) -> Iterator[Any]:
    """Yield devices as the finder produces them.

    pyusb reads each device descriptor while iterating, so a failing device
    raises out of `next()`. That ends the scan; devices already yielded have
    been checked by then.
    """

    try:
        devices = iter(finder(find_all=True) or ())
    except _USB_ERRORS as exc:
        logger.warning("USB enumeration failed: %s", exc)
        return

    while True:
        try:
            device = next(devices)
        except StopIteration:
            return
        except _USB_ERRORS as exc:
            logger.warning("USB enumeration stopped early: %s", exc)
            return
        yield device


def _matches(device: Any, vendor_id: int, product_id: int) -> bool:
    try:
        return int(device.idVendor) == vendor_id and int(device.idProduct) == product_id
    except (usb.core.USBError, AttributeError, TypeError, ValueError) as exc:
        logger.debug("Skipping device with unreadable descriptor: %s", exc)
        return False


def _open(device: Any) -> None:
    # pyusb opens handles lazily; a GET_STATUS request forces the open.
    usb.control.get_status(device)


def locate(
    vendor_id: int = VENDOR_ID,
    product_id: int = PRODUCT_ID,
    *,
    finder: Optional[Callable[..., Any]] = None,
) -> Optional[Any]:
    """Return the first matching device that could be opened, else None."""

    if usb_scan_disabled():
        logger.debug("USB scan disabled via HPKEYRGB_DISABLE_USB_SCAN")
        return None

    finder = usb.core.find if finder is None else finder

    for device in _enumerate(finder):
        if not _matches(device, vendor_id, product_id):
            continue
        try:
            _open(device)
        except _USB_ERRORS as exc:
            logger.warning(
                "Found 0x%04x:0x%04x but could not open it: %s",
                vendor_id,
                product_id,
                describe_usb_error(exc),
            )
            continue
        logger.debug(
            "Opened 0x%04x:0x%04x (bus %s address %s)",
            vendor_id,
            product_id,
            getattr(device, "bus", "?"),
            getattr(device, "address", "?"),
        )
        return device

    return None


def release(device: Any) -> None:
    """Free the device handle; best-effort."""

    try:
        usb.util.dispose_resources(device)
    except _USB_ERRORS as exc:
        logger.debug("dispose_resources failed: %s", exc)
