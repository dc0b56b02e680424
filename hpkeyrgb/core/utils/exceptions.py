from __future__ import annotations


class HpKeyRgbError(Exception):
    """Base class for all errors raised by hpkeyrgb."""


class InputError(HpKeyRgbError):
    """Caller-supplied key/color input is malformed. No USB I/O happens."""


class ColorParseError(InputError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invalid color {token!r}: expected 1-6 hex digits (e.g. ff0000)")


class OddArgumentCountError(InputError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"expected [key|group] [color] pairs, got {count} argument(s)\n"
            "example: pkeys ff0000 home 00ff00"
        )


class DeviceNotFoundError(HpKeyRgbError):
    def __init__(self, vendor_id: int, product_id: int):
        self.vendor_id = vendor_id
        self.product_id = product_id
        super().__init__(f"no usable device 0x{vendor_id:04x}:0x{product_id:04x}")


class EndpointNotFoundError(HpKeyRgbError):
    """No OUT endpoint of the requested transfer kind exists on the device."""


class EndpointConfigurationError(HpKeyRgbError):
    """Activating the configuration, claiming or selecting the alt setting failed."""


class ReportTransferError(HpKeyRgbError):
    """The write itself failed or timed out."""


# (errno values, lowercase message fragments) per failure class.
_DISCONNECTED = ((19,), ("no such device",))
_BUSY = ((16,), ("device or resource busy",))
_PERMISSION = ((1, 13), ("permission denied", "access denied", "not permitted"))


def _classify(exc: BaseException, signature) -> bool:
    errnos, fragments = signature
    if getattr(exc, "errno", None) in errnos:
        return True
    try:
        msg = str(exc).lower()
    except Exception:
        return False
    return any(fragment in msg for fragment in fragments)


def is_device_disconnected(exc: BaseException) -> bool:
    """True when *exc* looks like the keyboard went away (ENODEV)."""

    return _classify(exc, _DISCONNECTED)


def is_device_busy(exc: BaseException) -> bool:
    return _classify(exc, _BUSY)


def is_permission_denied(exc: BaseException) -> bool:
    """True for EPERM/EACCES style failures, usually a missing udev rule."""

    return isinstance(exc, PermissionError) or _classify(exc, _PERMISSION)


def describe_usb_error(exc: BaseException) -> str:
    """Short human hint for a USB failure, used in log messages."""

    if is_permission_denied(exc):
        return f"{exc} (permission denied; install the udev rule or run as root)"
    if is_device_busy(exc):
        return f"{exc} (device busy; another program may hold the interface)"
    if is_device_disconnected(exc):
        return f"{exc} (device disconnected)"
    return str(exc)
