"""Writable endpoint discovery.

The descriptor tree is walked in a fixed order (configuration index, interface
and alternate setting as listed in the configuration descriptor, endpoint
index) and the first OUT endpoint of the requested transfer kind wins.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional

import usb.core
import usb.util

logger = logging.getLogger(__name__)


class TransferKind(enum.Enum):
    INTERRUPT = usb.util.ENDPOINT_TYPE_INTR
    BULK = usb.util.ENDPOINT_TYPE_BULK


@dataclass(frozen=True)
class Endpoint:
    config: int
    interface: int
    setting: int
    address: int

    def __str__(self) -> str:
        return f"cfg={self.config} iface={self.interface} alt={self.setting} ep=0x{self.address:02x}"


def _is_writable(ep: Any, kind: TransferKind) -> bool:
    return (
        usb.util.endpoint_direction(ep.bEndpointAddress) == usb.util.ENDPOINT_OUT
        and usb.util.endpoint_type(ep.bmAttributes) == kind.value
    )


def find_writable(device: Any, kind: TransferKind) -> Optional[Endpoint]:
    """Return the first OUT endpoint of *kind*, or None when the tree has none.

    Configuration descriptors that cannot be read are skipped.
    """

    kind = TransferKind(kind)

    try:
        num_configs = int(device.bNumConfigurations)
    except (usb.core.USBError, AttributeError, TypeError, ValueError) as exc:
        logger.debug("Cannot read device descriptor: %s", exc)
        return None

    for index in range(num_configs):
        try:
            config = device[index]
        except (usb.core.USBError, IndexError, KeyError) as exc:
            logger.debug("Skipping configuration #%d: %s", index, exc)
            continue

        for interface in config:
            for ep in interface:
                if not _is_writable(ep, kind):
                    continue
                endpoint = Endpoint(
                    config=int(config.bConfigurationValue),
                    interface=int(interface.bInterfaceNumber),
                    setting=int(interface.bAlternateSetting),
                    address=int(ep.bEndpointAddress),
                )
                logger.debug("Writable %s endpoint: %s", kind.name.lower(), endpoint)
                return endpoint

    return None
