"""Per-report transfer execution.

Every report goes through its own cycle:

    resolve endpoint -> detach kernel driver -> set configuration -> claim
    interface -> select alt setting -> write -> release -> reattach driver

Nothing is cached between reports: the controller re-enumerates its
configuration while being programmed, so the endpoint is looked up again each
time. A failed report is logged and skipped; it never stops the remaining ones.
"""

from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional

import usb.core
import usb.util

from ..protocol import TRANSFER_TIMEOUT_MS
from ..utils.exceptions import (
    EndpointConfigurationError,
    EndpointNotFoundError,
    ReportTransferError,
    describe_usb_error,
)
from .endpoints import Endpoint, TransferKind, find_writable

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (usb.core.USBError, NotImplementedError)


class ReportStatus(enum.Enum):
    SENT = "sent"
    NO_ENDPOINT = "no-endpoint"
    CONFIG_FAILED = "config-failed"
    TRANSFER_FAILED = "transfer-failed"


@dataclass(frozen=True)
class ReportOutcome:
    index: int
    status: ReportStatus
    endpoint: Optional[Endpoint] = None
    written: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ReportStatus.SENT


@contextmanager
def kernel_driver_detached(handle: Any, interface: int) -> Iterator[bool]:
    """Detach the kernel driver from *interface* for the duration of the block.

    Yields whether a driver was detached. Detach and reattach failures are
    logged and otherwise ignored; reattach only happens after a successful
    detach.
    """

    detached = False
    try:
        if handle.is_kernel_driver_active(interface):
            handle.detach_kernel_driver(interface)
            detached = True
            logger.debug("Detached kernel driver from interface %d", interface)
    except _DRIVER_ERRORS as exc:
        logger.debug("Kernel driver detach on interface %d failed: %s", interface, exc)

    try:
        yield detached
    finally:
        if detached:
            try:
                handle.attach_kernel_driver(interface)
                logger.debug("Reattached kernel driver to interface %d", interface)
            except _DRIVER_ERRORS as exc:
                logger.debug("Kernel driver reattach on interface %d failed: %s", interface, exc)


def _configure(handle: Any, endpoint: Endpoint) -> None:
    try:
        handle.set_configuration(endpoint.config)
        usb.util.claim_interface(handle, endpoint.interface)
        handle.set_interface_altsetting(interface=endpoint.interface, alternate_setting=endpoint.setting)
    except usb.core.USBError as exc:
        raise EndpointConfigurationError(
            f"could not configure endpoint ({endpoint}): {describe_usb_error(exc)}"
        ) from exc


def _release_interface(handle: Any, interface: int) -> None:
    # The kernel refuses to reattach a driver to a still-claimed interface.
    try:
        usb.util.release_interface(handle, interface)
    except usb.core.USBError as exc:
        logger.debug("Releasing interface %d failed: %s", interface, exc)


@contextmanager
def claimed_endpoint(handle: Any, endpoint: Endpoint) -> Iterator[Endpoint]:
    """Make *endpoint* writable; restore driver state on every exit path.

    Raises:
        EndpointConfigurationError: activating the configuration, claiming the
            interface or selecting the alternate setting failed.
    """

    with kernel_driver_detached(handle, endpoint.interface):
        try:
            _configure(handle, endpoint)
            yield endpoint
        finally:
            _release_interface(handle, endpoint.interface)


def write_report(
    handle: Any,
    endpoint: Endpoint,
    kind: TransferKind,
    data: bytes,
    *,
    timeout_ms: int = TRANSFER_TIMEOUT_MS,
) -> int:
    """Write one report to an already claimed endpoint.

    pyusb picks the interrupt or bulk transfer from the endpoint descriptor;
    *kind* is validated so an unknown transfer kind never reaches the device.

    Raises:
        ReportTransferError: the write failed or timed out.
    """

    kind = TransferKind(kind)
    try:
        written = int(handle.write(endpoint.address, data, timeout=timeout_ms))
    except usb.core.USBError as exc:
        raise ReportTransferError(
            f"could not write {kind.name.lower()} report to 0x{endpoint.address:02x}: {describe_usb_error(exc)}"
        ) from exc

    if written != len(data):
        logger.warning("Short write on 0x%02x: %d of %d bytes", endpoint.address, written, len(data))
    return written


def send_report(
    handle: Any,
    data: bytes,
    *,
    index: int = 0,
    kind: TransferKind = TransferKind.INTERRUPT,
    timeout_ms: int = TRANSFER_TIMEOUT_MS,
    resolver: Callable[[Any, TransferKind], Optional[Endpoint]] = find_writable,
) -> ReportOutcome:
    """Resolve, claim and write a single report. Never raises for USB failures."""

    try:
        endpoint = resolver(handle, kind)
        if endpoint is None:
            raise EndpointNotFoundError(f"no writable {kind.name.lower()} endpoint found")
    except EndpointNotFoundError as exc:
        logger.error("Report %d skipped: %s", index, exc)
        return ReportOutcome(index=index, status=ReportStatus.NO_ENDPOINT, error=str(exc))

    try:
        with claimed_endpoint(handle, endpoint):
            written = write_report(handle, endpoint, kind, data, timeout_ms=timeout_ms)
    except EndpointConfigurationError as exc:
        logger.error("Report %d skipped: %s", index, exc)
        return ReportOutcome(index=index, status=ReportStatus.CONFIG_FAILED, endpoint=endpoint, error=str(exc))
    except ReportTransferError as exc:
        logger.warning("Report %d not delivered: %s", index, exc)
        return ReportOutcome(index=index, status=ReportStatus.TRANSFER_FAILED, endpoint=endpoint, error=str(exc))

    logger.debug("Report %d: wrote %d bytes via %s", index, written, endpoint)
    return ReportOutcome(index=index, status=ReportStatus.SENT, endpoint=endpoint, written=written)


def send_reports(
    handle: Any,
    reports: Iterable[bytes],
    *,
    kind: TransferKind = TransferKind.INTERRUPT,
    timeout_ms: int = TRANSFER_TIMEOUT_MS,
    resolver: Callable[[Any, TransferKind], Optional[Endpoint]] = find_writable,
) -> list[ReportOutcome]:
    """Send reports in order, one full endpoint cycle each."""

    return [
        send_report(handle, data, index=index, kind=kind, timeout_ms=timeout_ms, resolver=resolver)
        for index, data in enumerate(reports)
    ]
