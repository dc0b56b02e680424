from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from .protocol import PRODUCT_ID, VENDOR_ID
from .transport import ReportOutcome, TransferKind, locate, release, send_reports
from .utils.exceptions import DeviceNotFoundError

logger = logging.getLogger(__name__)


class SessionStatus(enum.Enum):
    COMPLETED = "completed"
    PARTIAL = "partial"
    DEVICE_NOT_FOUND = "device-not-found"


@dataclass(frozen=True)
class SessionResult:
    status: SessionStatus
    outcomes: tuple[ReportOutcome, ...] = field(default_factory=tuple)
    error: Optional[DeviceNotFoundError] = None

    @property
    def ok(self) -> bool:
        return self.status is SessionStatus.COMPLETED

    @property
    def failed(self) -> list[ReportOutcome]:
        return [o for o in self.outcomes if not o.ok]


def apply_reports(
    reports: Sequence[bytes],
    *,
    device: Optional[Any] = None,
    kind: TransferKind = TransferKind.INTERRUPT,
    locator: Callable[..., Optional[Any]] = locate,
) -> SessionResult:
    """Write *reports* to the keyboard, one endpoint cycle per report.

    A missing keyboard is reported as DEVICE_NOT_FOUND instead of raising, so
    the tool stays harmless on machines without it. The device handle is
    always released, including when it was passed in.
    """

    if device is None:
        device = locator(VENDOR_ID, PRODUCT_ID)
    if device is None:
        missing = DeviceNotFoundError(VENDOR_ID, PRODUCT_ID)
        logger.warning("%s; nothing written.", missing)
        return SessionResult(status=SessionStatus.DEVICE_NOT_FOUND, error=missing)

    try:
        outcomes = tuple(send_reports(device, reports, kind=kind))
    finally:
        release(device)

    failed = [o for o in outcomes if not o.ok]
    if failed:
        logger.warning("%d of %d reports were not delivered.", len(failed), len(outcomes))
        return SessionResult(status=SessionStatus.PARTIAL, outcomes=outcomes)

    logger.info("Wrote %d reports.", len(outcomes))
    return SessionResult(status=SessionStatus.COMPLETED, outcomes=outcomes)
