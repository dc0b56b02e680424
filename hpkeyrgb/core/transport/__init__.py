"""pyusb transport for the keyboard: locate, resolve endpoints, write reports."""

from __future__ import annotations

from .device import locate, release
from .endpoints import Endpoint, TransferKind, find_writable
from .transfer import ReportOutcome, ReportStatus, claimed_endpoint, send_report, send_reports, write_report

__all__ = [
    "Endpoint",
    "ReportOutcome",
    "ReportStatus",
    "TransferKind",
    "claimed_endpoint",
    "find_writable",
    "locate",
    "release",
    "send_report",
    "send_reports",
    "write_report",
]
