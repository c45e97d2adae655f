"""Pydantic schemas for targets, status snapshots and reports."""
from .target import (
    Check,
    HttpCheck,
    TcpCheck,
    Target,
    SUPPORTED_TYPES,
)
from .status import (
    TargetStatus,
    TickStatus,
)
from .report import (
    WindowSummary,
    TargetDowntime,
    DowntimeReport,
)

__all__ = [
    "Check",
    "HttpCheck",
    "TcpCheck",
    "Target",
    "SUPPORTED_TYPES",
    "TargetStatus",
    "TickStatus",
    "WindowSummary",
    "TargetDowntime",
    "DowntimeReport",
]
