"""Services for checking, polling, tracking and reporting."""
from .checker import CheckerService
from .poller import poll_all
from .tracker import FailureTracker, FailureWindow, TargetState
from .reporter import build_report
from .monitor import MonitorService, InitialHealthCheckError
from .loader import load_targets, TargetsFileError

__all__ = [
    "CheckerService",
    "poll_all",
    "FailureTracker",
    "FailureWindow",
    "TargetState",
    "build_report",
    "MonitorService",
    "InitialHealthCheckError",
    "load_targets",
    "TargetsFileError",
]
