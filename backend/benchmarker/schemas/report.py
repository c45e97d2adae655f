"""Downtime report schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class WindowSummary(BaseModel):
    """One contiguous failure interval."""
    start: datetime
    end: datetime
    duration_seconds: int


class TargetDowntime(BaseModel):
    """Downtime totals for a target that failed at least once."""
    name: str
    kind: str
    icon: str
    total_downtime_seconds: int
    failure_count: int
    windows: List[WindowSummary]


class DowntimeReport(BaseModel):
    """Final report produced once the monitoring loop has ended.

    `targets` holds only targets with at least one failure window, ordered by
    the start of their first window.
    """
    generated_at: datetime
    failures_began_at: Optional[datetime] = None
    targets: List[TargetDowntime] = []
    total_downtime_seconds: int = 0

    @property
    def downtime_detected(self) -> bool:
        return bool(self.targets)
