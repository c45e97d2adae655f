"""Reporter service - turns final tracker state into a downtime report."""
import logging
from datetime import datetime
from typing import Optional, Sequence

from ..schemas import DowntimeReport, TargetDowntime, WindowSummary
from .tracker import TargetState

logger = logging.getLogger(__name__)


def _summarize(state: TargetState) -> TargetDowntime:
    windows = [
        WindowSummary(
            start=w.start,
            end=w.end,
            duration_seconds=w.duration_seconds,
        )
        for w in state.windows
    ]
    return TargetDowntime(
        name=state.target.name,
        kind=state.target.kind,
        icon=state.target.icon,
        total_downtime_seconds=sum(w.duration_seconds for w in windows),
        failure_count=len(windows),
        windows=windows,
    )


def build_report(
    states: Sequence[TargetState],
    generated_at: Optional[datetime] = None,
) -> DowntimeReport:
    """Aggregate per-target failure windows.

    Only targets that failed at least once are listed, ordered by the start
    of their first window. Ties keep the original target order.
    """
    generated_at = generated_at or datetime.now().astimezone()

    failed = [s for s in states if s.windows]
    if not failed:
        logger.info("No downtime detected")
        return DowntimeReport(generated_at=generated_at)

    # sorted() is stable, so equal starts stay in target order
    failed = sorted(failed, key=lambda s: s.windows[0].start)
    targets = [_summarize(s) for s in failed]

    report = DowntimeReport(
        generated_at=generated_at,
        failures_began_at=min(s.windows[0].start for s in failed),
        targets=targets,
        total_downtime_seconds=sum(t.total_downtime_seconds for t in targets),
    )
    logger.info(
        f"Downtime report: {len(targets)} target(s) failed, "
        f"{report.total_downtime_seconds}s total"
    )
    return report
