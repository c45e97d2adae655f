"""Failure-window tracker - per-target healthy/failing state machine."""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

from ..schemas import Target

logger = logging.getLogger(__name__)


class HealthState(str, Enum):
    HEALTHY = "healthy"
    FAILING = "failing"


@dataclass
class FailureWindow:
    """A contiguous interval during which a target failed every check.

    While the target keeps failing, `end` follows the latest failing tick.
    On recovery `end` is the time of the first successful check, so the
    detection lag of one interval is part of the reported duration.
    """
    start: datetime
    end: datetime

    @property
    def duration_seconds(self) -> int:
        """Whole seconds, never less than 1."""
        return max(1, int((self.end - self.start).total_seconds()))


@dataclass
class TargetState:
    """Health state and failure history of one target."""
    target: Target
    status: HealthState = HealthState.HEALTHY
    windows: List[FailureWindow] = field(default_factory=list)

    @property
    def is_failing(self) -> bool:
        return self.status is HealthState.FAILING

    @property
    def open_window(self) -> Optional[FailureWindow]:
        """The window still being extended, if the target is failing."""
        if self.is_failing and self.windows:
            return self.windows[-1]
        return None

    def record(self, healthy: bool, now: datetime) -> None:
        """Apply one check result observed at `now`."""
        if self.is_failing:
            # FAILING -> FAILING extends, FAILING -> HEALTHY closes
            window = self.windows[-1]
            window.end = max(now, window.start)
            if healthy:
                self.status = HealthState.HEALTHY
                logger.info(
                    f"{self.target.name} recovered after "
                    f"{window.duration_seconds}s"
                )
        elif not healthy:
            if self.windows:
                # windows never overlap, even if the clock steps back
                now = max(now, self.windows[-1].end)
            self.windows.append(FailureWindow(start=now, end=now))
            self.status = HealthState.FAILING
            logger.info(f"{self.target.name} started failing")

    def close(self, now: datetime) -> None:
        """Force the open window, if any, to end at `now`."""
        window = self.open_window
        if window is not None:
            window.end = max(now, window.start)


class FailureTracker:
    """Keeps one independent TargetState per target.

    Owned by the monitoring loop; not safe for concurrent updates.
    """

    def __init__(self, targets: Sequence[Target]):
        self.states: List[TargetState] = [TargetState(target=t) for t in targets]

    def update(self, results: Sequence[bool], now: datetime) -> None:
        """Apply one tick of results, index-aligned with the targets."""
        if len(results) != len(self.states):
            raise ValueError(
                f"Expected {len(self.states)} results, got {len(results)}"
            )
        for state, healthy in zip(self.states, results):
            state.record(healthy, now)

    def close_open_windows(self, now: datetime) -> None:
        """Terminate every still-open window at the shutdown instant."""
        for state in self.states:
            state.close(now)
