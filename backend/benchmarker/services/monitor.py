"""Monitor service - precondition check and the tick loop.

Each tick: sleep for the interval, poll every target concurrently, feed the
results to the failure tracker, then emit a status snapshot. The interval is
measured from the end of the previous tick, so slow checks make the schedule
drift instead of overlapping ticks.

The cancellation token is only looked at before and after the sleep. An
in-flight sleep or poll always finishes, so stopping takes at most one
interval plus one check timeout.
"""
import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Sequence

from ..schemas import Target, TargetStatus, TickStatus
from ..utils.cancellation import CancellationToken
from .checker import CheckerService, checker_service
from .poller import poll_all
from .tracker import FailureTracker, TargetState

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[None]]
TickCallback = Callable[[TickStatus], None]


def local_now() -> datetime:
    return datetime.now().astimezone()


class InitialHealthCheckError(Exception):
    """Raised when targets fail the check required before monitoring starts."""

    def __init__(self, failed: Sequence[Target], status: Optional[TickStatus] = None):
        self.failed = list(failed)
        self.status = status
        names = ", ".join(t.name for t in self.failed)
        super().__init__(f"{len(self.failed)} target(s) failed the initial health check: {names}")


def snapshot(targets: Sequence[Target], results: Sequence[bool], now: datetime) -> TickStatus:
    """Build the structured status for one round of results."""
    return TickStatus(
        checked_at=now,
        results=[
            TargetStatus(name=t.name, kind=t.kind, healthy=ok)
            for t, ok in zip(targets, results)
        ],
    )


class MonitorService:
    """Runs the monitoring loop for a fixed list of targets."""

    def __init__(
        self,
        targets: Sequence[Target],
        check_interval: float,
        timeout: float,
        checker: Optional[CheckerService] = None,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleep] = None,
    ):
        if not targets:
            raise ValueError("At least one target is required")
        if check_interval <= 0 or timeout <= 0:
            raise ValueError("check_interval and timeout must be positive")
        self.targets = list(targets)
        self.check_interval = check_interval
        self.timeout = timeout
        self.checker = checker or checker_service
        self.clock = clock or local_now
        self.sleep = sleep or asyncio.sleep
        self.tracker = FailureTracker(self.targets)
        self.ticks = 0

    async def poll(self) -> List[bool]:
        return await poll_all(self.targets, self.timeout, self.checker)

    async def initial_check(self) -> TickStatus:
        """Poll once; every target must be healthy before monitoring starts.

        Raises InitialHealthCheckError listing the failing targets.
        """
        logger.info(f"Running initial health check for {len(self.targets)} target(s)")
        results = await self.poll()
        status = snapshot(self.targets, results, self.clock())

        failed = [t for t, ok in zip(self.targets, results) if not ok]
        if failed:
            raise InitialHealthCheckError(failed, status)

        logger.info("All targets healthy")
        return status

    async def run(
        self,
        token: CancellationToken,
        on_tick: Optional[TickCallback] = None,
    ) -> List[TargetState]:
        """Monitor until the token is cancelled, then close open windows."""
        logger.info(
            f"Monitoring started (interval={self.check_interval}s, timeout={self.timeout}s)"
        )

        while not token.cancelled:
            await self.sleep(self.check_interval)
            if token.cancelled:
                break

            results = await self.poll()
            now = self.clock()
            self.tracker.update(results, now)
            self.ticks += 1

            if on_tick:
                on_tick(snapshot(self.targets, results, now))

        stopped_at = self.clock()
        self.tracker.close_open_windows(stopped_at)
        logger.info(f"Monitoring stopped after {self.ticks} tick(s)")
        return self.tracker.states
