"""Poller service - fans out one concurrent check per target each tick."""
import asyncio
import logging
from typing import List, Optional, Sequence

from ..schemas import Target
from .checker import CheckerService, checker_service

logger = logging.getLogger(__name__)


async def poll_all(
    targets: Sequence[Target],
    timeout: float,
    checker: Optional[CheckerService] = None,
) -> List[bool]:
    """Check every target concurrently and return results in target order.

    Each check runs as its own task bounded by its own timeout, so one slow
    target cannot hold up the others. All tasks are joined before returning.
    A task that fails internally counts as unhealthy instead of aborting the
    batch.
    """
    checker = checker or checker_service

    tasks = [
        asyncio.create_task(checker.check(target, timeout), name=f"check-{target.name}")
        for target in targets
    ]
    outcomes = await asyncio.gather(*tasks, return_exceptions=True)

    results: List[bool] = []
    for target, outcome in zip(targets, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning(f"Check for {target.name} could not be completed: {outcome!r}")
            results.append(False)
        else:
            results.append(bool(outcome))
    return results
