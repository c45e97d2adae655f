"""Tests for the concurrent fan-out/fan-in of checks."""
import asyncio
import time

import pytest

from benchmarker.services.checker import CheckerService
from benchmarker.services.poller import poll_all
from tests.conftest import ScriptedChecker, http_target, tcp_target


class SlowChecker(CheckerService):
    def __init__(self, delays):
        super().__init__()
        self.delays = delays

    async def check(self, target, timeout):
        await asyncio.sleep(min(self.delays.get(target.name, 0), timeout))
        return target.name != "down"


class BrokenChecker(CheckerService):
    async def check(self, target, timeout):
        if target.name == "broken":
            raise RuntimeError("internal fault")
        return True


@pytest.mark.asyncio
async def test_results_are_index_aligned():
    targets = [http_target("a"), tcp_target("b"), http_target("c")]
    checker = ScriptedChecker({"a": [True], "b": [False], "c": [True]})

    assert await poll_all(targets, 1, checker) == [True, False, True]


@pytest.mark.asyncio
async def test_slow_check_does_not_reorder_results():
    targets = [http_target("slow"), http_target("down"), http_target("fast")]
    checker = SlowChecker({"slow": 0.1})

    assert await poll_all(targets, 1, checker) == [True, False, True]


@pytest.mark.asyncio
async def test_checks_run_concurrently():
    targets = [http_target(f"t{i}") for i in range(5)]
    checker = SlowChecker({f"t{i}": 0.2 for i in range(5)})

    started = time.monotonic()
    results = await poll_all(targets, 1, checker)
    elapsed = time.monotonic() - started

    assert results == [True] * 5
    assert elapsed < 0.8


@pytest.mark.asyncio
async def test_failing_unit_counts_as_unhealthy():
    targets = [http_target("ok"), http_target("broken"), http_target("also-ok")]

    assert await poll_all(targets, 1, BrokenChecker()) == [True, False, True]
