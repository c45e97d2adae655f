"""Shared fixtures and fakes."""
from datetime import datetime, timedelta, timezone
from typing import Dict, List

import pytest

from benchmarker.schemas import HttpCheck, TcpCheck, Target
from benchmarker.services.checker import CheckerService

T0 = datetime(2026, 1, 5, 2, 0, 0, tzinfo=timezone.utc)


def http_target(name: str, url: str = "http://example.test/") -> Target:
    return Target(name=name, check=HttpCheck(url=url))


def tcp_target(name: str, host: str = "127.0.0.1", port: int = 5432) -> Target:
    return Target(name=name, check=TcpCheck(host=host, port=port))


def at(seconds: float) -> datetime:
    return T0 + timedelta(seconds=seconds)


class ScriptedChecker(CheckerService):
    """Returns pre-scripted results per target name, healthy once exhausted."""

    def __init__(self, script: Dict[str, List[bool]]):
        super().__init__()
        self.script = {name: list(results) for name, results in script.items()}
        self.calls: List[str] = []

    async def check(self, target: Target, timeout: float) -> bool:
        self.calls.append(target.name)
        results = self.script.get(target.name)
        if results:
            return results.pop(0)
        return True


class FakeClock:
    """Clock advanced by the fake sleep."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
