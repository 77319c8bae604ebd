import asyncio

import pytest

from src.models.exceptions.probe_failure import ProbeFailure
from src.models.status_report import SubsystemCheck
from src.utils.checkable import Checkable


class HealthyProbe(Checkable):
    async def probe(self) -> SubsystemCheck:
        return SubsystemCheck(name=self.name, healthy=True)


class UnhealthyProbe(Checkable):
    """Returns an unhealthy check rather than raising"""
    async def probe(self) -> SubsystemCheck:
        return SubsystemCheck(name=self.name, healthy=False, detail='not ready')


class FailingProbe(Checkable):
    def __init__(self, name: str, critical: bool = True, error: Exception | None = None):
        super().__init__(name, critical)
        self.error = error if error is not None else ConnectionError('connection refused')

    async def probe(self) -> SubsystemCheck:
        raise self.error


class RejectingProbe(Checkable):
    async def probe(self) -> SubsystemCheck:
        raise ProbeFailure('HTTP 500')


class SlowProbe(Checkable):
    def __init__(self, name: str, critical: bool = True, delay: float = 5.0):
        super().__init__(name, critical)
        self.delay = delay
        self.cancelled = False

    async def probe(self) -> SubsystemCheck:
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return SubsystemCheck(name=self.name, healthy=True)


@pytest.fixture
def healthy_database() -> HealthyProbe:
    return HealthyProbe('database')


@pytest.fixture
def failing_database() -> FailingProbe:
    return FailingProbe('database')


@pytest.fixture
def failing_cache() -> FailingProbe:
    return FailingProbe('cache', critical=False)


class ReturnsErrorProbe(Checkable):
    """Returns the error instead of raising it"""
    async def probe(self):
        return ConnectionError('refused')


class ReturnsNothingProbe(Checkable):
    async def probe(self):
        return None
