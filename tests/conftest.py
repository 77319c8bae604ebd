from datetime import datetime, timezone

import pytest

pytest_plugins = [
    "tests.fixtures.probes",
    "tests.fixtures.app",
]


@pytest.fixture()
def fixed_instant() -> datetime:
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_clock(fixed_instant):
    return lambda: fixed_instant
