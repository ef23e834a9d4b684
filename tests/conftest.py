import pytest


class ManualClock:
    """Clock for ``TTLCache(time_func=...)`` that only moves when told to."""

    def __init__(self, initial: float = 0.0):
        self._value = initial

    def now(self) -> float:
        return self._value

    def advance(self, seconds: float) -> None:
        self._value += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()
