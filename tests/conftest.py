import pytest

from nettraffic.data.traffic import Counters, TrafficSettings
from nettraffic.widget import TrafficWidget


class FakeHost:
    """
    Stands in for the OS: a controllable clock, counters and link state.
    """

    def __init__(self):
        self.now = 10_000
        self.received = 0
        self.transmitted = 0
        self.connected = True

    def clock(self) -> int:
        return self.now

    def counters(self, _interfaces: list[str] | None) -> Counters:
        return Counters(received=self.received, transmitted=self.transmitted)

    def connectivity(self, _interfaces: list[str] | None) -> bool:
        return self.connected

    def advance(self, ms: int, rx: int = 0, tx: int = 0):
        self.now += ms
        self.received += rx
        self.transmitted += tx


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def make_widget(host: FakeHost):
    def _make(**kwargs) -> TrafficWidget:
        return TrafficWidget(
            settings=TrafficSettings(**kwargs),
            counters=host.counters,
            connectivity=host.connectivity,
            clock=host.clock,
        )

    return _make
