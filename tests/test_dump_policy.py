# ==============================================
# Tests for DumpPolicy / DumpScheduler
# ==============================================

import pytest

from picklekv.errors import ConfigError
from picklekv.persistence import DumpMode, DumpPolicy, DumpScheduler


class TestDumpPolicy:
    """Policy construction and parsing."""

    def test_constructors(self):
        assert DumpPolicy.never().mode is DumpMode.NEVER
        assert DumpPolicy.auto().mode is DumpMode.AUTO
        assert DumpPolicy.upon_request().mode is DumpMode.UPON_REQUEST
        assert DumpPolicy.periodic(2).interval == 2.0

    def test_negative_interval(self):
        with pytest.raises(ValueError):
            DumpPolicy.periodic(-1)

    @pytest.mark.parametrize("interval", [float("nan"), float("inf")])
    def test_non_finite_interval(self, interval):
        with pytest.raises(ValueError):
            DumpPolicy.periodic(interval)
        with pytest.raises(ConfigError):
            DumpPolicy.parse("periodic", interval)

    def test_parse(self):
        assert DumpPolicy.parse("AUTO") == DumpPolicy.auto()
        assert DumpPolicy.parse("upon-request") == DumpPolicy.upon_request()
        assert DumpPolicy.parse("periodic", 3) == DumpPolicy.periodic(3)
        assert DumpPolicy.parse("never", 3) == DumpPolicy.never()

    def test_parse_errors(self):
        with pytest.raises(ConfigError):
            DumpPolicy.parse("sometimes")
        with pytest.raises(ConfigError):
            DumpPolicy.parse("periodic", -5)

    def test_str(self):
        assert str(DumpPolicy.periodic(1.5)) == "periodic(1.5s)"
        assert str(DumpPolicy.auto()) == "auto"


class TestDumpScheduler:
    """on_mutation() decisions per mode."""

    def test_never(self, clock):
        scheduler = DumpScheduler(DumpPolicy.never(), clock)
        clock.advance(100)

        assert scheduler.on_mutation() is False
        assert scheduler.allows_dump() is False

    def test_auto(self, clock):
        scheduler = DumpScheduler(DumpPolicy.auto(), clock)

        assert scheduler.on_mutation() is True
        assert scheduler.on_mutation() is True

    def test_upon_request(self, clock):
        scheduler = DumpScheduler(DumpPolicy.upon_request(), clock)
        clock.advance(100)

        assert scheduler.on_mutation() is False
        assert scheduler.allows_dump() is True

    def test_periodic_cooldown(self, clock):
        scheduler = DumpScheduler(DumpPolicy.periodic(10), clock)

        clock.advance(5)
        assert scheduler.on_mutation() is False

        clock.advance(6)
        assert scheduler.on_mutation() is True
        scheduler.mark_dumped()

        clock.advance(1)
        assert scheduler.on_mutation() is False

    def test_periodic_needs_strictly_more_than_interval(self, clock):
        scheduler = DumpScheduler(DumpPolicy.periodic(10), clock)
        clock.advance(10)

        assert scheduler.on_mutation() is False

    def test_seconds_since_dump(self, clock):
        scheduler = DumpScheduler(DumpPolicy.periodic(10), clock)
        clock.advance(4)

        assert scheduler.seconds_since_dump() == 4
