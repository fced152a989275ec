"""Tests for tick accumulation."""

from __future__ import annotations

import pytest

from orrery.core.timekeeping import TickAccumulator, WallClock


def test_consume_releases_whole_ticks() -> None:
    """Only whole ticks are released; the fraction stays banked."""
    stepper = TickAccumulator(tick=0.1, max_ticks=16)
    stepper.accrue(0.35)
    assert stepper.consume() == (3, 0.1)
    assert stepper.pending == pytest.approx(0.05)
    assert stepper.consume() == (0, 0.0)
    assert stepper.drain_remainder() == pytest.approx(0.05)
    assert stepper.pending == 0.0


def test_exact_multiple() -> None:
    """An exact multiple of the tick size leaves nothing behind."""
    stepper = TickAccumulator(tick=0.25, max_ticks=16)
    stepper.accrue(1.0)
    assert stepper.consume() == (4, 0.25)
    assert stepper.drain_remainder() == 0.0


def test_backlog_is_carried_forward() -> None:
    """A backlog beyond the cap keeps the tick length and waits for later drains."""
    stepper = TickAccumulator(tick=0.01, max_ticks=4)
    stepper.accrue(1.0)
    assert stepper.backlog == 100
    assert stepper.consume() == (4, 0.01)
    assert stepper.pending == pytest.approx(0.96)

    released = 4
    while stepper.backlog:
        count, dt = stepper.consume()
        assert 1 <= count <= 4
        assert dt == 0.01
        released += count
    assert released == 100
    assert stepper.drain_remainder() == pytest.approx(0.0, abs=1e-9)


def test_negative_and_clear() -> None:
    """Negative deltas are ignored and clear() drops pending time."""
    stepper = TickAccumulator(tick=0.1, max_ticks=4)
    stepper.accrue(-1.0)
    assert stepper.pending == 0.0
    stepper.accrue(0.2)
    stepper.clear()
    assert stepper.consume() == (0, 0.0)


def test_invalid_configuration() -> None:
    """Tick size and tick budget must be positive."""
    with pytest.raises(ValueError):
        TickAccumulator(tick=0.0, max_ticks=4)
    with pytest.raises(ValueError):
        TickAccumulator(tick=0.1, max_ticks=0)


def test_wall_clock_laps() -> None:
    """Laps are counted and the slowest one is remembered."""
    clock = WallClock()
    first = clock.lap()
    second = clock.lap()
    assert clock.laps == 2
    assert clock.slowest_lap == max(first, second)
    assert clock.elapsed() >= first + second - 1e-9
