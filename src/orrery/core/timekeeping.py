"""Fixed-size ticks for advancing the orrery clock."""
from __future__ import annotations

import math
import time
from dataclasses import dataclass, field

# Absorbs rounding when the banked time is a whole number of ticks
_TICK_SLACK = 1e-9


@dataclass
class WallClock:
    """Real seconds spent on a run, with per-frame laps."""

    started: float = field(default_factory=time.perf_counter)
    last_lap: float = field(init=False)
    laps: int = 0
    slowest_lap: float = 0.0

    def __post_init__(self) -> None:
        self.last_lap = self.started

    def lap(self) -> float:
        now = time.perf_counter()
        duration = now - self.last_lap
        self.last_lap = now
        self.laps += 1
        self.slowest_lap = max(self.slowest_lap, duration)
        return duration

    def elapsed(self) -> float:
        return time.perf_counter() - self.started


@dataclass
class TickAccumulator:
    """Banks animation time and pays it out in ticks of exactly ``tick`` seconds.

    A drain releases at most ``max_ticks`` ticks. Whatever is left, whole
    ticks beyond the cap or a fraction of a tick, stays banked for the next
    drain; :meth:`drain_remainder` hands out the final fraction.
    """

    tick: float
    max_ticks: int
    pending: float = 0.0

    def __post_init__(self) -> None:
        if self.tick <= 0.0 or not math.isfinite(self.tick):
            raise ValueError(f"Tick length must be positive, got {self.tick!r}")
        if self.max_ticks < 1:
            raise ValueError("max_ticks must be at least 1")

    @property
    def backlog(self) -> int:
        """Whole ticks currently banked."""
        return int(self.pending / self.tick + _TICK_SLACK)

    def accrue(self, delta: float) -> None:
        if delta > 0.0:
            self.pending += delta

    def clear(self) -> None:
        self.pending = 0.0

    def consume(self) -> tuple[int, float]:
        """Return ``(count, tick)`` for the whole ticks released by this drain."""
        count = min(self.backlog, self.max_ticks)
        if count == 0:
            return 0, 0.0
        self.pending = max(0.0, self.pending - count * self.tick)
        return count, self.tick

    def drain_remainder(self) -> float:
        """Release everything still banked; less than one tick once the backlog is consumed."""
        remainder = self.pending
        self.pending = 0.0
        return remainder


__all__ = ["TickAccumulator", "WallClock"]
