"""Tests for the run recorder."""

from __future__ import annotations

import csv
import json
import math

import pytest

from orrery.core.logging_utils import ApsisTracker, RunLogger
from orrery.core.model import SystemState
from orrery.data.bodies import BODY_DEFINITIONS


def test_apsis_tracker() -> None:
    """Wrapping marks perihelion and crossing π marks aphelion."""
    tracker = ApsisTracker()
    assert tracker.update("Earth", 6.2) is None
    assert tracker.update("Earth", 0.1) == "perihelion"
    assert tracker.update("Earth", 3.0) is None
    assert tracker.update("Earth", 3.3) == "aphelion"
    assert tracker.update("Mars", math.pi) is None


def test_logger_creates_run_files(tmp_path) -> None:  # type: ignore[no-untyped-def]
    """Headers, metadata and the last-run marker are written."""
    with RunLogger(tmp_path, run_id="demo") as logger:
        logger.write_meta({"days": 10})
    assert logger.run_dir == tmp_path / "demo"
    assert (tmp_path / "last_run.txt").read_text(encoding="utf-8") == "demo"
    header = logger.timeseries_path.read_text().splitlines()[0]
    assert header == "t,body,mean_anomaly,x,y,z,r"
    assert logger.events_path.read_text().startswith("t,type,body,r,mean_anomaly")
    assert json.loads(logger.meta_path.read_text()) == {"days": 10}


def test_duplicate_run_id_gets_suffix(tmp_path) -> None:  # type: ignore[no-untyped-def]
    """An existing run directory is never overwritten."""
    first = RunLogger(tmp_path, run_id="demo")
    second = RunLogger(tmp_path, run_id="demo")
    first.close()
    second.close()
    assert second.run_id == "demo_01"


def test_log_system_rows_flush_on_close(tmp_path) -> None:  # type: ignore[no-untyped-def]
    """One row per orbiting body per tick; buffered rows reach disk on close."""
    system = SystemState.from_bodies(BODY_DEFINITIONS, seed=9)
    logger = RunLogger(tmp_path, timeseries_flush_threshold=1000)
    for _ in range(3):
        logger.log_system(system)
        system.step(0.1)
    logger.close()
    logger.close()

    with logger.timeseries_path.open(newline="") as fh:
        rows = list(csv.DictReader(fh))
    orbiting = sum(1 for body in BODY_DEFINITIONS if body.elements is not None)
    assert len(rows) == 3 * orbiting
    assert {row["body"] for row in rows} == {b.name for b in BODY_DEFINITIONS if b.elements is not None}
    for row in rows:
        assert 0.0 <= float(row["mean_anomaly"]) < 2 * math.pi
        position = (float(row["x"]), float(row["y"]), float(row["z"]))
        assert math.dist(position, (0.0, 0.0, 0.0)) == pytest.approx(float(row["r"]), rel=1e-6)


def test_log_system_records_perihelion(tmp_path) -> None:  # type: ignore[no-untyped-def]
    """A body that wraps past 2π produces a perihelion event."""
    system = SystemState.from_bodies(BODY_DEFINITIONS[:2], seed=1)
    mercury = system.get("mercury")
    mercury.phase.mean_anomaly = 6.2
    with RunLogger(tmp_path) as logger:
        logger.log_system(system)
        # Mercury's mean motion is 2π / 8.8 per second
        system.step(0.2)
        events = logger.log_system(system)
    assert events == 1
    lines = logger.events_path.read_text().splitlines()
    assert len(lines) == 2
    assert lines[1].split(",")[1:3] == ["perihelion", "Mercury"]
