"""Run recorder for orrery simulations: buffered CSV plus JSON metadata."""
from __future__ import annotations

import json
import math
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .config import ORBIT_CFG, OrbitCfg
from .model import SystemState, distance_from_origin


class ApsisTracker:
    """Detects perihelion and aphelion passages from successive mean anomalies.

    Perihelion is passed when the anomaly wraps past 2π back to 0; aphelion
    when it crosses π. Ticks longer than half an orbit can miss a passage.
    """

    def __init__(self) -> None:
        self._previous: dict[str, float] = {}

    def update(self, body: str, mean_anomaly: float) -> Optional[str]:
        previous = self._previous.get(body)
        self._previous[body] = mean_anomaly
        if previous is None:
            return None
        if mean_anomaly < previous:
            return "perihelion"
        if previous < math.pi <= mean_anomaly:
            return "aphelion"
        return None


class RunLogger:
    """Buffered logger that stores per-body orbital ticks to CSV files."""

    TIMESERIES_HEADER = ["t", "body", "mean_anomaly", "x", "y", "z", "r"]
    EVENTS_HEADER = ["t", "type", "body", "r", "mean_anomaly"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base = run_id or f"{timestamp}_orrery"
        candidate = base
        suffix = 1
        while (self.root_dir / candidate).exists():
            candidate = f"{base}_{suffix:02d}"
            suffix += 1

        self.run_id = candidate
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.timeseries_path = self.run_dir / "timeseries.csv"
        self.events_path = self.run_dir / "events.csv"
        self.meta_path = self.run_dir / "meta.json"

        self._ts_file = self.timeseries_path.open("w", newline="")
        self._ts_file.write(",".join(self.TIMESERIES_HEADER) + "\n")
        self._ev_file = self.events_path.open("w", newline="")
        self._ev_file.write(",".join(self.EVENTS_HEADER) + "\n")

        self._ts_buffer: list[str] = []
        self._ev_buffer: list[str] = []
        self._ts_threshold = max(1, timeseries_flush_threshold)
        self._ev_threshold = max(1, events_flush_threshold)
        self._apsides = ApsisTracker()
        self.closed = False

        (self.root_dir / "last_run.txt").write_text(self.run_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_ts(self, values: Sequence[object]) -> None:
        self._ts_buffer.append(",".join(self._format_value(v) for v in values))
        if len(self._ts_buffer) >= self._ts_threshold:
            self._flush_timeseries()

    def log_event(self, values: Sequence[object]) -> None:
        self._ev_buffer.append(",".join(self._format_value(v) for v in values))
        if len(self._ev_buffer) >= self._ev_threshold:
            self._flush_events()

    def log_system(self, system: SystemState, cfg: OrbitCfg = ORBIT_CFG) -> int:
        """Write one row per orbiting body and any apsis passages; return the event count."""
        events = 0
        for state in system.bodies:
            if state.body.elements is None:
                continue
            name = state.body.name
            anomaly = state.phase.mean_anomaly
            position = state.position(cfg)
            r = distance_from_origin(position)
            self.log_ts([system.time, name, anomaly, *position, r])

            passage = self._apsides.update(name, anomaly)
            if passage is not None:
                self.log_event([system.time, passage, name, r, anomaly])
                events += 1
        return events

    def close(self) -> None:
        if self.closed:
            return
        self._flush_timeseries()
        self._flush_events()
        self._ts_file.close()
        self._ev_file.close()
        self.closed = True

    def _flush_timeseries(self) -> None:
        if self._ts_buffer:
            self._ts_file.write("\n".join(self._ts_buffer) + "\n")
            self._ts_file.flush()
            self._ts_buffer.clear()

    def _flush_events(self) -> None:
        if self._ev_buffer:
            self._ev_file.write("\n".join(self._ev_buffer) + "\n")
            self._ev_file.flush()
            self._ev_buffer.clear()

    @staticmethod
    def _format_value(value: object) -> str:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value:.10g}"
        return str(value)

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["ApsisTracker", "RunLogger"]
