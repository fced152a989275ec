"""Command line tools: export textures, record a simulation run, plot orbits."""
from __future__ import annotations

import argparse
import math
from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from . import __version__
from .core.config import ORBIT_CFG, TEXTURE_CFG
from .core.logging_utils import RunLogger
from .core.model import BodyKind, SystemState
from .core.physics import sample_orbit_path
from .core.timekeeping import TickAccumulator, WallClock
from .data.bodies import BODY_DEFINITIONS
from .render.assets import save_raster_png
from .textures import default_size, synthesize, synthesize_ring_profile, synthesize_starfield

EXTRA_TEXTURES = ("rings", "starfield")
TEXTURE_CHOICES = tuple(kind.value for kind in BodyKind) + EXTRA_TEXTURES
MAX_SUBSTEPS = 16
_END_SLACK = 1e-12


def _scaled(size: tuple[int, int], scale: float) -> tuple[int, int]:
    return max(1, int(size[0] * scale)), max(1, int(size[1] * scale))


def export_textures(out_dir: Path, kinds: Sequence[str], scale: float = 1.0) -> list[Path]:
    written = []
    for name in kinds:
        if name == "rings":
            buffer = synthesize_ring_profile(*_scaled(TEXTURE_CFG.ring_size, scale))
        elif name == "starfield":
            buffer = synthesize_starfield(None, *_scaled(TEXTURE_CFG.starfield_size, scale))
        else:
            buffer = synthesize(name, *_scaled(default_size(name), scale))
        path = save_raster_png(buffer, out_dir / f"{name}.png")
        print(f"Wrote {path} ({buffer.width}x{buffer.height})")
        written.append(path)
    return written


def run_simulation(
    days: float,
    dt: float,
    speed: float = 1.0,
    runs_dir: str | Path = "data/runs",
    seed: Optional[int] = None,
    fps: float = 60.0,
) -> Path:
    """Advance every catalogue body for *days* of orbital time and log each tick."""
    if days <= 0.0:
        raise ValueError("Simulated days must be positive")
    if speed <= 0.0 or not math.isfinite(speed):
        raise ValueError("Speed multiplier must be positive")

    # Animation seconds needed to cover the requested span
    duration = days * ORBIT_CFG.time_scale / speed
    frame = 1.0 / fps
    system = SystemState.from_bodies(BODY_DEFINITIONS, seed)
    stepper = TickAccumulator(tick=dt, max_ticks=MAX_SUBSTEPS)
    clock = WallClock()
    ticks = 0
    events = 0

    with RunLogger(runs_dir) as logger:
        logger.log_system(system)
        banked = 0.0
        while banked < duration - _END_SLACK or stepper.backlog:
            if banked < duration - _END_SLACK:
                frame_time = min(frame, duration - banked)
                stepper.accrue(frame_time)
                banked += frame_time
            count, tick = stepper.consume()
            for _ in range(count):
                system.step(tick, speed)
                events += logger.log_system(system)
                ticks += 1
            clock.lap()

        # Land exactly on the requested span
        tail = stepper.drain_remainder()
        if tail > _END_SLACK:
            system.step(tail, speed)
            events += logger.log_system(system)
            ticks += 1

        logger.write_meta(
            {
                "version": __version__,
                "days": days,
                "dt": dt,
                "speed": speed,
                "seed": seed,
                "ticks": ticks,
                "final_tick": tail,
                "max_ticks_per_frame": MAX_SUBSTEPS,
                "frames": clock.laps,
                "events": events,
                "animation_seconds": system.time,
                "wall_seconds": clock.elapsed(),
                "slowest_frame_seconds": clock.slowest_lap,
                "bodies": [state.body.name for state in system.bodies],
            }
        )
    print(f"Recorded {ticks} ticks ({events} apsis passages) to {logger.run_dir}")
    return logger.run_dir


def plot_orbits(out_path: Path, segments: int = ORBIT_CFG.orbit_path_segments) -> Path:
    """Top-down view of every orbit path in the ecliptic (x-z) plane."""
    fig, ax = plt.subplots(figsize=(8, 8))
    ax.scatter([0.0], [0.0], color="#ffcc55", s=80, label="Sun", zorder=3)
    for body in BODY_DEFINITIONS:
        elements = body.elements
        if elements is None:
            continue
        path = sample_orbit_path(
            elements.semi_major_axis,
            elements.eccentricity,
            elements.inclination_deg,
            elements.arg_perihelion_deg,
            segments,
        )
        linestyle = "--" if body.is_dwarf else "-"
        ax.plot(path[:, 0], path[:, 2], lw=1.0, linestyle=linestyle, label=body.name)
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x [scene units]")
    ax.set_ylabel("z [scene units]")
    ax.set_title("Orbits (compressed scale)")
    ax.legend(fontsize="small", loc="upper right")
    fig.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    print(f"Wrote {out_path}")
    return out_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="orrery", description="Procedural solar-system textures and orbits.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    textures = sub.add_parser("textures", help="Export texture PNGs")
    textures.add_argument("--out", type=Path, required=True, help="Output directory")
    textures.add_argument("--kinds", nargs="+", choices=TEXTURE_CHOICES, default=list(TEXTURE_CHOICES))
    textures.add_argument("--scale", type=float, default=1.0, help="Multiplier on the default sizes")

    simulate = sub.add_parser("simulate", help="Record an orbital run to CSV")
    simulate.add_argument("--days", type=float, default=365.0, help="Simulated days to cover")
    simulate.add_argument("--dt", type=float, default=1.0 / 240.0, help="Tick length in animation seconds")
    simulate.add_argument("--speed", type=float, default=1.0, help="Speed multiplier")
    simulate.add_argument("--seed", type=int, default=None, help="Seed for starting anomalies")
    simulate.add_argument("--runs-dir", type=Path, default=Path("data") / "runs")

    plot = sub.add_parser("plot", help="Plot all orbit paths")
    plot.add_argument("--out", type=Path, required=True, help="Output image path")
    plot.add_argument("--segments", type=int, default=ORBIT_CFG.orbit_path_segments)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "textures":
        if args.scale <= 0.0:
            parser.error("--scale must be positive")
        export_textures(args.out, args.kinds, args.scale)
    elif args.command == "simulate":
        if args.dt <= 0.0:
            parser.error("--dt must be positive")
        try:
            run_simulation(args.days, args.dt, args.speed, args.runs_dir, args.seed)
        except ValueError as exc:
            parser.error(str(exc))
    elif args.command == "plot":
        if args.segments < 1:
            parser.error("--segments must be at least 1")
        plot_orbits(args.out, args.segments)
    return 0


__all__ = ["build_parser", "export_textures", "main", "plot_orbits", "run_simulation"]
