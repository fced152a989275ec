"""Descriptors and per-body simulation state for the orrery."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

import numpy as np

from .config import ORBIT_CFG, TEXTURE_CFG, OrbitCfg
from .physics import (
    TWO_PI,
    advance_anomaly,
    compute_mean_motion,
    compute_position,
    moon_offset,
    wrap_anomaly,
)


class BodyKind(Enum):
    """Texture routines available for celestial bodies."""

    SUN = "sun"
    MERCURY = "mercury"
    VENUS = "venus"
    EARTH = "earth"
    EARTH_NIGHT = "earth_night"
    MARS = "mars"
    CERES = "ceres"
    JUPITER = "jupiter"
    SATURN = "saturn"
    URANUS = "uranus"
    NEPTUNE = "neptune"
    PLUTO = "pluto"
    HAUMEA = "haumea"
    MAKEMAKE = "makemake"
    ERIS = "eris"

    @classmethod
    def parse(cls, value: "BodyKind | str") -> "BodyKind":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for kind in cls:
            if kind.value == key:
                return kind
        available = ", ".join(kind.value for kind in cls)
        raise KeyError(f"Unknown body kind '{value}'. Available: {available}")


@dataclass(frozen=True)
class OrbitalElements:
    """Classical elements of a heliocentric ellipse (distance in scene units)."""

    semi_major_axis: float
    eccentricity: float
    inclination_deg: float
    arg_perihelion_deg: float
    period_days: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError(f"Eccentricity must be in [0, 1), got {self.eccentricity!r}")
        if self.period_days <= 0.0:
            raise ValueError(f"Orbital period must be positive, got {self.period_days!r}")

    def position(self, mean_anomaly: float, cfg: OrbitCfg = ORBIT_CFG) -> tuple[float, float, float]:
        return compute_position(
            mean_anomaly,
            self.semi_major_axis,
            self.eccentricity,
            self.inclination_deg,
            self.arg_perihelion_deg,
            cfg,
        )


@dataclass
class OrbitalPhase:
    """Mean anomaly of one body, always kept in ``[0, 2π)``."""

    mean_anomaly: float = 0.0

    def __post_init__(self) -> None:
        self.mean_anomaly = wrap_anomaly(self.mean_anomaly)

    def advance(
        self,
        period_days: float,
        dt: float,
        speed: float = 1.0,
        cfg: OrbitCfg = ORBIT_CFG,
    ) -> float:
        rate = compute_mean_motion(period_days, speed, cfg)
        self.mean_anomaly = advance_anomaly(self.mean_anomaly, rate, dt)
        return self.mean_anomaly


@dataclass(frozen=True)
class Moon:
    name: str
    orbit_radius: float
    period_days: float
    radius: float
    color: tuple[int, int, int]


@dataclass(frozen=True)
class CelestialBody:
    """
    Static description of a body in the scene.

    Attributes:
        name: Display name
        kind: Texture routine used for the surface
        radius: Visual radius in scene units
        elements: Orbital elements, ``None`` for the central star
        has_rings: Whether a ring profile is attached
        is_star: Central, self-luminous body
        is_dwarf: Dwarf planet (smaller default texture)
        axial_tilt_deg: Tilt of the spin axis
        rotation_period_hours: Sidereal day; negative means retrograde spin
        moons: Satellites on circular display orbits
    """

    name: str
    kind: BodyKind
    radius: float
    elements: Optional[OrbitalElements] = None
    has_rings: bool = False
    is_star: bool = False
    is_dwarf: bool = False
    axial_tilt_deg: float = 0.0
    rotation_period_hours: float = 24.0
    moons: tuple[Moon, ...] = ()

    def __post_init__(self) -> None:
        if self.rotation_period_hours == 0.0 or not math.isfinite(self.rotation_period_hours):
            raise ValueError(f"Rotation period must be non-zero, got {self.rotation_period_hours!r}")

    @property
    def texture_size(self) -> tuple[int, int]:
        return TEXTURE_CFG.dwarf_size if self.is_dwarf else TEXTURE_CFG.planet_size


@dataclass
class MoonState:
    moon: Moon
    angle: float = 0.0

    def step(self, speed: float = 1.0, cfg: OrbitCfg = ORBIT_CFG) -> float:
        self.angle += cfg.moon_angular_step * speed
        return self.angle

    def offset(self) -> tuple[float, float, float]:
        return moon_offset(self.angle, self.moon.orbit_radius)


@dataclass
class BodyState:
    """Mutable state owned by a single body: orbital phase, spin and moons."""

    body: CelestialBody
    phase: OrbitalPhase = field(default_factory=OrbitalPhase)
    spin_angle: float = 0.0
    moons: list[MoonState] = field(default_factory=list)

    def position(self, cfg: OrbitCfg = ORBIT_CFG) -> tuple[float, float, float]:
        if self.body.elements is None:
            return 0.0, 0.0, 0.0
        return self.body.elements.position(self.phase.mean_anomaly, cfg)

    def step(self, dt: float, speed: float = 1.0, cfg: OrbitCfg = ORBIT_CFG) -> tuple[float, float, float]:
        elements = self.body.elements
        if elements is not None:
            self.phase.advance(elements.period_days, dt, speed, cfg)

        rotation = self.body.rotation_period_hours
        spin_rate = TWO_PI / abs(rotation) * cfg.time_scale * speed
        direction = 1.0 if rotation > 0 else -1.0
        self.spin_angle = wrap_anomaly(self.spin_angle + spin_rate * direction * dt)

        for moon_state in self.moons:
            moon_state.step(speed, cfg)
        return self.position(cfg)


@dataclass
class SystemState:
    """High level container of every body's state; stepped once per tick."""

    bodies: list[BodyState]
    time: float = 0.0
    paused: bool = False

    @classmethod
    def from_bodies(cls, bodies: Iterable[CelestialBody], seed: Optional[int] = None) -> "SystemState":
        rng = np.random.default_rng(seed)
        states = []
        for body in bodies:
            anomaly = float(rng.random() * TWO_PI) if body.elements is not None else 0.0
            moons = [MoonState(moon, float(rng.random() * TWO_PI)) for moon in body.moons]
            states.append(BodyState(body, OrbitalPhase(anomaly), moons=moons))
        return cls(bodies=states)

    def get(self, name: str) -> BodyState:
        for state in self.bodies:
            if state.body.name.lower() == name.lower():
                return state
        raise KeyError(f"No body named '{name}' in this system")

    def positions(self, cfg: OrbitCfg = ORBIT_CFG) -> dict[str, tuple[float, float, float]]:
        result: dict[str, tuple[float, float, float]] = {}
        for state in self.bodies:
            px, py, pz = state.position(cfg)
            result[state.body.name] = (px, py, pz)
            for moon_state in state.moons:
                mx, my, mz = moon_state.offset()
                result[moon_state.moon.name] = (px + mx, py + my, pz + mz)
        return result

    def step(self, dt: float, speed: float = 1.0, cfg: OrbitCfg = ORBIT_CFG) -> dict[str, tuple[float, float, float]]:
        if not self.paused and dt > 0.0:
            for state in self.bodies:
                state.step(dt, speed, cfg)
            self.time += dt
        return self.positions(cfg)


def distance_from_origin(position: tuple[float, float, float]) -> float:
    return math.sqrt(sum(c * c for c in position))


__all__ = [
    "BodyKind",
    "BodyState",
    "CelestialBody",
    "Moon",
    "MoonState",
    "OrbitalElements",
    "OrbitalPhase",
    "SystemState",
    "distance_from_origin",
]
