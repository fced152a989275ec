"""Kepler-orbit helpers for placing bodies along their ellipses."""
from __future__ import annotations

import math

import numpy as np

from .config import ORBIT_CFG, OrbitCfg

TWO_PI = 2.0 * math.pi
DEG_TO_RAD = math.pi / 180.0


def _check_eccentricity(eccentricity: float) -> None:
    if not 0.0 <= eccentricity < 1.0:
        raise ValueError(f"Eccentricity must be in [0, 1), got {eccentricity!r}")


def _check_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")


def wrap_anomaly(angle: float) -> float:
    """Normalise *angle* into ``[0, 2π)``, negative angles included."""

    wrapped = math.fmod(angle, TWO_PI)
    if wrapped < 0.0:
        wrapped += TWO_PI
    # fmod of a tiny negative angle plus 2π can round up to exactly 2π
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def compressed_axis(semi_major_axis: float, cfg: OrbitCfg = ORBIT_CFG) -> float:
    """Semi-major axis rescaled for display (not physically meaningful)."""

    return cfg.compressed_axis(semi_major_axis)


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    max_iterations: int = ORBIT_CFG.kepler_max_iterations,
    tolerance: float = ORBIT_CFG.kepler_tolerance,
) -> float:
    """Eccentric anomaly ``E`` with ``M = E - e sin E`` via Newton-Raphson.

    Starts from ``E = M`` and stops after *max_iterations* or once the
    correction drops below *tolerance*.
    """

    _check_eccentricity(eccentricity)
    _check_finite(mean_anomaly=mean_anomaly)

    E = mean_anomaly
    for _ in range(max_iterations):
        delta = (E - eccentricity * math.sin(E) - mean_anomaly) / (1.0 - eccentricity * math.cos(E))
        E -= delta
        if abs(delta) < tolerance:
            break
    return E


def eccentric_to_true_anomaly(eccentric_anomaly: float, eccentricity: float) -> float:
    """True anomaly from the eccentric anomaly (half-angle-free form)."""

    beta = eccentricity / (1.0 + math.sqrt(1.0 - eccentricity * eccentricity))
    return eccentric_anomaly + 2.0 * math.atan2(
        beta * math.sin(eccentric_anomaly),
        1.0 - beta * math.cos(eccentric_anomaly),
    )


def compute_position(
    mean_anomaly: float,
    semi_major_axis: float,
    eccentricity: float,
    inclination_deg: float,
    arg_perihelion_deg: float,
    cfg: OrbitCfg = ORBIT_CFG,
) -> tuple[float, float, float]:
    """Return the ``(x, y, z)`` scene position of a body on its orbit."""

    _check_eccentricity(eccentricity)
    _check_finite(
        semi_major_axis=semi_major_axis,
        inclination_deg=inclination_deg,
        arg_perihelion_deg=arg_perihelion_deg,
    )

    axis = compressed_axis(semi_major_axis, cfg)
    E = solve_kepler(mean_anomaly, eccentricity, cfg.kepler_max_iterations, cfg.kepler_tolerance)
    nu = eccentric_to_true_anomaly(E, eccentricity)

    distance = axis * (1.0 - eccentricity * eccentricity) / (1.0 + eccentricity * math.cos(nu))

    inc = inclination_deg * DEG_TO_RAD
    omega = arg_perihelion_deg * DEG_TO_RAD

    x_orbital = distance * math.cos(nu)
    y_orbital = distance * math.sin(nu)

    x_rot = x_orbital * math.cos(omega) - y_orbital * math.sin(omega)
    y_rot = x_orbital * math.sin(omega) + y_orbital * math.cos(omega)

    # Tilt about the line of nodes (x axis)
    return x_rot, y_rot * math.sin(inc), y_rot * math.cos(inc)


def compute_mean_motion(
    period_days: float,
    speed_multiplier: float = 1.0,
    cfg: OrbitCfg = ORBIT_CFG,
) -> float:
    """Angular rate of the mean anomaly in radians per animation second."""

    _check_finite(period_days=period_days, speed_multiplier=speed_multiplier)
    if period_days <= 0.0:
        raise ValueError(f"Orbital period must be positive, got {period_days!r}")
    return TWO_PI / (period_days * cfg.time_scale) * speed_multiplier


def advance_anomaly(
    mean_anomaly: float,
    mean_motion: float,
    dt: float,
) -> float:
    """Step the mean anomaly by ``mean_motion * dt`` and wrap it."""

    return wrap_anomaly(mean_anomaly + mean_motion * dt)


def sample_orbit_path(
    semi_major_axis: float,
    eccentricity: float,
    inclination_deg: float,
    arg_perihelion_deg: float,
    segments: int = ORBIT_CFG.orbit_path_segments,
    cfg: OrbitCfg = ORBIT_CFG,
) -> np.ndarray:
    """Closed polyline of ``segments + 1`` positions at even mean-anomaly steps."""

    if segments < 1:
        raise ValueError("Orbit path needs at least one segment")
    step = TWO_PI / segments
    points = np.empty((segments + 1, 3), dtype=float)
    for j in range(segments + 1):
        points[j] = compute_position(
            j * step,
            semi_major_axis,
            eccentricity,
            inclination_deg,
            arg_perihelion_deg,
            cfg,
        )
    return points


def moon_offset(angle: float, orbit_radius: float) -> tuple[float, float, float]:
    """Moon position relative to its parent on a flat circular orbit."""

    return math.cos(angle) * orbit_radius, 0.0, math.sin(angle) * orbit_radius


__all__ = [
    "DEG_TO_RAD",
    "TWO_PI",
    "advance_anomaly",
    "compressed_axis",
    "compute_mean_motion",
    "compute_position",
    "eccentric_to_true_anomaly",
    "moon_offset",
    "sample_orbit_path",
    "solve_kepler",
    "wrap_anomaly",
]
