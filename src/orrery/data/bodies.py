"""Catalogue of the Sun, planets, dwarf planets and their major moons.

Distances are given in AU and periods in Earth days (NASA planetary fact
sheets); radii are relative to Earth and exaggerated for the giants so that
everything stays visible at orrery scale.
"""
from __future__ import annotations

from ..core.config import ORBIT_CFG
from ..core.model import BodyKind, CelestialBody, Moon, OrbitalElements

AU = ORBIT_CFG.distance_unit
EARTH_RADIUS = 6.0  # Earth's visual radius in scene units


def _elements(au: float, period: float, e: float, inc: float, arg_peri: float) -> OrbitalElements:
    return OrbitalElements(
        semi_major_axis=AU * au,
        eccentricity=e,
        inclination_deg=inc,
        arg_perihelion_deg=arg_peri,
        period_days=period,
    )


def _moon(name: str, orbit_radius: float, period: float, radius: float, color: int) -> Moon:
    rgb = ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)
    return Moon(name=name, orbit_radius=orbit_radius, period_days=period, radius=EARTH_RADIUS * radius, color=rgb)


BODY_DEFINITIONS: tuple[CelestialBody, ...] = (
    CelestialBody(
        name="Sun",
        kind=BodyKind.SUN,
        radius=EARTH_RADIUS * 109 * 0.045,
        is_star=True,
        axial_tilt_deg=7.25,
        rotation_period_hours=609.12,
    ),
    CelestialBody(
        name="Mercury",
        kind=BodyKind.MERCURY,
        radius=EARTH_RADIUS * 0.38,
        elements=_elements(0.39, 88, 0.206, 7.0, 29.1),
        axial_tilt_deg=0.034,
        rotation_period_hours=1407.6,
    ),
    CelestialBody(
        name="Venus",
        kind=BodyKind.VENUS,
        radius=EARTH_RADIUS * 0.95,
        elements=_elements(0.72, 225, 0.007, 3.4, 55.2),
        axial_tilt_deg=177.4,
        rotation_period_hours=-5832.5,
    ),
    CelestialBody(
        name="Earth",
        kind=BodyKind.EARTH,
        radius=EARTH_RADIUS,
        elements=_elements(1.0, 365, 0.017, 0.0, 114.2),
        axial_tilt_deg=23.44,
        rotation_period_hours=23.93,
        moons=(_moon("Moon", 8, 27.3, 0.27, 0xAAAAAA),),
    ),
    CelestialBody(
        name="Mars",
        kind=BodyKind.MARS,
        radius=EARTH_RADIUS * 0.53,
        elements=_elements(1.52, 687, 0.094, 1.9, 286.5),
        axial_tilt_deg=25.19,
        rotation_period_hours=24.62,
        moons=(
            _moon("Phobos", 5, 0.32, 0.02, 0x8A7D6D),
            _moon("Deimos", 7, 1.26, 0.01, 0x9C8B7A),
        ),
    ),
    CelestialBody(
        name="Ceres",
        kind=BodyKind.CERES,
        radius=EARTH_RADIUS * 0.07 * 3,
        elements=_elements(2.77, 1682, 0.079, 10.6, 73.6),
        is_dwarf=True,
        axial_tilt_deg=4.0,
        rotation_period_hours=9.07,
    ),
    CelestialBody(
        name="Jupiter",
        kind=BodyKind.JUPITER,
        radius=EARTH_RADIUS * 11.2 * 0.4,
        elements=_elements(5.20, 4333, 0.049, 1.3, 14.8),
        axial_tilt_deg=3.13,
        rotation_period_hours=9.93,
        moons=(
            _moon("Io", 12, 1.77, 0.29, 0xFFFF66),
            _moon("Europa", 16, 3.55, 0.25, 0xCCDDFF),
            _moon("Ganymede", 22, 7.15, 0.41, 0xAABBCC),
            _moon("Callisto", 30, 16.69, 0.38, 0x888899),
        ),
    ),
    CelestialBody(
        name="Saturn",
        kind=BodyKind.SATURN,
        radius=EARTH_RADIUS * 9.45 * 0.4,
        elements=_elements(9.58, 10759, 0.057, 2.5, 92.9),
        has_rings=True,
        axial_tilt_deg=26.73,
        rotation_period_hours=10.7,
        moons=(
            _moon("Mimas", 10, 0.94, 0.03, 0xCCCCCC),
            _moon("Enceladus", 12, 1.37, 0.04, 0xFFFFFF),
            _moon("Tethys", 14, 1.89, 0.08, 0xE8E8E8),
            _moon("Dione", 17, 2.74, 0.09, 0xDDDDDD),
            _moon("Rhea", 22, 4.52, 0.12, 0xD0D0D0),
            _moon("Titan", 28, 15.95, 0.40, 0xFFAA55),
            _moon("Iapetus", 38, 79.32, 0.11, 0x8B6914),
        ),
    ),
    CelestialBody(
        name="Uranus",
        kind=BodyKind.URANUS,
        radius=EARTH_RADIUS * 4.0 * 0.5,
        elements=_elements(19.22, 30687, 0.046, 0.8, 172.4),
        has_rings=True,
        axial_tilt_deg=97.77,
        rotation_period_hours=-17.24,
        moons=(
            _moon("Miranda", 8, 1.41, 0.04, 0xAAAAAA),
            _moon("Ariel", 11, 2.52, 0.09, 0xC8C8C8),
            _moon("Umbriel", 14, 4.14, 0.09, 0x6B6B6B),
            _moon("Titania", 18, 8.71, 0.12, 0xB8B8B8),
            _moon("Oberon", 23, 13.46, 0.12, 0xA0A0A0),
        ),
    ),
    CelestialBody(
        name="Neptune",
        kind=BodyKind.NEPTUNE,
        radius=EARTH_RADIUS * 3.88 * 0.5,
        elements=_elements(30.05, 60190, 0.009, 1.8, 46.7),
        axial_tilt_deg=28.32,
        rotation_period_hours=16.11,
        moons=(
            _moon("Proteus", 10, 1.12, 0.06, 0x777777),
            _moon("Triton", 16, 5.88, 0.21, 0xDDCCBB),
            _moon("Nereid", 24, 360.14, 0.05, 0x999999),
        ),
    ),
    CelestialBody(
        name="Pluto",
        kind=BodyKind.PLUTO,
        radius=EARTH_RADIUS * 0.18 * 2,
        elements=_elements(39.48, 90560, 0.248, 17.2, 113.8),
        is_dwarf=True,
        axial_tilt_deg=122.53,
        rotation_period_hours=-153.3,
        moons=(
            _moon("Charon", 6, 6.39, 0.12, 0x9A9A9A),
            _moon("Nix", 10, 24.85, 0.025, 0xBBBBBB),
            _moon("Hydra", 13, 38.20, 0.03, 0xBBBBBB),
            _moon("Kerberos", 11, 32.17, 0.02, 0xAAAAAA),
            _moon("Styx", 8, 20.16, 0.02, 0xAAAAAA),
        ),
    ),
    CelestialBody(
        name="Haumea",
        kind=BodyKind.HAUMEA,
        radius=EARTH_RADIUS * 0.11 * 2,
        elements=_elements(43.13, 103774, 0.195, 28.2, 239.2),
        has_rings=True,
        is_dwarf=True,
        axial_tilt_deg=126.0,
        rotation_period_hours=3.92,
        moons=(
            _moon("Hi'iaka", 8, 49.12, 0.025, 0xDDDDDD),
            _moon("Namaka", 5, 18.28, 0.013, 0xCCCCCC),
        ),
    ),
    CelestialBody(
        name="Makemake",
        kind=BodyKind.MAKEMAKE,
        radius=EARTH_RADIUS * 0.11 * 2,
        elements=_elements(45.79, 112897, 0.159, 29.0, 294.8),
        is_dwarf=True,
        axial_tilt_deg=0.0,
        rotation_period_hours=22.48,
        moons=(_moon("MK2", 5, 12.4, 0.013, 0x444444),),
    ),
    CelestialBody(
        name="Eris",
        kind=BodyKind.ERIS,
        radius=EARTH_RADIUS * 0.18 * 2,
        elements=_elements(67.67, 204199, 0.441, 44.0, 151.4),
        is_dwarf=True,
        axial_tilt_deg=78.0,
        rotation_period_hours=25.9,
        moons=(_moon("Dysnomia", 6, 15.77, 0.05, 0x888888),),
    ),
)

BODIES: dict[str, CelestialBody] = {body.name.lower(): body for body in BODY_DEFINITIONS}
BODY_DISPLAY_ORDER: list[str] = [body.name.lower() for body in BODY_DEFINITIONS]


def get_body(name: str) -> CelestialBody:
    """
    Look up a catalogue body by name (case-insensitive).

    Raises:
        KeyError: If the name is not in the catalogue
    """
    key = name.lower()
    if key not in BODIES:
        available = ", ".join(BODY_DISPLAY_ORDER)
        raise KeyError(f"Unknown body '{name}'. Available: {available}")
    return BODIES[key]


def list_bodies() -> list[str]:
    """Return catalogue names in display order (Sun first)."""
    return list(BODY_DISPLAY_ORDER)


__all__ = [
    "AU",
    "BODIES",
    "BODY_DEFINITIONS",
    "BODY_DISPLAY_ORDER",
    "EARTH_RADIUS",
    "get_body",
    "list_bodies",
]
