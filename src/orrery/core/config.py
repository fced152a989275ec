"""Configuration dataclasses for the orrery core."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class OrbitCfg:
    distance_unit: float = 100.0  # scene units per AU
    distance_compression: float = 0.5
    orbit_offset: float = 25.0
    time_scale: float = 0.1  # days of period per second of animation
    kepler_max_iterations: int = 10
    kepler_tolerance: float = 1e-10
    moon_angular_step: float = 0.01
    orbit_path_segments: int = 256

    def compressed_axis(self, semi_major_axis: float) -> float:
        return semi_major_axis * self.distance_compression + self.orbit_offset


@dataclass(frozen=True)
class TextureCfg:
    planet_size: tuple[int, int] = (1024, 512)
    dwarf_size: tuple[int, int] = (512, 256)
    ring_size: tuple[int, int] = (1024, 32)
    starfield_size: tuple[int, int] = (2048, 1024)
    starfield_seed: int = 2024
    starfield_background: tuple[int, int, int] = (0, 3, 6)


def _freeze(table: dict[str, dict[str, int]]) -> Mapping[str, Mapping[str, int]]:
    return MappingProxyType({key: MappingProxyType(dict(value)) for key, value in table.items()})


# Seed bases are shared between unrelated features on purpose (e.g. Earth's
# ridge layer and Mars' craters both use 42); the textures depend on it.
NOISE_SEEDS: Mapping[str, Mapping[str, int]] = _freeze(
    {
        "sun": {
            "granulation": 1,
            "large_granules": 2,
            "spots": 3,
            "spot_detail": 4,
            "faculae": 5,
            "active": 6,
            "temperature": 7,
            "supergranulation": 10,
        },
        "mercury": {
            "highlands": 10,
            "basins": 11,
            "craters": 12,
            "medium_craters": 13,
            "fine": 14,
            "rays": 15,
            "basin_floor": 20,
        },
        "venus": {
            "bands": 20,
            "vortex": 21,
            "turbulence": 22,
            "detail": 23,
            "haze": 24,
        },
        "earth": {
            "land": 30,
            "land_detail": 31,
            "elevation": 32,
            "moisture": 33,
            "ice_edge": 35,
            "ocean_depth": 37,
            "clouds": 38,
            "land_ridges": 42,
            "ice_detail": 43,
            "detail": 44,
            "rock": 45,
            "sand": 46,
            "ocean_detail": 47,
        },
        "earth_night": {
            "land": 30,
            "land_detail": 31,
            "cities": 100,
            "density": 101,
        },
        "mars": {
            "terrain": 40,
            "dark_regions": 41,
            "craters": 42,
            "canyon": 43,
            "dust": 44,
        },
        "jupiter": {
            "distortion": 50,
            "large_turbulence": 51,
            "eddies": 52,
            "detail": 53,
            "spot_eye": 54,
            "zones": 55,
            "storms": 56,
        },
        "saturn": {
            "turbulence": 60,
            "edges": 61,
            "detail": 62,
            "vortex": 63,
            "storms": 64,
        },
        "uranus": {
            "bands": 70,
            "haze": 71,
            "clouds": 72,
            "cloud_features": 73,
        },
        "neptune": {
            "bands": 80,
            "wind_shear": 81,
            "white_clouds": 82,
            "companions": 83,
            "polar": 84,
        },
        "ceres": {"terrain": 200, "craters": 201, "salt": 202},
        "pluto": {"terrain": 210, "dark": 211},
        "haumea": {"ice": 220, "red_spot": 221},
        "makemake": {"terrain": 230, "methane": 231},
        "eris": {"ice": 240, "variation": 241},
        "rings": {
            "d_ring": 89,
            "c_ring": 90,
            "b_ring": 91,
            "cassini": 93,
            "a_ring": 94,
        },
    }
)


ORBIT_CFG = OrbitCfg()
TEXTURE_CFG = TextureCfg()


__all__ = ["NOISE_SEEDS", "ORBIT_CFG", "TEXTURE_CFG", "OrbitCfg", "TextureCfg"]
