"""Surface colour functions for the Sun and the rocky inner planets.

Each function maps normalised texel coordinates ``(u, v)`` to float RGB
channels. Layers are applied in a fixed order and every layer blends against
the colour left by the previous one.
"""
from __future__ import annotations

import math
from typing import Mapping

import numpy as np

from ..core.noise import fbm, ridged, turbulence
from .raster import Channels, blend_toward

# Continental elevation strictly above this is land
LAND_THRESHOLD = 0.52


def sun(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Granulated photosphere with sunspots, faculae and limb darkening."""
    x = u * 30
    y = v * 15

    # Convection cells
    granulation = fbm(x * 4, y * 4, 4, seeds["granulation"])
    large_granules = fbm(x * 1.5, y * 1.5, 3, seeds["large_granules"])
    intensity = 0.85 + granulation * 0.12 + large_granules * 0.08

    supergranulation = fbm(x * 0.3, y * 0.3, 3, seeds["supergranulation"])
    intensity = intensity + supergranulation * 0.05

    # Sunspots: dark umbra, filamented penumbra
    spots = fbm(x * 0.4, y * 0.4, 4, seeds["spots"])
    spot_detail = fbm(x * 2, y * 2, 3, seeds["spot_detail"])
    in_spot = spots > 0.72
    intensity = np.where(in_spot, intensity * (1 - (spots - 0.72) * 3 * 0.5), intensity)
    intensity = np.where(in_spot & (spots < 0.82), intensity + spot_detail * 0.1, intensity)

    # Faculae ring the spots
    faculae = ridged(x * 1.2, y * 1.2, 4, seeds["faculae"])
    near_spot = (faculae > 0.6) & (spots > 0.5) & (spots < 0.72)
    intensity = np.where(near_spot, intensity + (faculae - 0.6) * 0.3, intensity)

    active = turbulence(x * 0.8, y * 0.8, 4, seeds["active"])
    intensity = np.where(active > 0.6, intensity + (active - 0.6) * 0.15, intensity)

    limb = np.abs(v - 0.5) * 2
    intensity = intensity * (1 - limb * 0.15)

    temperature = fbm(x * 2, y * 2, 3, seeds["temperature"]) * 0.1

    r = intensity * 255 + 30
    g = intensity * 200 + temperature * 50
    b = intensity * 80 + temperature * 20
    return r, g, b


def mercury(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Cratered grey highlands with smooth basins and bright ray systems."""
    x = u * 40
    y = v * 20

    height = fbm(x, y, 4, seeds["highlands"]) * 0.4 + 0.5

    # Impact basins (Caloris-like) get smoother, lower floors
    basins = fbm(x * 0.2, y * 0.2, 3, seeds["basins"])
    basin_floor = fbm(x * 0.5, y * 0.5, 2, seeds["basin_floor"])
    height = np.where(basins < 0.35, height * 0.75 + basin_floor * 0.1, height)

    craters = turbulence(x * 2, y * 2, 3, seeds["craters"])
    height = np.where(
        craters > 0.7,
        height - (craters - 0.7) * 0.4,
        np.where(craters > 0.6, height + (craters - 0.6) * 0.2, height),
    )

    medium = turbulence(x * 3, y * 3, 4, seeds["medium_craters"])
    height = height + (medium - 0.5) * 0.15

    fine = fbm(x * 8, y * 8, 3, seeds["fine"])
    height = height + (fine - 0.5) * 0.05

    rays = ridged(x * 0.8, y * 0.8, 3, seeds["rays"])
    height = np.where(rays > 0.75, height + (rays - 0.75) * 0.3, height)

    base = np.floor(height * 140 + 80)
    return np.minimum(255, base + 12), np.minimum(255, base + 5), np.minimum(255, base - 5)


def venus(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Sulphuric cloud deck: Y-shaped bands, vortices and polar collars."""
    x = u * 20
    y = v * 10

    y_pattern = np.sin(y * 2.5 + np.sin(x * 0.3) * 1.5)
    clouds = y_pattern * 0.15 + 0.55

    # Super-rotation bands
    bands = np.sin(y * 6 + x * 0.8 + fbm(x, y, 3, seeds["bands"]) * 2)
    clouds = clouds + bands * 0.08

    vortex = fbm(x * 0.5 + np.sin(y * 1.5) * 3, y * 0.5, 3, seeds["vortex"])
    clouds = clouds + vortex * 0.2

    turb = turbulence(x * 1.5, y * 1.5, 4, seeds["turbulence"])
    clouds = clouds + turb * 0.12

    detail = fbm(x * 4, y * 4, 4, seeds["detail"])
    clouds = clouds + (detail - 0.5) * 0.08

    polar = np.abs(v - 0.5) * 2
    strength = (polar - 0.7) / 0.3
    angle = np.arctan2(v - 0.5, (u - 0.5) * 2)
    collar = clouds - strength * 0.15 + np.sin(angle * 4 + polar * 10) * strength * 0.05
    clouds = np.where(polar > 0.7, collar, clouds)

    haze = fbm(x * 0.3, y * 0.3, 2, seeds["haze"]) * 0.1
    clouds = np.clip(clouds + haze, 0.3, 1)

    return (
        np.floor(230 * clouds + 40),
        np.floor(195 * clouds + 45),
        np.floor(130 * clouds + 50),
    )


def earth(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Blue marble: continents, biomes, ice caps, shallow seas and cloud wisps."""
    x = u * 25
    y = v * 12.5
    lat = (v - 0.5) * math.pi
    polar = np.abs(lat) / (math.pi / 2)

    land = earth_land_mask(u, v, seeds)
    ice_r, ice_g, ice_b, in_ice = _earth_ice(x, y, polar, land > LAND_THRESHOLD, seeds)
    r, g, b = _earth_surface(x, y, polar, land, seeds)

    clouds = fbm(x * 1.5 + 200, y * 1.5, 3, seeds["clouds"])
    cover = (clouds - 0.55) * 1.8 * 0.35
    cloudy = clouds > 0.55
    r = np.where(cloudy, blend_toward(r, 255, cover), r)
    g = np.where(cloudy, blend_toward(g, 255, cover), g)
    b = np.where(cloudy, blend_toward(b, 255, cover), b)

    # Ice caps replace everything underneath, clouds included
    return (
        np.where(in_ice, ice_r, np.minimum(255, r)),
        np.where(in_ice, ice_g, np.minimum(255, g)),
        np.where(in_ice, ice_b, np.minimum(255, b)),
    )


def earth_land_mask(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> np.ndarray:
    """Continental elevation; texels above ``LAND_THRESHOLD`` are land."""
    x = u * 25
    y = v * 12.5
    # Continents at several scales plus a longitudinal bias
    land = fbm(x * 0.6, y * 0.6, 4, seeds["land"])
    land = land + fbm(x * 1.2 + 100, y * 1.2, 3, seeds["land_detail"]) * 0.35
    land = land + ridged(x * 0.8, y * 0.8, 3, seeds["land_ridges"]) * 0.15
    return land + np.sin(u * math.pi * 2.5 + 0.5) * 0.12


def _earth_surface(x, y, polar, land, seeds):
    is_land = land > LAND_THRESHOLD
    land_r, land_g, land_b = _earth_land(x, y, polar, land, seeds)
    sea_r, sea_g, sea_b = _earth_ocean(x, y, land, seeds)
    return (
        np.where(is_land, land_r, sea_r),
        np.where(is_land, land_g, sea_g),
        np.where(is_land, land_b, sea_b),
    )


def _earth_ice(x, y, polar, is_land, seeds):
    edge = 0.82 - fbm(x * 2, y * 2, 3, seeds["ice_edge"]) * 0.1
    in_ice = polar > edge
    strength = (polar - edge) / (1 - edge)
    detail = fbm(x * 6, y * 6, 3, seeds["ice_detail"])

    r = np.floor(240 + detail * 15)
    g = np.floor(248 + detail * 7)
    b = np.full_like(r, 255.0)

    # Ice fades into bare ground over land near the edge
    fading = (strength < 0.3) & is_land
    blend = strength / 0.3
    r = np.where(fading, np.floor(r * blend + 200 * (1 - blend)), r)
    g = np.where(fading, np.floor(g * blend + 210 * (1 - blend)), g)
    b = np.where(fading, np.floor(b * blend + 220 * (1 - blend)), b)
    return r, g, b, in_ice


def _earth_land(x, y, polar, land, seeds):
    elevation = fbm(x * 2, y * 2, 4, seeds["elevation"])
    moisture = fbm(x * 1.2 + 50, y * 1.2, 3, seeds["moisture"])
    detail = fbm(x * 8, y * 8, 3, seeds["detail"])
    rock = fbm(x * 5, y * 5, 3, seeds["rock"])
    sand = fbm(x * 4, y * 4, 3, seeds["sand"])

    high = elevation > 0.72
    snow_line = 0.72 + (1 - polar) * 0.1

    # First matching row wins
    biomes = [
        high & (elevation > snow_line + 0.08),  # snow caps
        high,  # rocky peaks
        polar > 0.6,  # tundra / taiga
        (polar < 0.18) & (moisture > 0.4),  # rainforest
        (moisture < 0.28) & (polar > 0.12) & (polar < 0.5),  # desert
        moisture < 0.42,  # savanna
    ]
    r = np.select(
        biomes,
        [
            np.floor(245 + rock * 10),
            np.floor(130 + rock * 50 + detail * 20),
            np.floor(90 + moisture * 25 + detail * 15),
            np.floor(45 + detail * 20),
            np.floor(210 + sand * 30 + detail * 10),
            np.floor(145 + detail * 20),
        ],
        np.floor(65 + elevation * 30 + detail * 15),
    )
    g = np.select(
        biomes,
        [
            np.floor(250 + rock * 5),
            np.floor(120 + rock * 45 + detail * 18),
            np.floor(95 + moisture * 25 + detail * 15),
            np.floor(75 + moisture * 30 + detail * 20),
            np.floor(180 + sand * 25 + detail * 8),
            np.floor(135 + moisture * 25 + detail * 15),
        ],
        np.floor(90 + elevation * 35 + moisture * 20 + detail * 15),
    )
    b = np.select(
        biomes,
        [
            np.full_like(rock, 255.0),
            np.floor(110 + rock * 40 + detail * 15),
            np.floor(80 + moisture * 15 + detail * 10),
            np.floor(40 + detail * 15),
            np.floor(130 + sand * 20 + detail * 5),
            np.floor(85 + detail * 12),
        ],
        np.floor(55 + elevation * 20 + detail * 10),
    )

    # Sandy coastal lowlands
    coast = land - LAND_THRESHOLD
    beach = (coast < 0.05) & (coast > 0)
    sand_mix = (1 - coast / 0.05) * 0.4
    r = np.where(beach, np.floor(r * (1 - sand_mix) + 200 * sand_mix), r)
    g = np.where(beach, np.floor(g * (1 - sand_mix) + 185 * sand_mix), g)
    b = np.where(beach, np.floor(b * (1 - sand_mix) + 140 * sand_mix), b)
    return r, g, b


def _earth_ocean(x, y, land, seeds):
    depth_noise = fbm(x * 0.8, y * 0.8, 4, seeds["ocean_depth"])
    detail = fbm(x * 4, y * 4, 3, seeds["ocean_detail"])
    depth = (LAND_THRESHOLD - land) / LAND_THRESHOLD

    shallow = depth < 0.15
    mix = depth / 0.15
    deep_var = depth_noise * 0.15

    r = np.where(shallow, np.floor(60 * mix + 90 * (1 - mix)), np.floor(20 + detail * 15))
    g = np.where(
        shallow,
        np.floor(130 * mix + 185 * (1 - mix)),
        np.floor(70 + (1 - depth) * 50 + detail * 20 - deep_var * 30),
    )
    b = np.where(
        shallow,
        np.floor(180 * mix + 210 * (1 - mix)),
        np.floor(140 + (1 - depth) * 60 + detail * 15),
    )
    return r, g, b


def earth_night(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """City lights on the night side; black everywhere else."""
    x = u * 20
    y = v * 10
    lat = (v - 0.5) * math.pi

    land = fbm(x * 0.8, y * 0.8, 6, seeds["land"])
    land = land + fbm(x * 1.5 + 100, y * 1.5, 4, seeds["land_detail"]) * 0.3
    land = land + np.sin(u * math.pi * 3) * 0.1
    populated = (land > 0.55) & (np.abs(lat) < 1.1)

    cities = fbm(x * 3, y * 3, 4, seeds["cities"])
    density = fbm(x * 1.5, y * 1.5, 3, seeds["density"])
    lit = populated & (cities > 0.6) & (density > 0.4)
    intensity = (cities - 0.6) * 2.5 * density

    return (
        np.where(lit, np.floor(255 * intensity * 0.9), 0.0),
        np.where(lit, np.floor(200 * intensity * 0.7), 0.0),
        np.where(lit, np.floor(100 * intensity * 0.4), 0.0),
    )


def mars(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Rust-red dusty plains, dark volcanic provinces, a canyon belt and polar ice."""
    x = u * 20
    y = v * 10
    lat = (v - 0.5) * math.pi

    terrain = fbm(x, y, 4, seeds["terrain"])
    dark = fbm(x * 0.5, y * 0.5, 3, seeds["dark_regions"])
    terrain = terrain + turbulence(x * 3, y * 3, 3, seeds["craters"]) * 0.3

    canyon = np.abs(np.sin(x * 0.3 + y * 0.1)) * fbm(x * 0.2, y * 0.2, 3, seeds["canyon"])
    terrain = np.where((canyon < 0.1) & (v > 0.3) & (v < 0.6), terrain * 0.7, terrain)

    volcanic = dark < 0.4
    r = np.where(volcanic, np.floor(140 + terrain * 50), np.floor(210 + terrain * 40))
    g = np.where(volcanic, np.floor(80 + terrain * 35), np.floor(120 + terrain * 35))
    b = np.where(volcanic, np.floor(50 + terrain * 25), np.floor(70 + terrain * 25))

    dust = fbm(x * 0.8 + 100, y * 0.8, 3, seeds["dust"])
    haze = (dust - 0.7) * 2 * 0.25
    stormy = dust > 0.7
    r = np.where(stormy, blend_toward(r, 240, haze), r)
    g = np.where(stormy, blend_toward(g, 180, haze), g)
    b = np.where(stormy, blend_toward(b, 140, haze), b)

    polar = np.abs(lat) > 1.3
    ice = (np.abs(lat) - 1.3) / 0.27
    r = np.where(polar, blend_toward(r, 255, ice), r)
    g = np.where(polar, blend_toward(g, 250, ice), g)
    b = np.where(polar, blend_toward(b, 248, ice), b)

    return np.minimum(255, r), np.minimum(255, g), np.minimum(255, b)


__all__ = ["LAND_THRESHOLD", "earth", "earth_land_mask", "earth_night", "mars", "mercury", "sun", "venus"]
