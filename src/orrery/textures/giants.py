"""Banded atmospheres of the gas and ice giants."""
from __future__ import annotations

import math
from typing import Mapping

import numpy as np

from ..core.noise import fbm, ridged, turbulence
from .raster import Channels, blend_toward

# Storm anchors in texture space: (u, v, horizontal aspect, radius)
GREAT_RED_SPOT = (0.62, 0.57, 1.8, 0.08)
GREAT_DARK_SPOT = (0.35, 0.45, 1.5, 0.06)


def _storm_distance(u, v, anchor):
    cx, cy, aspect, _ = anchor
    return np.sqrt(((u - cx) * aspect) ** 2 + (v - cy) ** 2)


def jupiter(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Zones and belts, equatorial chevrons, the Great Red Spot and white ovals."""
    x = u * 30
    y = v * 15
    lat = (v - 0.5) * 2

    band = np.sin(v * math.pi * 12) * 0.3
    band = band + np.sin(v * math.pi * 24 + 0.5) * 0.15
    band = band + np.sin(v * math.pi * 6) * 0.1

    distort = fbm(x * 0.8, y * 0.3, 4, seeds["distortion"])
    band = band + np.sin(v * math.pi * 12 + distort * 2) * 0.1
    band = band + fbm(x * 0.5, y * 0.2, 3, seeds["large_turbulence"]) * 0.15

    # Eddies concentrate along belt edges
    eddy_strength = np.abs(np.cos(v * math.pi * 12)) * 0.8
    eddies = turbulence(x * 2 + np.sin(y * 3) * 3, y * 1.5, 4, seeds["eddies"])
    band = band + eddies * 0.12 * eddy_strength

    equatorial = np.abs(lat) < 0.3
    chevron = np.sin(x * 0.5 + np.abs(lat) * 20) * (1 - np.abs(lat) / 0.3)
    band = np.where(equatorial, band + chevron * 0.08, band)

    detail = fbm(x * 4, y * 4, 3, seeds["detail"])
    band = band + (detail - 0.5) * 0.06
    band = band * 0.5 + 0.5

    spot = _red_spot(u, v, x, y, seeds)

    storm_noise = fbm(x * 0.4, y * 0.4, 2, seeds["storms"])
    storms = np.where(storm_noise > 0.78, (storm_noise - 0.78) * 3, 0.0)

    zone_var = fbm(x * 3, y * 3, 2, seeds["zones"]) * 0.1
    zones = [band > 0.65, band > 0.45, band > 0.3]
    r = np.select(
        zones,
        [
            np.floor(250 - (band - 0.65) * 30 + zone_var * 20),
            np.floor(225 + (band - 0.45) * 60),
            np.floor(195 + (band - 0.3) * 80),
        ],
        np.floor(165 + band * 100),
    )
    g = np.select(
        zones,
        [
            np.floor(242 - (band - 0.65) * 40 + zone_var * 15),
            np.floor(165 + (band - 0.45) * 80),
            np.floor(130 + (band - 0.3) * 70),
        ],
        np.floor(100 + band * 100),
    )
    b = np.select(
        zones,
        [
            np.floor(215 - (band - 0.65) * 50 + zone_var * 10),
            np.floor(115 + (band - 0.45) * 60),
            np.floor(90 + (band - 0.3) * 50),
        ],
        np.floor(70 + band * 70),
    )

    in_spot = spot > 0.05
    mix = np.minimum(1, spot * 1.5)
    r = np.where(in_spot, np.floor(r * (1 - mix) + 210 * mix), r)
    g = np.where(in_spot, np.floor(g * (1 - mix * 0.7) + 100 * mix * 0.7), g)
    b = np.where(in_spot, np.floor(b * (1 - mix * 0.8) + 80 * mix * 0.8), b)

    stormy = storms > 0.1
    r = np.where(stormy, blend_toward(r, 255, storms), r)
    g = np.where(stormy, blend_toward(g, 250, storms), g)
    b = np.where(stormy, blend_toward(b, 245, storms), b)

    return np.minimum(255, r), np.minimum(255, g), np.minimum(255, b)


def _red_spot(u, v, x, y, seeds):
    cx, cy, aspect, radius = GREAT_RED_SPOT
    dist = _storm_distance(u, v, GREAT_RED_SPOT)
    angle = np.arctan2(v - cy, (u - cx) * aspect)
    spiral = np.sin(angle * 2 - dist * 60)

    spot = (1 - dist / radius) * (0.7 + 0.3 * spiral)
    eye = 0.9 + fbm(x * 8, y * 8, 2, seeds["spot_eye"]) * 0.2
    spot = np.where(dist < 0.03, spot * eye, spot)
    return np.where(dist < radius, spot, 0.0)


def saturn(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Muted golden bands with a hexagonal north polar vortex."""
    x = u * 25
    y = v * 12

    band = np.sin(v * math.pi * 8) * 0.2
    band = band + np.sin(v * math.pi * 16 + 0.3) * 0.1
    band = band + np.sin(v * math.pi * 4) * 0.08
    band = band + fbm(x * 0.6, y * 0.25, 3, seeds["turbulence"]) * 0.12
    band = band + fbm(x * 1.5 + np.sin(y * 2) * 2, y, 4, seeds["edges"]) * 0.08
    band = band + (fbm(x * 3, y * 3, 3, seeds["detail"]) - 0.5) * 0.05
    band = band * 0.5 + 0.5

    north = v < 0.12
    polar = v / 0.12
    angle = np.arctan2(v - 0.06, u - 0.5)
    hexagon = np.cos(angle * 6) * 0.5 + 0.5
    vortex = fbm(x * 4, y * 4, 3, seeds["vortex"])
    hex_band = band - (1 - polar) * 0.15 * (0.7 + hexagon * 0.3)
    hex_band = hex_band + vortex * 0.1 * (1 - polar)
    band = np.where(north, hex_band, band)

    south = v > 0.88
    band = np.where(south, band - (v - 0.88) / 0.12 * 0.1, band)

    storm_noise = fbm(x * 0.3, y * 0.3, 3, seeds["storms"])
    storm = np.where(storm_noise > 0.78, (storm_noise - 0.78) * 4, 0.0)

    zones = [band > 0.6, band > 0.4]
    r = np.select(
        zones,
        [np.floor(250 - (band - 0.6) * 20), np.floor(240 + (band - 0.4) * 25)],
        np.floor(210 + band * 75),
    )
    g = np.select(
        zones,
        [np.floor(235 - (band - 0.6) * 30), np.floor(210 + (band - 0.4) * 50)],
        np.floor(175 + band * 90),
    )
    b = np.select(
        zones,
        [np.floor(195 - (band - 0.6) * 40), np.floor(160 + (band - 0.4) * 70)],
        np.floor(130 + band * 75),
    )

    stormy = storm > 0.1
    r = np.where(stormy, blend_toward(r, 255, storm * 0.6), r)
    g = np.where(stormy, blend_toward(g, 252, storm * 0.6), g)
    b = np.where(stormy, blend_toward(b, 245, storm * 0.6), b)

    return np.minimum(255, r), np.minimum(255, g), np.minimum(255, b)


def uranus(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Nearly featureless cyan haze with bright poles and faint clouds."""
    x = u * 20
    y = v * 10
    lat = np.abs(v - 0.5) * 2

    band = np.sin(v * math.pi * 6) * 0.05
    band = band + fbm(x * 0.4, y * 0.3, 4, seeds["bands"]) * 0.08
    band = band + lat**1.5 * 0.2
    band = band + fbm(x * 0.8, y * 0.4, 4, seeds["haze"]) * 0.06
    band = band + (fbm(x * 2, y * 2, 3, seeds["clouds"]) - 0.5) * 0.04
    band = np.clip(band * 0.5 + 0.5, 0, 1)

    cloud_noise = fbm(x * 0.5, y * 0.5, 3, seeds["cloud_features"])
    feature = np.where(cloud_noise > 0.72, (cloud_noise - 0.72) * 2.5, 0.0)

    r = np.floor(160 + band * 30)
    g = np.floor(215 + band * 25)
    b = np.floor(235 + band * 15)

    bright = feature > 0.1
    r = np.where(bright, blend_toward(r, 220, feature * 0.5), r)
    g = np.where(bright, blend_toward(g, 240, feature * 0.5), g)
    b = np.where(bright, blend_toward(b, 250, feature * 0.5), b)

    return np.minimum(255, r), np.minimum(255, g), np.minimum(255, b)


def neptune(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Deep blue bands, the Great Dark Spot with companion clouds, polar haze."""
    x = u * 22
    y = v * 11
    lat = np.abs(v - 0.5) * 2

    band = np.sin(v * math.pi * 8) * 0.12
    band = band + np.sin(v * math.pi * 4) * 0.08
    band = band + fbm(x * 0.5, y * 0.3, 3, seeds["bands"]) * 0.15
    band = band + fbm(x * 1.2 + np.sin(y * 2) * 3, y * 0.5, 4, seeds["wind_shear"]) * 0.1

    cx, cy, _, radius = GREAT_DARK_SPOT
    dist = _storm_distance(u, v, GREAT_DARK_SPOT)
    vortex = np.sin(np.arctan2(v - cy, u - cx) * 3 - dist * 40)
    dark_spot = np.where(dist < radius, (1 - dist / radius) * (0.7 + 0.3 * vortex), 0.0)

    cloud_noise = ridged(x * 2, y * 1.2, 4, seeds["white_clouds"])
    white = np.where(cloud_noise > 0.6, (cloud_noise - 0.6) * 1.5, 0.0)

    companion = fbm(x * 4, y * 4, 2, seeds["companions"])
    near_spot = (dist > 0.05) & (dist < 0.1) & (companion > 0.6)
    white = np.where(near_spot, white + (companion - 0.6) * 2, white)

    polar_cloud = fbm(x * 3, y * 3, 3, seeds["polar"])
    white = np.where(lat > 0.75, white + polar_cloud * 0.3 * (lat - 0.75) / 0.25, white)

    band = band * 0.5 + 0.5

    r = np.floor(35 + band * 30)
    g = np.floor(80 + band * 55)
    b = np.floor(180 + band * 45)

    dark = dark_spot > 0.1
    r = np.where(dark, np.floor(r * (1 - dark_spot * 0.4)), r)
    g = np.where(dark, np.floor(g * (1 - dark_spot * 0.3)), g)
    b = np.where(dark, np.floor(b * (1 - dark_spot * 0.15)), b)

    cloudy = white > 0.1
    cover = np.minimum(1, white)
    r = np.where(cloudy, blend_toward(r, 240, cover * 0.7), r)
    g = np.where(cloudy, blend_toward(g, 245, cover * 0.7), g)
    b = np.where(cloudy, blend_toward(b, 255, cover * 0.5), b)

    return np.minimum(255, r), np.minimum(255, g), np.minimum(255, b)


__all__ = ["GREAT_DARK_SPOT", "GREAT_RED_SPOT", "jupiter", "neptune", "saturn", "uranus"]
