"""Icy and rocky dwarf planets. Smaller canvases, simpler surfaces."""
from __future__ import annotations

from typing import Mapping

import numpy as np

from ..core.noise import fbm, turbulence
from .raster import Channels

# Tombaugh Regio centre in texture space
PLUTO_HEART = (0.4, 0.5)


def ceres(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Dark cratered regolith with bright salt deposits."""
    x = u * 20
    y = v * 10

    terrain = fbm(x, y, 4, seeds["terrain"]) * 0.5 + 0.5
    terrain = terrain + turbulence(x * 3, y * 3, 4, seeds["craters"]) * 0.15

    spots = fbm(x * 2, y * 2, 3, seeds["salt"])
    salt = np.where(spots > 0.8, (spots - 0.8) * 3, 0.0)

    base = np.floor(terrain * 100 + 80)
    return (
        np.minimum(255, base + salt * 150),
        np.minimum(255, base + salt * 160),
        np.minimum(255, base - 10 + salt * 140),
    )


def pluto(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Pinkish-tan surface, dark reddish regions and the bright nitrogen heart."""
    x = u * 15
    y = v * 8

    terrain = fbm(x, y, 3, seeds["terrain"]) * 0.4 + 0.5

    hx, hy = PLUTO_HEART
    dist = np.sqrt((u - hx) ** 2 * 2 + (v - hy) ** 2 * 4)
    heart = np.where(dist < 0.25, 1 - dist / 0.25, 0.0)

    dark = fbm(x * 0.8, y * 0.8, 4, seeds["dark"])

    regions = [heart > 0.3, dark < 0.4]
    r = np.select(regions, [np.floor(220 + heart * 30), np.floor(120 + terrain * 40)], np.floor(180 + terrain * 40))
    g = np.select(regions, [np.floor(210 + heart * 35), np.floor(90 + terrain * 30)], np.floor(160 + terrain * 35))
    b = np.select(regions, [np.floor(200 + heart * 40), np.floor(80 + terrain * 25)], np.floor(150 + terrain * 30))
    return r, g, b


def haumea(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    """Bright crystalline ice with a reddish spot in one longitude band."""
    x = u * 12
    y = v * 6

    ice = fbm(x, y, 4, seeds["ice"]) * 0.3 + 0.7

    spot = fbm(x * 0.5, y * 0.5, 3, seeds["red_spot"])
    red = np.where((spot > 0.7) & (u > 0.3) & (u < 0.5), (spot - 0.7) * 2, 0.0)

    return (
        np.floor(220 + ice * 35 + red * 40),
        np.floor(225 + ice * 30 - red * 30),
        np.floor(235 + ice * 20 - red * 50),
    )


def makemake(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    x = u * 12
    y = v * 6

    terrain = fbm(x, y, 3, seeds["terrain"]) * 0.4 + 0.5
    methane = fbm(x * 1.5, y * 1.5, 3, seeds["methane"]) * 0.2

    return (
        np.floor(200 + terrain * 40 + methane * 30),
        np.floor(160 + terrain * 35),
        np.floor(140 + terrain * 30),
    )


def eris(u: np.ndarray, v: np.ndarray, seeds: Mapping[str, int]) -> Channels:
    x = u * 12
    y = v * 6

    ice = fbm(x, y, 3, seeds["ice"]) * 0.25 + 0.75
    variation = fbm(x * 2, y * 2, 3, seeds["variation"]) * 0.1

    brightness = np.floor(ice * 200 + 55 + variation * 30)
    return brightness, brightness + 2, brightness + 5


__all__ = ["PLUTO_HEART", "ceres", "eris", "haumea", "makemake", "pluto"]
