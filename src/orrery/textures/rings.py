"""Radial profile of Saturn's ring system.

The profile is one-dimensional: ``u`` runs from the inner edge (0) to the
outer edge (1) and every row of the raster is identical. Unlike the planet
surfaces the alpha channel carries real coverage, so consumers should blend
the ring with it.
"""
from __future__ import annotations

from typing import Mapping, Optional

import numpy as np

from ..core.config import NOISE_SEEDS, TEXTURE_CFG, TextureCfg
from ..core.noise import ArrayLike, fbm
from .raster import RasterBuffer, check_dimensions, quantize

MAX_OPACITY = 0.95

# (inner, outer) edges in normalised radius
D_RING = (0.02, 0.08)
C_RING = (0.08, 0.22)
COLOMBO_GAP = (0.11, 0.115)
MAXWELL_GAP = (0.16, 0.165)
B_RING = (0.25, 0.50)
CASSINI_DIVISION = (0.50, 0.545)
HUYGENS_GAP = (0.51, 0.52)
A_RING = (0.545, 0.75)
ENCKE_GAP = (0.69, 0.70)
F_RING = (0.78, 0.82)


def _within(u: np.ndarray, bounds: tuple[float, float]) -> np.ndarray:
    lo, hi = bounds
    return (u > lo) & (u < hi)


def ring_density(
    u: ArrayLike,
    seeds: Optional[Mapping[str, int]] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(density, tint)`` at normalised radius *u*.

    Density is clamped to ``[0, 1]``. Tint is positive for warm (cream) ring
    material and negative for cool grey-blue material. Later rings override
    earlier ones where their ranges touch.
    """

    seeds = NOISE_SEEDS["rings"] if seeds is None else seeds
    u = np.asarray(u, dtype=float)
    zero = np.zeros_like(u)
    density = zero.copy()
    tint = zero.copy()

    mask = _within(u, D_RING)
    density = np.where(mask, 0.12 + fbm(u * 300, zero, 3, seeds["d_ring"]) * 0.1, density)
    tint = np.where(mask, -0.1, tint)

    mask = _within(u, C_RING)
    c_ring = 0.25 + fbm(u * 200, zero, 4, seeds["c_ring"]) * 0.2
    c_ring = np.where(_within(u, COLOMBO_GAP), c_ring * 0.3, c_ring)
    c_ring = np.where(_within(u, MAXWELL_GAP), c_ring * 0.2, c_ring)
    density = np.where(mask, c_ring, density)
    tint = np.where(mask, -0.05, tint)

    mask = _within(u, B_RING)
    b_ring = 0.85 + fbm(u * 150, zero, 3, seeds["b_ring"]) * 0.12
    # Ringlets
    b_ring = b_ring + np.sin(u * 400) * 0.03
    density = np.where(mask, b_ring, density)
    tint = np.where(mask, 0.15 + (u - 0.25) / 0.25 * 0.1, tint)

    mask = _within(u, CASSINI_DIVISION)
    cassini = 0.05 + fbm(u * 400, zero, 2, seeds["cassini"]) * 0.05
    cassini = np.where(_within(u, HUYGENS_GAP), 0.02, cassini)
    density = np.where(mask, cassini, density)
    tint = np.where(mask, -0.1, tint)

    mask = _within(u, A_RING)
    a_ring = 0.65 + fbm(u * 100, zero, 3, seeds["a_ring"]) * 0.18
    a_ring = np.where(_within(u, ENCKE_GAP), 0.03, a_ring)
    density = np.where(mask, a_ring, density)
    tint = np.where(mask, 0.08, tint)

    mask = _within(u, F_RING)
    f_ring = np.maximum(0.0, 0.6 - np.abs(u - 0.80) * 20)
    density = np.where(mask, f_ring, density)
    tint = np.where(mask, 0.05, tint)

    return np.clip(density, 0.0, 1.0), tint


def ring_color(density: np.ndarray, tint: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Map density and tint to float RGBA, alpha already scaled to 0..255."""

    brightness = density * 230 + 25
    r = np.minimum(255, np.floor(brightness + tint * 40))
    g = np.minimum(255, np.floor(brightness + tint * 20))
    b = np.minimum(255, np.floor(brightness - tint * 20))
    alpha = np.floor(np.minimum(MAX_OPACITY, density * MAX_OPACITY) * 255)
    return r, g, b, alpha


def synthesize_ring_profile(
    width: Optional[int] = None,
    height: Optional[int] = None,
    seeds: Optional[Mapping[str, int]] = None,
    cfg: TextureCfg = TEXTURE_CFG,
) -> RasterBuffer:
    """Render the ring profile; each column is constant top to bottom."""

    default_w, default_h = cfg.ring_size
    width = default_w if width is None else width
    height = default_h if height is None else height
    check_dimensions(width, height)

    u = np.arange(width, dtype=float) / width
    r, g, b, alpha = ring_color(*ring_density(u, seeds))
    row = quantize(r, g, b, alpha)
    pixels = np.ascontiguousarray(np.broadcast_to(row, (height, width, 4)))
    return RasterBuffer(width=width, height=height, pixels=pixels)


__all__ = [
    "A_RING",
    "B_RING",
    "CASSINI_DIVISION",
    "C_RING",
    "D_RING",
    "ENCKE_GAP",
    "F_RING",
    "HUYGENS_GAP",
    "MAX_OPACITY",
    "ring_color",
    "ring_density",
    "synthesize_ring_profile",
]
