"""Procedural surface textures, keyed by body kind."""
from __future__ import annotations

from typing import Mapping, Optional, Union

import numpy as np

from ..core.config import NOISE_SEEDS, TEXTURE_CFG, TextureCfg
from ..core.model import BodyKind
from . import dwarfs, giants, terrestrial
from .raster import Channels, ColorFunction, RasterBuffer, create_texture
from .rings import ring_density, synthesize_ring_profile
from .starfield import synthesize_starfield

GENERATORS: dict[BodyKind, ColorFunction] = {
    BodyKind.SUN: terrestrial.sun,
    BodyKind.MERCURY: terrestrial.mercury,
    BodyKind.VENUS: terrestrial.venus,
    BodyKind.EARTH: terrestrial.earth,
    BodyKind.EARTH_NIGHT: terrestrial.earth_night,
    BodyKind.MARS: terrestrial.mars,
    BodyKind.CERES: dwarfs.ceres,
    BodyKind.JUPITER: giants.jupiter,
    BodyKind.SATURN: giants.saturn,
    BodyKind.URANUS: giants.uranus,
    BodyKind.NEPTUNE: giants.neptune,
    BodyKind.PLUTO: dwarfs.pluto,
    BodyKind.HAUMEA: dwarfs.haumea,
    BodyKind.MAKEMAKE: dwarfs.makemake,
    BodyKind.ERIS: dwarfs.eris,
}

DWARF_KINDS = frozenset({BodyKind.CERES, BodyKind.PLUTO, BodyKind.HAUMEA, BodyKind.MAKEMAKE, BodyKind.ERIS})


def default_size(kind: Union[BodyKind, str], cfg: TextureCfg = TEXTURE_CFG) -> tuple[int, int]:
    kind = BodyKind.parse(kind)
    return cfg.dwarf_size if kind in DWARF_KINDS else cfg.planet_size


def evaluate(
    kind: Union[BodyKind, str],
    u: Union[float, np.ndarray],
    v: Union[float, np.ndarray],
    seeds: Optional[Mapping[str, int]] = None,
) -> Channels:
    """Float RGB for *kind* at texture coordinates ``(u, v)``, before quantisation."""

    kind = BodyKind.parse(kind)
    seeds = NOISE_SEEDS[kind.value] if seeds is None else seeds
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    r, g, b = GENERATORS[kind](u, v, seeds)
    shape = np.broadcast_shapes(u.shape, v.shape)
    return np.broadcast_to(r, shape), np.broadcast_to(g, shape), np.broadcast_to(b, shape)


def synthesize(
    kind: Union[BodyKind, str],
    width: Optional[int] = None,
    height: Optional[int] = None,
    seeds: Optional[Mapping[str, int]] = None,
    cfg: TextureCfg = TEXTURE_CFG,
) -> RasterBuffer:
    """
    Render the surface texture of one body.

    Args:
        kind: Body kind or its name (case-insensitive)
        width, height: Output size; defaults depend on whether the body is a dwarf planet
        seeds: Feature seed overrides; defaults to the body's entry in NOISE_SEEDS
        cfg: Texture configuration

    Raises:
        KeyError: If the kind is unknown
        ValueError: If a dimension is not positive
    """
    kind = BodyKind.parse(kind)
    default_w, default_h = default_size(kind, cfg)
    width = default_w if width is None else width
    height = default_h if height is None else height
    seeds = NOISE_SEEDS[kind.value] if seeds is None else seeds
    return create_texture(width, height, GENERATORS[kind], seeds)


__all__ = [
    "DWARF_KINDS",
    "GENERATORS",
    "RasterBuffer",
    "default_size",
    "evaluate",
    "ring_density",
    "synthesize",
    "synthesize_ring_profile",
    "synthesize_starfield",
]
