"""Tests for the per-body surface textures."""

from __future__ import annotations

import numpy as np
import pytest

from orrery.core.config import NOISE_SEEDS
from orrery.core.model import BodyKind
from orrery.textures import GENERATORS, default_size, evaluate, synthesize
from orrery.textures.giants import GREAT_RED_SPOT
from orrery.textures.raster import quantize, texel_grid
from orrery.textures.terrestrial import (
    LAND_THRESHOLD,
    _earth_land,
    _earth_ocean,
    _earth_surface,
    earth_land_mask,
)


def test_every_kind_has_a_generator() -> None:
    """The lookup table covers all body kinds and every kind has seeds."""
    assert set(GENERATORS) == set(BodyKind)
    for kind in BodyKind:
        assert kind.value in NOISE_SEEDS


@pytest.mark.parametrize("kind", list(BodyKind))
def test_small_textures_are_valid(kind: BodyKind) -> None:
    """Every routine renders an opaque, read-only RGBA raster."""
    buffer = synthesize(kind, 32, 16)
    assert buffer.pixels.shape == (16, 32, 4)
    assert buffer.pixels.dtype == np.uint8
    assert np.all(buffer.pixels[..., 3] == 255)
    assert not buffer.pixels.flags.writeable


@pytest.mark.parametrize("kind", list(BodyKind))
def test_float_channels_are_finite(kind: BodyKind) -> None:
    """Unquantised colours never contain NaN or infinities."""
    u, v = texel_grid(24, 12)
    for channel in evaluate(kind, u, v):
        assert np.all(np.isfinite(channel))


def test_earth_is_deterministic() -> None:
    """Two renders of the same body are byte-identical."""
    first = synthesize("earth", 64, 32)
    second = synthesize(BodyKind.EARTH, 64, 32)
    assert first.to_bytes() == second.to_bytes()


def test_evaluate_matches_synthesize() -> None:
    """Quantising evaluate() on the texel grid reproduces the raster."""
    buffer = synthesize("earth", 40, 20)
    u, v = texel_grid(40, 20)
    np.testing.assert_array_equal(quantize(*evaluate("earth", u, v)), buffer.pixels)


def test_seed_override_changes_surface() -> None:
    """Feature seeds can be swapped per call."""
    seeds = {key: value + 1000 for key, value in NOISE_SEEDS["mars"].items()}
    assert synthesize("mars", 32, 16).to_bytes() != synthesize("mars", 32, 16, seeds=seeds).to_bytes()


def test_default_sizes() -> None:
    """Planets default to 1024x512, dwarf planets to 512x256."""
    assert default_size("jupiter") == (1024, 512)
    assert default_size("sun") == (1024, 512)
    assert default_size("ceres") == (512, 256)
    assert default_size(BodyKind.ERIS) == (512, 256)


def test_unknown_kind_and_bad_size() -> None:
    """Unknown kinds raise KeyError; empty sizes raise ValueError."""
    with pytest.raises(KeyError):
        synthesize("vulcan", 8, 8)
    with pytest.raises(ValueError):
        synthesize("earth", 0, 8)


def test_earth_sea_texels_are_ocean_coloured() -> None:
    """Texels at or below the land threshold render as water, bluer than red."""
    u, v = texel_grid(256, 128)
    seeds = NOISE_SEEDS["earth"]
    # Stay clear of the ice caps
    band = np.abs(v - 0.5) < 0.3
    sea = (earth_land_mask(u, v, seeds) <= LAND_THRESHOLD) & band
    assert sea.any()

    r, g, b = evaluate("earth", u, v)
    assert np.all(b[sea] > r[sea])


def test_land_threshold_is_strict() -> None:
    """Elevation exactly at the threshold is still ocean."""
    seeds = NOISE_SEEDS["earth"]
    x = np.array([3.0, 3.0, 3.0])
    y = np.array([6.0, 6.0, 6.0])
    polar = np.full(3, 0.3)
    land = np.array([LAND_THRESHOLD, LAND_THRESHOLD + 0.01, 0.3])

    surface = _earth_surface(x, y, polar, land, seeds)
    ocean = _earth_ocean(x, y, land, seeds)
    ground = _earth_land(x, y, polar, land, seeds)
    for got, sea_channel, land_channel in zip(surface, ocean, ground):
        assert got[0] == sea_channel[0]
        assert got[1] == land_channel[1]
        assert got[2] == sea_channel[2]
    # Zero depth is the shallowest turquoise
    assert (ocean[0][0], ocean[1][0], ocean[2][0]) == (90.0, 185.0, 210.0)


def test_earth_poles_are_ice() -> None:
    """The top row of Earth is inside the ice cap."""
    u = np.linspace(0.0, 1.0, 50, endpoint=False)
    r, g, b = evaluate("earth", u, np.zeros_like(u))
    assert np.all(r >= 240)
    assert np.all(g >= 248)
    assert np.all(b == 255)


def test_earth_night_dark_at_poles() -> None:
    """No city lights poleward of the populated latitudes."""
    u = np.linspace(0.0, 1.0, 50, endpoint=False)
    r, g, b = evaluate("earth_night", u, np.zeros_like(u))
    assert np.all(r == 0) and np.all(g == 0) and np.all(b == 0)


def test_mars_polar_caps() -> None:
    """Mars' poles blend fully to ice white."""
    u = np.linspace(0.0, 1.0, 20, endpoint=False)
    r, g, b = evaluate("mars", u, np.zeros_like(u))
    assert np.all(r >= 254)
    np.testing.assert_array_equal(g, 250)
    np.testing.assert_array_equal(b, 248)


def test_great_red_spot_is_red() -> None:
    """The centre of the Great Red Spot is red-dominant."""
    cx, cy, _, _ = GREAT_RED_SPOT
    r, g, b = evaluate("jupiter", cx, cy)
    assert float(r) > float(g)
    assert float(r) > float(b)


def test_mercury_is_grey_brown() -> None:
    """Mercury's channels keep their fixed warm offsets."""
    u, v = texel_grid(16, 8)
    r, g, b = evaluate("mercury", u, v)
    unclamped = r < 255
    np.testing.assert_array_equal((r - g)[unclamped], 7)
    np.testing.assert_array_equal((g - b)[unclamped], 10)
