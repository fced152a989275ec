"""Tests for the value-noise primitives and their fractal sums."""

from __future__ import annotations

import numpy as np
import pytest

from orrery.core.noise import fbm, hash_noise, ridged, turbulence, value_noise


def _grid() -> tuple[np.ndarray, np.ndarray]:
    xs = np.linspace(-50.0, 50.0, 41)
    ys = np.linspace(-20.0, 80.0, 37)
    return np.meshgrid(xs, ys)


def test_hash_noise_range() -> None:
    """Hash values stay in [0, 1) across a wide coordinate range."""
    x, y = _grid()
    for seed in (0, 1, 42, 240):
        n = hash_noise(x, y, seed)
        assert np.all(n >= 0.0)
        assert np.all(n < 1.0)


def test_hash_noise_is_pure() -> None:
    """The same inputs always produce the same sample."""
    assert hash_noise(1.25, -3.5, 7) == hash_noise(1.25, -3.5, 7)


def test_value_noise_matches_hash_on_lattice() -> None:
    """On integer lattice points interpolation returns the corner hash."""
    for ix, iy in [(0, 0), (3, 5), (-4, 2), (17, -9)]:
        assert value_noise(float(ix), float(iy), 13) == hash_noise(float(ix), float(iy), 13)


def test_fractal_sums_are_normalised() -> None:
    """fBm, turbulence and ridged noise all stay inside [0, 1]."""
    x, y = _grid()
    for func in (fbm, turbulence, ridged):
        values = func(x * 0.37, y * 0.91, 5, 30)
        assert values.min() >= 0.0
        assert values.max() <= 1.0


def test_scalar_and_array_agree() -> None:
    """Evaluating a grid gives the per-point result of scalar calls."""
    xs = np.array([0.1, 2.7, -5.3, 11.0])
    ys = np.array([4.2, -0.6, 3.3, 8.9])
    grid = fbm(xs, ys, 4, 32)
    for i, (x, y) in enumerate(zip(xs, ys)):
        assert grid[i] == pytest.approx(fbm(float(x), float(y), 4, 32), abs=1e-9)


def test_single_octave_fbm_is_value_noise() -> None:
    """One octave of fBm is exactly the underlying value noise."""
    assert fbm(3.3, 1.7, 1, 5) == pytest.approx(value_noise(3.3, 1.7, 5))


def test_octave_seeds_differ() -> None:
    """Changing the seed changes the field."""
    x, y = _grid()
    assert not np.array_equal(fbm(x, y, 3, 10), fbm(x, y, 3, 11))


@pytest.mark.parametrize("func", [fbm, turbulence, ridged])
def test_octaves_must_be_positive(func) -> None:  # type: ignore[no-untyped-def]
    """Zero octaves is rejected rather than dividing by zero."""
    with pytest.raises(ValueError):
        func(1.0, 2.0, 0, 0)
