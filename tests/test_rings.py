"""Tests for Saturn's ring profile."""

from __future__ import annotations

import numpy as np
import pytest

from orrery.textures.rings import (
    A_RING,
    B_RING,
    CASSINI_DIVISION,
    D_RING,
    F_RING,
    MAX_OPACITY,
    ring_density,
    synthesize_ring_profile,
)


def _span(bounds: tuple[float, float], count: int = 200) -> np.ndarray:
    lo, hi = bounds
    return np.linspace(lo, hi, count + 2)[1:-1]


def test_density_is_clamped() -> None:
    """Density stays in [0, 1] across the whole radius."""
    density, _ = ring_density(np.linspace(0.0, 1.0, 4096, endpoint=False))
    assert density.min() >= 0.0
    assert density.max() <= 1.0


def test_cassini_division_is_nearly_empty() -> None:
    """The Cassini Division never exceeds a tenth of full density."""
    density, tint = ring_density(_span(CASSINI_DIVISION))
    assert np.all(density < 0.1)
    np.testing.assert_allclose(tint, -0.1)


def test_named_gaps() -> None:
    """Huygens and Encke gaps hold their fixed residual densities."""
    density, _ = ring_density(np.array([0.515, 0.695]))
    assert density[0] == pytest.approx(0.02)
    assert density[1] == pytest.approx(0.03)


def test_b_ring_is_densest() -> None:
    """The B ring is denser on average than the A ring."""
    b_density, b_tint = ring_density(_span(B_RING))
    a_density, _ = ring_density(_span(A_RING))
    assert b_density.mean() > a_density.mean()
    assert np.all(b_density > 0.8)
    assert np.all(b_tint > 0.0)


def test_empty_space_between_rings() -> None:
    """Regions outside every ring have zero density."""
    density, tint = ring_density(np.array([0.0, 0.01, 0.23, 0.76, 0.9, 0.99]))
    np.testing.assert_array_equal(density, 0.0)
    np.testing.assert_array_equal(tint, 0.0)


def test_ring_edges_are_exclusive() -> None:
    """A radius exactly on an edge belongs to neither neighbouring ring."""
    edges = np.array([D_RING[1], B_RING[0], B_RING[1], CASSINI_DIVISION[1], A_RING[1], F_RING[0]])
    density, tint = ring_density(edges)
    np.testing.assert_array_equal(density, 0.0)
    np.testing.assert_array_equal(tint, 0.0)
    # Just inside the B ring the material is dense again
    assert ring_density(B_RING[1] - 1e-6)[0] > 0.8


def test_f_ring_peak() -> None:
    """The F ring peaks at its centre line."""
    density, _ = ring_density(np.array([0.80, 0.79]))
    assert density[0] == pytest.approx(0.6)
    assert density[1] == pytest.approx(0.4)


def test_profile_raster() -> None:
    """Every row repeats the radial profile and alpha tracks density."""
    buffer = synthesize_ring_profile()
    assert (buffer.width, buffer.height) == (1024, 32)
    pixels = buffer.pixels
    assert np.all(pixels == pixels[0])

    # u = 712 / 1024 falls inside the Encke gap
    assert buffer.pixel(712, 0)[3] == int(0.03 * MAX_OPACITY * 255)
    # Outside the rings: base grey, fully transparent
    assert buffer.pixel(1000, 5) == (25, 25, 25, 0)
    assert pixels[..., 3].max() <= int(MAX_OPACITY * 255)


def test_custom_profile_size() -> None:
    """Width and height can be overridden."""
    buffer = synthesize_ring_profile(256, 4)
    assert buffer.pixels.shape == (4, 256, 4)
