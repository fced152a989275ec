"""Tests for the sky dome and its compositing canvas."""

from __future__ import annotations

import math

import numpy as np
import pytest

from orrery.textures.starfield import (
    SPECTRAL_COLORS,
    SkyCanvas,
    radial_gradient,
    solid,
    spectral_color,
    synthesize_starfield,
)

WIDTH, HEIGHT = 256, 128


@pytest.fixture(scope="module")
def sky():  # type: ignore[no-untyped-def]
    return synthesize_starfield(seed=7, width=WIDTH, height=HEIGHT)


def test_starfield_shape(sky) -> None:  # type: ignore[no-untyped-def]
    """The sky is an opaque raster of the requested size."""
    assert sky.pixels.shape == (HEIGHT, WIDTH, 4)
    assert np.all(sky.pixels[..., 3] == 255)


def test_starfield_is_reproducible(sky) -> None:  # type: ignore[no-untyped-def]
    """A fixed seed always paints the same sky."""
    again = synthesize_starfield(seed=7, width=WIDTH, height=HEIGHT)
    assert again.to_bytes() == sky.to_bytes()


def test_starfield_depends_on_seed(sky) -> None:  # type: ignore[no-untyped-def]
    """Another seed scatters the stars differently."""
    other = synthesize_starfield(seed=8, width=WIDTH, height=HEIGHT)
    assert other.to_bytes() != sky.to_bytes()


def test_starfield_has_light(sky) -> None:  # type: ignore[no-untyped-def]
    """Stars and glows rise well above the near-black background."""
    assert sky.pixels[..., :3].max() > 40
    assert np.median(sky.pixels[..., 2]) < 60


def test_spectral_table_weights() -> None:
    """Spectral weights sum to one and rolls map onto the table."""
    assert sum(weight for _, weight in SPECTRAL_COLORS) == pytest.approx(1.0)
    assert spectral_color(0.0) == SPECTRAL_COLORS[0][0]
    assert spectral_color(0.02) == SPECTRAL_COLORS[1][0]
    assert spectral_color(0.999) == SPECTRAL_COLORS[-1][0]
    assert spectral_color(1.0) == SPECTRAL_COLORS[-1][0]


def test_canvas_solid_disc() -> None:
    """An opaque disc replaces the background inside and leaves it outside."""
    canvas = SkyCanvas(WIDTH, HEIGHT, (0, 0, 0))
    canvas.fill_circle(1024, 512, 80, solid((255, 255, 255), 1.0))
    assert canvas.rgb[64, 128, 0] == pytest.approx(255.0)
    assert canvas.rgb[0, 0, 0] == 0.0
    # Edge pixels are partially covered
    edge = canvas.rgb[71, 134, 0]
    assert 0.0 < edge < 255.0


def test_canvas_source_over() -> None:
    """Translucent paint mixes with what is underneath."""
    canvas = SkyCanvas(WIDTH, HEIGHT, (100, 100, 100))
    canvas.fill_rect(0, 0, 2048, 1024, solid((200, 200, 200), 0.5))
    np.testing.assert_allclose(canvas.rgb, 150.0)


def test_canvas_radial_gradient() -> None:
    """Gradients fade from the centre colour to transparent."""
    canvas = SkyCanvas(WIDTH, HEIGHT, (0, 0, 0))
    gradient = radial_gradient(1024, 512, 400, [(0.0, (255, 0, 0, 1.0)), (1.0, (0, 0, 0, 0.0))])
    canvas.fill_rect(0, 0, 2048, 1024, gradient, clip_radius=(1024, 512, 400))
    centre = canvas.rgb[64, 128, 0]
    halfway = canvas.rgb[64, 128 + 25, 0]
    assert centre > halfway > 0.0
    assert canvas.rgb[64, 128 + 60, 0] == 0.0


def test_canvas_rotated_frame() -> None:
    """Shapes follow the rotated frame and the frame is restored afterwards."""
    canvas = SkyCanvas(WIDTH, HEIGHT, (0, 0, 0))
    with canvas.rotated_frame(1024, 512, math.pi / 2):
        canvas.fill_rect(200, -10, 50, 20, solid((255, 255, 255), 1.0))
    # Rotated a quarter turn the bar points straight down from the centre
    assert canvas.rgb[92, 128, 0] == pytest.approx(255.0)
    assert canvas.rgb[64, 156, 0] == 0.0

    canvas.fill_circle(1024, 512, 40, solid((0, 255, 0), 1.0))
    assert canvas.rgb[64, 128, 1] == pytest.approx(255.0)
