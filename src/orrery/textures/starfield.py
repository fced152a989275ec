"""Equirectangular sky dome: Milky Way band, nebulae, galaxies and stars.

Layers are composited back to front onto an opaque float canvas with
source-over blending, in the reference frame of a 2048x1024 sky. Other output
sizes scale that frame. All random scatter comes from one seeded
``numpy.random.Generator``, so a seed always produces the same sky.
"""
from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence

import numpy as np

from ..core.config import TEXTURE_CFG, TextureCfg
from .raster import RasterBuffer, check_dimensions, quantize

REFERENCE_SIZE = (2048, 1024)
MILKY_WAY_TILT = -0.35

RGBA = tuple[float, float, float, float]
TRANSPARENT: RGBA = (0.0, 0.0, 0.0, 0.0)

# (x, y, size, rgb)
NEBULAE = (
    (400, 200, 150, (180, 50, 80)),
    (1600, 300, 120, (60, 100, 160)),
    (1400, 800, 180, (120, 40, 100)),
    (250, 700, 100, (40, 120, 130)),
)
# (x, y, size)
GALAXIES = (
    (300, 400, 15),
    (1700, 200, 12),
    (1100, 850, 18),
)
# (x, y, star count, spread); two of these sit outside the reference frame
STAR_CLUSTERS = (
    (1000, 600, 40, 50),
    (3000, 1400, 35, 40),
    (2400, 900, 50, 60),
    (700, 1600, 30, 35),
)
# Spectral classes O through M with their relative frequency
SPECTRAL_COLORS = (
    ((155, 176, 255), 0.01),
    ((170, 191, 255), 0.02),
    ((202, 215, 255), 0.05),
    ((248, 247, 255), 0.08),
    ((255, 244, 234), 0.10),
    ((255, 210, 161), 0.15),
    ((255, 204, 111), 0.20),
    ((255, 170, 124), 0.25),
    ((255, 140, 100), 0.14),
)

Shape = Callable[[np.ndarray, np.ndarray], np.ndarray]
Paint = Callable[[np.ndarray, np.ndarray], tuple[np.ndarray, np.ndarray]]


def _translate(dx: float, dy: float) -> np.ndarray:
    return np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])


def _rotate(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def _scale(sx: float, sy: float) -> np.ndarray:
    return np.diag([sx, sy, 1.0])


def solid(rgb: Sequence[float], alpha: float) -> Paint:
    premultiplied = np.asarray(rgb, dtype=float) * alpha

    def paint(lx: np.ndarray, ly: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        shape = np.shape(lx)
        return np.broadcast_to(premultiplied, shape + (3,)), np.full(shape, alpha)

    return paint


def radial_gradient(cx: float, cy: float, radius: float, stops: Sequence[tuple[float, RGBA]]) -> Paint:
    """Radial gradient from the centre outwards, interpolated premultiplied."""

    offsets = np.array([offset for offset, _ in stops], dtype=float)
    alphas = np.array([color[3] for _, color in stops], dtype=float)
    channels = [np.array([color[i] * color[3] for _, color in stops], dtype=float) for i in range(3)]

    def paint(lx: np.ndarray, ly: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        t = np.hypot(lx - cx, ly - cy) / radius
        premultiplied = np.stack([np.interp(t, offsets, c) for c in channels], axis=-1)
        return premultiplied, np.interp(t, offsets, alphas)

    return paint


def _circle(cx: float, cy: float, radius: float) -> Shape:
    return lambda lx, ly: (lx - cx) ** 2 + (ly - cy) ** 2 <= radius * radius


def _ellipse(cx: float, cy: float, rx: float, ry: float, rotation: float) -> Shape:
    c, s = math.cos(rotation), math.sin(rotation)

    def inside(lx: np.ndarray, ly: np.ndarray) -> np.ndarray:
        dx = lx - cx
        dy = ly - cy
        ex = dx * c + dy * s
        ey = -dx * s + dy * c
        return (ex / rx) ** 2 + (ey / ry) ** 2 <= 1.0

    return inside


def _rect(x: float, y: float, w: float, h: float) -> Shape:
    return lambda lx, ly: (lx >= x) & (lx < x + w) & (ly >= y) & (ly < y + h)


class SkyCanvas:
    """Opaque float RGB canvas drawn in reference-frame coordinates."""

    def __init__(self, width: int, height: int, background: Sequence[float]):
        check_dimensions(width, height)
        self.width = width
        self.height = height
        self.rgb = np.empty((height, width, 3), dtype=float)
        self.rgb[...] = background
        ref_w, ref_h = REFERENCE_SIZE
        self._set_transform(_scale(width / ref_w, height / ref_h))

    def _set_transform(self, matrix: np.ndarray) -> None:
        self._matrix = matrix
        self._inverse = np.linalg.inv(matrix)

    @contextmanager
    def rotated_frame(self, cx: float, cy: float, angle: float) -> Iterator["SkyCanvas"]:
        """Draw about ``(cx, cy)`` rotated by *angle* until the block exits."""
        previous = self._matrix
        self._set_transform(previous @ _translate(cx, cy) @ _rotate(angle))
        try:
            yield self
        finally:
            self._set_transform(previous)

    def _pixel_bounds(self, bounds: tuple[float, float, float, float]) -> Optional[tuple[int, int, int, int]]:
        x0, y0, x1, y1 = bounds
        corners = self._matrix @ np.array([[x0, x1, x1, x0], [y0, y0, y1, y1], [1.0, 1.0, 1.0, 1.0]])
        px0 = max(int(math.floor(corners[0].min())), 0)
        py0 = max(int(math.floor(corners[1].min())), 0)
        px1 = min(int(math.ceil(corners[0].max())), self.width)
        py1 = min(int(math.ceil(corners[1].max())), self.height)
        if px0 >= px1 or py0 >= py1:
            return None
        return px0, py0, px1, py1

    def paint(
        self,
        bounds: tuple[float, float, float, float],
        shape: Shape,
        paint: Paint,
        samples: int = 1,
    ) -> None:
        """Composite *paint* inside *shape* over the pixels covering *bounds*.

        Each pixel is sampled on a ``samples x samples`` sub-grid, which
        anti-aliases shape edges.
        """
        box = self._pixel_bounds(bounds)
        if box is None:
            return
        px0, py0, px1, py1 = box
        xs, ys = np.meshgrid(np.arange(px0, px1, dtype=float), np.arange(py0, py1, dtype=float))
        color = np.zeros(xs.shape + (3,))
        alpha = np.zeros(xs.shape)
        inv = self._inverse
        offsets = (np.arange(samples) + 0.5) / samples
        for oy in offsets:
            for ox in offsets:
                sx = xs + ox
                sy = ys + oy
                lx = inv[0, 0] * sx + inv[0, 1] * sy + inv[0, 2]
                ly = inv[1, 0] * sx + inv[1, 1] * sy + inv[1, 2]
                premultiplied, a = paint(lx, ly)
                covered = shape(lx, ly)
                color += np.where(covered[..., None], premultiplied, 0.0)
                alpha += np.where(covered, a, 0.0)
        count = samples * samples
        region = self.rgb[py0:py1, px0:px1]
        region *= (1.0 - alpha / count)[..., None]
        region += color / count

    def fill_rect(self, x: float, y: float, w: float, h: float, paint: Paint, clip_radius: Optional[tuple[float, float, float]] = None) -> None:
        """Fill a rectangle; *clip_radius* ``(cx, cy, r)`` limits work to a gradient's extent."""
        bounds = (x, y, x + w, y + h)
        if clip_radius is not None:
            cx, cy, r = clip_radius
            bounds = (max(x, cx - r), max(y, cy - r), min(x + w, cx + r), min(y + h, cy + r))
            if bounds[0] >= bounds[2] or bounds[1] >= bounds[3]:
                return
        self.paint(bounds, _rect(x, y, w, h), paint)

    def fill_circle(self, cx: float, cy: float, radius: float, paint: Paint, samples: int = 4) -> None:
        bounds = (cx - radius, cy - radius, cx + radius, cy + radius)
        self.paint(bounds, _circle(cx, cy, radius), paint, samples)

    def fill_ellipse(
        self,
        cx: float,
        cy: float,
        rx: float,
        ry: float,
        rotation: float,
        paint: Paint,
        samples: int = 2,
    ) -> None:
        extent = max(rx, ry)
        bounds = (cx - extent, cy - extent, cx + extent, cy + extent)
        self.paint(bounds, _ellipse(cx, cy, rx, ry, rotation), paint, samples)


def _glow(canvas: SkyCanvas, x: float, y: float, radius: float, stops: Sequence[tuple[float, RGBA]]) -> None:
    canvas.fill_circle(x, y, radius, radial_gradient(x, y, radius, stops), samples=1)


def _color_washes(canvas: SkyCanvas, rng: np.random.Generator) -> None:
    width, height = REFERENCE_SIZE
    for _ in range(4):
        x = rng.random() * width
        y = rng.random() * height
        r = rng.random() * 500 + 300
        gradient = radial_gradient(x, y, r, [(0.0, (40, 30, 60, 0.15)), (1.0, TRANSPARENT)])
        canvas.fill_rect(0, 0, width, height, gradient, clip_radius=(x, y, r))


def _milky_way(canvas: SkyCanvas, rng: np.random.Generator) -> None:
    width, height = REFERENCE_SIZE
    with canvas.rotated_frame(width / 2, height / 2, MILKY_WAY_TILT):
        # Dust lanes
        for _ in range(20):
            x = (rng.random() - 0.5) * 2800
            y = (rng.random() - 0.5) * 100
            w = rng.random() * 200 + 50
            h = rng.random() * 30 + 10
            canvas.fill_ellipse(x, y, w, h, rng.random() * math.pi, solid((0, 0, 0), 0.25))

        core = radial_gradient(
            0, 0, 200,
            [(0.0, (255, 245, 220, 0.15)), (0.5, (220, 200, 180, 0.06)), (1.0, TRANSPARENT)],
        )
        canvas.fill_rect(-250, -250, 500, 500, core, clip_radius=(0, 0, 200))

        for _ in range(60):
            x = (rng.random() - 0.5) * 3000
            y = (rng.random() - 0.5) * 150
            r = rng.random() * 80 + 30
            glow = radial_gradient(x, y, r, [(0.0, (220, 210, 230, 0.04)), (1.0, TRANSPARENT)])
            canvas.fill_rect(x - r, y - r, r * 2, r * 2, glow)

        for _ in range(2000):
            x = (rng.random() - 0.5) * 2800
            band_width = 120 * (1 - abs(x) / 2000)
            y = (rng.random() - 0.5) * band_width
            size = rng.random() * 0.6 + 0.2
            canvas.fill_circle(x, y, size, solid((255, 252, 248), rng.random() * 0.5 + 0.3))


def _nebulae(canvas: SkyCanvas, rng: np.random.Generator) -> None:
    width, height = REFERENCE_SIZE
    for nx, ny, size, (r, g, b) in NEBULAE:
        for _ in range(5):
            cx = nx + (rng.random() - 0.5) * size
            cy = ny + (rng.random() - 0.5) * size * 0.6
            radius = size * (0.4 + rng.random() * 0.4)
            cloud = radial_gradient(cx, cy, radius, [(0.0, (r + 30, g + 20, b + 40, 0.06)), (1.0, TRANSPARENT)])
            canvas.fill_rect(0, 0, width, height, cloud, clip_radius=(cx, cy, radius))


def _galaxies(canvas: SkyCanvas, rng: np.random.Generator) -> None:
    for gx, gy, size in GALAXIES:
        light = radial_gradient(
            gx, gy, size,
            [(0.0, (255, 248, 230, 0.5)), (0.5, (255, 240, 200, 0.2)), (1.0, TRANSPARENT)],
        )
        canvas.fill_ellipse(gx, gy, size * 1.3, size * 0.5, rng.random() * math.pi, light, samples=4)


def _clusters(canvas: SkyCanvas, rng: np.random.Generator) -> None:
    for cx, cy, count, spread in STAR_CLUSTERS:
        haze = radial_gradient(cx, cy, spread * 1.5, [(0.0, (200, 210, 255, 0.05)), (1.0, TRANSPARENT)])
        canvas.fill_rect(cx - spread * 2, cy - spread * 2, spread * 4, spread * 4, haze, clip_radius=(cx, cy, spread * 1.5))

        for _ in range(count):
            angle = rng.random() * math.pi * 2
            # Product of two uniforms concentrates stars toward the centre
            dist = rng.random() * spread * rng.random()
            x = cx + math.cos(angle) * dist
            y = cy + math.sin(angle) * dist
            size = rng.random() * 1.2 + 0.5
            brightness = rng.random() * 0.4 + 0.6
            canvas.fill_circle(x, y, size, solid((220, 230, 255), brightness))


def _faint_stars(canvas: SkyCanvas, rng: np.random.Generator) -> None:
    width, height = REFERENCE_SIZE
    for _ in range(5000):
        x = rng.random() * width
        y = rng.random() * height
        size = rng.random() * 0.6 + 0.2
        brightness = rng.random() * 0.4 + 0.15
        canvas.fill_circle(x, y, size, solid((255, 255, 255), brightness))


def spectral_color(roll: float) -> tuple[int, int, int]:
    """Pick a star colour from the weighted spectral table for ``roll`` in [0, 1)."""
    cumulative = 0.0
    for rgb, weight in SPECTRAL_COLORS:
        cumulative += weight
        if roll < cumulative:
            return rgb
    return SPECTRAL_COLORS[-1][0]


def _medium_stars(canvas: SkyCanvas, rng: np.random.Generator) -> None:
    width, height = REFERENCE_SIZE
    for _ in range(1000):
        x = rng.random() * width
        y = rng.random() * height
        size = rng.random() * 1.3 + 0.6
        brightness = rng.random() * 0.5 + 0.5
        canvas.fill_circle(x, y, size, solid(spectral_color(rng.random()), brightness))


def _bright_star_color(temp: float) -> tuple[int, int, int]:
    if temp < 0.15:
        return 180, 210, 255
    if temp < 0.3:
        return 255, 252, 250
    if temp < 0.6:
        return 255, 244, 225
    if temp < 0.8:
        return 255, 210, 170
    return 255, 175, 140


def _bright_stars(canvas: SkyCanvas, rng: np.random.Generator) -> None:
    width, height = REFERENCE_SIZE
    for _ in range(50):
        x = rng.random() * width
        y = rng.random() * height
        size = rng.random() * 2 + 1
        brightness = rng.random() * 0.3 + 0.7
        r, g, b = _bright_star_color(rng.random())

        _glow(canvas, x, y, size * 8, [
            (0.0, (r, g, b, brightness * 0.15)),
            (0.4, (r, g, b, brightness * 0.05)),
            (1.0, TRANSPARENT),
        ])
        _glow(canvas, x, y, size * 3, [
            (0.0, (r, g, b, brightness * 0.6)),
            (0.5, (r, g, b, brightness * 0.2)),
            (1.0, TRANSPARENT),
        ])
        canvas.fill_circle(x, y, size, solid((255, 255, 255), brightness))


def _very_bright_stars(canvas: SkyCanvas, rng: np.random.Generator) -> None:
    width, height = REFERENCE_SIZE
    for _ in range(15):
        x = rng.random() * width
        y = rng.random() * height
        size = rng.random() * 2.5 + 2
        temp = rng.random()
        if temp < 0.3:
            r, g, b = 200, 220, 255
        elif temp < 0.7:
            r, g, b = 255, 250, 245
        else:
            r, g, b = 255, 235, 210

        _glow(canvas, x, y, size * 15, [
            (0.0, (r, g, b, 0.1)),
            (0.3, (r, g, b, 0.03)),
            (0.6, (r, g, b, 0.01)),
            (1.0, TRANSPARENT),
        ])
        _glow(canvas, x, y, size * 6, [
            (0.0, (r, g, b, 0.4)),
            (0.4, (r, g, b, 0.15)),
            (1.0, TRANSPARENT),
        ])
        _glow(canvas, x, y, size * 2.5, [
            (0.0, (255, 255, 255, 0.9)),
            (0.5, (r, g, b, 0.5)),
            (1.0, TRANSPARENT),
        ])
        canvas.fill_circle(x, y, size * 0.8, solid((255, 255, 255), 1.0))


LAYERS = (
    _color_washes,
    _milky_way,
    _nebulae,
    _galaxies,
    _clusters,
    _faint_stars,
    _medium_stars,
    _bright_stars,
    _very_bright_stars,
)


def synthesize_starfield(
    seed: Optional[int] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    cfg: TextureCfg = TEXTURE_CFG,
) -> RasterBuffer:
    """Paint the full sky; the same seed and size always give the same pixels."""

    default_w, default_h = cfg.starfield_size
    width = default_w if width is None else width
    height = default_h if height is None else height
    seed = cfg.starfield_seed if seed is None else seed

    canvas = SkyCanvas(width, height, cfg.starfield_background)
    rng = np.random.default_rng(seed)
    for layer in LAYERS:
        layer(canvas, rng)

    r, g, b = np.moveaxis(canvas.rgb, -1, 0)
    return RasterBuffer(width=width, height=height, pixels=quantize(r, g, b))


__all__ = [
    "GALAXIES",
    "MILKY_WAY_TILT",
    "NEBULAE",
    "REFERENCE_SIZE",
    "SPECTRAL_COLORS",
    "STAR_CLUSTERS",
    "SkyCanvas",
    "radial_gradient",
    "solid",
    "spectral_color",
    "synthesize_starfield",
]
