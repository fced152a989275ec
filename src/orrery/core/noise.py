"""Deterministic value noise and its fractal compositions.

Every function works element-wise on Python floats or numpy arrays, so a
texture can evaluate a whole texel grid in one call and still get exactly the
value a single-texel lookup would produce.
"""
from __future__ import annotations

from typing import Callable, Union

import numpy as np

ArrayLike = Union[float, np.ndarray]


def hash_noise(x: ArrayLike, y: ArrayLike, seed: float = 0.0) -> ArrayLike:
    """Pseudo-random value in ``[0, 1)`` for the point ``(x, y)``."""

    n = np.sin(x * 12.9898 + y * 78.233 + seed) * 43758.5453
    return n - np.floor(n)


def value_noise(x: ArrayLike, y: ArrayLike, seed: float = 0.0) -> ArrayLike:
    """Smoothstep-interpolated lattice noise.

    On integer coordinates the result is exactly ``hash_noise(x, y, seed)``.
    """

    ix = np.floor(x)
    iy = np.floor(y)
    fx = x - ix
    fy = y - iy

    a = hash_noise(ix, iy, seed)
    b = hash_noise(ix + 1, iy, seed)
    c = hash_noise(ix, iy + 1, seed)
    d = hash_noise(ix + 1, iy + 1, seed)

    ux = fx * fx * (3 - 2 * fx)
    uy = fy * fy * (3 - 2 * fy)

    return a * (1 - ux) * (1 - uy) + b * ux * (1 - uy) + c * (1 - ux) * uy + d * ux * uy


def _accumulate(
    x: ArrayLike,
    y: ArrayLike,
    octaves: int,
    seed: float,
    shape: Callable[[ArrayLike], ArrayLike],
) -> ArrayLike:
    if octaves < 1:
        raise ValueError("octaves must be at least 1")

    value: ArrayLike = 0.0
    amplitude = 0.5
    frequency = 1.0
    max_value = 0.0

    for i in range(octaves):
        sample = value_noise(x * frequency, y * frequency, seed + i * 100)
        value = value + amplitude * shape(sample)
        max_value += amplitude
        amplitude *= 0.5
        frequency *= 2.0

    return value / max_value


def _identity(n: ArrayLike) -> ArrayLike:
    return n


def _fold(n: ArrayLike) -> ArrayLike:
    return np.abs(n * 2 - 1)


def _ridge(n: ArrayLike) -> ArrayLike:
    r = 1 - np.abs(n * 2 - 1)
    return r * r


def fbm(x: ArrayLike, y: ArrayLike, octaves: int = 6, seed: float = 0.0) -> ArrayLike:
    """Fractal Brownian motion normalised to ``[0, 1]``."""

    return _accumulate(x, y, octaves, seed, _identity)


def turbulence(x: ArrayLike, y: ArrayLike, octaves: int = 6, seed: float = 0.0) -> ArrayLike:
    """fBm of folded octaves ``|2n - 1|``; sharp creases at the fold lines."""

    return _accumulate(x, y, octaves, seed, _fold)


def ridged(x: ArrayLike, y: ArrayLike, octaves: int = 6, seed: float = 0.0) -> ArrayLike:
    """fBm of ``(1 - |2n - 1|)**2``; thin bright ridges such as crater rims."""

    return _accumulate(x, y, octaves, seed, _ridge)


__all__ = ["ArrayLike", "fbm", "hash_noise", "ridged", "turbulence", "value_noise"]
