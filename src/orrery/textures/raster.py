"""Immutable RGBA rasters and texel-grid evaluation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

import numpy as np

Channels = tuple[np.ndarray, np.ndarray, np.ndarray]
ColorFunction = Callable[[np.ndarray, np.ndarray, Mapping[str, int]], Channels]


@dataclass(frozen=True)
class RasterBuffer:
    """Width x height grid of 8-bit RGBA pixels, row-major (``pixels[y, x]``)."""

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.pixels.shape != (self.height, self.width, 4):
            raise ValueError(
                f"Pixel array shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height} RGBA"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError("Pixel array must be uint8")
        self.pixels.setflags(write=False)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()


def check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Texture dimensions must be positive, got {width}x{height}")


def texel_grid(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Normalised ``(u, v)`` coordinates of every texel, shaped ``(height, width)``."""

    check_dimensions(width, height)
    u = np.arange(width, dtype=float) / width
    v = np.arange(height, dtype=float) / height
    return np.meshgrid(u, v, indexing="xy")


def quantize(r: np.ndarray, g: np.ndarray, b: np.ndarray, alpha: np.ndarray | float = 255.0) -> np.ndarray:
    """Truncate and clamp float channels into an ``(h, w, 4)`` uint8 array."""

    shape = np.broadcast_shapes(np.shape(r), np.shape(g), np.shape(b), np.shape(alpha))
    out = np.empty(shape + (4,), dtype=np.uint8)
    for index, channel in enumerate((r, g, b, alpha)):
        out[..., index] = np.clip(np.trunc(np.broadcast_to(channel, shape)), 0, 255)
    return out


def create_texture(
    width: int,
    height: int,
    generator: ColorFunction,
    seeds: Mapping[str, int],
) -> RasterBuffer:
    """Evaluate *generator* on every texel and pack the result (alpha 255)."""

    u, v = texel_grid(width, height)
    r, g, b = generator(u, v, seeds)
    return RasterBuffer(width=width, height=height, pixels=quantize(r, g, b))


def blend_toward(channel: np.ndarray, target: float, amount: np.ndarray) -> np.ndarray:
    """``floor(c + (target - c) * amount)``: move a channel toward *target*."""

    return np.floor(channel + (target - channel) * amount)


__all__ = [
    "Channels",
    "ColorFunction",
    "RasterBuffer",
    "blend_toward",
    "check_dimensions",
    "create_texture",
    "quantize",
    "texel_grid",
]
