"""pygame surfaces built from synthesized rasters, with a bounded cache."""
from __future__ import annotations

from collections import OrderedDict
from pathlib import Path
from typing import Optional, Union

import pygame

from ..core.model import BodyKind
from ..textures import default_size, synthesize, synthesize_ring_profile, synthesize_starfield
from ..textures.raster import RasterBuffer

Size = tuple[int, int]
CacheKey = tuple[str, int, int]

_CACHE_MAX_SIZE = 50


def raster_to_surface(buffer: RasterBuffer) -> pygame.Surface:
    """Copy a raster into a new 32-bit RGBA surface (no display needed)."""

    surface = pygame.image.frombuffer(buffer.to_bytes(), (buffer.width, buffer.height), "RGBA")
    # frombuffer shares the bytes object; copy so the surface owns its pixels
    return surface.copy()


def save_raster_png(buffer: RasterBuffer, path: Union[str, Path]) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    pygame.image.save(raster_to_surface(buffer), target.as_posix())
    return target


class TextureLibrary:
    """Least-recently-used cache of texture surfaces keyed by ``(name, width, height)``."""

    def __init__(self, max_size: int = _CACHE_MAX_SIZE) -> None:
        if max_size < 1:
            raise ValueError("Cache size must be at least 1")
        self.max_size = max_size
        self._surfaces: OrderedDict[CacheKey, pygame.Surface] = OrderedDict()

    def __len__(self) -> int:
        return len(self._surfaces)

    def clear(self) -> None:
        self._surfaces.clear()

    def _lookup(self, key: CacheKey) -> Optional[pygame.Surface]:
        cached = self._surfaces.get(key)
        if cached is not None:
            self._surfaces.move_to_end(key)
        return cached

    def _store(self, key: CacheKey, surface: pygame.Surface) -> pygame.Surface:
        self._surfaces[key] = surface
        if len(self._surfaces) > self.max_size:
            # Least recently used entry goes first
            self._surfaces.popitem(last=False)
        return surface

    def body_surface(self, kind: Union[BodyKind, str], size: Optional[Size] = None) -> pygame.Surface:
        kind = BodyKind.parse(kind)
        width, height = size or default_size(kind)
        key = (kind.value, width, height)
        cached = self._lookup(key)
        if cached is not None:
            return cached
        return self._store(key, raster_to_surface(synthesize(kind, width, height)))

    def ring_surface(self) -> pygame.Surface:
        cached = self._lookup(("rings", 0, 0))
        if cached is not None:
            return cached
        return self._store(("rings", 0, 0), raster_to_surface(synthesize_ring_profile()))

    def starfield_surface(self, seed: Optional[int] = None) -> pygame.Surface:
        key = ("starfield", -1 if seed is None else seed, 0)
        cached = self._lookup(key)
        if cached is not None:
            return cached
        return self._store(key, raster_to_surface(synthesize_starfield(seed)))


_DEFAULT_LIBRARY = TextureLibrary()


def get_body_surface(kind: Union[BodyKind, str], size: Optional[Size] = None) -> pygame.Surface:
    """Cached surface for a body texture; generated on first request."""
    return _DEFAULT_LIBRARY.body_surface(kind, size)


def clear_texture_cache() -> None:
    _DEFAULT_LIBRARY.clear()


def get_cache_size() -> int:
    return len(_DEFAULT_LIBRARY)


__all__ = [
    "TextureLibrary",
    "clear_texture_cache",
    "get_body_surface",
    "get_cache_size",
    "raster_to_surface",
    "save_raster_png",
]
