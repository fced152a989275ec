"""Tests for the pygame surface adapter."""

from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from orrery.render.assets import (
    TextureLibrary,
    clear_texture_cache,
    get_body_surface,
    get_cache_size,
    raster_to_surface,
    save_raster_png,
)
from orrery.textures import synthesize


def test_raster_to_surface_copies_pixels() -> None:
    """Surfaces carry the raster's size and RGBA values."""
    buffer = synthesize("neptune", 16, 8)
    surface = raster_to_surface(buffer)
    assert surface.get_size() == (16, 8)
    for x, y in [(0, 0), (5, 3), (15, 7)]:
        assert tuple(surface.get_at((x, y))) == buffer.pixel(x, y)


def test_save_raster_png(tmp_path) -> None:  # type: ignore[no-untyped-def]
    """PNG export round-trips through pygame's image loader."""
    buffer = synthesize("ceres", 20, 10)
    path = save_raster_png(buffer, tmp_path / "nested" / "ceres.png")
    assert path.exists()
    loaded = pygame.image.load(path.as_posix())
    assert loaded.get_size() == (20, 10)


def test_library_caches_and_evicts() -> None:
    """Repeated requests hit the cache; the oldest entry is evicted first."""
    library = TextureLibrary(max_size=2)
    first = library.body_surface("eris", (8, 4))
    assert library.body_surface("ERIS", (8, 4)) is first
    library.body_surface("makemake", (8, 4))
    library.body_surface("pluto", (8, 4))
    assert len(library) == 2
    assert library.body_surface("eris", (8, 4)) is not first


def test_library_keeps_recently_used() -> None:
    """A cache hit protects the entry from the next eviction."""
    library = TextureLibrary(max_size=2)
    eris = library.body_surface("eris", (8, 4))
    makemake = library.body_surface("makemake", (8, 4))
    assert library.body_surface("eris", (8, 4)) is eris
    library.body_surface("pluto", (8, 4))
    assert library.body_surface("eris", (8, 4)) is eris
    assert library.body_surface("makemake", (8, 4)) is not makemake


def test_ring_surface_has_alpha() -> None:
    """The ring surface keeps its per-pixel opacity."""
    library = TextureLibrary()
    rings = library.ring_surface()
    assert rings.get_size() == (1024, 32)
    assert rings.get_at((1000, 0)).a == 0
    assert library.ring_surface() is rings


def test_module_cache() -> None:
    """The shared library backs get_body_surface()."""
    clear_texture_cache()
    surface = get_body_surface("uranus", (12, 6))
    assert get_body_surface("uranus", (12, 6)) is surface
    assert get_cache_size() == 1
    clear_texture_cache()
    assert get_cache_size() == 0
