"""pygame adapters for synthesized textures."""

from .assets import (
    TextureLibrary,
    clear_texture_cache,
    get_body_surface,
    get_cache_size,
    raster_to_surface,
    save_raster_png,
)

__all__ = [
    "TextureLibrary",
    "clear_texture_cache",
    "get_body_surface",
    "get_cache_size",
    "raster_to_surface",
    "save_raster_png",
]
