"""AI Wallpaper Generator - phone wallpapers from a text prompt via Gemini Imagen."""

__version__ = "0.3.0"

from wallpapergen.core.config import WallpaperConfig, config
from wallpapergen.core.images import ImageResult

__all__ = [
    "ImageResult",
    "WallpaperConfig",
    "config",
]
