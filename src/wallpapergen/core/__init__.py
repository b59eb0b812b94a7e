"""Core functionality for wallpaper generation.

This package holds everything that is independent of the front end:

- **config**: Configuration management using Pydantic Settings
  (``WALLPAPERGEN_`` prefix, ``.env`` support)
- **images**: The :class:`ImageResult` data model and data-URL helpers
- **gemini_service**: The ``google-genai`` wrapper (generation and key probe)
- **key_store**: JSON-file storage for the manually entered API key
- **key_resolver**: Stored → host key fallback, validation, and reset

Usage Example
-------------
    from wallpapergen.core import ApiKeyManager, build_image_results, generate_wallpapers

    manager = ApiKeyManager.from_config()
    key, source = manager.resolve()
    images = build_image_results(generate_wallpapers("misty harbour", key), "misty harbour")
"""

from wallpapergen.core.config import WallpaperConfig, config
from wallpapergen.core.gemini_service import (
    ApiKeyNotFoundError,
    generate_wallpapers,
    is_invalid_key_error,
    test_api_key,
)
from wallpapergen.core.images import ImageResult, build_image_results
from wallpapergen.core.key_resolver import ApiKeyManager, ApiKeyStatus

__all__ = [
    "ApiKeyManager",
    "ApiKeyNotFoundError",
    "ApiKeyStatus",
    "ImageResult",
    "WallpaperConfig",
    "build_image_results",
    "config",
    "generate_wallpapers",
    "is_invalid_key_error",
    "test_api_key",
]
