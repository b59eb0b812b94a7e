"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events, organized into logical modules:
- generation: Wallpaper generation and the rotating loader
- viewer: Full-screen viewer with download and remix
- api_key: API-key panel (save, check, clear, status)
"""

from .api_key import (
    clear_api_key_handler,
    refresh_key_status,
    save_api_key_handler,
    test_api_key_handler,
)
from .generation import (
    cycle_loader_message,
    generate_wallpapers_handler,
)
from .viewer import (
    close_viewer,
    discard_downloads,
    remix_image,
    select_image,
)

__all__ = [
    # Generation handlers
    "cycle_loader_message",
    "generate_wallpapers_handler",
    # Viewer handlers
    "close_viewer",
    "discard_downloads",
    "remix_image",
    "select_image",
    # API-key handlers
    "clear_api_key_handler",
    "refresh_key_status",
    "save_api_key_handler",
    "test_api_key_handler",
]
