"""Data models for wallpaper generator UI state."""

import logging
from dataclasses import dataclass, field

from wallpapergen.core.images import ImageResult

logger = logging.getLogger(__name__)


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own UIState instance.  The generated images
    only live here: they are replaced by the next generation and lost when
    the page is reloaded.

    Attributes
    ----------
    prompt : str
        Prompt used for the last generation request
    images : list[ImageResult]
        Images from the last successful generation
    is_loading : bool
        True while a generation request is in flight
    error : str | None
        User-facing message from the last failure
    selected_image : ImageResult | None
        Image currently open in the full-screen viewer
    key_source : str
        Where the active API key comes from ("stored", "host", or "none")
    key_verified : bool
        True once the active key passed a probe in this session
    """

    prompt: str = ""
    images: list[ImageResult] = field(default_factory=list)
    is_loading: bool = False
    error: str | None = None
    selected_image: ImageResult | None = None

    key_source: str = "none"
    key_verified: bool = False

    def has_images(self) -> bool:
        return bool(self.images)

    def show_empty_hint(self) -> bool:
        """The "what kind of wallpaper?" hint shows when idle with no images."""
        return not self.is_loading and not self.images

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"UIState(images={len(self.images)}, loading={self.is_loading}, "
            f"key_source={self.key_source}, verified={self.key_verified})"
        )
