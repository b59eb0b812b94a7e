"""State management utilities for the wallpaper generator UI.

The functions here are the only code that mutates :class:`UIState`.  They
encode the single-request rule: a generation can only start when none is in
flight and the prompt is not empty.
"""

import logging

from wallpapergen.core.images import ImageResult
from wallpapergen.core.key_resolver import ApiKeyManager

from .models import UIState

logger = logging.getLogger(__name__)

_key_manager: ApiKeyManager | None = None


def get_key_manager() -> ApiKeyManager:
    """Return the process-wide key manager, creating it from config on first use."""
    global _key_manager
    if _key_manager is None:
        _key_manager = ApiKeyManager.from_config()
    return _key_manager


def initialize_ui_state(
    state: UIState | None = None, manager: ApiKeyManager | None = None
) -> UIState:
    """Create a UIState if needed and record where the API key comes from.

    Args:
        state: Existing UIState or None
        manager: Key manager used to resolve the key source

    Returns:
        Initialized UIState instance
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if manager is not None:
        _, source = manager.resolve()
        if source != state.key_source:
            logger.info(f"API key source: {source}")
            state.key_source = source
            state.key_verified = False

    return state


def begin_generation(state: UIState, prompt: str) -> bool:
    """Mark a generation as started.

    Returns:
        False (and leaves the state untouched) when a generation is already
        in flight or the prompt is empty; True otherwise.
    """
    if state.is_loading or not prompt or not prompt.strip():
        return False

    state.prompt = prompt
    state.is_loading = True
    state.error = None
    state.images = []
    state.selected_image = None
    return True


def finish_generation(
    state: UIState,
    images: list[ImageResult] | None = None,
    error: str | None = None,
) -> UIState:
    """Clear the loading flag and record the outcome of a generation."""
    state.is_loading = False
    state.images = list(images or [])
    state.error = error
    return state


def reset_key_state(state: UIState, manager: ApiKeyManager | None = None) -> UIState:
    """Forget that the key was verified so the user is asked for a new one."""
    logger.info("Resetting API key state")
    state.key_verified = False
    if manager is not None:
        _, state.key_source = manager.resolve()
    else:
        state.key_source = "none"
    return state


def next_loader_index(index: int, message_count: int) -> int:
    """Index of the loader message that follows *index*."""
    if message_count <= 0:
        return 0
    return (index + 1) % message_count
