"""API-key panel handlers.

Every handler returns the same tuple so the panel can be wired with one
output list:

    (key_status, key_input, key_message, key_accordion, state)
"""

import logging

import gradio as gr

from wallpapergen.core.gemini_service import is_invalid_key_error
from wallpapergen.core.key_resolver import ApiKeyManager

from ..components import render_key_status
from ..messages import format_error, get_message
from ..models import UIState
from ..state import get_key_manager, initialize_ui_state, reset_key_state
from ..validation import ValidationError, validate_api_key_input

logger = logging.getLogger(__name__)


def _panel(
    manager: ApiKeyManager,
    state: UIState,
    message: str | None = None,
    clear_input: bool = False,
    open_panel: bool | None = None,
) -> tuple:
    return (
        render_key_status(manager.status()),
        gr.update(value="") if clear_input else gr.update(),
        message if message is not None else gr.update(),
        gr.update(open=open_panel) if open_panel is not None else gr.update(),
        state,
    )


def _failure_message(error: Exception) -> str:
    if is_invalid_key_error(error):
        return get_message("error_prefix", message=get_message("invalid_key"))
    return get_message("error_prefix", message=format_error(error))


def refresh_key_status(state: UIState, manager: ApiKeyManager | None = None) -> tuple:
    """Show the active key source; open the panel when there is no key."""
    manager = manager or get_key_manager()
    state = initialize_ui_state(state, manager)
    return _panel(manager, state, open_panel=state.key_source == "none")


def save_api_key_handler(
    api_key: str, state: UIState, manager: ApiKeyManager | None = None
) -> tuple:
    """Probe a manually entered key and store it if the probe succeeds."""
    manager = manager or get_key_manager()
    state = initialize_ui_state(state, manager)

    try:
        api_key = validate_api_key_input(api_key)
    except ValidationError as e:
        return _panel(manager, state, message=get_message("error_prefix", message=str(e)))

    try:
        manager.save_and_validate(api_key)
    except Exception as e:
        logger.warning(f"Manual API key rejected: {e}")
        return _panel(manager, state, message=_failure_message(e), clear_input=True)

    state.key_source = "stored"
    state.key_verified = True
    return _panel(
        manager, state, message=get_message("key_saved"), clear_input=True, open_panel=False
    )


def test_api_key_handler(state: UIState, manager: ApiKeyManager | None = None) -> tuple:
    """Probe the key currently in use (stored or host-injected)."""
    manager = manager or get_key_manager()
    state = initialize_ui_state(state, manager)

    try:
        manager.validate_current()
    except Exception as e:
        logger.warning(f"API key check failed: {e}")
        if is_invalid_key_error(e):
            reset_key_state(state, manager)
            return _panel(manager, state, message=_failure_message(e), open_panel=True)
        return _panel(manager, state, message=_failure_message(e))

    state.key_verified = True
    return _panel(manager, state, message=get_message("key_valid"))


def clear_api_key_handler(state: UIState, manager: ApiKeyManager | None = None) -> tuple:
    """Delete the stored key and fall back to the host key, if any."""
    manager = manager or get_key_manager()
    state = initialize_ui_state(state, manager)

    removed = manager.clear()
    reset_key_state(state, manager)
    message = get_message("key_cleared" if removed else "key_nothing_to_clear")
    return _panel(manager, state, message=message, open_panel=state.key_source == "none")
