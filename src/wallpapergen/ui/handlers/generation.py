"""Wallpaper generation and loader handlers."""

import logging
from collections.abc import Iterator

import gradio as gr

from wallpapergen.core.gemini_service import generate_wallpapers
from wallpapergen.core.images import build_image_results
from wallpapergen.core.key_resolver import ApiKeyManager

from ..components import gallery_items, render_empty_hint, render_error, render_key_status, render_loader_at
from ..messages import format_error, get_message, loader_messages
from ..models import UIState
from ..state import (
    begin_generation,
    finish_generation,
    get_key_manager,
    initialize_ui_state,
    next_loader_index,
    reset_key_state,
)
from ..validation import ValidationError, validate_prompt
from .viewer import discard_downloads

logger = logging.getLogger(__name__)

# Output order shared by every yield of generate_wallpapers_handler:
# (gallery, loader, error, empty_hint, prompt_input, generate_btn, loader_timer,
#  loader_index, viewer_group, key_status, key_accordion, state)


def _loading_outputs(state: UIState) -> tuple:
    return (
        gr.update(value=[]),
        gr.update(value=render_loader_at(0), visible=True),
        gr.update(value="", visible=False),
        gr.update(visible=False),
        gr.update(interactive=False),
        gr.update(interactive=False),
        gr.update(active=True),
        0,
        gr.update(visible=False),
        gr.update(),
        gr.update(),
        state,
    )


def _busy_outputs(state: UIState) -> tuple:
    # Leave the running request's loading view untouched.
    return (
        gr.update(),
        gr.update(),
        gr.update(value=render_error(get_message("busy")), visible=True),
        *(gr.update() for _ in range(8)),
        state,
    )


def _idle_outputs(
    state: UIState,
    items: list | None = None,
    key_status: str | None = None,
    open_key_panel: bool = False,
) -> tuple:
    return (
        gr.update(value=items or []) if items is not None else gr.update(),
        gr.update(value="", visible=False),
        gr.update(value=render_error(state.error), visible=bool(state.error)),
        gr.update(value=render_empty_hint(), visible=state.show_empty_hint()),
        gr.update(interactive=True),
        gr.update(interactive=True),
        gr.update(active=False),
        gr.update(),
        gr.update(),
        gr.update(value=key_status) if key_status is not None else gr.update(),
        gr.update(open=True) if open_key_panel else gr.update(),
        state,
    )


def generate_wallpapers_handler(
    prompt: str, state: UIState, manager: ApiKeyManager | None = None
) -> Iterator[tuple]:
    """Generate wallpapers for the prompt and show them in the grid.

    This is a generator: the first yield switches the page to its loading
    view (loader visible, input disabled, previous images cleared) and the
    last yield shows either the new images or an error message.

    Args:
        prompt: Prompt text from the UI
        state: UI state
        manager: API-key manager (defaults to the process-wide one)

    Yields:
        Output tuples in the order documented at module level
    """
    manager = manager or get_key_manager()
    state = initialize_ui_state(state, manager)

    if state.is_loading:
        logger.info("Ignoring generate request while another is in flight")
        yield _busy_outputs(state)
        return

    try:
        prompt = validate_prompt(prompt)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        state.error = str(e)
        yield _idle_outputs(state)
        return

    discard_downloads(state)
    if not begin_generation(state, prompt):
        yield _busy_outputs(state)
        return

    yield _loading_outputs(state)

    api_key, source = manager.resolve()
    logger.info(f"Generating wallpapers (key source: {source})")

    try:
        urls = generate_wallpapers(prompt, api_key)
    except Exception as e:
        logger.error(f"Error generating wallpapers: {e}", exc_info=True)
        if manager.handle_failure(e, api_key):
            reset_key_state(state, manager)
            message_key = "key_source_none" if source == "none" else "invalid_key"
            finish_generation(state, error=get_message(message_key))
            yield _idle_outputs(
                state,
                items=[],
                key_status=render_key_status(manager.status()),
                open_key_panel=True,
            )
        else:
            finish_generation(state, error=format_error(e))
            yield _idle_outputs(state, items=[])
        return

    kept, items = gallery_items(build_image_results(urls, prompt))
    if kept:
        state.key_verified = True
        finish_generation(state, kept)
        logger.info(f"Showing {len(kept)} wallpaper(s)")
    else:
        finish_generation(state, error=get_message("no_images"))
    yield _idle_outputs(state, items=items)


def cycle_loader_message(loader_index: int, state: UIState) -> tuple[dict, int]:
    """Advance the rotating loader message on each timer tick.

    The session state is only read here, so a tick never overwrites the
    state written by the running generation.

    Returns:
        Tuple of (loader_update, next_loader_index)
    """
    if state is None or not state.is_loading:
        return gr.update(), loader_index
    index = next_loader_index(loader_index or 0, len(loader_messages()))
    return gr.update(value=render_loader_at(index)), index
