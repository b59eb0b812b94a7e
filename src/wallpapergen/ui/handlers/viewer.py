"""Full-screen viewer handlers: open, close, download, and remix."""

import logging

import gradio as gr

from wallpapergen.core.config import config
from wallpapergen.core.images import load_pil_image, remove_download_files, write_download_file

from ..models import UIState

logger = logging.getLogger(__name__)


def _closed_viewer() -> tuple:
    return gr.update(visible=False), None, gr.update(value=None)


def discard_downloads(state: UIState) -> None:
    """Delete the download files of the images held by *state*.

    Called before a new generation replaces the images and when a session
    ends, so download files never outlive the images they belong to.
    """
    if state is None or not state.images:
        return
    removed = remove_download_files(config.downloads_dir, [image.id for image in state.images])
    if removed:
        logger.info(f"Removed {removed} download file(s)")


def select_image(evt: gr.SelectData, state: UIState) -> tuple:
    """Open the viewer for the image clicked in the grid.

    The image bytes are written to the downloads directory so the download
    button can hand the browser a file named after the prompt.

    Args:
        evt: Gradio SelectData event containing the selected index
        state: UI state

    Returns:
        Tuple of (viewer_group_update, viewer_image, download_update, updated_state)
    """
    index = evt.index if isinstance(evt.index, int) else evt.index[0]

    if state is None or not state.images or index >= len(state.images):
        return (*_closed_viewer(), state)

    image = state.images[index]
    try:
        download_path = write_download_file(image, config.downloads_dir)
        preview = load_pil_image(image.url)
    except (ValueError, OSError) as e:
        logger.error(f"Error opening image {image.id}: {e}", exc_info=True)
        state.selected_image = None
        return (*_closed_viewer(), state)

    state.selected_image = image
    logger.info(f"Opened viewer for image {image.id}")
    return (
        gr.update(visible=True),
        preview,
        gr.update(value=str(download_path)),
        state,
    )


def close_viewer(state: UIState) -> tuple:
    """Hide the viewer.

    Returns:
        Tuple of (viewer_group_update, viewer_image, download_update, updated_state)
    """
    if state is not None:
        state.selected_image = None
    return (*_closed_viewer(), state)


def remix_image(state: UIState) -> tuple:
    """Copy the viewed image's prompt into the prompt box and close the viewer.

    Returns:
        Tuple of (prompt_update, viewer_group_update, viewer_image,
        download_update, updated_state)
    """
    if state is None or state.selected_image is None:
        return (gr.update(), *_closed_viewer(), state)

    prompt = state.selected_image.prompt
    state.selected_image = None
    logger.info("Remixing prompt from viewer")
    return (gr.update(value=prompt), *_closed_viewer(), state)
