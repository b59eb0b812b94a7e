"""Reusable UI components for the wallpaper generator Gradio interface."""

import html
import logging

import gradio as gr
from PIL import Image

from wallpapergen.core.images import ImageResult, load_pil_image
from wallpapergen.core.key_resolver import ApiKeyStatus

from .messages import get_message, loader_messages

logger = logging.getLogger(__name__)


class KeyPanelUI:
    """API-key panel: status line, password box, and save/check/clear buttons."""

    def __init__(self, locale: str | None = None, open: bool = False):
        """Initialize the key panel.

        Args:
            locale: Locale for labels (defaults to the configured one)
            open: Whether the accordion starts expanded
        """
        with gr.Accordion(get_message("key_section", locale), open=open) as self.accordion:
            self.status = gr.Markdown(value="")
            self.key_input = gr.Textbox(
                label=get_message("key_label", locale),
                placeholder=get_message("key_placeholder", locale),
                type="password",
                lines=1,
            )
            with gr.Row():
                self.save_btn = gr.Button(get_message("key_save", locale), variant="primary")
                self.test_btn = gr.Button(get_message("key_test", locale))
                self.clear_btn = gr.Button(get_message("key_clear", locale), variant="stop")
            self.message = gr.Markdown(value="")

    def get_output_components(self) -> list[gr.components.Component]:
        """Components updated by every key handler: status, input, message, accordion."""
        return [self.status, self.key_input, self.message, self.accordion]


class ViewerUI:
    """Full-screen viewer for one wallpaper with download and remix actions.

    Gradio has no real modal, so the viewer is a group that is shown on top
    of the grid when an image is selected and hidden again when closed.
    """

    def __init__(self, locale: str | None = None):
        with gr.Group(visible=False, elem_id="wallpaper-viewer") as self.group:
            self.image = gr.Image(
                label=None,
                show_label=False,
                type="pil",
                interactive=False,
                height=640,
            )
            with gr.Row():
                self.download_btn = gr.DownloadButton(
                    get_message("download", locale), value=None, variant="secondary"
                )
                self.remix_btn = gr.Button(get_message("remix", locale), variant="primary")
                self.close_btn = gr.Button(get_message("close", locale))

    def get_output_components(self) -> list[gr.components.Component]:
        """Components updated when the viewer opens or closes: group, image, download."""
        return [self.group, self.image, self.download_btn]


def render_loader(message: str, locale: str | None = None) -> str:
    """Markdown shown while a generation is running."""
    return f"### ✨ {get_message('loader_title', locale)}\n\n*{message}*"


def render_loader_at(index: int, locale: str | None = None) -> str:
    messages = loader_messages(locale)
    return render_loader(messages[index % len(messages)], locale)


def render_error(error: str | None, locale: str | None = None) -> str:
    if not error:
        return ""
    return get_message("error_prefix", locale, message=html.escape(error))


def render_empty_hint(locale: str | None = None) -> str:
    return (
        f"<div style='text-align:center'>{get_message('empty_title', locale)}"
        f"<br><small>{get_message('empty_hint', locale)}</small></div>"
    )


def render_key_status(status: ApiKeyStatus, locale: str | None = None) -> str:
    if status.source == "stored":
        return get_message("key_source_stored", locale, masked=status.masked)
    if status.source == "host":
        return get_message("key_source_host", locale, masked=status.masked)
    return get_message("key_source_none", locale)


def gallery_items(
    images: list[ImageResult],
) -> tuple[list[ImageResult], list[tuple[Image.Image, str]]]:
    """Convert image results into ``(image, caption)`` pairs for ``gr.Gallery``.

    Images whose data URL cannot be decoded are left out.  The kept results
    are returned alongside the gallery items so that a gallery selection
    index always points at the matching result.

    Returns:
        Tuple of (kept_results, gallery_items)
    """
    kept: list[ImageResult] = []
    items: list[tuple[Image.Image, str]] = []
    for image in images:
        try:
            items.append((load_pil_image(image.url), image.prompt))
        except (ValueError, OSError) as e:
            logger.warning(f"Skipping undecodable image {image.id}: {e}")
            continue
        kept.append(image)
    return kept, items
