"""Gradio UI for the AI Wallpaper Generator."""

import logging

import gradio as gr

from wallpapergen.core.config import config
from wallpapergen.core.images import remove_download_files

from .components import KeyPanelUI, ViewerUI, render_empty_hint
from .handlers import (
    clear_api_key_handler,
    close_viewer,
    cycle_loader_message,
    discard_downloads,
    generate_wallpapers_handler,
    refresh_key_status,
    remix_image,
    save_api_key_handler,
    select_image,
    test_api_key_handler,
)
from .messages import get_message
from .models import UIState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CUSTOM_CSS = """
#wallpaper-title h1 {
    background: linear-gradient(to right, #c084fc, #ec4899);
    -webkit-background-clip: text;
    color: transparent;
    text-align: center;
}
#wallpaper-subtitle { text-align: center; opacity: 0.7; }
#wallpaper-viewer { max-width: 420px; margin: 0 auto; }
"""

SCROLL_TO_TOP_JS = "() => { window.scrollTo({ top: 0, behavior: 'smooth' }); }"


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Layout, top to bottom: title, API-key panel, prompt row, loader / error /
    empty hint, two-column image grid, and the viewer shown over the grid
    when an image is clicked.

    Returns:
        Gradio Blocks app
    """
    locale = config.locale
    app = gr.Blocks(title=get_message("title", locale), css=CUSTOM_CSS)

    with app:
        # Session state - one instance per user, download files dropped with it
        ui_state = gr.State(UIState(), delete_callback=discard_downloads)
        loader_index = gr.State(0)

        gr.Markdown(f"# {get_message('title', locale)}", elem_id="wallpaper-title")
        gr.Markdown(get_message("subtitle", locale), elem_id="wallpaper-subtitle")

        key_panel = KeyPanelUI(locale)

        with gr.Row(equal_height=True):
            prompt_input = gr.Textbox(
                label=get_message("prompt_label", locale),
                placeholder=get_message("prompt_placeholder", locale),
                value=config.default_prompt,
                lines=2,
                scale=5,
            )
            generate_btn = gr.Button(get_message("generate", locale), variant="primary", scale=1)

        loader = gr.Markdown(value="", visible=False)
        loader_timer = gr.Timer(value=config.loader_interval, active=False)
        error_output = gr.Markdown(value="", visible=False)

        viewer = ViewerUI(locale)

        gallery = gr.Gallery(
            label=None,
            show_label=False,
            columns=2,
            object_fit="cover",
            allow_preview=False,
            height="auto",
        )
        empty_hint = gr.Markdown(value=render_empty_hint(locale))

        # API-key panel
        key_outputs = [*key_panel.get_output_components(), ui_state]
        app.load(fn=refresh_key_status, inputs=[ui_state], outputs=key_outputs)
        key_panel.save_btn.click(
            fn=save_api_key_handler,
            inputs=[key_panel.key_input, ui_state],
            outputs=key_outputs,
        )
        key_panel.key_input.submit(
            fn=save_api_key_handler,
            inputs=[key_panel.key_input, ui_state],
            outputs=key_outputs,
        )
        key_panel.test_btn.click(fn=test_api_key_handler, inputs=[ui_state], outputs=key_outputs)
        key_panel.clear_btn.click(fn=clear_api_key_handler, inputs=[ui_state], outputs=key_outputs)

        # Generation - one request at a time
        generation_outputs = [
            gallery,
            loader,
            error_output,
            empty_hint,
            prompt_input,
            generate_btn,
            loader_timer,
            loader_index,
            viewer.group,
            key_panel.status,
            key_panel.accordion,
            ui_state,
        ]
        generate_btn.click(
            fn=generate_wallpapers_handler,
            inputs=[prompt_input, ui_state],
            outputs=generation_outputs,
            concurrency_limit=1,
        )
        loader_timer.tick(
            fn=cycle_loader_message,
            inputs=[loader_index, ui_state],
            outputs=[loader, loader_index],
            show_progress="hidden",
        )

        # Viewer
        viewer_outputs = [*viewer.get_output_components(), ui_state]
        gallery.select(fn=select_image, inputs=[ui_state], outputs=viewer_outputs)
        viewer.close_btn.click(fn=close_viewer, inputs=[ui_state], outputs=viewer_outputs)
        viewer.remix_btn.click(
            fn=remix_image,
            inputs=[ui_state],
            outputs=[prompt_input, *viewer_outputs],
        ).then(fn=None, js=SCROLL_TO_TOP_JS)

    return app


def main():
    """Launch the Gradio UI on its own, without the REST API."""
    logger.info("Starting AI Wallpaper Generator UI...")
    logger.info(f"Configuration: {config.model_dump()}")
    remove_download_files(config.downloads_dir)

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.server_host}:{config.server_port}")

    app.launch(
        server_name=config.server_host,
        server_port=config.server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        allowed_paths=[str(config.downloads_dir.resolve())],
    )


if __name__ == "__main__":
    main()
