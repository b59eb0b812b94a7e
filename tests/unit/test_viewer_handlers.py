"""Unit tests for the full-screen viewer handlers."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from PIL import Image

from wallpapergen.core.images import ImageResult
from wallpapergen.ui.handlers.viewer import (
    close_viewer,
    discard_downloads,
    remix_image,
    select_image,
)


@pytest.fixture
def patched_config(test_config):
    with patch("wallpapergen.ui.handlers.viewer.config", test_config):
        yield test_config


def _select(index):
    evt = Mock()
    evt.index = index
    return evt


class TestSelectImage:
    def test_opens_viewer(self, patched_config, ui_state, sample_images):
        ui_state.images = sample_images

        group, preview, download, state = select_image(_select(1), ui_state)

        assert group["visible"] is True
        assert isinstance(preview, Image.Image)
        assert state.selected_image is sample_images[1]

        path = Path(download["value"])
        assert path.exists()
        assert path.name == "ai_wallpaper_rainy_city_at_night.jpg"
        assert patched_config.downloads_dir in path.parents

    def test_list_index(self, patched_config, ui_state, sample_images):
        ui_state.images = sample_images
        _, _, _, state = select_image(_select([2, 0]), ui_state)
        assert state.selected_image is sample_images[2]

    def test_same_prompt_images_get_separate_files(self, patched_config, ui_state,
                                                   sample_images):
        ui_state.images = sample_images
        first = select_image(_select(0), ui_state)[2]["value"]
        second = select_image(_select(1), ui_state)[2]["value"]
        assert first != second

    def test_out_of_range(self, patched_config, ui_state, sample_images):
        ui_state.images = sample_images
        group, preview, _, state = select_image(_select(10), ui_state)
        assert group["visible"] is False
        assert preview is None
        assert state.selected_image is None

    def test_no_images(self, patched_config, ui_state):
        group, _, _, _ = select_image(_select(0), ui_state)
        assert group["visible"] is False

    def test_undecodable_image(self, patched_config, ui_state):
        ui_state.images = [ImageResult(id="1-0", url="not a data url", prompt="x")]
        group, _, _, state = select_image(_select(0), ui_state)
        assert group["visible"] is False
        assert state.selected_image is None


class TestCloseViewer:
    def test_clears_selection(self, ui_state, sample_images):
        ui_state.images = sample_images
        ui_state.selected_image = sample_images[0]

        group, preview, download, state = close_viewer(ui_state)

        assert group["visible"] is False
        assert preview is None
        assert download["value"] is None
        assert state.selected_image is None
        # closing never drops the grid
        assert state.images == sample_images


class TestRemixImage:
    def test_copies_prompt_and_closes(self, ui_state, sample_images):
        ui_state.images = sample_images
        ui_state.selected_image = sample_images[3]

        prompt, group, _, _, state = remix_image(ui_state)

        assert prompt["value"] == "Rainy city at night"
        assert group["visible"] is False
        assert state.selected_image is None
        assert state.images == sample_images

    def test_nothing_selected(self, ui_state):
        prompt, group, _, _, _ = remix_image(ui_state)
        assert "value" not in prompt
        assert group["visible"] is False


class TestDiscardDownloads:
    def test_removes_files_of_session_images(self, patched_config, ui_state, sample_images):
        ui_state.images = sample_images
        paths = [Path(select_image(_select(i), ui_state)[2]["value"]) for i in range(4)]

        discard_downloads(ui_state)

        assert not any(path.exists() for path in paths)

    def test_keeps_other_sessions_files(self, patched_config, ui_state, sample_images):
        other = ImageResult(id="1699999999999-0", url=sample_images[0].url, prompt="other")
        ui_state.images = [other]
        other_path = Path(select_image(_select(0), ui_state)[2]["value"])

        ui_state.images = sample_images
        select_image(_select(0), ui_state)
        discard_downloads(ui_state)

        assert other_path.exists()

    def test_no_state(self, patched_config):
        discard_downloads(None)
