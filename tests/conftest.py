"""Shared pytest fixtures for wallpaper generator tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock

import pytest
from PIL import Image

from wallpapergen.core.config import WallpaperConfig
from wallpapergen.core.images import ImageResult, to_data_url
from wallpapergen.core.key_resolver import ApiKeyManager
from wallpapergen.ui.models import UIState

HOST_KEY_ENV_VARS = ("WALLPAPERGEN_API_KEY", "GEMINI_API_KEY", "API_KEY")


@pytest.fixture(autouse=True)
def clean_key_env(monkeypatch):
    """Make sure no real API key from the developer's shell leaks into tests."""
    for name in HOST_KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> WallpaperConfig:
    """Create a test configuration with temporary directories and no host key."""
    return WallpaperConfig(
        data_dir=temp_dir / "data",
        downloads_dir=temp_dir / "downloads",
        locale="en",
        _env_file=None,
    )


@pytest.fixture
def settings_file(temp_dir: Path) -> Path:
    return temp_dir / "data" / "settings.json"


@pytest.fixture
def key_manager(settings_file: Path, test_config: WallpaperConfig) -> ApiKeyManager:
    """Key manager with an empty store and no host key."""
    return ApiKeyManager(settings_file, host_key=None, settings=test_config)


def _jpeg_bytes(color=(128, 64, 200), size=(9, 16)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=color).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A tiny 9x16 JPEG."""
    return _jpeg_bytes()


@pytest.fixture
def jpeg_data_url(jpeg_bytes: bytes) -> str:
    return to_data_url(jpeg_bytes, "image/jpeg")


@pytest.fixture
def sample_images(jpeg_data_url: str) -> list[ImageResult]:
    """Four results as produced by one generation."""
    return [
        ImageResult(id=f"1700000000000-{i}", url=jpeg_data_url, prompt="Rainy city at night")
        for i in range(4)
    ]


@pytest.fixture
def ui_state() -> UIState:
    """Create empty UI state for testing."""
    return UIState()


@pytest.fixture
def make_images_response():
    """Build a fake ``generate_images`` response with *count* JPEG images."""

    def _make(count: int = 4, mime_type: str | None = "image/jpeg"):
        response = MagicMock()
        generated = []
        for i in range(count):
            item = MagicMock()
            item.image.image_bytes = _jpeg_bytes(color=(i * 40, 10, 10))
            item.image.mime_type = mime_type
            generated.append(item)
        response.generated_images = generated
        return response

    return _make
