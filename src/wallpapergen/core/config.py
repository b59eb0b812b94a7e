"""Configuration management for the AI Wallpaper Generator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the WALLPAPERGEN_
prefix, allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (WALLPAPERGEN_* prefix)
2. .env file in the project root
3. Default values defined in WallpaperConfig

Example .env file:
    WALLPAPERGEN_IMAGE_MODEL=imagen-4.0-generate-001
    WALLPAPERGEN_ASPECT_RATIO=9:16
    WALLPAPERGEN_LOCALE=en
    GEMINI_API_KEY=AIza...

Host-Injected API Key
---------------------
The host environment may inject an API key.  ``api_key`` is read from
``WALLPAPERGEN_API_KEY`` first, then ``GEMINI_API_KEY``, then ``API_KEY``.
A key entered manually in the UI always takes precedence over this value
(see :mod:`wallpapergen.core.key_resolver`).

The key is stored as a ``SecretStr`` so that ``config.model_dump()`` (which
is logged at startup) never prints it in clear text.

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

Usage Example
-------------
    from wallpapergen.core.config import config

    print(config.image_model)
    print(config.number_of_images)
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class WallpaperConfig(BaseSettings):
    """Main configuration for the AI Wallpaper Generator.

    Attributes
    ----------
    API Settings:
        api_key : SecretStr | None
            Host-injected Gemini API key (fallback when no key is stored)
        image_model : str
            Imagen model used for wallpaper generation
        probe_model : str
            Text model used for the API-key liveness probe
        probe_contents : str
            Text sent by the liveness probe

    Generation Settings:
        number_of_images : int
            Images requested per generation (1-4)
        output_mime_type : Literal["image/jpeg", "image/png"]
            Encoding of the returned images
        aspect_ratio : Literal["1:1", "3:4", "4:3", "9:16", "16:9"]
            Aspect ratio of the returned images
        prompt_suffix : str
            Style text appended to every prompt
        default_prompt : str
            Prompt shown when the page first loads

    Paths:
        data_dir : Path
            Directory holding ``settings.json`` (persisted API key)
        downloads_dir : Path
            Directory for files handed to the download button

    UI Settings:
        locale : Literal["ko", "en"]
            Language of user-facing messages
        loader_interval : float
            Seconds between loader message rotations
        server_host : str
            Server bind address
        server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WALLPAPERGEN_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # API settings
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", "WALLPAPERGEN_API_KEY", "GEMINI_API_KEY", "API_KEY"),
        description="Host-injected API key used when no key has been stored",
    )
    image_model: str = Field(
        default="imagen-4.0-generate-001",
        description="Imagen model ID for wallpaper generation",
    )
    probe_model: str = Field(
        default="gemini-2.5-flash",
        description="Text model ID used to check that an API key works",
    )
    probe_contents: str = Field(default="hello")

    # Generation settings
    number_of_images: int = Field(default=4, ge=1, le=4)
    output_mime_type: Literal["image/jpeg", "image/png"] = Field(default="image/jpeg")
    aspect_ratio: Literal["1:1", "3:4", "4:3", "9:16", "16:9"] = Field(default="9:16")
    prompt_suffix: str = Field(
        default="phone wallpaper, vertical, high detail, cinematic lighting",
        description="Style modifiers appended to the user prompt",
    )
    default_prompt: str = Field(default="비오는 서정적인 도시 풍경")

    # Paths
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory for persisted settings",
    )
    downloads_dir: Path = Field(
        default=Path("outputs/downloads"),
        description="Directory for files prepared for download",
    )

    # UI settings
    locale: Literal["ko", "en"] = Field(default="ko")
    loader_interval: float = Field(default=2.5, gt=0)
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(default=7860, ge=1024, le=65535)
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create required directories."""
        super().__init__(**kwargs)

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.downloads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def settings_file(self) -> Path:
        """Path of the JSON file that stores the manually entered API key."""
        return self.data_dir / "settings.json"

    @property
    def host_api_key(self) -> str | None:
        """Plain-text host key, or None when the host injected nothing."""
        if self.api_key is None:
            return None
        return self.api_key.get_secret_value() or None


# Global configuration instance
# Loads values from environment variables (WALLPAPERGEN_* prefix) and .env file.
config = WallpaperConfig()
