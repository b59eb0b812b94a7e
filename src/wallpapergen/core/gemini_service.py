"""Gemini API access for wallpaper generation and API-key checks.

This module is the only place that talks to the ``google-genai`` SDK.  It
offers three operations:

- :func:`get_client` builds a :class:`genai.Client`, preferring a key passed
  by the caller and falling back to the key injected by the host environment.
- :func:`test_api_key` runs a tiny text generation to check that a key works.
- :func:`generate_wallpapers` asks Imagen for a batch of vertical wallpapers
  and returns them as ``data:`` URLs.

SDK errors are logged and re-raised unchanged so that the caller (a Gradio
handler or a FastAPI route) decides how to present them.
:func:`is_invalid_key_error` tells the caller whether a failure means the key
itself is bad, in which case the stored key should be forgotten.

Usage
-----
::

    from wallpapergen.core.gemini_service import generate_wallpapers

    urls = generate_wallpapers("a forest under a starry sky", api_key="AIza...")
"""

from __future__ import annotations

import logging

from google import genai
from google.genai import types

from wallpapergen.core.config import WallpaperConfig, config
from wallpapergen.core.images import to_data_url

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "API key not found. Please provide a key manually or select one via AI Studio."
)

# Substrings of SDK error messages that mean the key itself was rejected.
INVALID_KEY_MARKERS = (
    "api key not valid",
    "api_key_invalid",
    "requested entity was not found",
    "api key not found",
    "permission_denied",
)


class ApiKeyNotFoundError(RuntimeError):
    """Raised when neither a manual key nor a host key is available."""

    def __init__(self, message: str = MISSING_KEY_MESSAGE):
        super().__init__(message)


def get_client(
    api_key: str | None = None,
    *,
    settings: WallpaperConfig | None = None,
) -> genai.Client:
    """Create a Gemini client.

    A manually provided key wins; otherwise the host-injected key from the
    configuration is used.

    Args:
        api_key: Optional, manually provided API key.
        settings: Configuration to read the host key from (defaults to the
            global ``config``).

    Returns:
        A configured :class:`genai.Client`.

    Raises:
        ApiKeyNotFoundError: If no key can be found.
    """
    settings = settings or config
    key_to_use = (api_key or "").strip() or settings.host_api_key
    if not key_to_use:
        raise ApiKeyNotFoundError()
    return genai.Client(api_key=key_to_use)


def test_api_key(api_key: str | None = None, *, settings: WallpaperConfig | None = None) -> bool:
    """Check that an API key works by making a lightweight call.

    Args:
        api_key: The key to test.  If omitted, the host key is used.
        settings: Configuration override (defaults to the global ``config``).

    Returns:
        ``True`` when the probe succeeds.

    Raises:
        Exception: Whatever the SDK raised; the original error is kept so
            the UI can inspect its message.
    """
    settings = settings or config
    try:
        client = get_client(api_key, settings=settings)
        client.models.generate_content(
            model=settings.probe_model,
            contents=settings.probe_contents,
        )
        return True
    except Exception as e:
        logger.error(f"API key test failed: {e}")
        raise


def build_generation_prompt(prompt: str, *, settings: WallpaperConfig | None = None) -> str:
    """Append the configured style suffix to a user prompt."""
    settings = settings or config
    prompt = prompt.strip()
    suffix = settings.prompt_suffix.strip()
    if not suffix:
        return prompt
    return f"{prompt}, {suffix}"


def generate_wallpapers(
    prompt: str,
    api_key: str | None = None,
    *,
    settings: WallpaperConfig | None = None,
) -> list[str]:
    """Generate a batch of wallpapers for a prompt.

    Args:
        prompt: The user's creative prompt.
        api_key: Key for the request.  If omitted, the host key is used.
        settings: Configuration override (defaults to the global ``config``).

    Returns:
        Data URLs of the generated images, or an empty list when the API
        returned none.

    Raises:
        ApiKeyNotFoundError: If no key is available.
        Exception: Any SDK error, re-raised unchanged.
    """
    settings = settings or config
    client = get_client(api_key, settings=settings)

    try:
        response = client.models.generate_images(
            model=settings.image_model,
            prompt=build_generation_prompt(prompt, settings=settings),
            config=types.GenerateImagesConfig(
                number_of_images=settings.number_of_images,
                output_mime_type=settings.output_mime_type,
                aspect_ratio=settings.aspect_ratio,
            ),
        )
    except Exception as e:
        logger.error(f"Error generating images: {e}")
        raise

    generated = getattr(response, "generated_images", None) or []
    urls: list[str] = []
    for generated_image in generated:
        image = getattr(generated_image, "image", None)
        image_bytes = getattr(image, "image_bytes", None)
        if not image_bytes:
            logger.warning("Skipping generated image without bytes")
            continue
        mime_type = getattr(image, "mime_type", None) or settings.output_mime_type
        urls.append(to_data_url(image_bytes, mime_type))

    logger.info(f"Generated {len(urls)} image(s) with {settings.image_model}")
    return urls


def is_invalid_key_error(error: BaseException) -> bool:
    """Tell whether an error means the API key was rejected or missing."""
    if isinstance(error, ApiKeyNotFoundError):
        return True
    message = str(error).lower()
    return any(marker in message for marker in INVALID_KEY_MARKERS)
