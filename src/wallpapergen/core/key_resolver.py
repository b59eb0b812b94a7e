"""API-key acquisition, validation, and fallback.

:class:`ApiKeyManager` decides which key a request should use:

1. a key the user entered manually and that was stored locally
2. otherwise the key injected by the host environment
3. otherwise no key at all

A manually entered key is only stored after a probe call succeeds.  When a
request later fails because the key was rejected, the stored key is cleared so
the user is asked for a new one; the host key cannot be cleared and simply
keeps being reported as the active source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from wallpapergen.core import gemini_service
from wallpapergen.core.config import WallpaperConfig, config
from wallpapergen.core.key_store import (
    clear_stored_api_key,
    get_stored_api_key,
    set_stored_api_key,
)

logger = logging.getLogger(__name__)

KeySource = Literal["stored", "host", "none"]


def mask_api_key(api_key: str | None) -> str:
    """Hide most of an API key for display (``AIza…abcd``)."""
    if not api_key:
        return ""
    if len(api_key) <= 8:
        return "•" * len(api_key)
    return f"{api_key[:4]}…{api_key[-4:]}"


@dataclass(frozen=True)
class ApiKeyStatus:
    """Which key is active and how to show it."""

    source: KeySource
    masked: str = ""

    @property
    def has_key(self) -> bool:
        return self.source != "none"

    def to_dict(self) -> dict:
        return {"source": self.source, "has_key": self.has_key, "masked": self.masked}


class ApiKeyManager:
    """Resolve, validate, persist, and reset the API key.

    Attributes:
        settings_file: JSON file holding the stored key.
        host_key: Key injected by the host environment, if any.
    """

    def __init__(self, settings_file: Path, host_key: str | None = None,
                 settings: WallpaperConfig | None = None):
        self.settings_file = settings_file
        self.host_key = host_key or None
        self._settings = settings

    @classmethod
    def from_config(cls, settings: WallpaperConfig | None = None) -> "ApiKeyManager":
        settings = settings or config
        return cls(settings.settings_file, settings.host_api_key, settings=settings)

    def resolve(self) -> tuple[str | None, KeySource]:
        """Return the key to use and where it came from."""
        stored = get_stored_api_key(self.settings_file)
        if stored:
            return stored, "stored"
        if self.host_key:
            return self.host_key, "host"
        return None, "none"

    def status(self) -> ApiKeyStatus:
        key, source = self.resolve()
        return ApiKeyStatus(source=source, masked=mask_api_key(key))

    def save_and_validate(self, api_key: str) -> ApiKeyStatus:
        """Probe a manually entered key and store it if it works.

        Raises:
            ValueError: If the key is blank.
            Exception: The SDK error from the probe; nothing is stored.
        """
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError("API key must not be empty")

        gemini_service.test_api_key(api_key, settings=self._settings)
        set_stored_api_key(self.settings_file, api_key)
        logger.info("Manual API key validated and stored")
        return self.status()

    def validate_current(self) -> ApiKeyStatus:
        """Probe the currently resolved key.

        If the probe rejects a stored key, the stored key is cleared before
        the error is re-raised.

        Raises:
            gemini_service.ApiKeyNotFoundError: If no key is available.
            Exception: The SDK error from the probe.
        """
        key, source = self.resolve()
        if source == "none":
            raise gemini_service.ApiKeyNotFoundError()
        try:
            gemini_service.test_api_key(key, settings=self._settings)
        except Exception as e:
            self.handle_failure(e, key)
            raise
        return self.status()

    def handle_failure(self, error: BaseException, failed_key: str | None = None) -> bool:
        """React to a failed API call.

        Args:
            error: The error raised by the call.
            failed_key: The key the call was made with.  When given, the
                stored key is only cleared if it is still that key, so a key
                saved while the call was running survives.

        Returns:
            True if the error means the key is invalid (the stored key, if
            any, has been cleared), False for any other error.
        """
        if not gemini_service.is_invalid_key_error(error):
            return False
        if failed_key is not None and get_stored_api_key(self.settings_file) != failed_key:
            logger.info("Rejected key is no longer the stored key; keeping the stored key")
            return True
        if clear_stored_api_key(self.settings_file):
            logger.warning("Stored API key was rejected and has been cleared")
        return True

    def clear(self) -> bool:
        """Forget the stored key.  Returns True if one was removed."""
        return clear_stored_api_key(self.settings_file)
