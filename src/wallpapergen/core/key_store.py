"""Local key-value storage for the manually entered API key.

Settings live in a single ``settings.json`` file inside the data directory.
The store is intentionally simple:

- reads are forgiving: a missing, empty, or corrupt file is an empty mapping
- writes replace the whole file
- clearing the API key removes only that entry and keeps any other settings
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

API_KEY_FIELD = "api_key"


def load_settings(settings_file: Path) -> dict:
    """Load the settings mapping from disk.

    Args:
        settings_file: Path to ``settings.json``.

    Returns:
        The stored mapping, or an empty dict if the file is missing or invalid.
    """
    if not settings_file.exists():
        return {}
    try:
        with open(settings_file, encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable settings file {settings_file}: {e}")
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def save_settings(settings_file: Path, settings: dict) -> None:
    """Persist the settings mapping to disk.

    Args:
        settings_file: Path to ``settings.json``.
        settings: JSON-serialisable mapping to persist.
    """
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    with open(settings_file, "w", encoding="utf-8") as handle:
        json.dump(settings, handle, indent=2)


def get_stored_api_key(settings_file: Path) -> str | None:
    """Return the stored API key, or None if nothing usable is stored."""
    value = load_settings(settings_file).get(API_KEY_FIELD)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def set_stored_api_key(settings_file: Path, api_key: str) -> None:
    """Store an API key.  A blank key clears the stored one instead."""
    api_key = (api_key or "").strip()
    if not api_key:
        clear_stored_api_key(settings_file)
        return
    settings = load_settings(settings_file)
    settings[API_KEY_FIELD] = api_key
    save_settings(settings_file, settings)
    logger.info("Stored API key")


def clear_stored_api_key(settings_file: Path) -> bool:
    """Remove the stored API key.

    Returns:
        True if a key was removed, False if none was stored.
    """
    settings = load_settings(settings_file)
    if API_KEY_FIELD not in settings:
        return False
    del settings[API_KEY_FIELD]
    save_settings(settings_file, settings)
    logger.info("Cleared stored API key")
    return True
