"""Validation utilities for wallpaper generator UI inputs."""

import logging

from .messages import get_message

logger = logging.getLogger(__name__)

MAX_PROMPT_LENGTH = 2000


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_prompt(prompt: str | None, max_length: int = MAX_PROMPT_LENGTH) -> str:
    """Validate the prompt text and return it stripped.

    Args:
        prompt: Prompt text from the UI
        max_length: Maximum allowed prompt length in characters

    Returns:
        The stripped prompt

    Raises:
        ValidationError: If the prompt is empty or too long
    """
    prompt = (prompt or "").strip()
    if not prompt:
        raise ValidationError(get_message("empty_prompt"))
    if len(prompt) > max_length:
        raise ValidationError(
            get_message("prompt_too_long", length=len(prompt), max_length=max_length)
        )
    return prompt


def validate_api_key_input(api_key: str | None) -> str:
    """Validate a manually entered API key and return it stripped.

    Raises:
        ValidationError: If the key is blank or contains whitespace
    """
    api_key = (api_key or "").strip()
    if not api_key:
        raise ValidationError(get_message("key_empty"))
    if any(ch.isspace() for ch in api_key):
        logger.warning("Rejected API key containing whitespace")
        raise ValidationError(get_message("invalid_key"))
    return api_key
