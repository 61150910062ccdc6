"""Gemini client factory."""

import os

from google import genai

from relay.core.config import GeminiConfig
from relay.core.errors import MISSING_KEY_MESSAGE, ApiKeyError


def resolve_api_key(config: GeminiConfig) -> str:
    """
    Find the API key, preferring an explicit value over the environment.

    Args:
        config: Gemini configuration.

    Returns:
        The API key.

    Raises:
        ApiKeyError: If no key is configured.
    """
    key = config.api_key or os.environ.get(config.api_key_env, "")
    key = key.strip()
    if not key:
        raise ApiKeyError(MISSING_KEY_MESSAGE)
    return key


def create_client(config: GeminiConfig) -> genai.Client:
    """
    Factory function to create the Gemini client.

    Args:
        config: Gemini configuration.

    Returns:
        Configured genai.Client.
    """
    return genai.Client(api_key=resolve_api_key(config))
