"""
Gemini API client initialization and configuration.
"""

from __future__ import annotations
from typing import Optional

from google import genai

from .config import Settings
from .errors import AuthError


def get_genai_client(api_key: Optional[str]) -> "genai.Client":
    """
    Build a fresh Gemini API client for one call.

    A new client is created per call so that a key rotated through the
    credential dialog is picked up immediately.

    Args:
        api_key: Key read from the credential gate at call time

    Returns:
        genai.Client instance

    Raises:
        AuthError: if no key is available
    """
    if not api_key:
        raise AuthError("API key has not been selected. Please select an API key and try again.")
    return genai.Client(api_key=api_key)


def get_image_model_name(settings: Optional[Settings] = None) -> str:
    return (settings or Settings.from_env()).imagen_model


def get_video_model_name(settings: Optional[Settings] = None) -> str:
    return (settings or Settings.from_env()).veo_model
