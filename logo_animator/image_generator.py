"""
Image Generation Client - one logo image from one text prompt via Imagen.
"""

from __future__ import annotations
from typing import Optional

from google.genai import types as genai_types

from .config import (
    LOGO_ASPECT_RATIO,
    LOGO_MIME_TYPE,
    LOGO_PROMPT_TEMPLATE,
    LogoImage,
    Settings,
)
from .errors import GenerationFailed, InvalidInput, LogoAnimatorError, UnknownProviderError
from .gemini_client import get_genai_client, get_image_model_name
from .utils import get_logger

logger = get_logger("image_generator")


def build_logo_prompt(prompt: str) -> str:
    return LOGO_PROMPT_TEMPLATE.format(prompt=prompt.strip())


def generate_logo(
    prompt: str,
    api_key: Optional[str],
    settings: Optional[Settings] = None,
) -> LogoImage:
    """
    Generate a single square PNG logo.

    Args:
        prompt: User description of the logo (must be non-empty)
        api_key: Current key from the credential gate
        settings: Optional settings override (defaults to environment)

    Returns:
        LogoImage with the raw PNG bytes

    Raises:
        InvalidInput, AuthError, GenerationFailed, UnknownProviderError
    """
    if not prompt or not prompt.strip():
        raise InvalidInput("Please enter a description for your logo.")

    client = get_genai_client(api_key)
    model_name = get_image_model_name(settings)
    logger.info(f"Requesting logo from {model_name} ({len(prompt)} chars prompt)")

    try:
        response = client.models.generate_images(
            model=model_name,
            prompt=build_logo_prompt(prompt),
            config=genai_types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type=LOGO_MIME_TYPE,
                aspect_ratio=LOGO_ASPECT_RATIO,
            ),
        )
    except LogoAnimatorError:
        raise
    except Exception as exc:
        logger.error(f"Image generation request failed: {exc}")
        raise UnknownProviderError(str(exc)) from exc

    return _extract_logo(response)


def _extract_logo(response) -> LogoImage:
    """Validate the Imagen response and pull out the first image."""
    generated = getattr(response, "generated_images", None) or []
    if not generated:
        logger.warning("Image generation returned no images")
        raise GenerationFailed("Image generation failed to produce an image.")

    image = getattr(generated[0], "image", None)
    data = getattr(image, "image_bytes", None) if image is not None else None
    if not data:
        logger.warning("Image generation returned an empty image payload")
        raise GenerationFailed("Image generation failed to produce an image.")

    mime = getattr(image, "mime_type", None) or LOGO_MIME_TYPE
    logger.info(f"Logo generated ({len(data)} bytes, {mime})")
    return LogoImage(data=data, mime_type=mime)
