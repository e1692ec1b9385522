"""
Configuration, constants, and data models for Logo Animator AI.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .utils import get_logger

logger = get_logger("config")

# ---------- Models ----------
DEFAULT_IMAGEN_MODEL = "imagen-4.0-generate-001"
DEFAULT_VEO_MODEL = "veo-3.1-fast-generate-preview"

# ---------- Image Generation ----------
LOGO_PROMPT_TEMPLATE = (
    "A professional, clean, vector-style logo for a company. "
    "The logo should be centered on a solid white background. "
    "Description: {prompt}"
)
LOGO_MIME_TYPE = "image/png"
LOGO_ASPECT_RATIO = "1:1"

# ---------- Video Generation ----------
DEFAULT_ANIMATION_PROMPT = "An elegant and dynamic animation of this logo."
VIDEO_RESOLUTION = "720p"
VIDEO_MIME_TYPE = "video/mp4"

VEO_LOADING_MESSAGES = (
    "Warming up the animation studio...",
    "Casting your logo for the lead role...",
    "Our digital artists are sketching the first frames...",
    "Rendering the animation... this can take a minute.",
    "Adding the final touches and polish...",
    "Almost there, preparing for the premiere!",
)
FINALIZING_MESSAGE = "Finalizing your video..."
LOGO_LOADING_MESSAGE = "Generating your unique logo..."

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_MAX_POLL_ATTEMPTS = 120
DEFAULT_DOWNLOAD_TIMEOUT = 120.0

# Checked in order; the first non-empty value wins.
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_GENAI_API_KEY", "API_KEY")


class AspectRatio(str, Enum):
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"

    @property
    def label(self) -> str:
        return f"{self.value} ({'Landscape' if self is AspectRatio.LANDSCAPE else 'Portrait'})"


# ---------- Data Models ----------
@dataclass(frozen=True)
class LogoImage:
    """Image payload handed from logo generation (or an upload) to animation."""
    data: bytes
    mime_type: str = LOGO_MIME_TYPE


@dataclass(frozen=True)
class AnimationRequest:
    """One animation job as submitted from the UI."""
    image: LogoImage
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    prompt: Optional[str] = None

    @property
    def effective_prompt(self) -> str:
        text = (self.prompt or "").strip()
        return text or DEFAULT_ANIMATION_PROMPT


@dataclass(frozen=True)
class AnimatedVideo:
    """Downloaded video bytes, playable in-process via ``st.video``."""
    data: bytes
    mime_type: str = VIDEO_MIME_TYPE
    source_uri: str = field(default="", repr=False)


# ---------- Settings ----------
def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}; using {default}")
        return default
    if value < 0:
        logger.warning(f"Ignoring negative {name}={raw!r}; using {default}")
        return default
    return value


def get_env_api_key() -> Optional[str]:
    """Return the first API key found in the environment, if any."""
    for name in API_KEY_ENV_VARS:
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return None


@dataclass(frozen=True)
class Settings:
    imagen_model: str = DEFAULT_IMAGEN_MODEL
    veo_model: str = DEFAULT_VEO_MODEL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    # 0 disables the cap.
    max_poll_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            imagen_model=os.getenv("IMAGEN_MODEL", DEFAULT_IMAGEN_MODEL),
            veo_model=os.getenv("VEO_MODEL", DEFAULT_VEO_MODEL),
            poll_interval=_env_number("VEO_POLL_INTERVAL", DEFAULT_POLL_INTERVAL, float),
            max_poll_attempts=_env_number("VEO_MAX_POLL_ATTEMPTS", DEFAULT_MAX_POLL_ATTEMPTS, int),
            download_timeout=_env_number("VIDEO_DOWNLOAD_TIMEOUT", DEFAULT_DOWNLOAD_TIMEOUT, float),
        )
