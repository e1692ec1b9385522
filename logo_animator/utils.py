"""
Utility functions for Logo Animator AI.
"""

from __future__ import annotations
import io
import logging
import os
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Return a package logger with a single stream handler attached.

    Args:
        name: Short module name (e.g. "video_animator")

    Returns:
        logging.Logger named ``logo_animator.<name>``
    """
    root = logging.getLogger("logo_animator")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
        root.propagate = False
    return root.getChild(name)


def load_image_bytes(file) -> Tuple[bytes, str]:
    """
    Load and convert uploaded file to PNG bytes.

    Args:
        file: Streamlit UploadedFile object (or any binary file-like)

    Returns:
        Tuple of (image_bytes, mime_type)
    """
    image = Image.open(file).convert("RGB")
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue(), "image/png"


def sniff_image_mime(data: bytes) -> Optional[str]:
    """Detect an image mime type from its bytes, or None if Pillow can't read it."""
    if not data:
        return None
    try:
        with Image.open(io.BytesIO(data)) as image:
            fmt = image.format
    except (UnidentifiedImageError, OSError):
        return None
    return Image.MIME.get(fmt) if fmt else None


def resolve_image_mime(data: bytes, declared: Optional[str]) -> Optional[str]:
    """Prefer a declared ``image/*`` type; otherwise sniff the bytes."""
    if declared and declared.lower().startswith("image/") and len(declared) > len("image/"):
        return declared.lower()
    return sniff_image_mime(data)
