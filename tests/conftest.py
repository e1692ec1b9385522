"""Shared fakes for the Gemini client used across the tests."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, List

import pytest
from PIL import Image

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def make_png(size: int = 8) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (size, size), "white").save(buf, format="PNG")
    return buf.getvalue()


def make_operation(name: str = "operations/abc", done: bool = False, uri: str = None, error=None):
    videos = [SimpleNamespace(video=SimpleNamespace(uri=uri))] if uri else []
    response = SimpleNamespace(generated_videos=videos) if done else None
    return SimpleNamespace(name=name, done=done, response=response, error=error)


class FakeModels:
    def __init__(self, images: List[Any] = None, operation=None, error: Exception = None):
        self.images = images
        self.operation = operation
        self.error = error
        self.image_calls: List[dict] = []
        self.video_calls: List[dict] = []

    def generate_images(self, **kwargs):
        self.image_calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(generated_images=self.images)

    def generate_videos(self, **kwargs):
        self.video_calls.append(kwargs)
        if self.error:
            raise self.error
        return self.operation


class FakeOperations:
    """Returns the queued operations one per ``get`` call."""

    def __init__(self, responses: List[Any] = None):
        self.responses = list(responses or [])
        self.calls: List[Any] = []

    def get(self, operation):
        self.calls.append(operation)
        return self.responses.pop(0)


class FakeClient:
    def __init__(self, models: FakeModels = None, operations: FakeOperations = None):
        self.models = models or FakeModels()
        self.operations = operations or FakeOperations()


class DummyResponse:
    """Simple stand-in for ``requests.Response``."""

    def __init__(self, content: bytes = b"", status_code: int = 200, headers=None, reason: str = "OK"):
        self.content = content
        self.status_code = status_code
        self.headers = headers or {"content-type": "video/mp4"}
        self.reason = reason

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GEMINI_API_KEY", "GOOGLE_GENAI_API_KEY", "API_KEY", "VEO_MAX_POLL_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)
