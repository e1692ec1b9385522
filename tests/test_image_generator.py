"""Tests for the Imagen logo client."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from conftest import FakeClient, FakeModels
from logo_animator import image_generator
from logo_animator.config import Settings
from logo_animator.errors import AuthError, GenerationFailed, InvalidInput, UnknownProviderError


def _install(monkeypatch: pytest.MonkeyPatch, client: FakeClient) -> list:
    seen_keys = []

    def fake_client(api_key):
        seen_keys.append(api_key)
        if not api_key:
            raise AuthError("API key has not been selected.")
        return client

    monkeypatch.setattr(image_generator, "get_genai_client", fake_client)
    return seen_keys


def test_generate_logo_wraps_prompt_in_style_template(monkeypatch, png_bytes):
    image = SimpleNamespace(image=SimpleNamespace(image_bytes=png_bytes, mime_type="image/png"))
    client = FakeClient(FakeModels(images=[image]))
    keys = _install(monkeypatch, client)

    logo = image_generator.generate_logo("A minimalist leaf logo", "key-1", settings=Settings())

    assert logo.data == png_bytes
    assert logo.mime_type == "image/png"
    assert keys == ["key-1"]
    assert len(client.models.image_calls) == 1
    call = client.models.image_calls[0]
    assert "A minimalist leaf logo" in call["prompt"]
    assert "white background" in call["prompt"]
    assert call["model"] == Settings().imagen_model
    assert call["config"].number_of_images == 1
    assert call["config"].output_mime_type == "image/png"
    assert call["config"].aspect_ratio == "1:1"


@pytest.mark.parametrize("images", [None, []])
def test_generate_logo_raises_when_no_images(monkeypatch, images):
    _install(monkeypatch, FakeClient(FakeModels(images=images)))

    with pytest.raises(GenerationFailed):
        image_generator.generate_logo("leaf", "key", settings=Settings())


def test_generate_logo_raises_on_empty_payload(monkeypatch):
    image = SimpleNamespace(image=SimpleNamespace(image_bytes=b"", mime_type="image/png"))
    _install(monkeypatch, FakeClient(FakeModels(images=[image])))

    with pytest.raises(GenerationFailed):
        image_generator.generate_logo("leaf", "key", settings=Settings())


def test_generate_logo_wraps_provider_errors(monkeypatch):
    _install(monkeypatch, FakeClient(FakeModels(error=RuntimeError("quota exceeded"))))

    with pytest.raises(UnknownProviderError, match="quota exceeded"):
        image_generator.generate_logo("leaf", "key", settings=Settings())


def test_generate_logo_requires_key(monkeypatch):
    client = FakeClient(FakeModels(images=[]))
    _install(monkeypatch, client)

    with pytest.raises(AuthError):
        image_generator.generate_logo("leaf", None, settings=Settings())
    assert client.models.image_calls == []


def test_generate_logo_rejects_blank_prompt(monkeypatch):
    client = FakeClient()
    keys = _install(monkeypatch, client)

    with pytest.raises(InvalidInput):
        image_generator.generate_logo("   ", "key", settings=Settings())
    assert keys == []


def test_real_client_factory_rejects_missing_key():
    from logo_animator.gemini_client import get_genai_client

    with pytest.raises(AuthError):
        get_genai_client("")
