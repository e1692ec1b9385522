"""Tests for the Streamlit page while a generation job is queued."""

from __future__ import annotations

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from conftest import PROJECT_ROOT
from logo_animator import flow as flow_module
from logo_animator.config import AnimationRequest, AspectRatio, LogoImage
from logo_animator.credentials import STATUS_KEY, CredentialStatus
from logo_animator.flow import SUBMITTING_MESSAGE, STATE_KEY, FlowState, Step

APP_PATH = str(PROJECT_ROOT / "app.py")


@pytest.fixture
def stopped_video_client(monkeypatch) -> list:
    """Video client that reports progress, then stops the script run."""
    calls = []

    def fake_animate(request, api_key, on_progress=None, settings=None):
        calls.append(request)
        on_progress("Warming up the animation studio...")
        st.stop()

    monkeypatch.setattr(flow_module, "animate_logo", fake_animate)
    return calls


def test_controls_are_disabled_while_animation_runs(png_bytes, stopped_video_client):
    logo = LogoImage(png_bytes)
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state[STATUS_KEY] = CredentialStatus.PRESENT.value
    at.session_state[STATE_KEY] = FlowState(
        step=Step.ANIMATE_LOGO,
        logo=logo,
        is_loading=True,
        loading_message=SUBMITTING_MESSAGE,
        pending=AnimationRequest(image=logo, aspect_ratio=AspectRatio.PORTRAIT),
    )

    at.run()

    assert len(stopped_video_client) == 1
    assert stopped_video_client[0].aspect_ratio is AspectRatio.PORTRAIT

    labels = {button.label for button in at.button}
    assert {"🔑 Change API Key", "← Back", "🎞️ Animate Logo"} <= labels
    assert all(button.disabled for button in at.button)
    assert all(area.disabled for area in at.text_area)
    assert all(radio.disabled for radio in at.radio)
    assert at.session_state[STATE_KEY].is_loading is False


def test_controls_are_enabled_when_idle(png_bytes):
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state[STATUS_KEY] = CredentialStatus.PRESENT.value
    at.session_state[STATE_KEY] = FlowState(step=Step.ANIMATE_LOGO, logo=LogoImage(png_bytes))

    at.run()

    assert at.button
    assert not any(button.disabled for button in at.button)
