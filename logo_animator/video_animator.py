"""
Video Generation Client - submit a Veo job, poll it to completion, download the video.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests
from google.genai import types as genai_types

from .config import (
    FINALIZING_MESSAGE,
    VEO_LOADING_MESSAGES,
    VIDEO_MIME_TYPE,
    VIDEO_RESOLUTION,
    AnimatedVideo,
    AnimationRequest,
    Settings,
)
from .errors import (
    DownloadFailed,
    GenerationFailed,
    InvalidInput,
    LogoAnimatorError,
    PollTimeout,
    ResultMissing,
    UnknownProviderError,
)
from .gemini_client import get_genai_client, get_video_model_name
from .utils import get_logger, resolve_image_mime

logger = get_logger("video_animator")

ProgressCallback = Callable[[str], None]


@dataclass(frozen=True)
class VideoOperation:
    """Typed view of a Veo long-running operation."""
    handle: str
    done: bool
    video_uri: Optional[str] = None
    error: Optional[str] = None
    raw: Any = None

    @classmethod
    def from_sdk(cls, operation) -> "VideoOperation":
        response = getattr(operation, "response", None)
        videos = getattr(response, "generated_videos", None) or []
        uri = None
        if videos:
            video = getattr(videos[0], "video", None)
            uri = getattr(video, "uri", None) if video is not None else None

        error = getattr(operation, "error", None)
        if isinstance(error, dict):
            error = error.get("message") or str(error)
        return cls(
            handle=getattr(operation, "name", None) or "",
            done=bool(getattr(operation, "done", False)),
            video_uri=uri or None,
            error=str(error) if error else None,
            raw=operation,
        )


def _noop(_message: str) -> None:
    pass


def animate_logo(
    request: AnimationRequest,
    api_key: Optional[str],
    on_progress: Optional[ProgressCallback] = None,
    settings: Optional[Settings] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> AnimatedVideo:
    """
    Animate a logo image into a short video.

    Progress phrases are reported through ``on_progress``: the first one right
    after the job is submitted, then one per poll, then the finalizing phrase.

    Raises:
        AuthError, InvalidInput, UnknownProviderError, GenerationFailed,
        PollTimeout, ResultMissing, DownloadFailed
    """
    settings = settings or Settings.from_env()
    report = on_progress or _noop

    client = get_genai_client(api_key)

    mime = resolve_image_mime(request.image.data, request.image.mime_type)
    if not mime:
        raise InvalidInput("Invalid image format: could not determine the image type.")

    model_name = get_video_model_name(settings)
    logger.info(f"Submitting animation job to {model_name} (aspect_ratio={request.aspect_ratio.value})")

    operation = _call_provider(
        lambda: client.models.generate_videos(
            model=model_name,
            prompt=request.effective_prompt,
            image=genai_types.Image(image_bytes=request.image.data, mime_type=mime),
            config=genai_types.GenerateVideosConfig(
                number_of_videos=1,
                resolution=VIDEO_RESOLUTION,
                aspect_ratio=request.aspect_ratio.value,
            ),
        )
    )
    operation = _poll_until_done(client, operation, report, settings, sleep)

    report(FINALIZING_MESSAGE)
    if operation.error:
        logger.error(f"Video operation {operation.handle} failed: {operation.error}")
        raise GenerationFailed(f"Video generation failed: {operation.error}")
    if not operation.video_uri:
        logger.error(f"Video operation {operation.handle} finished without a result")
        raise ResultMissing("Video generation completed, but no download link was found.")

    return _download_video(operation.video_uri, api_key, settings.download_timeout)


def _call_provider(call) -> VideoOperation:
    try:
        return VideoOperation.from_sdk(call())
    except LogoAnimatorError:
        raise
    except Exception as exc:
        logger.error(f"Video provider call failed: {exc}")
        raise UnknownProviderError(str(exc)) from exc


def _poll_until_done(
    client,
    operation: VideoOperation,
    report: ProgressCallback,
    settings: Settings,
    sleep: Callable[[float], None],
) -> VideoOperation:
    """Poll at a fixed interval until the server reports ``done``."""
    message_index = 0
    report(VEO_LOADING_MESSAGES[message_index])

    attempts = 0
    while not operation.done:
        if settings.max_poll_attempts and attempts >= settings.max_poll_attempts:
            waited = int(attempts * settings.poll_interval)
            logger.error(f"Video operation {operation.handle} still running after {attempts} polls")
            raise PollTimeout(
                f"Video generation timed out after {waited}s. Please try again later."
            )
        sleep(settings.poll_interval)
        attempts += 1
        message_index = (message_index + 1) % len(VEO_LOADING_MESSAGES)
        report(VEO_LOADING_MESSAGES[message_index])
        raw = operation.raw
        operation = _call_provider(lambda: client.operations.get(raw))
        logger.info(f"Poll {attempts} for {operation.handle}: done={operation.done}")

    return operation


def _download_video(uri: str, api_key: Optional[str], timeout: float) -> AnimatedVideo:
    """Fetch the signed video URI, passing the key as a query parameter."""
    try:
        resp = requests.get(uri, params={"key": api_key}, timeout=timeout)
    except requests.exceptions.RequestException as exc:
        logger.error(f"Video download failed: {exc}")
        raise DownloadFailed(f"Failed to download video: {exc}") from exc

    if not resp.ok:
        logger.error(f"Video download returned HTTP {resp.status_code}")
        raise DownloadFailed(f"Failed to download video: {resp.status_code} {resp.reason}")

    content_type = resp.headers.get("content-type", "").split(";")[0].strip()
    mime = content_type if content_type.startswith("video/") else VIDEO_MIME_TYPE
    logger.info(f"Video downloaded ({len(resp.content)} bytes)")
    return AnimatedVideo(data=resp.content, mime_type=mime, source_uri=uri)
