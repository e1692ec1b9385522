"""
Application Flow Controller - the two-step logo -> animation state machine.

All shared UI state lives in a single ``FlowState`` kept in a mutable mapping
(``st.session_state`` in the app). Every transition goes through a method on
``FlowController``; views only read the state.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, MutableMapping, Optional, Union

from .config import (
    LOGO_LOADING_MESSAGE,
    AnimatedVideo,
    AnimationRequest,
    AspectRatio,
    LogoImage,
    Settings,
)
from .credentials import CredentialGate
from .errors import AuthError, InvalidInput, LogoAnimatorError, is_credential_not_found
from .image_generator import generate_logo
from .utils import get_logger
from .video_animator import animate_logo

logger = get_logger("flow")

STATE_KEY = "flow_state"
KEY_NOT_FOUND_MESSAGE = "Your API key was not found. Please select a valid key and try again."
EMPTY_PROMPT_MESSAGE = "Please enter a description for your logo."
SUBMITTING_MESSAGE = "Submitting your animation..."
INTERRUPTED_MESSAGE = "The request was interrupted before it finished. Please try again."


class Step(str, Enum):
    GENERATE_LOGO = "generate_logo"
    ANIMATE_LOGO = "animate_logo"
    RESULT = "result"


@dataclass(frozen=True)
class LogoJob:
    prompt: str


@dataclass
class FlowState:
    step: Step = Step.GENERATE_LOGO
    logo: Optional[LogoImage] = None
    video: Optional[AnimatedVideo] = None
    is_loading: bool = False
    loading_message: str = ""
    error: Optional[str] = None
    # LogoJob or AnimationRequest waiting for the next run
    pending: Union[LogoJob, AnimationRequest, None] = None


class FlowController:
    """
    Drives ``FlowState`` through its transitions.

    Generation is split in two: ``submit_*`` validates input, queues the job
    and raises the loading flag; ``run_pending`` performs the call. Streamlit
    reruns in between so every control is drawn disabled before the call
    starts. ``generate_logo``/``animate`` do both in one go.
    """

    def __init__(
        self,
        store: MutableMapping,
        gate: CredentialGate,
        settings: Optional[Settings] = None,
        image_client: Optional[Callable] = None,
        video_client: Optional[Callable] = None,
    ):
        self._store = store
        self.gate = gate
        self.settings = settings or Settings.from_env()
        self._image_client = image_client or generate_logo
        self._video_client = video_client or animate_logo

    @property
    def state(self) -> FlowState:
        if STATE_KEY not in self._store:
            self._store[STATE_KEY] = FlowState()
        return self._store[STATE_KEY]

    @property
    def is_busy(self) -> bool:
        """True while input must stay locked."""
        return self.state.is_loading

    # ---------- Loading / errors ----------
    def _lock(self, job, message: str) -> None:
        state = self.state
        state.pending = job
        state.is_loading = True
        state.loading_message = message

    @contextmanager
    def _loading(self, message: str):
        state = self.state
        state.is_loading = True
        state.loading_message = message
        finished = False
        try:
            yield state
            finished = True
        finally:
            state.is_loading = False
            state.loading_message = ""
            if not finished and state.error is None:
                # Overwritten by _fail for ordinary exceptions.
                state.error = INTERRUPTED_MESSAGE

    def _fail(self, exc: Exception, fallback: str) -> None:
        state = self.state
        if is_credential_not_found(exc):
            logger.warning("Provider reported the API key as not found; resetting credential gate")
            state.error = KEY_NOT_FOUND_MESSAGE
            self.gate.reset_credential()
        elif isinstance(exc, AuthError):
            logger.warning(f"Authentication failed: {exc}")
            state.error = str(exc)
            self.gate.reset_credential()
        elif isinstance(exc, LogoAnimatorError):
            logger.warning(f"{type(exc).__name__}: {exc}")
            state.error = str(exc) or fallback
        else:
            logger.exception("Unexpected failure")
            state.error = str(exc) or fallback

    def set_error(self, message: Optional[str]) -> None:
        self.state.error = message

    def clear_error(self) -> None:
        self.state.error = None

    # ---------- Submission ----------
    def submit_logo(self, prompt: str) -> bool:
        """Validate and queue a logo request. Returns True when queued."""
        state = self.state
        if state.is_loading:
            return False
        state.error = None
        if not prompt or not prompt.strip():
            state.error = EMPTY_PROMPT_MESSAGE
            return False
        self._lock(LogoJob(prompt), LOGO_LOADING_MESSAGE)
        return True

    def submit_animation(self, prompt: Optional[str], aspect_ratio) -> bool:
        """Validate and queue an animation request. Returns True when queued."""
        state = self.state
        if state.is_loading:
            return False
        state.error = None
        if state.step is not Step.ANIMATE_LOGO or state.logo is None:
            self._fail(InvalidInput("Confirm a logo before animating it."), "")
            return False
        try:
            ratio = AspectRatio(aspect_ratio)
        except ValueError:
            self._fail(InvalidInput(f"Unsupported aspect ratio: {aspect_ratio}"), "")
            return False

        self._lock(AnimationRequest(image=state.logo, aspect_ratio=ratio, prompt=prompt), SUBMITTING_MESSAGE)
        return True

    def run_pending(self, on_progress: Optional[Callable[[str], None]] = None) -> Optional[bool]:
        """
        Run the queued job, if any.

        Returns None when nothing was queued, otherwise whether the job
        succeeded. The loading flag is always cleared afterwards.
        """
        state = self.state
        job = state.pending
        state.pending = None
        if job is None:
            state.is_loading = False
            state.loading_message = ""
            return None
        if isinstance(job, LogoJob):
            return self._run_logo(job)
        return self._run_animation(job, on_progress)

    def _run_logo(self, job: LogoJob) -> bool:
        state = self.state
        state.logo = None
        try:
            with self._loading(LOGO_LOADING_MESSAGE):
                state.logo = self._image_client(
                    job.prompt, self.gate.current_api_key(), settings=self.settings
                )
        except Exception as exc:
            self._fail(exc, "An unknown error occurred during image generation.")
            return False
        return True

    def _run_animation(self, request: AnimationRequest, on_progress) -> bool:
        state = self.state

        def progress(message: str) -> None:
            state.loading_message = message
            if on_progress is not None:
                on_progress(message)

        try:
            with self._loading(SUBMITTING_MESSAGE):
                video = self._video_client(
                    request,
                    self.gate.current_api_key(),
                    on_progress=progress,
                    settings=self.settings,
                )
        except Exception as exc:
            self._fail(exc, "An unknown error occurred during video generation.")
            return False

        state.video = video
        state.step = Step.RESULT
        return True

    # ---------- Step 1: logo ----------
    def generate_logo(self, prompt: str) -> bool:
        """Generate a logo preview. Returns True when a logo is now held."""
        if not self.submit_logo(prompt):
            return False
        return bool(self.run_pending())

    def confirm_logo(self) -> None:
        state = self.state
        if state.logo is None:
            state.error = "Generate a logo before animating it."
            return
        state.step = Step.ANIMATE_LOGO
        state.error = None

    # ---------- Step 2: animation ----------
    def replace_logo(self, data: bytes, mime_type: str) -> None:
        """Swap the held logo for a user upload before animating."""
        state = self.state
        if state.step is not Step.ANIMATE_LOGO:
            return
        state.logo = LogoImage(data=data, mime_type=mime_type)
        state.error = None

    def animate(
        self,
        prompt: Optional[str],
        aspect_ratio: AspectRatio,
        on_progress: Optional[Callable[[str], None]] = None,
    ) -> bool:
        if not self.submit_animation(prompt, aspect_ratio):
            return False
        return bool(self.run_pending(on_progress))

    # ---------- Navigation ----------
    def back(self) -> None:
        state = self.state
        state.step = Step.GENERATE_LOGO
        state.logo = None
        state.error = None

    def start_over(self) -> None:
        self._store[STATE_KEY] = FlowState()
