"""
Error taxonomy shared by the generation clients and the flow controller.
"""

from __future__ import annotations

CREDENTIAL_NOT_FOUND_MARKER = "Requested entity was not found."


class LogoAnimatorError(Exception):
    """Base class; ``str(exc)`` is safe to show to the user."""


class AuthError(LogoAnimatorError):
    """No API key configured, or the provider rejected it."""


class InvalidInput(LogoAnimatorError):
    """Empty prompt or an image whose type cannot be determined."""


class GenerationFailed(LogoAnimatorError):
    """Provider answered but produced nothing usable."""


class ResultMissing(LogoAnimatorError):
    """Video operation finished without a download link."""


class DownloadFailed(LogoAnimatorError):
    """Fetching the finished video failed."""


class UnknownProviderError(LogoAnimatorError):
    """Any other failure raised by the provider SDK."""


class PollTimeout(LogoAnimatorError):
    """Video operation did not finish within the configured attempt budget."""


def is_credential_not_found(exc: BaseException) -> bool:
    return CREDENTIAL_NOT_FOUND_MARKER in str(exc)
