"""
Credential Gate - decides whether an API key is available for the Veo step.

The gate keeps its status in a mutable mapping (``st.session_state`` in the
app, a plain dict in tests) so it survives Streamlit reruns.
"""

from __future__ import annotations

from enum import Enum
from typing import MutableMapping, Optional, Protocol

from .config import get_env_api_key
from .errors import AuthError
from .utils import get_logger

logger = get_logger("credentials")

STATUS_KEY = "credential_status"
SELECTED_KEY = "selected_api_key"


class CredentialStatus(str, Enum):
    CHECKING = "checking"
    PRESENT = "present"
    ABSENT = "absent"


class CredentialProvider(Protocol):
    """External key-selection UI."""

    def has_selected_credential(self) -> bool: ...

    def open_select_credential(self) -> None: ...

    def selected_credential(self) -> Optional[str]: ...


class SessionCredentialProvider:
    """
    Key selection backed by session state.

    ``open_select_credential`` hands control to ``opener`` (the Streamlit
    dialog in the app), which stores the chosen key under ``SELECTED_KEY``.
    """

    def __init__(self, store: MutableMapping, opener=None, default_key: Optional[str] = None):
        self._store = store
        self._opener = opener
        self._default_key = default_key

    def selected_credential(self) -> Optional[str]:
        return (self._store.get(SELECTED_KEY) or "").strip() or self._default_key

    def has_selected_credential(self) -> bool:
        return bool(self.selected_credential())

    def open_select_credential(self) -> None:
        if self._opener is not None:
            self._opener()

    def store_credential(self, api_key: str) -> None:
        self._store[SELECTED_KEY] = api_key.strip()


class CredentialGate:
    def __init__(self, store: MutableMapping, provider: Optional[CredentialProvider] = None):
        self._store = store
        self._provider = provider

    @property
    def status(self) -> CredentialStatus:
        return CredentialStatus(self._store.get(STATUS_KEY, CredentialStatus.CHECKING.value))

    def _set(self, status: CredentialStatus) -> None:
        if self._store.get(STATUS_KEY) != status.value:
            logger.info(f"Credential status -> {status.value}")
        self._store[STATUS_KEY] = status.value

    @property
    def is_present(self) -> bool:
        return self.status is CredentialStatus.PRESENT

    def check_credential(self) -> bool:
        """Ask the provider (or the environment, without one) whether a key exists."""
        self._set(CredentialStatus.CHECKING)
        if self._provider is not None:
            present = bool(self._provider.has_selected_credential())
        else:
            present = bool(get_env_api_key())
        self._set(CredentialStatus.PRESENT if present else CredentialStatus.ABSENT)
        return present

    def ensure_checked(self) -> CredentialStatus:
        """Run the initial check once per session."""
        if STATUS_KEY not in self._store:
            self.check_credential()
        return self.status

    def request_credential(self) -> None:
        """
        Open the external selector and assume success.

        The selector gives no completion signal, so the gate is marked present
        without re-verifying; a bad key surfaces later as an AuthError, which
        resets the gate.
        """
        if self._provider is None:
            raise AuthError("API key selection is not available in this environment.")
        self._provider.open_select_credential()
        self._set(CredentialStatus.PRESENT)

    def reset_credential(self) -> None:
        self._set(CredentialStatus.ABSENT)

    def current_api_key(self) -> Optional[str]:
        """Latest key value; read at call time, never cached by callers."""
        if self._provider is not None:
            key = self._provider.selected_credential()
            if key:
                return key
        return get_env_api_key()
