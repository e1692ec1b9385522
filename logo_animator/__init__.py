"""
Logo Animator AI - Modular Components

This package contains the core modules for Logo Animator AI:
- config: Configuration, constants, and data models
- errors: Error taxonomy shared by the clients and the flow
- utils: Helper functions (logging, image loading)
- gemini_client: Gemini API client initialization
- credentials: Credential Gate (API key selection)
- image_generator: Imagen logo generation
- video_animator: Veo animation job (submit, poll, download)
- flow: Application Flow Controller
"""

# Lazy imports to avoid circular dependencies and hot-reload issues
__all__ = [
    # Config
    "AnimatedVideo",
    "AnimationRequest",
    "AspectRatio",
    "LogoImage",
    "Settings",
    # Errors
    "AuthError",
    "DownloadFailed",
    "GenerationFailed",
    "InvalidInput",
    "LogoAnimatorError",
    "PollTimeout",
    "ResultMissing",
    "UnknownProviderError",
    # Utils
    "get_logger",
    "load_image_bytes",
    # Credentials
    "CredentialGate",
    "CredentialStatus",
    "SessionCredentialProvider",
    # Clients
    "generate_logo",
    "animate_logo",
    # Flow
    "FlowController",
    "FlowState",
    "Step",
]

_SOURCES = {
    ".config": ("AnimatedVideo", "AnimationRequest", "AspectRatio", "LogoImage", "Settings"),
    ".errors": (
        "AuthError", "DownloadFailed", "GenerationFailed", "InvalidInput",
        "LogoAnimatorError", "PollTimeout", "ResultMissing", "UnknownProviderError",
    ),
    ".utils": ("get_logger", "load_image_bytes"),
    ".credentials": ("CredentialGate", "CredentialStatus", "SessionCredentialProvider"),
    ".image_generator": ("generate_logo",),
    ".video_animator": ("animate_logo",),
    ".flow": ("FlowController", "FlowState", "Step"),
}


def __getattr__(name):
    """Lazy import to avoid circular dependencies and streamlit hot-reload issues."""
    if name in __all__:
        import importlib

        for module_name, names in _SOURCES.items():
            if name in names:
                module = importlib.import_module(module_name, __name__)
                return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
