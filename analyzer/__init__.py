# Analyzer package - Vibe Check analysis engine
# Only leaf modules are re-exported; import pipeline/sanitizer directly
from .errors import (
    VibeCheckError,
    InvalidInput,
    InvalidURL,
    ConfigurationError,
    BrowserLaunchError,
    NavigationFailed,
    CritiqueBackendError,
    MalformedCritique,
    RequestTooLarge,
)
from .prompts import PROMPT_VERSION, get_critique_prompt

__all__ = [
    "VibeCheckError",
    "InvalidInput",
    "InvalidURL",
    "ConfigurationError",
    "BrowserLaunchError",
    "NavigationFailed",
    "CritiqueBackendError",
    "MalformedCritique",
    "RequestTooLarge",
    "PROMPT_VERSION",
    "get_critique_prompt",
]
