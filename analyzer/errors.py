"""
Error taxonomy for the Vibe Check pipeline.

Every failure the pipeline can surface is a ``VibeCheckError`` carrying the
HTTP status it maps to. The message is what the caller sees in the
``{"error": ...}`` body, so it must stay human-readable.
"""

from typing import Optional


class VibeCheckError(Exception):
    """Base class for errors that map to an HTTP error body."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(VibeCheckError):
    """Raised when the url field is missing, empty or not a string."""

    status_code = 400

    def __init__(self, message: str = "url is required"):
        super().__init__(message)


class InvalidURL(VibeCheckError):
    """Raised when the url cannot be turned into an absolute http(s) URL."""

    status_code = 400

    def __init__(self, message: str = "Invalid URL"):
        super().__init__(message)


class ConfigurationError(VibeCheckError):
    """Raised when the critique service credential is not configured."""

    def __init__(self, message: str = "OPENROUTER_API_KEY is missing in environment"):
        super().__init__(message)


class BrowserLaunchError(VibeCheckError):
    """Raised when the headless browser could not be started."""


class NavigationFailed(VibeCheckError):
    """Raised when the page did not load in time (DNS, TLS, timeout...)."""


class CritiqueBackendError(VibeCheckError):
    """Raised when the critique API answers with a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body

    @classmethod
    def from_response(cls, status: int, body: str) -> "CritiqueBackendError":
        return cls(f"OpenRouter error {status}: {body}", status=status, body=body)


class MalformedCritique(VibeCheckError):
    """Raised when the model output holds no parseable JSON object."""

    def __init__(self, message: str = "Model did not return JSON"):
        super().__init__(message)


class RequestTooLarge(VibeCheckError):
    """Raised when the request body exceeds the configured size limit."""

    status_code = 413

    def __init__(self, message: str = "Request body too large"):
        super().__init__(message)
