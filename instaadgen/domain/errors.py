from __future__ import annotations

from typing import Any, Optional


class InstaAdGenError(Exception):
    """Base class for errors raised by the service layer."""


class AuthError(InstaAdGenError):
    pass


class ProfileNotFoundError(AuthError):
    def __init__(self, message: str = "User profile not found"):
        super().__init__(message)


class GeminiNotInitializedError(InstaAdGenError):
    def __init__(self, message: str = "Gemini API not initialized. Please provide an API key."):
        super().__init__(message)


class GeminiResponseError(InstaAdGenError):
    pass


class PublishError(InstaAdGenError):
    def __init__(self, message: str, details: Any = None, code: Optional[int] = None):
        super().__init__(message)
        self.details = details
        self.code = code
