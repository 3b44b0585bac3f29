from .errors import (
    AuthError,
    GeminiNotInitializedError,
    GeminiResponseError,
    InstaAdGenError,
    ProfileNotFoundError,
    PublishError,
)
from .models import (
    AdContent,
    AuthUser,
    GeneratedMedia,
    InstagramCredentials,
    MetaCredentials,
    PublishResult,
    SavedAd,
    UserProfile,
)

__all__ = [
    "AdContent",
    "AuthError",
    "AuthUser",
    "GeminiNotInitializedError",
    "GeminiResponseError",
    "GeneratedMedia",
    "InstaAdGenError",
    "InstagramCredentials",
    "MetaCredentials",
    "ProfileNotFoundError",
    "PublishError",
    "PublishResult",
    "SavedAd",
    "UserProfile",
]
