from .auth_service import AuthService
from .gemini_service import GeminiService, friendly_generation_error
from .media_service import MediaGenerationService
from .publish_service import PublishClient, friendly_publish_error
from .secret_codec import Base64SecretCodec, FernetSecretCodec, SecretCodec

__all__ = [
    "AuthService",
    "Base64SecretCodec",
    "FernetSecretCodec",
    "GeminiService",
    "MediaGenerationService",
    "PublishClient",
    "SecretCodec",
    "friendly_generation_error",
    "friendly_publish_error",
]
