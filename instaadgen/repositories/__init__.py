from .ad_repository import AdRepository
from .media_store import MediaStore
from .user_repository import UserRepository

__all__ = [
    "AdRepository",
    "MediaStore",
    "UserRepository",
]
