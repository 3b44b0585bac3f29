from .firebase_identity import FirebaseIdentity, IdentityProvider
from .instagram_graph import InstagramGraphPublisher

__all__ = [
    "FirebaseIdentity",
    "IdentityProvider",
    "InstagramGraphPublisher",
]
