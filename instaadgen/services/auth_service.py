from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from instaadgen.adapters.firebase_identity import IdentityProvider
from instaadgen.domain.errors import ProfileNotFoundError
from instaadgen.domain.models import (
    AdContent,
    InstagramCredentials,
    MetaCredentials,
    SavedAd,
    UserProfile,
)
from instaadgen.repositories.ad_repository import AdRepository
from instaadgen.repositories.media_store import MediaStore
from instaadgen.repositories.user_repository import UserRepository
from instaadgen.services.secret_codec import SecretCodec

logger = logging.getLogger(__name__)

USERNAME_EMAIL_DOMAIN = "example.com"


def login_email(email_or_username: str) -> str:
    value = (email_or_username or "").strip()
    return value if "@" in value else f"{value}@{USERNAME_EMAIL_DOMAIN}"


@dataclass
class AuthService:
    """
    Service layer over Firebase Auth, the `users` and `ads` collections and Storage.

    Writes log and re-raise. Reads log and return None / [] so pages keep rendering.
    """
    identity: IdentityProvider
    users: UserRepository
    ads: AdRepository
    codec: SecretCodec
    media: Optional[MediaStore] = None

    # -----------------------------
    # Authentication
    # -----------------------------
    def sign_up(self, email: str, password: str, username: str) -> UserProfile:
        try:
            auth_user = self.identity.create_user(email, password, display_name=username)
            profile = UserProfile(
                uid=auth_user.uid,
                email=auth_user.email,
                username=username,
                display_name=username,
                created_at=datetime.now(timezone.utc),
            )
            self.users.create(profile.uid, profile.to_dict())
            return profile
        except Exception:
            logger.exception("Error signing up %s", email)
            raise

    def sign_in(self, email: str, password: str) -> UserProfile:
        try:
            auth_user = self.identity.sign_in_with_password(email, password)
            data = self.users.get(auth_user.uid)
            if data is None:
                raise ProfileNotFoundError()
            return UserProfile.from_dict(data)
        except Exception:
            logger.exception("Error signing in %s", email)
            raise

    def login(self, email_or_username: str, password: str) -> Optional[UserProfile]:
        try:
            return self.sign_in(login_email(email_or_username), password)
        except Exception:
            return None

    def sign_out(self, uid: str) -> None:
        try:
            self.identity.revoke_sessions(uid)
        except Exception:
            logger.exception("Error signing out %s", uid)
            raise

    def ensure_profile(self, uid: str, email: str, display_name: str = "") -> UserProfile:
        """Read errors propagate; only a document that is confirmed missing gets created."""
        try:
            data = self.users.get(uid)
            if data is not None:
                return UserProfile.from_dict(data)

            fallback = display_name or (email.split("@")[0] if email else "") or "user"
            profile = UserProfile(
                uid=uid,
                email=email,
                username=fallback,
                display_name=display_name or fallback,
                created_at=datetime.now(timezone.utc),
            )
            self.users.create_if_missing(uid, profile.to_dict())
            return profile
        except Exception:
            logger.exception("Error ensuring user profile %s", uid)
            raise

    # -----------------------------
    # User profile
    # -----------------------------
    def get_user_profile(self, uid: str) -> Optional[UserProfile]:
        try:
            data = self.users.get(uid)
            return UserProfile.from_dict(data) if data is not None else None
        except Exception:
            logger.exception("Error getting user profile %s", uid)
            return None

    def create_user_profile(self, profile: UserProfile) -> None:
        try:
            self.users.create(profile.uid, profile.to_dict())
        except Exception:
            logger.exception("Error creating user profile %s", profile.uid)
            raise

    def update_user_profile(self, uid: str, updates: dict[str, Any]) -> None:
        try:
            self.users.update(uid, updates)
        except Exception:
            logger.exception("Error updating user profile %s", uid)
            raise

    # -----------------------------
    # Stored credentials
    # -----------------------------
    def save_instagram_credentials(self, uid: str, username: str, password: str) -> None:
        try:
            self.users.update(uid, {
                "instagramCredentials": {
                    "username": username,
                    "encryptedPassword": self.codec.encode(password),
                },
            })
        except Exception:
            logger.exception("Error saving Instagram credentials for %s", uid)
            raise

    def get_instagram_credentials(self, uid: str) -> Optional[InstagramCredentials]:
        try:
            data = self.users.get(uid) or {}
            creds = data.get("instagramCredentials")
            if not creds:
                return None
            return InstagramCredentials(
                username=creds.get("username", ""),
                password=self.codec.decode(creds.get("encryptedPassword", "")),
            )
        except Exception:
            logger.exception("Error getting Instagram credentials for %s", uid)
            return None

    def save_gemini_api_key(self, uid: str, api_key: str) -> None:
        try:
            self.users.update(uid, {"geminiApiKey": self.codec.encode(api_key)})
        except Exception:
            logger.exception("Error saving Gemini API key for %s", uid)
            raise

    def get_gemini_api_key(self, uid: str) -> Optional[str]:
        try:
            data = self.users.get(uid) or {}
            stored = data.get("geminiApiKey")
            return self.codec.decode(stored) if stored else None
        except Exception:
            logger.exception("Error getting Gemini API key for %s", uid)
            return None

    def save_meta_credentials(self, uid: str, creds: MetaCredentials) -> None:
        try:
            self.users.update(uid, {
                "metaCredentials": {
                    "appId": creds.app_id,
                    "encryptedAppSecret": self.codec.encode(creds.app_secret),
                    "encryptedAccessToken": self.codec.encode(creds.access_token),
                    "businessAccountId": creds.business_account_id,
                    "instagramAccountId": creds.instagram_account_id,
                },
            })
        except Exception:
            logger.exception("Error saving Meta credentials for %s", uid)
            raise

    def get_meta_credentials(self, uid: str) -> Optional[MetaCredentials]:
        try:
            data = self.users.get(uid) or {}
            creds = data.get("metaCredentials")
            if not creds:
                return None
            return MetaCredentials(
                app_id=creds.get("appId", ""),
                app_secret=self.codec.decode(creds.get("encryptedAppSecret", "")),
                access_token=self.codec.decode(creds.get("encryptedAccessToken", "")),
                business_account_id=creds.get("businessAccountId", ""),
                instagram_account_id=creds.get("instagramAccountId") or "",
            )
        except Exception:
            logger.exception("Error getting Meta credentials for %s", uid)
            return None

    # -----------------------------
    # Ads
    # -----------------------------
    def save_ad(self, user_id: str, title: str, prompt: str, content: AdContent) -> str:
        try:
            return self.ads.add(user_id, title, prompt, content)
        except Exception:
            logger.exception("Error saving ad for %s", user_id)
            raise

    def get_ad(self, ad_id: str) -> Optional[SavedAd]:
        try:
            return self.ads.get(ad_id)
        except Exception:
            logger.exception("Error getting ad %s", ad_id)
            return None

    def get_user_ads(self, user_id: str) -> list[SavedAd]:
        try:
            return self.ads.list_for_user(user_id)
        except Exception:
            logger.exception("Error getting user ads for %s", user_id)
            return []

    def update_ad(self, ad_id: str, updates: dict[str, Any]) -> None:
        try:
            self.ads.update(ad_id, updates)
        except Exception:
            logger.exception("Error updating ad %s", ad_id)
            raise

    def delete_ad(self, ad_id: str) -> None:
        try:
            self.ads.delete(ad_id)
        except Exception:
            logger.exception("Error deleting ad %s", ad_id)
            raise

    def mark_ad_as_published(self, ad_id: str) -> None:
        try:
            self.ads.mark_published(ad_id)
        except Exception:
            logger.exception("Error marking ad %s as published", ad_id)
            raise

    # -----------------------------
    # Media
    # -----------------------------
    def upload_media(self, data: bytes, filename: str, user_id: str, ad_id: str, content_type: Optional[str] = None) -> str:
        if self.media is None:
            raise RuntimeError("Media storage is not configured.")
        try:
            return self.media.upload(data, filename, user_id, ad_id, content_type=content_type)
        except Exception:
            logger.exception("Error uploading media %s for ad %s", filename, ad_id)
            raise
