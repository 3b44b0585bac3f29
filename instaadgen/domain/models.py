######## models.py
########

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class AuthUser:
    uid: str
    email: str
    display_name: str = ""


@dataclass(frozen=True)
class InstagramCredentials:
    username: str
    password: str


@dataclass(frozen=True)
class MetaCredentials:
    app_id: str
    app_secret: str
    access_token: str
    business_account_id: str
    instagram_account_id: str = ""


@dataclass(frozen=True)
class UserProfile:
    uid: str
    email: str
    username: str
    display_name: str
    created_at: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        return cls(
            uid=str(data.get("uid", "")),
            email=str(data.get("email", "")),
            username=str(data.get("username", "")),
            display_name=str(data.get("displayName") or data.get("username") or ""),
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> dict[str, Any]:
        # Only the base profile fields; credential fields are written by field updates
        return {
            "uid": self.uid,
            "email": self.email,
            "username": self.username,
            "displayName": self.display_name,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class AdContent:
    caption: str
    hashtags: list[str]
    media_description: str
    media_type: str = "image"           # "image" | "video" | "both"
    media_style: str = "modern"
    tone: Optional[str] = None
    platform: str = "Instagram"
    product_category: Optional[str] = None

    @property
    def full_caption(self) -> str:
        """Caption followed by a blank line and the hashtags, as posted to Instagram."""
        return f"{self.caption}\n\n{' '.join(self.hashtags)}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AdContent":
        return cls(
            caption=str(data.get("caption", "")),
            hashtags=[str(h) for h in (data.get("hashtags") or [])],
            media_description=str(data.get("mediaDescription", "")),
            media_type=str(data.get("mediaType") or "image"),
            media_style=str(data.get("mediaStyle") or "modern"),
            tone=data.get("tone"),
            platform=str(data.get("platform") or "Instagram"),
            product_category=data.get("productCategory"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "caption": self.caption,
            "hashtags": list(self.hashtags),
            "mediaType": self.media_type,
            "mediaDescription": self.media_description,
            "mediaStyle": self.media_style,
            "tone": self.tone,
            "platform": self.platform,
            "productCategory": self.product_category,
        }


@dataclass(frozen=True)
class SavedAd:
    id: str
    user_id: str
    title: str
    prompt: str
    content: AdContent
    created_at: Optional[datetime]
    published: bool = False
    published_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "SavedAd":
        return cls(
            id=doc_id,
            user_id=str(data.get("userId", "")),
            title=str(data.get("title", "")),
            prompt=str(data.get("prompt", "")),
            content=AdContent.from_dict(data.get("content") or {}),
            created_at=data.get("createdAt"),
            published=bool(data.get("published", False)),
            published_at=data.get("publishedAt"),
        )


@dataclass(frozen=True)
class GeneratedMedia:
    type: str                   # "image" | "video"
    url: str
    description: str
    thumbnail: Optional[str] = None


@dataclass(frozen=True)
class PublishResult:
    post_id: str
    message: str = "Successfully published to Instagram!"
