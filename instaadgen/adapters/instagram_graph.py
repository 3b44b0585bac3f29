from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from instaadgen.domain.errors import PublishError
from instaadgen.domain.models import PublishResult

logger = logging.getLogger(__name__)

GRAPH_BASE_URL = "https://graph.facebook.com"


@dataclass
class InstagramGraphPublisher:
    """
    Two-step Instagram content publishing:
      1) POST /<ig-user-id>/media           -> container id
      2) POST /<ig-user-id>/media_publish   -> post id
    """
    access_token: str
    ig_user_id: str
    api_version: str = "v19.0"
    timeout_seconds: int = 60
    session: Any = None

    @property
    def is_configured(self) -> bool:
        return bool(self.access_token and self.ig_user_id)

    def _url(self, edge: str) -> str:
        return f"{GRAPH_BASE_URL}/{self.api_version}/{self.ig_user_id}/{edge}"

    def _post(self, edge: str, payload: dict[str, Any]) -> dict[str, Any]:
        http = self.session or requests
        resp = http.post(self._url(edge), json={**payload, "access_token": self.access_token}, timeout=self.timeout_seconds)
        return resp.json()

    def publish(self, image_url: str, caption: str) -> PublishResult:
        logger.info("Creating media container for ig_user_id=%s image_url=%s", self.ig_user_id, image_url)
        media = self._post("media", {"image_url": image_url, "caption": caption})
        if media.get("error"):
            err = media["error"]
            raise PublishError("Failed to create media container", details=_error_message(err), code=_error_code(err))
        if not media.get("id"):
            raise PublishError("Invalid response from Instagram API - no media ID", details=media)

        logger.info("Publishing media with creation_id=%s", media["id"])
        result = self._post("media_publish", {"creation_id": media["id"]})
        if result.get("error"):
            err = result["error"]
            raise PublishError("Failed to publish to Instagram", details=_error_message(err), code=_error_code(err))
        if not result.get("id"):
            raise PublishError("Publishing failed - no post ID returned", details=result)

        logger.info("Published to Instagram, post id=%s", result["id"])
        return PublishResult(post_id=str(result["id"]))


def _error_message(err: Any) -> Any:
    if isinstance(err, dict):
        return err.get("message") or err
    return err


def _error_code(err: Any):
    return err.get("code") if isinstance(err, dict) else None
