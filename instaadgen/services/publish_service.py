from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from instaadgen.domain.errors import PublishError

logger = logging.getLogger(__name__)

PUBLISH_ERROR_HINTS = (
    ("access token", "Instagram access token is invalid or expired. Please check your credentials."),
    ("user ID", "Instagram User ID is invalid. Please check your credentials."),
    ("image_url", "The image could not be accessed by Instagram. Please try a different image."),
)


def friendly_publish_error(message: str) -> str:
    message = message or "Failed to publish to Instagram"
    for needle, friendly in PUBLISH_ERROR_HINTS:
        if needle in message:
            return friendly
    return message


@dataclass
class PublishClient:
    """
    Client for the publish endpoint (POST {image_url, caption} -> {success, postId}).
    """
    endpoint_url: str
    timeout_seconds: int = 60
    session: Any = None

    def publish(self, image_url: str, caption: str) -> str:
        http = self.session or requests
        logger.info("Publishing to Instagram via %s (image_url=%s)", self.endpoint_url, image_url)

        try:
            resp = http.post(
                self.endpoint_url,
                json={"image_url": image_url, "caption": caption},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise PublishError(f"Publish endpoint unreachable: {e}") from e

        if not 200 <= resp.status_code < 300:
            logger.error("Publish endpoint returned HTTP %s: %s", resp.status_code, resp.text)
            raise PublishError(f"HTTP {resp.status_code}: {resp.text}")

        result = resp.json()
        if result.get("error"):
            raise PublishError(str(result.get("details") or result["error"]), details=result.get("details"))

        if result.get("success") and result.get("postId"):
            logger.info("Published, post id=%s", result["postId"])
            return str(result["postId"])

        raise PublishError("Unexpected response format from server")
