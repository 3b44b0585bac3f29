from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from instaadgen.domain.models import AdContent, GeneratedMedia

MEDIA_TYPES = ("image", "video", "both")


@dataclass
class MediaGenerationService:
    """
    Media suggestions for a generated ad.
    No image/video model is wired in yet; suggestions come from the configured stock URLs.
    """
    stock_image_urls: Sequence[str]
    stock_video_urls: Sequence[str] = ()
    rng: random.Random = field(default_factory=random.Random)

    def image_prompt(self, content: AdContent) -> str:
        return f"{content.media_description}, {content.media_style} style, professional product photography"

    def video_prompt(self, content: AdContent) -> str:
        return f"{content.media_description}, dynamic movement, {content.media_style} style, engaging video content"

    def generate_image(self, prompt: str) -> str:
        if not self.stock_image_urls:
            raise ValueError("No stock image URLs configured.")
        return self.rng.choice(list(self.stock_image_urls))

    def generate_video(self, prompt: str) -> str:
        if not self.stock_video_urls:
            raise ValueError("No stock video URLs configured.")
        return self.rng.choice(list(self.stock_video_urls))

    def generate_media_from_ad_content(self, content: AdContent, media_type: str = "image") -> list[GeneratedMedia]:
        if media_type not in MEDIA_TYPES:
            raise ValueError(f"Unknown media type: {media_type!r}")

        media: list[GeneratedMedia] = []
        if media_type in ("image", "both"):
            media.append(GeneratedMedia(
                type="image",
                url=self.generate_image(self.image_prompt(content)),
                description=content.media_description,
            ))

        if media_type in ("video", "both"):
            thumbnail = next((m.url for m in media if m.type == "image"), None)
            if thumbnail is None and self.stock_image_urls:
                thumbnail = self.generate_image(self.image_prompt(content))
            media.append(GeneratedMedia(
                type="video",
                url=self.generate_video(self.video_prompt(content)),
                description=content.media_description,
                thumbnail=thumbnail,
            ))

        return media
