from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from google import genai

from instaadgen.domain.errors import GeminiNotInitializedError, GeminiResponseError
from instaadgen.domain.models import AdContent
from instaadgen.services.prompt_builder import build_ad_prompt

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "AI generation service is currently busy. Please try again in a few moments."

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def normalize_hashtags(tags: list[Any]) -> list[str]:
    out: list[str] = []
    for tag in tags:
        tag = str(tag)
        out.append(tag if tag.startswith("#") else f"#{tag}")
    return out


def parse_ad_content(text: str) -> AdContent:
    """
    Pulls the first '{' .. last '}' block out of the model text and turns it into AdContent.
    """
    match = _JSON_OBJECT.search(text or "")
    if not match:
        raise GeminiResponseError("Invalid response format from Gemini API")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise GeminiResponseError("Invalid response format from Gemini API") from e

    if not isinstance(data, dict):
        raise GeminiResponseError("Invalid response format from Gemini API")
    if not data.get("caption") or data.get("hashtags") is None or not data.get("mediaDescription"):
        raise GeminiResponseError("Incomplete response from Gemini API")

    hashtags = data["hashtags"]
    if isinstance(hashtags, str):
        hashtags = hashtags.split()

    return AdContent(
        caption=str(data["caption"]),
        hashtags=normalize_hashtags(hashtags),
        media_type="image",
        media_description=str(data.get("mediaDescription") or "Generated content"),
        media_style=str(data.get("mediaStyle") or "modern"),
        tone=data.get("tone"),
        platform=str(data.get("platform") or "Instagram"),
        product_category=data.get("productCategory"),
    )


def friendly_generation_error(exc: BaseException) -> str:
    message = str(exc) or "Failed to generate content. Please try again."
    if "overloaded" in message.lower():
        return BUSY_MESSAGE
    return message


def is_api_key_error(exc: BaseException) -> bool:
    return "api key" in str(exc).lower()


@dataclass
class GeminiService:
    """
    Single-shot ad generation: one prompt in, one parsed AdContent out.
    No conversation state, no streaming.
    """
    model_name: str = "gemini-2.5-flash"
    client_factory: Callable[..., Any] = genai.Client
    _client: Optional[Any] = field(default=None, init=False, repr=False)

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    def initialize(self, api_key: str) -> None:
        self._client = self.client_factory(api_key=api_key)

    def generate_ad_content(self, description: str) -> AdContent:
        if self._client is None:
            raise GeminiNotInitializedError()

        prompt = build_ad_prompt(description)
        try:
            response = self._client.models.generate_content(model=self.model_name, contents=prompt)
            return parse_ad_content(response.text or "")
        except Exception:
            logger.exception("Error generating content with Gemini (model=%s)", self.model_name)
            raise
