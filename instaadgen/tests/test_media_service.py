from __future__ import annotations

import random

import pytest

from instaadgen.domain.models import AdContent
from instaadgen.repositories.media_store import MediaStore, media_path
from instaadgen.services.media_service import MediaGenerationService

CONTENT = AdContent(caption="c", hashtags=["#a"], media_description="Bottle on a rock", media_style="natural")


def make_service(videos=("https://v/1.mp4",)) -> MediaGenerationService:
    return MediaGenerationService(
        stock_image_urls=("https://i/1.jpg", "https://i/2.jpg"),
        stock_video_urls=videos,
        rng=random.Random(7),
    )


def test_prompts_include_description_and_style():
    service = make_service()
    assert service.image_prompt(CONTENT).startswith("Bottle on a rock, natural style")
    assert "dynamic movement" in service.video_prompt(CONTENT)


def test_image_only():
    media = make_service().generate_media_from_ad_content(CONTENT, "image")
    assert [m.type for m in media] == ["image"]
    assert media[0].url in ("https://i/1.jpg", "https://i/2.jpg")
    assert media[0].description == "Bottle on a rock"


def test_both_uses_image_as_video_thumbnail():
    image, video = make_service().generate_media_from_ad_content(CONTENT, "both")
    assert video.type == "video"
    assert video.url == "https://v/1.mp4"
    assert video.thumbnail == image.url


def test_video_without_stock_urls_raises():
    with pytest.raises(ValueError):
        make_service(videos=()).generate_media_from_ad_content(CONTENT, "video")


def test_unknown_media_type():
    with pytest.raises(ValueError):
        make_service().generate_media_from_ad_content(CONTENT, "gif")


# -----------------------------
# Storage upload
# -----------------------------
class FakeBlob:
    def __init__(self, name: str):
        self.name = name
        self.public = False
        self.uploaded = None

    def upload_from_string(self, data, content_type=None):
        self.uploaded = (data, content_type)

    def make_public(self):
        self.public = True

    @property
    def public_url(self) -> str:
        return f"https://storage.googleapis.com/bucket/{self.name}"


class FakeBucket:
    def __init__(self):
        self.blobs: dict[str, FakeBlob] = {}

    def blob(self, name: str) -> FakeBlob:
        return self.blobs.setdefault(name, FakeBlob(name))


def test_media_path_sanitises_filename():
    assert media_path("u1", "ad-1", "../../etc/my photo.png") == "media/u1/ad-1/etc_my_photo.png"


def test_upload_makes_blob_public():
    bucket = FakeBucket()

    url = MediaStore(bucket=bucket).upload(b"png-bytes", "shot.png", "u1", "ad-1", content_type="image/png")

    blob = bucket.blobs["media/u1/ad-1/shot.png"]
    assert blob.public is True
    assert blob.uploaded == (b"png-bytes", "image/png")
    assert url == "https://storage.googleapis.com/bucket/media/u1/ad-1/shot.png"
