from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from werkzeug.utils import secure_filename


def media_path(user_id: str, ad_id: str, filename: str) -> str:
    return f"media/{user_id}/{ad_id}/{secure_filename(filename) or 'upload'}"


@dataclass
class MediaStore:
    """
    Firebase Storage bucket wrapper: uploads under media/<userId>/<adId>/ and hands back a URL.
    """
    bucket: Any

    def upload(self, data: bytes, filename: str, user_id: str, ad_id: str, content_type: Optional[str] = None) -> str:
        blob = self.bucket.blob(media_path(user_id, ad_id, filename))
        blob.upload_from_string(data, content_type=content_type or "application/octet-stream")
        # Instagram fetches image_url server-side, so the object has to be publicly readable
        blob.make_public()
        return blob.public_url
