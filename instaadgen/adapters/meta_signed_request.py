from __future__ import annotations

import base64
import hashlib
import hmac
import json
from typing import Any


class SignedRequestError(ValueError):
    pass


def _b64url_decode(raw: str) -> bytes:
    return base64.urlsafe_b64decode(raw + "=" * (-len(raw) % 4))


def parse_signed_request(signed_request: str, app_secret: str) -> dict[str, Any]:
    """
    Decodes a Meta `signed_request` ("<sig>.<payload>", base64url, HMAC-SHA256 over the payload).
    With an empty app_secret the payload is decoded without verification.
    """
    try:
        encoded_sig, encoded_payload = (signed_request or "").split(".", 1)
        payload = json.loads(_b64url_decode(encoded_payload))
    except ValueError as e:
        raise SignedRequestError("Malformed signed_request") from e
    if not isinstance(payload, dict):
        raise SignedRequestError("Malformed signed_request")

    if app_secret:
        if (payload.get("algorithm") or "").upper() != "HMAC-SHA256":
            raise SignedRequestError(f"Unsupported algorithm: {payload.get('algorithm')!r}")
        expected = hmac.new(app_secret.encode("utf-8"), encoded_payload.encode("ascii"), hashlib.sha256).digest()
        try:
            sig = _b64url_decode(encoded_sig)
        except ValueError as e:
            raise SignedRequestError("Malformed signed_request") from e
        if not hmac.compare_digest(sig, expected):
            raise SignedRequestError("signed_request signature mismatch")

    return payload
