from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from firebase_admin import auth

from instaadgen.domain.errors import AuthError
from instaadgen.domain.models import AuthUser

logger = logging.getLogger(__name__)

SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"


class IdentityProvider:
    """Port for the email/password identity backend."""
    def create_user(self, email: str, password: str, display_name: str) -> AuthUser:
        raise NotImplementedError

    def sign_in_with_password(self, email: str, password: str) -> AuthUser:
        raise NotImplementedError

    def revoke_sessions(self, uid: str) -> None:
        raise NotImplementedError


@dataclass
class FirebaseIdentity(IdentityProvider):
    """
    User management goes through the Admin SDK. Password verification has no
    Admin SDK call, so it uses the Identity Toolkit REST endpoint with the web API key.
    """
    web_api_key: str
    app: Optional[Any] = None
    timeout_seconds: int = 30
    session: Any = None

    def _http(self):
        return self.session or requests

    def create_user(self, email: str, password: str, display_name: str) -> AuthUser:
        try:
            record = auth.create_user(email=email, password=password, display_name=display_name, app=self.app)
        except auth.EmailAlreadyExistsError as e:
            raise AuthError("An account with this email already exists") from e
        except ValueError as e:
            # Admin SDK validates email/password shape client-side
            raise AuthError(str(e)) from e
        return AuthUser(uid=record.uid, email=record.email or email, display_name=record.display_name or display_name)

    def sign_in_with_password(self, email: str, password: str) -> AuthUser:
        if not self.web_api_key:
            raise AuthError("firebase.web_api_key is not configured")

        resp = self._http().post(
            SIGN_IN_URL,
            params={"key": self.web_api_key},
            json={"email": email, "password": password, "returnSecureToken": True},
            timeout=self.timeout_seconds,
        )
        payload = resp.json() if resp.content else {}
        if resp.status_code != 200:
            message = ((payload.get("error") or {}).get("message")) or f"HTTP {resp.status_code}"
            raise AuthError(message)

        return AuthUser(
            uid=payload["localId"],
            email=payload.get("email") or email,
            display_name=payload.get("displayName") or "",
        )

    def revoke_sessions(self, uid: str) -> None:
        auth.revoke_refresh_tokens(uid, app=self.app)
