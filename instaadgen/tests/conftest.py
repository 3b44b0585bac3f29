from __future__ import annotations

import itertools
import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from cryptography.fernet import Fernet

from instaadgen.adapters.firebase_identity import IdentityProvider
from instaadgen.domain.errors import AuthError
from instaadgen.domain.models import AuthUser
from instaadgen.repositories.ad_repository import AdRepository
from instaadgen.repositories.user_repository import UserRepository
from instaadgen.services.auth_service import AuthService
from instaadgen.services.secret_codec import FernetSecretCodec


# -----------------------------
# Firestore test double
# -----------------------------
class FakeSnapshot:
    def __init__(self, doc_id: str, data: Optional[dict[str, Any]]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[dict[str, Any]]:
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, store: dict[str, dict[str, Any]], doc_id: str):
        self._store = store
        self.id = doc_id

    def get(self) -> FakeSnapshot:
        return FakeSnapshot(self.id, self._store.get(self.id))

    def set(self, data: dict[str, Any], merge: bool = False) -> None:
        if merge and self.id in self._store:
            self._store[self.id].update(data)
        else:
            self._store[self.id] = dict(data)

    def update(self, updates: dict[str, Any]) -> None:
        if self.id not in self._store:
            raise LookupError(f"No document to update: {self.id}")
        self._store[self.id].update(updates)

    def delete(self) -> None:
        self._store.pop(self.id, None)


class FakeQuery:
    def __init__(self, store: dict[str, dict[str, Any]], filters=(), order=None):
        self._store = store
        self._filters = list(filters)
        self._order = order

    def where(self, *, filter):
        assert filter.op_string == "==", "only equality filters are faked"
        return FakeQuery(self._store, self._filters + [filter], self._order)

    def order_by(self, field_path: str, direction: str = "ASCENDING"):
        return FakeQuery(self._store, self._filters, (field_path, direction))

    def stream(self):
        rows = [
            (doc_id, data) for doc_id, data in self._store.items()
            if all(data.get(f.field_path) == f.value for f in self._filters)
        ]
        if self._order:
            field_path, direction = self._order
            rows.sort(key=lambda row: row[1].get(field_path), reverse=direction == "DESCENDING")
        return iter([FakeSnapshot(doc_id, data) for doc_id, data in rows])


class FakeCollection(FakeQuery):
    def __init__(self, store: dict[str, dict[str, Any]], name: str):
        super().__init__(store)
        self._ids = (f"{name}-{n}" for n in itertools.count(1))

    def document(self, doc_id: Optional[str] = None) -> FakeDocument:
        return FakeDocument(self._store, doc_id or next(self._ids))

    def add(self, data: dict[str, Any]):
        ref = self.document()
        ref.set(data)
        return datetime.now(timezone.utc), ref


class FakeFirestore:
    def __init__(self):
        self.data: dict[str, dict[str, dict[str, Any]]] = {}
        self._collections: dict[str, FakeCollection] = {}

    def collection(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(self.data.setdefault(name, {}), name)
        return self._collections[name]


# -----------------------------
# Identity test double
# -----------------------------
class FakeIdentity(IdentityProvider):
    def __init__(self):
        self.accounts: dict[str, dict[str, str]] = {}
        self.revoked: list[str] = []
        self._uids = (f"uid-{n}" for n in itertools.count(1))

    def create_user(self, email: str, password: str, display_name: str) -> AuthUser:
        if email in self.accounts:
            raise AuthError("An account with this email already exists")
        uid = next(self._uids)
        self.accounts[email] = {"uid": uid, "password": password, "display_name": display_name}
        return AuthUser(uid=uid, email=email, display_name=display_name)

    def sign_in_with_password(self, email: str, password: str) -> AuthUser:
        account = self.accounts.get(email)
        if account is None:
            raise AuthError("EMAIL_NOT_FOUND")
        if account["password"] != password:
            raise AuthError("INVALID_PASSWORD")
        return AuthUser(uid=account["uid"], email=email, display_name=account["display_name"])

    def revoke_sessions(self, uid: str) -> None:
        self.revoked.append(uid)


# -----------------------------
# google-genai test double
# -----------------------------
class FakeGenaiClient:
    """Stands in for genai.Client: client.models.generate_content(model=, contents=) -> .text"""
    def __init__(self, api_key: str, text: str = "", error: Optional[Exception] = None):
        self.api_key = api_key
        self.calls: list[dict[str, Any]] = []
        self._text = text
        self._error = error
        self.models = self

    def generate_content(self, *, model: str, contents: str):
        self.calls.append({"model": model, "contents": contents})
        if self._error is not None:
            raise self._error
        return SimpleNamespace(text=self._text)


def gemini_reply(**overrides) -> str:
    payload = {
        "caption": "Stay hydrated, save the planet.",
        "hashtags": ["eco", "sustainable"],
        "mediaDescription": "A reusable bottle on a mossy rock",
        "mediaStyle": "natural",
        "tone": "friendly",
        "platform": "Instagram",
        "productCategory": "lifestyle",
    }
    payload.update(overrides)
    return "Here you go:\n```json\n" + json.dumps(payload) + "\n```"


class Clock:
    """Deterministic, strictly increasing timestamps for createdAt ordering."""
    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(minutes=1)
        return self.now


# -----------------------------
# Fixtures
# -----------------------------
@pytest.fixture
def firestore():
    return FakeFirestore()


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def codec():
    return FernetSecretCodec(key=Fernet.generate_key().decode("ascii"))


@pytest.fixture
def auth_service(firestore, identity, codec):
    return AuthService(
        identity=identity,
        users=UserRepository(db=firestore),
        ads=AdRepository(db=firestore, clock=Clock()),
        codec=codec,
    )
