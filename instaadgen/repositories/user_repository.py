from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

USERS_COLLECTION = "users"


@dataclass
class UserRepository:
    """
    Repository pattern: one Firestore document per user, keyed by Auth UID.
    """
    db: Any
    collection: str = USERS_COLLECTION

    def _ref(self, uid: str):
        return self.db.collection(self.collection).document(uid)

    def get(self, uid: str) -> Optional[dict[str, Any]]:
        snap = self._ref(uid).get()
        return snap.to_dict() if snap.exists else None

    def create(self, uid: str, data: dict[str, Any]) -> None:
        self._ref(uid).set(data)

    def create_if_missing(self, uid: str, data: dict[str, Any]) -> None:
        # merge keeps fields written since the read (credentials, API key)
        self._ref(uid).set(data, merge=True)

    def update(self, uid: str, updates: dict[str, Any]) -> None:
        # update() fails on a missing document
        self._ref(uid).update(updates)
