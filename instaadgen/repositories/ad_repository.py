from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from google.cloud.firestore_v1 import FieldFilter, Query

from instaadgen.domain.models import AdContent, SavedAd

ADS_COLLECTION = "ads"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AdRepository:
    """
    Repository pattern: generated ads, one document each, owned by `userId`.
    """
    db: Any
    collection: str = ADS_COLLECTION
    clock: Callable[[], datetime] = _utcnow

    def _col(self):
        return self.db.collection(self.collection)

    def add(self, user_id: str, title: str, prompt: str, content: AdContent) -> str:
        ad_data = {
            "userId": user_id,
            "title": title,
            "prompt": prompt,
            "content": content.to_dict(),
            "createdAt": self.clock(),
            "published": False,
        }
        _, doc_ref = self._col().add(ad_data)
        return doc_ref.id

    def get(self, ad_id: str) -> Optional[SavedAd]:
        snap = self._col().document(ad_id).get()
        if not snap.exists:
            return None
        return SavedAd.from_document(snap.id, snap.to_dict())

    def list_for_user(self, user_id: str) -> list[SavedAd]:
        # where + order_by needs the composite index (userId ASC, createdAt DESC)
        q = (
            self._col()
            .where(filter=FieldFilter("userId", "==", user_id))
            .order_by("createdAt", direction=Query.DESCENDING)
        )
        return [SavedAd.from_document(snap.id, snap.to_dict()) for snap in q.stream()]

    def update(self, ad_id: str, updates: dict[str, Any]) -> None:
        self._col().document(ad_id).update(updates)

    def delete(self, ad_id: str) -> None:
        self._col().document(ad_id).delete()

    def mark_published(self, ad_id: str) -> None:
        self.update(ad_id, {"published": True, "publishedAt": self.clock()})
