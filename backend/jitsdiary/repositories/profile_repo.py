from __future__ import annotations
from typing import Optional
from jitsdiary.filters import build_filter
from jitsdiary.repositories.base import OwnedRepository, store_stripes
from jitsdiary.schemas.profile import ProfileSave
from jitsdiary.store import Record

class ProfileRepository(OwnedRepository):
    collection_name = "profiles"

    def get_mine(self) -> Optional[Record]:
        return self.records.get_first(
            build_filter("user_id = {:uid}", uid=self.user.user_id),
            expand="gym_id",
        )

    def save(self, payload: ProfileSave) -> Record:
        """
        Upsert the caller's profile: update the existing row, or create one.
        Not atomic; a concurrent double submit can create two rows.
        """
        data = self.stamp({
            "belt": payload.belt.value if payload.belt else None,
            "stripes": store_stripes(payload.stripes),
            "gym_id": payload.gym_id,
            "display_name": payload.display_name,
        })
        existing = self.get_mine()
        if existing:
            return self.records.update(existing["id"], data)
        return self.records.create(data)
