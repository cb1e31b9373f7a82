from __future__ import annotations
from jitsdiary.filters import build_filter
from jitsdiary.repositories.base import OwnedRepository, store_datetime, store_stripes
from jitsdiary.schemas.belt_progression import BeltProgressionCreate
from jitsdiary.store import Record

class BeltProgressionRepository(OwnedRepository):
    collection_name = "belt_progressions"

    def list_mine(self) -> list[Record]:
        return self.records.get_list(
            1,
            100,
            filter=build_filter("user_id = {:uid}", uid=self.user.user_id),
            sort="promoted_on",
        ).items

    def create(self, payload: BeltProgressionCreate) -> Record:
        return self.records.create(self.stamp({
            "belt": payload.belt.value,
            "stripes": store_stripes(payload.stripes),
            "promoted_on": store_datetime(payload.promoted_on),
            "gym_id": payload.gym_id,
            "notes": payload.notes,
        }))

    def delete(self, progression_id: str) -> None:
        self.get_owned(progression_id)
        self.records.delete(progression_id)
