from __future__ import annotations
from jitsdiary.repositories.base import BaseRepository
from jitsdiary.store import Record

class GymRepository(BaseRepository):
    """Gyms are shared reference data; any signed-in user may list them."""
    collection_name = "gyms"

    def list(self) -> list[Record]:
        return self.records.get_list(1, 100, sort="name").items
