from __future__ import annotations
from typing import Any
from jitsdiary.filters import build_filter
from jitsdiary.repositories.base import OwnedRepository
from jitsdiary.schemas.session import SessionCreate, SessionUpdate
from jitsdiary.store import ListResult, Record

class SessionRepository(OwnedRepository):
    collection_name = "sessions"

    def get(self, session_id: str) -> Record:
        return self.get_owned(session_id, expand="gym_id")

    def list_mine(self, *, page: int = 1, per_page: int = 20) -> ListResult:
        return self.records.get_list(
            page,
            per_page,
            filter=build_filter("user_id = {:uid}", uid=self.user.user_id),
            expand="gym_id",
            sort="-date",
        )

    def create(self, payload: SessionCreate) -> Record:
        data: dict[str, Any] = {
            "date": payload.date,
            "session_type": payload.session_type.value,
            "gym_id": payload.gym_id,
            "duration_minutes": payload.duration_minutes,
            "coach": payload.coach,
            "notes": payload.notes,
        }
        return self.records.create(self.stamp(data))

    def update(self, session_id: str, payload: SessionUpdate) -> Record:
        self.get_owned(session_id)
        data: dict[str, Any] = {
            "gym_id": payload.gym_id,
            "duration_minutes": payload.duration_minutes,
            "coach": payload.coach,
            "notes": payload.notes,
        }
        if payload.date is not None:
            data["date"] = payload.date
        if payload.session_type is not None:
            data["session_type"] = payload.session_type.value
        return self.records.update(session_id, data)
