from __future__ import annotations
from jitsdiary.errors import NotFound
from jitsdiary.filters import build_filter
from jitsdiary.repositories.base import BaseRepository
from jitsdiary.repositories.session_repo import SessionRepository
from jitsdiary.schemas.rolling_round import RoundCreate
from jitsdiary.store import Record

class RoundRepository(BaseRepository):
    """Rolling rounds are owned through their parent session."""
    collection_name = "rolling_rounds"

    def __init__(self, user):
        super().__init__(user)
        self.sessions = SessionRepository(user)

    def fetch(self, session_id: str) -> list[Record]:
        """Rounds of a session whose ownership the caller already checked."""
        return self.records.get_full_list(
            filter=build_filter("session_id = {:sid}", sid=session_id),
            sort="created",
        )

    def list_for_session(self, session_id: str) -> list[Record]:
        self.sessions.get_owned(session_id)
        return self.fetch(session_id)

    def create(self, session_id: str, payload: RoundCreate) -> Record:
        self.sessions.get_owned(session_id)
        data = payload.model_dump(mode="json")
        data["session_id"] = session_id
        return self.records.create(data)

    def delete(self, session_id: str, round_id: str) -> None:
        rnd = self.records.get_one(round_id)
        # check the round's real parent, not just the session named in the URL
        self.sessions.get_owned(rnd["session_id"])
        if rnd["session_id"] != session_id:
            raise NotFound()
        self.records.delete(round_id)
