from __future__ import annotations
from typing import Any
from jitsdiary.errors import NotFound
from jitsdiary.filters import build_filter
from jitsdiary.repositories.base import BaseRepository
from jitsdiary.repositories.session_repo import SessionRepository
from jitsdiary.schemas.technique import SessionTechniquesCreate
from jitsdiary.store import Record, RecordStore

class TechniqueRepository:
    """The shared technique library. Readable without signing in."""
    def __init__(self, store: RecordStore):
        self.store = store

    def list(self) -> list[Record]:
        return self.store.collection("techniques").get_list(1, 500, sort="category,name").items


class SessionTechniqueRepository(BaseRepository):
    collection_name = "session_techniques"

    def __init__(self, user):
        super().__init__(user)
        self.sessions = SessionRepository(user)

    def fetch(self, session_id: str, *, expand: str | None = "technique_id") -> list[Record]:
        """Links of a session whose ownership the caller already checked."""
        return self.records.get_full_list(
            filter=build_filter("session_id = {:sid}", sid=session_id),
            expand=expand,
        )

    def list_for_session(self, session_id: str) -> list[Record]:
        self.sessions.get_owned(session_id)
        return self.fetch(session_id)

    def link(self, session_id: str, payload: SessionTechniquesCreate) -> list[Record]:
        """
        Link techniques to a session, skipping ones already linked.

        Returns only the links created by this call, so submitting the same
        ids twice creates nothing the second time. Read-then-write: two
        concurrent submissions can still race.
        """
        self.sessions.get_owned(session_id)
        seen = {link["technique_id"] for link in self.fetch(session_id, expand=None)}

        created: list[Record] = []
        for technique_id in payload.technique_ids:
            if technique_id in seen:
                continue
            seen.add(technique_id)
            data: dict[str, Any] = {"session_id": session_id, "technique_id": technique_id}
            if payload.notes is not None:
                data["notes"] = payload.notes
            if payload.drill_count is not None:
                data["drill_count"] = payload.drill_count
            created.append(self.records.create(data))
        return created

    def unlink(self, session_id: str, link_id: str) -> None:
        link = self.records.get_one(link_id)
        self.sessions.get_owned(link["session_id"])
        if link["session_id"] != session_id:
            raise NotFound()
        self.records.delete(link_id)
