# jitsdiary/repositories/base.py
from __future__ import annotations
import logging
from typing import Any, Optional

from jitsdiary.deps.auth import AuthUser
from jitsdiary.errors import Forbidden
from jitsdiary.store import Collection, Record

log = logging.getLogger(__name__)


def owns(user: AuthUser, record: Optional[Record]) -> bool:
    """The single ownership predicate: the record's `user_id` is the caller."""
    return bool(record) and bool(user.user_id) and record.get("user_id") == user.user_id


def store_stripes(stripes: Optional[int]) -> Optional[int]:
    # The store's required-number fields reject 0, so "no stripes" travels as null
    return stripes or None


def store_datetime(value: str) -> str:
    """Expand a bare YYYY-MM-DD to midnight UTC; leave anything with a time part alone."""
    if len(value) == 10:
        return f"{value} 00:00:00.000Z"
    return value


class BaseRepository:
    """Lightweight base for repositories bound to the caller's store client."""
    collection_name: str

    def __init__(self, user: AuthUser):
        self.user = user
        self.store = user.store

    @property
    def records(self) -> Collection:
        return self.store.collection(self.collection_name)


class OwnedRepository(BaseRepository):
    """Repositories for collections whose records carry a `user_id`."""

    def ensure_owner(self, record: Record) -> Record:
        if not owns(self.user, record):
            log.warning(
                "forbidden: user=%s record=%s/%s",
                self.user.user_id, self.collection_name, record.get("id"),
            )
            raise Forbidden()
        return record

    def get_owned(self, record_id: str, *, expand: Optional[str] = None) -> Record:
        return self.ensure_owner(self.records.get_one(record_id, expand=expand))

    def stamp(self, data: dict[str, Any]) -> dict[str, Any]:
        # ownership always comes from the session, never from the payload
        return {**data, "user_id": self.user.user_id}
