# jitsdiary/store.py
"""
Thin client for the PocketBase record API.

One `RecordStore` (and one `requests.Session`) is built per inbound request
through the `get_store` dependency; nothing is shared between requests.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional
from urllib.parse import quote

import requests

from .errors import StoreError
from .settings import get_settings

log = logging.getLogger(__name__)

Record = dict[str, Any]


@dataclass(slots=True)
class ListResult:
    page: int
    per_page: int
    total_items: int
    total_pages: int
    items: list[Record] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        # Same shape the backend returns, so clients can page through it
        return {
            "page": self.page,
            "perPage": self.per_page,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "items": self.items,
        }


@dataclass(slots=True)
class AuthResult:
    token: str
    record: Record


class RecordStore:
    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.http = session or requests.Session()
        self.token = token
        self.timeout = timeout

    def with_token(self, token: str) -> "RecordStore":
        """A new client on the same HTTP session, authenticated as `token`."""
        return RecordStore(self.base_url, session=self.http, token=token, timeout=self.timeout)

    def collection(self, name: str) -> "Collection":
        return Collection(self, name)

    def close(self) -> None:
        self.http.close()

    def health(self) -> dict[str, Any]:
        return self.send("GET", "/api/health")

    def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = self.token
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            resp = self.http.request(
                method,
                f"{self.base_url}{path}",
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error("record store unreachable: %s %s: %s", method, path, e)
            raise StoreError(0, f"Record store unreachable: {type(e).__name__}") from e

        if resp.status_code == 204 or not resp.content:
            if resp.status_code >= 400:
                raise StoreError(resp.status_code, resp.reason or "Record store error")
            return None

        try:
            body = resp.json()
        except ValueError as e:
            raise StoreError(resp.status_code or 0, "Invalid response from record store") from e

        if resp.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            data = body.get("data") if isinstance(body, dict) else None
            log.info("record store rejected %s %s -> %s %s", method, path, resp.status_code, message)
            raise StoreError(resp.status_code, message or "Record store error", data)
        return body


class Collection:
    def __init__(self, store: RecordStore, name: str):
        self.store = store
        self.name = name

    def _records_path(self, record_id: Optional[str] = None) -> str:
        path = f"/api/collections/{quote(self.name, safe='')}/records"
        if record_id is not None:
            path += f"/{quote(record_id, safe='')}"
        return path

    def _auth_path(self, action: str) -> str:
        return f"/api/collections/{quote(self.name, safe='')}/{action}"

    # READS
    def get_list(
        self,
        page: int = 1,
        per_page: int = 30,
        *,
        filter: Optional[str] = None,
        sort: Optional[str] = None,
        expand: Optional[str] = None,
    ) -> ListResult:
        body = self.store.send(
            "GET",
            self._records_path(),
            params={
                "page": page,
                "perPage": per_page,
                "filter": filter,
                "sort": sort,
                "expand": expand,
            },
        )
        return ListResult(
            page=body.get("page", page),
            per_page=body.get("perPage", per_page),
            total_items=body.get("totalItems", 0),
            total_pages=body.get("totalPages", 0),
            items=list(body.get("items") or []),
        )

    def iter_all(
        self,
        *,
        filter: Optional[str] = None,
        sort: Optional[str] = None,
        expand: Optional[str] = None,
        batch: int = 500,
    ) -> Iterator[Record]:
        page = 1
        while True:
            result = self.get_list(page, batch, filter=filter, sort=sort, expand=expand)
            yield from result.items
            if len(result.items) < batch or page >= result.total_pages:
                return
            page += 1

    def get_full_list(self, **kwargs: Any) -> list[Record]:
        return list(self.iter_all(**kwargs))

    def get_first(self, filter: str, *, expand: Optional[str] = None) -> Optional[Record]:
        items = self.get_list(1, 1, filter=filter, expand=expand).items
        return items[0] if items else None

    def get_one(self, record_id: str, *, expand: Optional[str] = None) -> Record:
        return self.store.send("GET", self._records_path(record_id), params={"expand": expand})

    # WRITES
    def create(self, data: dict[str, Any]) -> Record:
        return self.store.send("POST", self._records_path(), json=data)

    def update(self, record_id: str, data: dict[str, Any]) -> Record:
        return self.store.send("PATCH", self._records_path(record_id), json=data)

    def delete(self, record_id: str) -> None:
        self.store.send("DELETE", self._records_path(record_id))

    # AUTH COLLECTIONS
    def auth_with_password(self, identity: str, password: str) -> AuthResult:
        body = self.store.send(
            "POST", self._auth_path("auth-with-password"),
            json={"identity": identity, "password": password},
        )
        return AuthResult(token=body["token"], record=body["record"])

    def auth_refresh(self) -> AuthResult:
        body = self.store.send("POST", self._auth_path("auth-refresh"))
        return AuthResult(token=body["token"], record=body["record"])

    def list_auth_methods(self) -> dict[str, Any]:
        return self.store.send("GET", self._auth_path("auth-methods"))

    def auth_with_oauth2_code(
        self, provider: str, code: str, code_verifier: str, redirect_url: str
    ) -> AuthResult:
        body = self.store.send(
            "POST", self._auth_path("auth-with-oauth2"),
            json={
                "provider": provider,
                "code": code,
                "codeVerifier": code_verifier,
                "redirectURL": redirect_url,
            },
        )
        return AuthResult(token=body["token"], record=body["record"])


# Dependency for FastAPI routes
def get_store():
    s = get_settings()
    store = RecordStore(s.POCKETBASE_URL, timeout=s.POCKETBASE_TIMEOUT_SECONDS)
    try:
        yield store
    finally:
        store.close()
